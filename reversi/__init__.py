"""Reversi rules engine and turn-management core.

Nothing in here renders anything: rendering, animation and dialogs are
collaborators injected through the protocols in `reversi.notifications`.
"""
