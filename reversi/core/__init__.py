"""Core primitives shared by the session and the store (events and the save-file codec).

Kept free of any UI concerns so it can be reused by the session, the headless runner, and tests.
"""
