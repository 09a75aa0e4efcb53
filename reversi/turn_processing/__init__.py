"""Turn/selection processing helpers.

This package centralizes validation of externally requested placements so that
every click flows through the same pipeline and shows up consistently in logs.
"""
