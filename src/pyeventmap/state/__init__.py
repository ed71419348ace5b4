"""State/store layer.

This package is the single source of truth for the snapshot the
presentation layer renders: acquisition progress, discovery progress and
the current events.
"""
