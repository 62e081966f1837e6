"""Announcement feed kept in sync with a remote news service."""

__version__ = "0.1.0"
