"""
Device Sync - real-time shared device registry over WebSockets.
"""

__version__ = "0.1.0"
