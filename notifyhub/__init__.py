"""Notification dispatch backend: fan-out over websocket and mobile push."""

__version__ = "0.1.0"
