"""DSI Toolkit add-in installer"""

__version__ = "1.0.0"
