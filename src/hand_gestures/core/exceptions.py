"""
Custom exceptions for the hand gesture package.
"""


class HandGestureError(Exception):
    """Base exception for all hand gesture errors."""
    pass


class InvalidHandError(HandGestureError, ValueError):
    """Raised when a hand does not carry 21 landmarks with usable x/y coordinates."""
    pass


class RecordingFormatError(HandGestureError):
    """Raised when a landmark recording cannot be parsed."""
    pass


class DetectorError(HandGestureError):
    """Raised when the hand landmark detector cannot be initialized or run."""
    pass


class ConfigError(HandGestureError):
    """Raised when configuration is unreadable or has the wrong types."""
    pass
