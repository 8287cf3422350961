"""Custom exceptions for Legion keyboard lighting."""


class LegionKeyboardError(Exception):
    """Base exception for Legion keyboard errors."""


class HIDUnavailableError(LegionKeyboardError):
    """Raised when the HID subsystem cannot be initialized or enumerated."""


class DeviceNotFoundError(LegionKeyboardError):
    """Raised when no compatible Legion keyboard is found."""

    def __init__(self, message: str = "No compatible Legion keyboard found") -> None:
        super().__init__(message)


class DeviceCommunicationError(LegionKeyboardError):
    """Raised when communication with the device fails."""


class DeviceOpenError(DeviceCommunicationError):
    """Raised when a matching keyboard is present but cannot be opened.

    On Linux this is usually a permissions problem on the hidraw node.
    """


class LightingValueError(LegionKeyboardError, ValueError):
    """Raised when a lighting state value is outside its valid range."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class ColorError(LegionKeyboardError, ValueError):
    """Raised when a color specification cannot be parsed."""
