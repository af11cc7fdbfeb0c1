"""Exceptions raised by the marking core."""


class UnsupportedFileType(ValueError):
    """Raised when an input image is not PNG or JPEG."""

    def __init__(self, mime_type, path=None):
        self.mime_type = mime_type
        self.path = path
        where = f" ({path})" if path is not None else ""
        super().__init__(f"Unsupported file type: {mime_type}{where}")


class UnknownColor(KeyError):
    """Raised when a color key is not part of the color registry."""

    def __init__(self, color):
        self.color = color
        super().__init__(color)

    def __str__(self):
        return f"Color {self.color!r} is not registered"


class SinkError(OSError):
    """Raised when a report could not be delivered to its sink."""
