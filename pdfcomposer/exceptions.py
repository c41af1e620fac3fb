"""Custom exceptions for PDF Composer."""

from typing import Optional


class PDFComposerError(Exception):
    """Base exception for PDF Composer errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class InvalidConfigurationError(PDFComposerError):
    """Exception raised when a configuration value is out of range."""

    pass


class MissingRequiredFieldError(PDFComposerError):
    """Exception raised when a component is built without a required field."""

    pass


class ListEmptyError(MissingRequiredFieldError):
    """Exception raised when a list is built without items."""

    pass


class FontMissingError(MissingRequiredFieldError):
    """Exception raised when a component that needs a font has none."""

    pass


class InvalidMoveError(PDFComposerError):
    """Exception raised when a cursor move cannot be performed."""

    pass


class InvalidPercentError(InvalidMoveError):
    """Exception raised when a percent move is outside [0, 100]."""

    pass


class GeometryError(PDFComposerError):
    """Exception raised during geometry calculations."""

    pass


class HeaderNotEnabledError(GeometryError):
    """Exception raised when the header band is requested but disabled."""

    pass


class FooterNotEnabledError(GeometryError):
    """Exception raised when the footer band is requested but disabled."""

    pass


class FontNotRegisteredError(PDFComposerError):
    """Exception raised when a font name cannot be resolved."""

    pass


class BackendIOError(PDFComposerError):
    """Exception raised when the rendering backend fails to read or write."""

    pass


class RenderingError(PDFComposerError):
    """Exception raised when a block cannot be rendered."""

    pass
