"""VMAP document custom exception hierarchy.

Provides specific exception types for the error scenarios of VMAP/VAST
document parsing and serialization, so callers can catch either a
single scalar failure or every document error with one except clause.

Exception Hierarchy:
    VmapException (base)
    ├── VmapParseError
    │   ├── VmapXMLError
    │   └── VmapFormatError
    ├── VmapSerializationError
    └── VmapConfigError
"""

from typing import Optional


class VmapException(Exception):
    """Base exception for all VMAP document errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        """Initialize VMAP exception.

        Args:
            message: Error message
            context: Optional context dictionary for debugging
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation with context."""
        if self.context:
            context_str = "; ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# Parsing Errors

class VmapParseError(VmapException):
    """Base exception for VMAP parsing errors."""

    pass


class VmapXMLError(VmapParseError):
    """Raised when XML parsing fails.

    Attributes:
        xml_preview: First 200 characters of XML that failed to parse
        parser_error: The underlying lxml parser error
    """

    def __init__(
        self,
        message: str,
        xml_preview: Optional[str] = None,
        parser_error: Optional[Exception] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if xml_preview:
            context["xml_preview"] = xml_preview[:200]
        super().__init__(message, context)
        self.xml_preview = xml_preview
        self.parser_error = parser_error


class VmapFormatError(VmapParseError):
    """Raised when a scalar text value cannot be decoded.

    Used by every scalar codec (durations, time offsets, integers).
    The offending text is always carried unchanged.

    Attributes:
        text: The original text that failed to decode
    """

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if text is not None:
            context["text"] = text
        super().__init__(message, context)
        self.text = text


# Serialization Errors

class VmapSerializationError(VmapException):
    """Raised when a model cannot be mapped to or from a document tree.

    Attributes:
        model: Name of the model class involved
        field_name: Name of the dataclass field involved
    """

    def __init__(
        self,
        message: str,
        model: Optional[str] = None,
        field_name: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if model:
            context["model"] = model
        if field_name:
            context["field_name"] = field_name
        super().__init__(message, context)
        self.model = model
        self.field_name = field_name


# Configuration Errors

class VmapConfigError(VmapException):
    """Raised when settings cannot be loaded.

    Attributes:
        config_path: Path of the configuration file involved
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if config_path:
            context["config_path"] = config_path
        super().__init__(message, context)
        self.config_path = config_path


__all__ = [
    "VmapException",
    "VmapParseError",
    "VmapXMLError",
    "VmapFormatError",
    "VmapSerializationError",
    "VmapConfigError",
]
