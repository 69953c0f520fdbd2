"""
VMAP Document Configuration Module

Provides the configuration dataclass for document parsing and
serialization, built from defaults or from the ``parser`` section of
the application settings.
"""

from dataclasses import dataclass, field, fields
from typing import Any

from .exceptions import VmapConfigError


@dataclass
class VmapParserConfig:
    """Configuration for VMAP/VAST XML parsing and serialization.

    Attributes:
        encoding: Text encoding used for reading and writing XML
        recover_on_error: Let lxml recover from malformed markup
        strip_text: Strip surrounding whitespace from character data
        skip_invalid_scalars: Keep the field default instead of failing the
            whole document when a scalar (duration, offset...) is malformed
        pretty_print: Indent serialized XML
        xml_declaration: Emit an ``<?xml ...?>`` declaration
        json_indent: Indentation of the JSON projection (None for compact)

    Examples:
        Strict parsing:
        >>> config = VmapParserConfig(recover_on_error=False)

        Lenient parsing that drops bad offsets:
        >>> config = VmapParserConfig(skip_invalid_scalars=True)
    """

    # Parsing options
    encoding: str = "utf-8"
    recover_on_error: bool = False
    strip_text: bool = True
    skip_invalid_scalars: bool = False

    # Serialization options
    pretty_print: bool = True
    xml_declaration: bool = True
    json_indent: int | None = 2

    # Unknown keys from settings files, kept for forward compatibility
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "VmapParserConfig":
        """Build a config from a settings dictionary.

        Keys that are not config fields are collected in ``extra``.

        Raises:
            VmapConfigError: If ``data`` is not a mapping
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise VmapConfigError(
                f"Parser configuration must be a mapping, got {type(data).__name__}"
            )
        known = {f.name for f in fields(cls)} - {"extra"}
        values = {key: value for key, value in data.items() if key in known}
        extra = {key: value for key, value in data.items() if key not in known}
        return cls(**values, extra=extra)


__all__ = ["VmapParserConfig"]
