"""Scalar codecs plugged into the document serializer.

A scalar codec turns the text of a single attribute or element into a
Python value and back. The serializer only relies on the
:class:`ScalarCodec` protocol, so any object with ``decode``/``encode``
can be attached to a field binding.
"""

import re
from typing import Protocol, TypeVar, runtime_checkable

from .duration import DURATION_CODEC
from .exceptions import VmapFormatError
from .time_offset import TIME_OFFSET_CODEC


T = TypeVar("T")

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@runtime_checkable
class ScalarCodec(Protocol[T]):
    """Capability of turning scalar text into a value and back.

    ``text_in_json`` tells the JSON projector whether the value is
    written as its encoded text (True) or as a native JSON value.
    """

    text_in_json: bool

    def decode(self, text: str) -> T: ...

    def encode(self, value: T) -> str: ...


class StringCodec:
    """Identity codec for plain text."""

    text_in_json = False

    def decode(self, text: str) -> str:
        return text

    def encode(self, value: str) -> str:
        return value


class IntegerCodec:
    """Decimal integer codec (bitrate, width, sequence...).

    Surrounding whitespace is ignored and empty text reads as 0.
    """

    text_in_json = False

    def decode(self, text: str) -> int:
        text = text.strip()
        if not text:
            return 0
        if not _INTEGER_PATTERN.fullmatch(text):
            raise VmapFormatError(f"Invalid integer value: {text}", text=text)
        return int(text)

    def encode(self, value: int) -> str:
        return str(value)


class BooleanCodec:
    """XML schema boolean codec."""

    text_in_json = False

    _TRUE = frozenset({"true", "1"})
    _FALSE = frozenset({"false", "0"})

    def decode(self, text: str) -> bool:
        if text in self._TRUE:
            return True
        if text in self._FALSE:
            return False
        raise VmapFormatError(f"Invalid boolean value: {text}", text=text)

    def encode(self, value: bool) -> str:
        return "true" if value else "false"


STRING = StringCodec()
INTEGER = IntegerCodec()
BOOLEAN = BooleanCodec()
DURATION = DURATION_CODEC
TIME_OFFSET = TIME_OFFSET_CODEC


__all__ = [
    "ScalarCodec",
    "StringCodec",
    "IntegerCodec",
    "BooleanCodec",
    "STRING",
    "INTEGER",
    "BOOLEAN",
    "DURATION",
    "TIME_OFFSET",
]
