"""VMAP ``timeOffset`` scalar.

A time offset says where an ad break sits in the content timeline and
takes one of four forms:

* ``00:10:00.000`` - absolute offset (DurationOffset)
* ``start`` / ``end`` - named anchors (AnchorOffset)
* ``#3`` - ordinal break position (PositionOffset)
* ``50%`` - fraction of the content duration (PercentOffset)

Anchors decode from their keywords but encode as their sentinel
positions (``#-1`` / ``#-2``).
"""

from dataclasses import dataclass
from enum import Enum
import re
from typing import Union

from .duration import DURATION_CODEC, Duration, DurationCodec
from .exceptions import VmapFormatError


INT8_MIN = -128
INT8_MAX = 127

PERCENT_SUFFIX = "%"
POSITION_PREFIX = "#"

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# sentinel break positions for the named anchors
OFFSET_START = -1
OFFSET_END = -2


class Anchor(str, Enum):
    """Named anchors and the break position each one stands for."""

    START = "start"
    END = "end"

    @property
    def position(self) -> int:
        return OFFSET_START if self is Anchor.START else OFFSET_END


@dataclass(frozen=True)
class DurationOffset:
    """Absolute elapsed-time offset."""

    duration: Duration


@dataclass(frozen=True)
class AnchorOffset:
    """Start or end of the content."""

    anchor: Anchor

    @property
    def position(self) -> int:
        return self.anchor.position


@dataclass(frozen=True)
class PositionOffset:
    """Ordinal ad break slot (``#N``)."""

    position: int

    def __post_init__(self):
        if not INT8_MIN <= self.position <= INT8_MAX:
            raise ValueError(f"Position out of range: {self.position}")


@dataclass(frozen=True)
class PercentOffset:
    """Fraction of the total content duration (``0.5`` for ``50%``)."""

    fraction: float


TimeOffset = Union[DurationOffset, AnchorOffset, PositionOffset, PercentOffset]


def _parse_int8(digits: str, text: str, kind: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(digits):
        raise VmapFormatError(f"Error parsing {kind} offset: {text}", text=text)
    value = int(digits)
    if not INT8_MIN <= value <= INT8_MAX:
        raise VmapFormatError(
            f"Error parsing {kind} offset: {text}. Value out of range",
            text=text,
            context={"min": INT8_MIN, "max": INT8_MAX},
        )
    return value


class TimeOffsetCodec:
    """Decode and encode the polymorphic time offset scalar."""

    text_in_json = True

    def __init__(self, duration_codec: DurationCodec = DURATION_CODEC):
        self.duration_codec = duration_codec

    def decode(self, text: str) -> TimeOffset:
        """Parse time offset text.

        Args:
            text: Offset text (e.g., "start", "#2", "25%", "00:05:00")

        Returns:
            One of DurationOffset, AnchorOffset, PositionOffset, PercentOffset

        Raises:
            VmapFormatError: If the text matches no offset form
        """
        if text == Anchor.START.value:
            return AnchorOffset(Anchor.START)
        if text == Anchor.END.value:
            return AnchorOffset(Anchor.END)
        if text.endswith(PERCENT_SUFFIX):
            percent = _parse_int8(text[: -len(PERCENT_SUFFIX)], text, "percentage")
            return PercentOffset(percent / 100)
        if text.startswith(POSITION_PREFIX):
            return PositionOffset(_parse_int8(text[len(POSITION_PREFIX):], text, "position"))
        return DurationOffset(self.duration_codec.decode(text))

    def encode(self, value: TimeOffset) -> str:
        """Render a time offset.

        Zero positions and zero percentages render as empty text.
        """
        if isinstance(value, DurationOffset):
            return self.duration_codec.encode(value.duration)
        if isinstance(value, (AnchorOffset, PositionOffset)):
            # anchors are written as their sentinel positions
            return f"{POSITION_PREFIX}{value.position}" if value.position != 0 else ""
        if isinstance(value, PercentOffset):
            return f"{value.fraction * 100:f}{PERCENT_SUFFIX}" if value.fraction != 0 else ""
        raise TypeError(f"Unsupported time offset type: {type(value).__name__}")


TIME_OFFSET_CODEC = TimeOffsetCodec()


def parse_time_offset(text: str) -> TimeOffset:
    """Decode time offset text with the shared codec."""
    return TIME_OFFSET_CODEC.decode(text)


def format_time_offset(value: TimeOffset) -> str:
    """Encode a time offset with the shared codec."""
    return TIME_OFFSET_CODEC.encode(value)


__all__ = [
    "Anchor",
    "OFFSET_START",
    "OFFSET_END",
    "DurationOffset",
    "AnchorOffset",
    "PositionOffset",
    "PercentOffset",
    "TimeOffset",
    "TimeOffsetCodec",
    "TIME_OFFSET_CODEC",
    "parse_time_offset",
    "format_time_offset",
]
