"""Clock-style duration scalar used by VAST ``<Duration>`` and VMAP offsets.

Text form is ``HH:MM:SS[.mmm]``. Decoding is positional: every ``:`` or
``.`` moves to the next unit (hours, minutes, seconds, milliseconds) no
matter which of the two characters was used, and anything that is not a
digit or a separator is ignored.

Examples:
    >>> DurationCodec().decode("00:01:30.500")
    Duration(milliseconds=90500)
    >>> DurationCodec().encode(Duration(3723000))
    '01:02:03'
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import IntEnum
import string

from .exceptions import VmapFormatError


MS_PER_SECOND = 1_000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE

SEPARATORS = frozenset(":.")
ZERO_DURATION_TEXT = "00:00:00"


@dataclass(frozen=True, order=True)
class Duration:
    """Elapsed time interval in whole milliseconds."""

    milliseconds: int = 0

    def __post_init__(self):
        if self.milliseconds < 0:
            raise ValueError(f"Duration cannot be negative: {self.milliseconds}ms")

    @classmethod
    def from_timedelta(cls, value: timedelta) -> "Duration":
        """Create a duration from a timedelta, truncating to milliseconds."""
        return cls(value // timedelta(milliseconds=1))

    def to_timedelta(self) -> timedelta:
        return timedelta(milliseconds=self.milliseconds)

    def total_seconds(self) -> float:
        return self.milliseconds / MS_PER_SECOND

    def __str__(self) -> str:
        return format_duration(self)


class DurationField(IntEnum):
    """Decoder states, in the order separators advance through them."""

    HOURS = 0
    MINUTES = 1
    SECONDS = 2
    MILLISECONDS = 3
    DONE = 4


_FIELD_SCALE = {
    DurationField.HOURS: MS_PER_HOUR,
    DurationField.MINUTES: MS_PER_MINUTE,
    DurationField.SECONDS: MS_PER_SECOND,
    DurationField.MILLISECONDS: 1,
}


class DurationCodec:
    """Decode and encode the ``HH:MM:SS[.mmm]`` duration scalar.

    Stateless; one instance can be shared across threads.
    """

    text_in_json = True

    def decode(self, text: str) -> Duration:
        """Parse duration text into a Duration.

        Args:
            text: Duration text (e.g., "00:00:30", "1:2:3", "00:01:30.500")

        Returns:
            Parsed Duration

        Raises:
            VmapFormatError: If fewer than two or more than three separators
                are present
        """
        buffers = {state: "" for state in _FIELD_SCALE}
        state = DurationField.HOURS

        for char in text:
            if char in SEPARATORS:
                state = DurationField(state + 1)
                if state is DurationField.DONE:
                    raise VmapFormatError(
                        f"Invalid duration format: {text}. Too many fields",
                        text=text,
                    )
            elif char in string.digits:
                buffers[state] += char

        if state < DurationField.SECONDS:
            raise VmapFormatError(
                f"Invalid duration format: {text}. Expected HH:MM:SS[.mmm]",
                text=text,
            )

        return Duration(
            sum(int(digits or "0") * _FIELD_SCALE[unit] for unit, digits in buffers.items())
        )

    def encode(self, value: Duration) -> str:
        """Render a Duration as ``HH:MM:SS`` with optional ``.mmm``."""
        total = value.milliseconds
        if total == 0:
            return ZERO_DURATION_TEXT

        hours, remainder = divmod(total, MS_PER_HOUR)
        minutes, remainder = divmod(remainder, MS_PER_MINUTE)
        seconds, milliseconds = divmod(remainder, MS_PER_SECOND)

        text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
        if milliseconds > 0:
            text += f".{milliseconds:03d}"
        return text


DURATION_CODEC = DurationCodec()


def parse_duration(text: str) -> Duration:
    """Decode duration text with the shared codec."""
    return DURATION_CODEC.decode(text)


def format_duration(value: Duration) -> str:
    """Encode a Duration with the shared codec."""
    return DURATION_CODEC.encode(value)


__all__ = [
    "Duration",
    "DurationCodec",
    "DurationField",
    "DURATION_CODEC",
    "parse_duration",
    "format_duration",
]
