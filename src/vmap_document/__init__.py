"""
VMAP Document Package

Models and (de)serializes VMAP ad-break documents and the VAST documents
embedded in them.

This package provides:
- Duration / DurationCodec: the ``HH:MM:SS[.mmm]`` scalar
- TimeOffset / TimeOffsetCodec: the polymorphic ``timeOffset`` scalar
- VMAP, AdBreak, VAST, ... : dataclass document models
- XmlSerializer / JsonProjector: generic tree serializer driven by field bindings
- VmapParser: parse and write whole documents

Usage:
    from vmap_document import Anchor, AnchorOffset, VmapParser

    parser = VmapParser()
    vmap = parser.parse_vmap(xml_text)
    pre_rolls = [b for b in vmap.ad_breaks if b.time_offset == AnchorOffset(Anchor.START)]
    print(parser.to_json(vmap))
"""

from .codecs import BOOLEAN, DURATION, INTEGER, STRING, TIME_OFFSET, ScalarCodec
from .config import VmapParserConfig
from .duration import Duration, DurationCodec, format_duration, parse_duration
from .exceptions import (
    VmapConfigError,
    VmapException,
    VmapFormatError,
    VmapParseError,
    VmapSerializationError,
    VmapXMLError,
)
from .models import (
    VAST,
    VMAP,
    Ad,
    AdBreak,
    AdSource,
    AdTagURI,
    ClickThrough,
    ClickTracking,
    Creative,
    CreativeParameter,
    CustomClick,
    Error,
    Extension,
    Impression,
    InLine,
    Linear,
    MediaFile,
    TrackingEvent,
    UniversalAdId,
    VASTData,
)
from .parser import VmapParser
from .serializer import JsonProjector, XmlSerializer
from .time_offset import (
    OFFSET_END,
    OFFSET_START,
    Anchor,
    AnchorOffset,
    DurationOffset,
    PercentOffset,
    PositionOffset,
    TimeOffset,
    TimeOffsetCodec,
    format_time_offset,
    parse_time_offset,
)

__version__ = "1.0.0"

__all__ = [
    # Scalars
    "Duration",
    "DurationCodec",
    "parse_duration",
    "format_duration",
    "Anchor",
    "OFFSET_START",
    "OFFSET_END",
    "DurationOffset",
    "AnchorOffset",
    "PositionOffset",
    "PercentOffset",
    "TimeOffset",
    "TimeOffsetCodec",
    "parse_time_offset",
    "format_time_offset",
    # Codecs
    "ScalarCodec",
    "STRING",
    "INTEGER",
    "BOOLEAN",
    "DURATION",
    "TIME_OFFSET",
    # Models
    "VMAP",
    "AdBreak",
    "AdSource",
    "AdTagURI",
    "TrackingEvent",
    "VASTData",
    "VAST",
    "Ad",
    "InLine",
    "Error",
    "Impression",
    "Creative",
    "UniversalAdId",
    "Linear",
    "ClickThrough",
    "ClickTracking",
    "CustomClick",
    "MediaFile",
    "Extension",
    "CreativeParameter",
    # Serialization
    "XmlSerializer",
    "JsonProjector",
    "VmapParser",
    "VmapParserConfig",
    # Errors
    "VmapException",
    "VmapParseError",
    "VmapXMLError",
    "VmapFormatError",
    "VmapSerializationError",
    "VmapConfigError",
    # Package metadata
    "__version__",
]


def create_parser(**kwargs):
    """Create a VmapParser instance.

    Args:
        **kwargs: VmapParserConfig fields

    Returns:
        VmapParser: Parser instance
    """
    return VmapParser(config=VmapParserConfig(**kwargs))
