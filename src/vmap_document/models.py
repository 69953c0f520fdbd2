"""VMAP and VAST document models.

Plain dataclasses whose fields are bound to the XML tree through
:mod:`bindings`. Field names follow Python conventions; the XML names and
JSON keys are declared on each binding.

VMAP-level models set ``__xml_namespace__ = "vmap"`` so their elements are
written in the ``vmap`` namespace whenever the document declares it.
The embedded VAST document is not namespaced.
"""

from dataclasses import dataclass
from typing import Optional

from .bindings import attribute, child, children, element, namespace, text
from .codecs import BOOLEAN, DURATION, INTEGER, TIME_OFFSET
from .duration import Duration
from .time_offset import TimeOffset


VMAP_NAMESPACE = "http://www.iab.net/videosuite/vmap"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"


# ==================== VAST ====================


@dataclass
class TrackingEvent:
    """Tracking URL fired for a playback event."""

    event: str = attribute("event")
    url: str = text(json="url")


@dataclass
class Impression:
    id: str = attribute("id")
    url: str = text(json="url")


@dataclass
class Error:
    value: str = text(json="value")


@dataclass
class UniversalAdId:
    id_registry: str = attribute("idRegistry")
    id: str = text(json="id")


@dataclass
class ClickThrough:
    id: str = attribute("id")
    url: str = text(json="url")


@dataclass
class ClickTracking:
    id: str = attribute("id")
    url: str = text(json="url")


@dataclass
class CustomClick:
    id: str = attribute("id")
    url: str = text(json="url")


@dataclass
class MediaFile:
    """Media rendition of a linear creative."""

    url: str = text(json="text")
    bitrate: int = attribute("bitrate", INTEGER, default=0)
    width: int = attribute("width", INTEGER, default=0)
    height: int = attribute("height", INTEGER, default=0)
    delivery: str = attribute("delivery")
    media_type: str = attribute("type", json="mediaType")
    codec: str = attribute("codec")


@dataclass
class Linear:
    """Linear (in-stream video) creative.

    ``duration`` is the ``HH:MM:SS[.mmm]`` scalar; ``skip_offset`` accepts the
    same forms as a VMAP time offset.
    """

    duration: Optional[Duration] = element("Duration", DURATION, json="duration", default=None)
    tracking_events: list[TrackingEvent] = children(
        "TrackingEvents/Tracking", TrackingEvent, json="trackingEvents"
    )
    media_files: list[MediaFile] = children("MediaFiles/MediaFile", MediaFile, json="mediaFiles")
    click_through: Optional[ClickThrough] = child(
        "VideoClicks/ClickThrough", ClickThrough, json="clickThrough"
    )
    click_tracking: list[ClickTracking] = children(
        "VideoClicks/ClickTracking", ClickTracking, json="clickTracking"
    )
    custom_click: list[CustomClick] = children(
        "VideoClicks/CustomClick", CustomClick, json="customClick"
    )
    skip_offset: Optional[TimeOffset] = attribute(
        "skipoffset", TIME_OFFSET, json="skipOffset", default=None
    )


@dataclass
class Creative:
    id: str = attribute("id")
    ad_id: str = attribute("adId")
    universal_ad_id: Optional[UniversalAdId] = child(
        "UniversalAdId", UniversalAdId, json="universalAdId"
    )
    linear: Optional[Linear] = child("Linear", Linear, json="linear")


@dataclass
class CreativeParameter:
    """FreeWheel ``CreativeParameter`` extension entry."""

    creative_id: str = attribute("creativeId")
    name: str = attribute("name")
    value: str = text(json="value")
    parameter_type: str = attribute("type", json="creativeParameterType")


@dataclass
class Extension:
    """Ad extension; only FreeWheel creative parameters are modelled."""

    extension_type: str = attribute("type")
    creative_parameters: list[CreativeParameter] = children(
        "CreativeParameters/CreativeParameter", CreativeParameter, json="creativeParameters"
    )


@dataclass
class InLine:
    ad_system: str = element("AdSystem", json="adSystem")
    ad_title: str = element("AdTitle", json="adTitle")
    impressions: list[Impression] = children("Impression", Impression, json="impression")
    creatives: list[Creative] = children("Creatives/Creative", Creative, json="creatives")
    extensions: list[Extension] = children("Extensions/Extension", Extension, json="extensions")
    error: Optional[Error] = child("Error", Error, json="error")


@dataclass
class Ad:
    id: str = attribute("id")
    sequence: int = attribute("sequence", INTEGER, default=0)
    in_line: Optional[InLine] = child("InLine", InLine, json="inLine")


@dataclass
class VAST:
    """Root of a VAST document."""

    __xml_tag__ = "VAST"

    chardata: str = text()
    xsi: str = namespace("xsi")
    no_namespace_schema_location: str = attribute("noNamespaceSchemaLocation", prefix="xsi")
    version: str = attribute("version")
    ads: list[Ad] = children("Ad", Ad, json="ad")


# ==================== VMAP ====================


@dataclass
class VASTData:
    """``<vmap:VASTAdData>`` wrapper around an inline VAST document."""

    vast: Optional[VAST] = child("VAST", VAST, json="vast")


@dataclass
class AdTagURI:
    """Ad tag reference of an ad source. Modelled only, never fetched."""

    template_type: str = attribute("templateType")
    url: str = text(json="url")


@dataclass
class AdSource:
    __xml_namespace__ = "vmap"

    id: str = attribute("id")
    allow_multiple_ads: Optional[bool] = attribute(
        "allowMultipleAds", BOOLEAN, default=None
    )
    follow_redirects: Optional[bool] = attribute("followRedirects", BOOLEAN, default=None)
    vast_data: Optional[VASTData] = child("VASTAdData", VASTData, json="vastData")
    ad_tag_uri: Optional[AdTagURI] = child("AdTagURI", AdTagURI, json="adTagURI")


@dataclass
class AdBreak:
    """Ad break placed in the content timeline by its time offset."""

    __xml_namespace__ = "vmap"

    ad_source: Optional[AdSource] = child("AdSource", AdSource, json="adSource")
    tracking_events: list[TrackingEvent] = children(
        "TrackingEvents/Tracking", TrackingEvent, json="trackingEvents"
    )
    id: str = attribute("breakId", json="id")
    break_type: str = attribute("breakType")
    time_offset: Optional[TimeOffset] = attribute(
        "timeOffset", TIME_OFFSET, json="timeOffset", default=None
    )


@dataclass
class VMAP:
    """Root of a VMAP document."""

    __xml_tag__ = "VMAP"
    __xml_namespace__ = "vmap"

    chardata: str = text()
    vmap: str = namespace("vmap")
    version: str = attribute("version")
    ad_breaks: list[AdBreak] = children("AdBreak", AdBreak, json="adBreaks")


__all__ = [
    "VMAP_NAMESPACE",
    "XSI_NAMESPACE",
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
]
