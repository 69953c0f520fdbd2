"""Unit tests for VMAP parser."""

import json

import pytest
from structlog.testing import capture_logs

from vmap_document.config import VmapParserConfig
from vmap_document.duration import Duration
from vmap_document.events import VmapEvents
from vmap_document.exceptions import VmapFormatError, VmapParseError, VmapXMLError
from vmap_document.models import VAST, VMAP, VMAP_NAMESPACE, XSI_NAMESPACE
from vmap_document.parser import VmapParser
from vmap_document.time_offset import (
    Anchor,
    AnchorOffset,
    DurationOffset,
    PercentOffset,
    PositionOffset,
)


class TestVmapParser:
    """Test suite for VmapParser class."""

    def test_parser_initialization(self, parser_config):
        """Test parser initialization with config."""
        parser = VmapParser(config=parser_config)
        assert parser.config == parser_config
        assert parser.logger is not None

    def test_parser_initialization_without_config(self):
        """Test parser initialization without config (uses defaults)."""
        parser = VmapParser()
        assert isinstance(parser.config, VmapParserConfig)

    def test_from_config(self):
        parser = VmapParser.from_config({"skip_invalid_scalars": True, "pretty_print": False})
        assert parser.config.skip_invalid_scalars is True
        assert parser.config.pretty_print is False

    def test_parse_vmap_document(self, vmap_parser, vmap_xml):
        """Test parsing the root and ad break attributes."""
        vmap = vmap_parser.parse_vmap(vmap_xml)

        assert isinstance(vmap, VMAP)
        assert vmap.version == "1.0"
        assert vmap.vmap == VMAP_NAMESPACE
        assert [b.id for b in vmap.ad_breaks] == [
            "preroll",
            "midroll-1",
            "midroll-2",
            "pod-2",
            "postroll",
        ]
        assert {b.break_type for b in vmap.ad_breaks} == {"linear"}

    def test_parse_time_offsets(self, vmap_parser, vmap_xml):
        """Test every time offset form in one document."""
        vmap = vmap_parser.parse_vmap(vmap_xml)

        assert [b.time_offset for b in vmap.ad_breaks] == [
            AnchorOffset(Anchor.START),
            DurationOffset(Duration(600_000)),
            PercentOffset(0.5),
            PositionOffset(2),
            AnchorOffset(Anchor.END),
        ]

    def test_parse_ad_source(self, vmap_parser, vmap_xml):
        """Test ad source attributes, tag URI and break tracking."""
        vmap = vmap_parser.parse_vmap(vmap_xml)
        preroll, midroll = vmap.ad_breaks[0], vmap.ad_breaks[1]

        assert preroll.ad_source.id == "preroll-ad-1"
        assert preroll.ad_source.allow_multiple_ads is False
        assert preroll.ad_source.follow_redirects is True
        assert preroll.tracking_events[0].event == "breakStart"
        assert preroll.tracking_events[0].url == "https://track.example.com/break-start"

        assert midroll.ad_source.vast_data is None
        assert midroll.ad_source.ad_tag_uri.template_type == "vast3"
        assert midroll.ad_source.ad_tag_uri.url == "https://ads.example.com/midroll"
        assert midroll.ad_source.allow_multiple_ads is None

    def test_parse_embedded_vast(self, vmap_parser, vmap_xml):
        """Test the inline VAST document inside VASTAdData."""
        vast = vmap_parser.parse_vmap(vmap_xml).ad_breaks[0].ad_source.vast_data.vast

        assert vast.version == "3.0"
        assert vast.xsi == XSI_NAMESPACE
        assert vast.no_namespace_schema_location == "vast.xsd"

        ad = vast.ads[0]
        assert ad.id == "ad-1"
        assert ad.sequence == 1
        assert ad.in_line.ad_system == "Example Ads"
        assert ad.in_line.ad_title == "Preroll Spot"
        assert ad.in_line.impressions[0].url == "https://track.example.com/impression"
        assert ad.in_line.error.value == "https://track.example.com/error?code=[ERRORCODE]"

        creative = ad.in_line.creatives[0]
        assert creative.ad_id == "ad-1"
        assert creative.universal_ad_id.id_registry == "ad-id.org"
        assert creative.universal_ad_id.id == "CNPA0484000H"

        linear = creative.linear
        assert linear.duration == Duration(15_250)
        assert linear.skip_offset == DurationOffset(Duration(5_000))
        assert [t.event for t in linear.tracking_events] == ["start", "complete"]
        assert linear.click_through.url == "https://advertiser.example.com"
        assert linear.click_tracking[0].id == "ctr"
        assert linear.custom_click == []

        media = linear.media_files[0]
        assert media.url == "https://media.example.com/spot.mp4"
        assert (media.width, media.height, media.bitrate) == (1280, 720, 1500)
        assert media.media_type == "video/mp4"
        assert media.codec == "H.264"

        parameter = ad.in_line.extensions[0].creative_parameters[0]
        assert ad.in_line.extensions[0].extension_type == "FreeWheel"
        assert (parameter.creative_id, parameter.name, parameter.value) == (
            "creative-1",
            "moat",
            "tag",
        )
        assert parameter.parameter_type == "Linear"

    def test_parse_bytes(self, vmap_parser, vmap_xml):
        vmap = vmap_parser.parse_vmap(vmap_xml.encode("utf-8"))
        assert len(vmap.ad_breaks) == 5

    def test_parse_standalone_vast(self, vmap_parser, minimal_vast_xml):
        vast = vmap_parser.parse_vast(minimal_vast_xml)

        assert isinstance(vast, VAST)
        assert vast.version == "4.0"
        assert vast.ads[0].in_line.creatives[0].linear.duration == Duration(15_000)
        assert vast.ads[0].sequence == 0

    def test_root_mismatch(self, vmap_parser, minimal_vast_xml):
        with pytest.raises(VmapParseError) as exc_info:
            vmap_parser.parse_vmap(minimal_vast_xml)

        assert not isinstance(exc_info.value, VmapXMLError)

    def test_parse_malformed_xml(self, vmap_parser):
        """Test parsing malformed XML without recovery (should raise)."""
        malformed_xml = """<?xml version="1.0" encoding="UTF-8"?>
<vmap:VMAP xmlns:vmap="http://www.iab.net/videosuite/vmap" version="1.0">
  <vmap:AdBreak timeOffset="start">
</vmap:VMAP>"""

        with pytest.raises(VmapXMLError) as exc_info:
            vmap_parser.parse_vmap(malformed_xml)

        assert exc_info.value.parser_error is not None
        assert exc_info.value.xml_preview.startswith("<?xml")

    def test_invalid_offset_aborts_by_default(self, vmap_parser, vmap_with_bad_offset_xml):
        with pytest.raises(VmapFormatError) as exc_info:
            vmap_parser.parse_vmap(vmap_with_bad_offset_xml)

        assert exc_info.value.text == "#abc"

    def test_invalid_offset_skipped_when_lenient(self, lenient_config, vmap_with_bad_offset_xml):
        parser = VmapParser(config=lenient_config)

        with capture_logs() as logs:
            vmap = parser.parse_vmap(vmap_with_bad_offset_xml)

        assert vmap.ad_breaks[0].time_offset == AnchorOffset(Anchor.START)
        assert vmap.ad_breaks[1].time_offset is None
        skipped = [log for log in logs if log["event"] == VmapEvents.SCALAR_SKIPPED]
        assert len(skipped) == 1
        assert skipped[0]["field"] == "time_offset"
        assert skipped[0]["text"] == "#abc"


class TestVmapWriting:
    """Test suite for XML and JSON output."""

    def test_to_xml_round_trip(self, vmap_parser, vmap_xml):
        """Test that writing and re-reading preserves the document.

        Anchors come back as their sentinel positions.
        """
        vmap = vmap_parser.parse_vmap(vmap_xml)
        del vmap.ad_breaks[2]  # percent offsets are not re-readable

        reparsed = vmap_parser.parse_vmap(vmap_parser.to_xml(vmap))

        assert reparsed.vmap == VMAP_NAMESPACE
        assert [b.time_offset for b in reparsed.ad_breaks] == [
            PositionOffset(-1),
            DurationOffset(Duration(600_000)),
            PositionOffset(2),
            PositionOffset(-2),
        ]
        for original, restored in zip(vmap.ad_breaks, reparsed.ad_breaks):
            assert restored.ad_source == original.ad_source
            assert restored.tracking_events == original.tracking_events
            assert restored.id == original.id

    def test_to_xml_output(self, vmap_parser, vmap_xml):
        xml_text = vmap_parser.to_xml(vmap_parser.parse_vmap(vmap_xml))

        assert xml_text.startswith("<?xml")
        assert 'xmlns:vmap="http://www.iab.net/videosuite/vmap"' in xml_text
        assert "<vmap:AdBreak" in xml_text
        assert 'timeOffset="#-1"' in xml_text
        assert 'timeOffset="00:10:00"' in xml_text
        assert 'timeOffset="50.000000%"' in xml_text
        assert "<Duration>00:00:15.250</Duration>" in xml_text
        assert 'xsi:noNamespaceSchemaLocation="vast.xsd"' in xml_text

    def test_written_percent_offset_is_rejected_on_read(self, vmap_parser, lenient_config, vmap_xml):
        xml_text = vmap_parser.to_xml(vmap_parser.parse_vmap(vmap_xml))

        with pytest.raises(VmapFormatError):
            vmap_parser.parse_vmap(xml_text)

        reparsed = VmapParser(config=lenient_config).parse_vmap(xml_text)
        assert reparsed.ad_breaks[2].time_offset is None

    def test_to_json(self, vmap_parser, vmap_xml):
        data = json.loads(vmap_parser.to_json(vmap_parser.parse_vmap(vmap_xml)))

        assert data["version"] == "1.0"
        assert data["vmap"] == VMAP_NAMESPACE
        assert [b["timeOffset"] for b in data["adBreaks"]] == [
            "#-1",
            "00:10:00",
            "50.000000%",
            "#2",
            "#-2",
        ]
        vast = data["adBreaks"][0]["adSource"]["vastData"]["vast"]
        linear = vast["ad"][0]["inLine"]["creatives"][0]["linear"]
        assert linear["duration"] == "00:00:15.250"
        assert linear["mediaFiles"][0]["bitrate"] == 1500
        assert data["adBreaks"][1]["adSource"]["vastData"] is None

    def test_from_json(self, vmap_parser, vmap_xml):
        vmap = vmap_parser.parse_vmap(vmap_xml)
        del vmap.ad_breaks[2]

        restored = vmap_parser.from_json(vmap_parser.to_json(vmap))

        assert restored.ad_breaks[0].ad_source == vmap.ad_breaks[0].ad_source
        assert restored.ad_breaks[1] == vmap.ad_breaks[1]
        assert restored.ad_breaks[0].time_offset == PositionOffset(-1)

    def test_from_json_invalid(self, vmap_parser):
        with pytest.raises(VmapParseError):
            vmap_parser.from_json("{not json")


def test_create_parser_helper(vmap_xml):
    """Test the package-level convenience constructor."""
    from vmap_document import create_parser

    parser = create_parser(skip_invalid_scalars=True)

    assert parser.config.skip_invalid_scalars is True
    assert len(parser.parse_vmap(vmap_xml).ad_breaks) == 5
