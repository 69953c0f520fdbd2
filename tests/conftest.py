"""Pytest configuration and shared fixtures for VMAP document tests."""

import sys
from pathlib import Path

import pytest
import structlog


sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from vmap_document.config import VmapParserConfig
from vmap_document.parser import VmapParser


# ==================== Configuration Fixtures ====================


@pytest.fixture
def parser_config() -> VmapParserConfig:
    """Create default parser configuration."""
    return VmapParserConfig(encoding="utf-8", recover_on_error=False)


@pytest.fixture
def lenient_config() -> VmapParserConfig:
    """Parser configuration that skips malformed scalars."""
    return VmapParserConfig(skip_invalid_scalars=True)


@pytest.fixture
def vmap_parser(parser_config) -> VmapParser:
    """Create parser instance."""
    return VmapParser(config=parser_config)


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration made by a test."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


# ==================== XML Fixtures ====================


@pytest.fixture
def vmap_xml() -> str:
    """VMAP 1.0 document with every kind of time offset."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<vmap:VMAP xmlns:vmap="http://www.iab.net/videosuite/vmap" version="1.0">
  <vmap:AdBreak timeOffset="start" breakType="linear" breakId="preroll">
    <vmap:AdSource id="preroll-ad-1" allowMultipleAds="false" followRedirects="true">
      <vmap:VASTAdData>
        <VAST version="3.0" xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xsi:noNamespaceSchemaLocation="vast.xsd">
          <Ad id="ad-1" sequence="1">
            <InLine>
              <AdSystem>Example Ads</AdSystem>
              <AdTitle>Preroll Spot</AdTitle>
              <Impression id="imp-1"><![CDATA[https://track.example.com/impression]]></Impression>
              <Creatives>
                <Creative id="creative-1" adId="ad-1">
                  <UniversalAdId idRegistry="ad-id.org">CNPA0484000H</UniversalAdId>
                  <Linear skipoffset="00:00:05">
                    <Duration>00:00:15.250</Duration>
                    <TrackingEvents>
                      <Tracking event="start"><![CDATA[https://track.example.com/start]]></Tracking>
                      <Tracking event="complete"><![CDATA[https://track.example.com/complete]]></Tracking>
                    </TrackingEvents>
                    <VideoClicks>
                      <ClickThrough id="ct"><![CDATA[https://advertiser.example.com]]></ClickThrough>
                      <ClickTracking id="ctr"><![CDATA[https://track.example.com/click]]></ClickTracking>
                    </VideoClicks>
                    <MediaFiles>
                      <MediaFile delivery="progressive" type="video/mp4" width="1280" height="720" bitrate="1500" codec="H.264">
                        <![CDATA[https://media.example.com/spot.mp4]]>
                      </MediaFile>
                    </MediaFiles>
                  </Linear>
                </Creative>
              </Creatives>
              <Extensions>
                <Extension type="FreeWheel">
                  <CreativeParameters>
                    <CreativeParameter creativeId="creative-1" name="moat" type="Linear">tag</CreativeParameter>
                  </CreativeParameters>
                </Extension>
              </Extensions>
              <Error>https://track.example.com/error?code=[ERRORCODE]</Error>
            </InLine>
          </Ad>
        </VAST>
      </vmap:VASTAdData>
    </vmap:AdSource>
    <vmap:TrackingEvents>
      <vmap:Tracking event="breakStart">https://track.example.com/break-start</vmap:Tracking>
    </vmap:TrackingEvents>
  </vmap:AdBreak>
  <vmap:AdBreak timeOffset="00:10:00.000" breakType="linear" breakId="midroll-1">
    <vmap:AdSource id="midroll-ad-1">
      <vmap:AdTagURI templateType="vast3"><![CDATA[https://ads.example.com/midroll]]></vmap:AdTagURI>
    </vmap:AdSource>
  </vmap:AdBreak>
  <vmap:AdBreak timeOffset="50%" breakType="linear" breakId="midroll-2"/>
  <vmap:AdBreak timeOffset="#2" breakType="linear" breakId="pod-2"/>
  <vmap:AdBreak timeOffset="end" breakType="linear" breakId="postroll"/>
</vmap:VMAP>"""


@pytest.fixture
def vmap_with_bad_offset_xml() -> str:
    """VMAP document whose second ad break has an unparseable offset."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<vmap:VMAP xmlns:vmap="http://www.iab.net/videosuite/vmap" version="1.0">
  <vmap:AdBreak timeOffset="start" breakType="linear" breakId="preroll"/>
  <vmap:AdBreak timeOffset="#abc" breakType="linear" breakId="broken"/>
</vmap:VMAP>"""


@pytest.fixture
def minimal_vast_xml() -> str:
    """Minimal valid VAST 4.0 XML."""
    return """<?xml version="1.0" encoding="UTF-8"?>
<VAST version="4.0">
  <Ad id="test-ad-001">
    <InLine>
      <AdSystem>Test Ad System</AdSystem>
      <AdTitle>Test Ad Title</AdTitle>
      <Impression><![CDATA[https://tracking.example.com/impression]]></Impression>
      <Creatives>
        <Creative id="creative-001" adId="ad-001">
          <Linear>
            <Duration>00:00:15</Duration>
            <MediaFiles>
              <MediaFile delivery="progressive" type="video/mp4" width="1280" height="720">
                <![CDATA[https://media.example.com/video.mp4]]>
              </MediaFile>
            </MediaFiles>
          </Linear>
        </Creative>
      </Creatives>
    </InLine>
  </Ad>
</VAST>"""
