"""VMAP/VAST document parser and writer."""

import json
from typing import Any

from lxml import etree

from .config import VmapParserConfig
from .events import VmapEvents
from .exceptions import VmapFormatError, VmapParseError, VmapXMLError
from .log_config import get_context_logger
from .models import VAST, VMAP
from .serializer import JsonProjector, XmlSerializer, local_name


class VmapParser:
    """Parse VMAP/VAST XML into models and write models back as XML or JSON."""

    def __init__(self, config=None):
        # Use contextual logger that automatically picks up context variables
        self.logger = get_context_logger("vmap_parser")
        self.config = config if config is not None else VmapParserConfig()
        self.serializer = XmlSerializer(self.config)
        self.projector = JsonProjector()

    def parse_vmap(self, xml_string: str | bytes) -> VMAP:
        """Parse a VMAP document.

        Args:
            xml_string: Raw VMAP XML

        Returns:
            VMAP model

        Raises:
            VmapXMLError: If XML parsing fails
            VmapParseError: If the root element is not VMAP
            VmapFormatError: If a scalar is malformed and skipping is disabled
        """
        return self._parse(xml_string, VMAP)

    def parse_vast(self, xml_string: str | bytes) -> VAST:
        """Parse a standalone VAST document."""
        return self._parse(xml_string, VAST)

    def _parse(self, xml_string: str | bytes, model: type) -> Any:
        self.logger.debug(
            VmapEvents.PARSE_STARTED, document=model.__name__, xml_length=len(xml_string)
        )
        root = self._load(xml_string)

        if local_name(root) != model.__xml_tag__:
            self.logger.error(
                VmapEvents.PARSE_FAILED,
                error="unexpected root element",
                root_tag=root.tag,
                expected=model.__xml_tag__,
            )
            raise VmapParseError(
                f"Expected <{model.__xml_tag__}> root element, got <{local_name(root)}>",
                context={"root_tag": root.tag},
            )

        try:
            document = self.serializer.from_element(model, root)
        except VmapFormatError as e:
            self.logger.error(VmapEvents.PARSE_FAILED, error=str(e), text=e.text)
            raise

        if isinstance(document, VMAP):
            self.logger.info(
                VmapEvents.PARSE_COMPLETED,
                document="VMAP",
                version=document.version,
                ad_breaks_count=len(document.ad_breaks),
            )
        else:
            self.logger.info(
                VmapEvents.PARSE_COMPLETED,
                document="VAST",
                version=document.version,
                ads_count=len(document.ads),
            )
        return document

    def _load(self, xml_string: str | bytes) -> etree._Element:
        preview = xml_string[:200] if isinstance(xml_string, str) else repr(xml_string[:200])
        try:
            parser = etree.XMLParser(
                recover=self.config.recover_on_error,
                encoding=self.config.encoding,
                resolve_entities=False,
            )
            data = (
                xml_string.encode(self.config.encoding)
                if isinstance(xml_string, str)
                else xml_string
            )
            root = etree.fromstring(data, parser=parser)  # ruff: noqa: S320
        except etree.XMLSyntaxError as e:
            self.logger.error(VmapEvents.PARSE_FAILED, error=str(e), xml_preview=preview)
            raise VmapXMLError(
                f"Failed to parse XML: {str(e)}",
                xml_preview=preview,
                parser_error=e,
            ) from e
        except (UnicodeError, ValueError) as e:
            self.logger.error(VmapEvents.PARSE_FAILED, error=str(e), xml_preview=preview)
            raise VmapXMLError(
                f"Failed to decode or parse XML: {str(e)}",
                xml_preview=preview,
                parser_error=e,
            ) from e

        if root is None:
            # recover mode yields no root for empty or hopeless input
            raise VmapXMLError("Document has no root element", xml_preview=preview)
        self.logger.debug("XML parsed successfully", root_tag=root.tag)
        return root

    def to_xml(self, document: VMAP | VAST) -> str:
        """Serialize a document model to XML text."""
        self.logger.debug(VmapEvents.SERIALIZE_STARTED, document=type(document).__name__)
        root = self.serializer.to_element(document)
        xml_bytes = etree.tostring(
            root,
            pretty_print=self.config.pretty_print,
            xml_declaration=self.config.xml_declaration,
            encoding=self.config.encoding,
        )
        xml_text = xml_bytes.decode(self.config.encoding)
        self.logger.debug(
            VmapEvents.SERIALIZE_COMPLETED,
            document=type(document).__name__,
            xml_length=len(xml_text),
        )
        return xml_text

    def to_dict(self, document: Any) -> dict[str, Any]:
        return self.projector.to_dict(document)

    def to_json(self, document: Any) -> str:
        """Serialize a document model to its JSON projection."""
        return json.dumps(self.projector.to_dict(document), indent=self.config.json_indent)

    def from_json(self, json_string: str, model: type = VMAP) -> Any:
        """Build a document model from its JSON projection.

        Raises:
            VmapParseError: If the JSON text is invalid
        """
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise VmapParseError(
                f"Failed to parse JSON: {str(e)}",
                context={"position": e.pos},
            ) from e
        return self.projector.from_dict(model, data)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "VmapParser":
        """Create parser from configuration dictionary.

        Args:
            config: Configuration dictionary

        Returns:
            VmapParser: Configured parser instance
        """
        return cls(config=VmapParserConfig.from_dict(config))


__all__ = ["VmapParser"]
