"""Generic tree serializer for bound dataclass models.

Walks the :mod:`bindings` declared on each model and delegates every
leaf value to its scalar codec. Two projections are supported:

* XML, read from and written to lxml elements (``XmlSerializer``)
* JSON-compatible dictionaries (``JsonProjector``)
"""

from typing import Any, Iterator, Optional

from lxml import etree

from .bindings import Binding, BindingKind, get_bindings
from .config import VmapParserConfig
from .events import VmapEvents
from .exceptions import VmapFormatError, VmapSerializationError
from .log_config import get_context_logger


_SKIP = object()


def local_name(node: etree._Element) -> Optional[str]:
    """Return the tag of an element without its namespace, None for comments/PIs."""
    if not isinstance(node.tag, str):
        return None
    return etree.QName(node).localname


def direct_text(node: etree._Element) -> str:
    """Character data of an element, excluding text inside its children."""
    parts = [node.text or ""]
    parts.extend(child.tail or "" for child in node)
    return "".join(parts)


def iter_path(node: etree._Element, path: tuple[str, ...]) -> Iterator[etree._Element]:
    """Yield every element reached by following ``path`` by local name."""
    if not path:
        yield node
        return
    head, rest = path[0], path[1:]
    for child in node:
        if local_name(child) == head:
            yield from iter_path(child, rest)


def find_path(node: etree._Element, path: tuple[str, ...]) -> Optional[etree._Element]:
    return next(iter_path(node, path), None)


def find_attribute(node: etree._Element, name: str) -> Optional[str]:
    """Look up an attribute by local name, ignoring its namespace."""
    if name in node.attrib:
        return node.attrib[name]
    for key, value in node.attrib.items():
        if etree.QName(key).localname == name:
            return value
    return None


class XmlSerializer:
    """Map bound models to and from lxml element trees."""

    def __init__(self, config: Optional[VmapParserConfig] = None):
        self.logger = get_context_logger("vmap_serializer")
        self.config = config or VmapParserConfig()

    # Reading

    def from_element(self, cls: type, node: etree._Element) -> Any:
        """Build a model instance from an element.

        Absent attributes and elements keep the field default.

        Raises:
            VmapFormatError: If a scalar is malformed and
                ``skip_invalid_scalars`` is disabled
        """
        values = {}
        for name, binding in get_bindings(cls):
            value = self._read_field(cls, name, binding, node)
            if value is not _SKIP:
                values[name] = value
        return cls(**values)

    def _read_field(self, cls: type, name: str, binding: Binding, node: etree._Element) -> Any:
        kind = binding.kind

        if kind is BindingKind.NAMESPACE:
            uri = node.nsmap.get(binding.prefix)
            return uri if uri is not None else _SKIP

        if kind is BindingKind.ATTRIBUTE:
            raw = find_attribute(node, binding.tag)
            if raw is None:
                return _SKIP
            return self._decode(cls, name, binding, raw)

        if kind is BindingKind.TEXT:
            return self._decode(cls, name, binding, self._text_of(node))

        if kind is BindingKind.ELEMENT:
            found = find_path(node, binding.path)
            if found is None:
                return _SKIP
            return self._decode(cls, name, binding, self._text_of(found))

        if kind is BindingKind.CHILD:
            found = find_path(node, binding.path)
            if found is None:
                return _SKIP
            return self.from_element(binding.model, found)

        return [self.from_element(binding.model, found) for found in iter_path(node, binding.path)]

    def _text_of(self, node: etree._Element) -> str:
        content = direct_text(node)
        return content.strip() if self.config.strip_text else content

    def _decode(self, cls: type, name: str, binding: Binding, raw: str) -> Any:
        try:
            return binding.codec.decode(raw)
        except VmapFormatError as e:
            if not self.config.skip_invalid_scalars:
                self.logger.warning(
                    VmapEvents.SCALAR_INVALID,
                    model=cls.__name__,
                    field=name,
                    text=raw,
                    error=e.message,
                )
                raise
            self.logger.warning(
                VmapEvents.SCALAR_SKIPPED,
                model=cls.__name__,
                field=name,
                text=raw,
                error=e.message,
            )
            return _SKIP

    # Writing

    def to_element(self, obj: Any, tag: Optional[str] = None) -> etree._Element:
        """Build an element tree for a model instance.

        The tag defaults to the model's ``__xml_tag__``.
        """
        cls = type(obj)
        tag = tag or getattr(cls, "__xml_tag__", None)
        if tag is None:
            raise VmapSerializationError("Model has no XML tag", model=cls.__name__)

        nsmap = self._nsmap(obj)
        node = etree.Element(self._qualify(cls, tag, nsmap), nsmap=nsmap or None)
        self._write_fields(obj, node, nsmap)
        return node

    def _nsmap(self, obj: Any) -> dict[str, str]:
        return {
            binding.prefix: getattr(obj, name)
            for name, binding in get_bindings(type(obj))
            if binding.kind is BindingKind.NAMESPACE and getattr(obj, name)
        }

    @staticmethod
    def _qualify(owner: type, tag: str, namespaces: dict[str, str]) -> str:
        prefix = getattr(owner, "__xml_namespace__", None)
        if prefix and prefix in namespaces:
            return f"{{{namespaces[prefix]}}}{tag}"
        return tag

    def _write_fields(self, obj: Any, node: etree._Element, namespaces: dict[str, str]) -> None:
        cls = type(obj)
        wrappers: dict[tuple[str, ...], etree._Element] = {}

        for name, binding in get_bindings(cls):
            value = getattr(obj, name)
            kind = binding.kind

            if kind is BindingKind.NAMESPACE or value is None:
                continue

            if kind is BindingKind.ATTRIBUTE:
                encoded = binding.codec.encode(value)
                # PositionOffset(0) and PercentOffset(0) encode to ""
                if encoded == "":
                    continue
                key = binding.tag
                if binding.prefix and binding.prefix in namespaces:
                    key = f"{{{namespaces[binding.prefix]}}}{key}"
                node.set(key, encoded)

            elif kind is BindingKind.TEXT:
                if value != "":
                    node.text = binding.codec.encode(value)

            elif kind is BindingKind.ELEMENT:
                encoded = binding.codec.encode(value)
                if encoded == "":
                    continue
                leaf = self._append(cls, node, binding.path, wrappers, namespaces, {})
                leaf.text = encoded

            elif kind is BindingKind.CHILD:
                self._append_model(cls, node, binding.path, wrappers, namespaces, value)

            else:
                for item in value:
                    self._append_model(cls, node, binding.path, wrappers, namespaces, item)

    def _append_model(self, owner, node, path, wrappers, namespaces, value) -> None:
        nsmap = self._nsmap(value)
        leaf = self._append(owner, node, path, wrappers, namespaces, nsmap)
        self._write_fields(value, leaf, {**namespaces, **nsmap})

    def _append(self, owner, node, path, wrappers, namespaces, nsmap) -> etree._Element:
        # wrappers are shared between bindings of the same owner, e.g. VideoClicks
        parent = node
        for depth in range(1, len(path)):
            key = path[:depth]
            if key not in wrappers:
                wrappers[key] = etree.SubElement(
                    parent, self._qualify(owner, path[depth - 1], namespaces)
                )
            parent = wrappers[key]
        return etree.SubElement(
            parent, self._qualify(owner, path[-1], namespaces), nsmap=nsmap or None
        )


class JsonProjector:
    """Project bound models to JSON-compatible dictionaries and back."""

    def to_dict(self, obj: Any) -> dict[str, Any]:
        result = {}
        for name, binding in get_bindings(type(obj)):
            value = getattr(obj, name)
            key = binding.json_name or name
            if binding.kind is BindingKind.CHILD:
                result[key] = self.to_dict(value) if value is not None else None
            elif binding.kind is BindingKind.CHILDREN:
                result[key] = [self.to_dict(item) for item in value]
            elif value is not None and binding.codec.text_in_json:
                result[key] = binding.codec.encode(value)
            else:
                result[key] = value
        return result

    def from_dict(self, cls: type, data: Any) -> Any:
        """Build a model from a dictionary produced by :meth:`to_dict`.

        Raises:
            VmapSerializationError: If the data shape does not match the model
            VmapFormatError: If a textual scalar is malformed
        """
        if not isinstance(data, dict):
            raise VmapSerializationError(
                f"Expected an object, got {type(data).__name__}", model=cls.__name__
            )
        values = {}
        for name, binding in get_bindings(cls):
            key = binding.json_name or name
            if key not in data:
                continue
            raw = data[key]
            if binding.kind is BindingKind.CHILD:
                values[name] = self.from_dict(binding.model, raw) if raw is not None else None
            elif binding.kind is BindingKind.CHILDREN:
                if raw is None:
                    raw = []
                if not isinstance(raw, list):
                    raise VmapSerializationError(
                        f"Expected a list, got {type(raw).__name__}",
                        model=cls.__name__,
                        field_name=name,
                    )
                values[name] = [self.from_dict(binding.model, item) for item in raw]
            elif raw is not None and binding.codec.text_in_json:
                if not isinstance(raw, str):
                    raise VmapSerializationError(
                        f"Expected text, got {type(raw).__name__}",
                        model=cls.__name__,
                        field_name=name,
                    )
                values[name] = binding.codec.decode(raw)
            else:
                values[name] = raw
        return cls(**values)


__all__ = [
    "XmlSerializer",
    "JsonProjector",
    "local_name",
    "direct_text",
    "iter_path",
    "find_path",
    "find_attribute",
]
