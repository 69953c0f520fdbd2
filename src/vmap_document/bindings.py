"""Declarative field bindings between dataclass models and document trees.

Each model field carries a :class:`Binding` in its dataclass metadata
that says where the value lives in the XML tree (attribute, character
data, scalar child element, nested model or list of nested models),
which scalar codec converts it, and which key it uses in the JSON
projection.

Example:
    >>> @dataclass
    ... class Tracking:
    ...     event: str = attribute("event")
    ...     url: str = text(json="url")
"""

from dataclasses import MISSING, dataclass, field, fields, is_dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Optional

from .codecs import STRING, ScalarCodec
from .exceptions import VmapSerializationError


BINDING_KEY = "vmap_binding"


class BindingKind(str, Enum):
    """Where a bound value lives in the XML tree."""

    ATTRIBUTE = "attribute"
    TEXT = "text"  # direct character data of the element
    ELEMENT = "element"  # text of a scalar child element
    CHILD = "child"  # single nested model
    CHILDREN = "children"  # list of nested models
    NAMESPACE = "namespace"  # namespace declaration (xmlns:prefix)


@dataclass(frozen=True)
class Binding:
    """Mapping of one model field to the document tree."""

    kind: BindingKind
    path: tuple[str, ...] = ()
    json_name: Optional[str] = None
    codec: ScalarCodec = STRING
    model: Optional[type] = None
    prefix: Optional[str] = None

    @property
    def tag(self) -> str:
        return self.path[-1]


def _split(path: str) -> tuple[str, ...]:
    return tuple(segment for segment in path.split("/") if segment)


def _bound_field(binding: Binding, default: Any = MISSING, default_factory: Any = MISSING):
    metadata = {BINDING_KEY: binding}
    if default_factory is not MISSING:
        return field(default_factory=default_factory, metadata=metadata)
    return field(default=default, metadata=metadata)


def attribute(
    name: str,
    codec: ScalarCodec = STRING,
    json: Optional[str] = None,
    default: Any = "",
    prefix: Optional[str] = None,
):
    """Bind a field to an XML attribute.

    Args:
        name: Attribute local name
        codec: Scalar codec for the attribute text
        json: Key in the JSON projection (defaults to ``name``)
        default: Value used when the attribute is absent
        prefix: Namespace prefix the attribute is written with, if declared
    """
    return _bound_field(
        Binding(BindingKind.ATTRIBUTE, (name,), json or name, codec, prefix=prefix),
        default=default,
    )


def text(codec: ScalarCodec = STRING, json: str = "text", default: Any = ""):
    """Bind a field to the element's own character data."""
    return _bound_field(Binding(BindingKind.TEXT, (), json, codec), default=default)


def element(path: str, codec: ScalarCodec = STRING, json: Optional[str] = None, default: Any = ""):
    """Bind a field to the text of a (possibly nested) scalar child element."""
    segments = _split(path)
    return _bound_field(
        Binding(BindingKind.ELEMENT, segments, json or segments[-1], codec),
        default=default,
    )


def child(path: str, model: type, json: Optional[str] = None):
    """Bind a field to a single optional nested model."""
    segments = _split(path)
    return _bound_field(
        Binding(BindingKind.CHILD, segments, json or segments[-1], model=model),
        default=None,
    )


def children(path: str, model: type, json: Optional[str] = None):
    """Bind a field to every nested model found at ``path``.

    Intermediate segments are wrapper elements, e.g.
    ``TrackingEvents/Tracking``.
    """
    segments = _split(path)
    return _bound_field(
        Binding(BindingKind.CHILDREN, segments, json or segments[-1], model=model),
        default_factory=list,
    )


def namespace(prefix: str, json: Optional[str] = None):
    """Bind a field to the URI declared for ``xmlns:<prefix>``."""
    return _bound_field(
        Binding(BindingKind.NAMESPACE, (), json or prefix, prefix=prefix),
        default="",
    )


@lru_cache(maxsize=None)
def get_bindings(cls: type) -> tuple[tuple[str, Binding], ...]:
    """Return ``(field_name, binding)`` pairs of a model in declaration order.

    Raises:
        VmapSerializationError: If ``cls`` is not a dataclass model
    """
    if not is_dataclass(cls):
        raise VmapSerializationError(
            "Bound models must be dataclasses", model=getattr(cls, "__name__", repr(cls))
        )
    return tuple(
        (f.name, f.metadata[BINDING_KEY]) for f in fields(cls) if BINDING_KEY in f.metadata
    )


__all__ = [
    "BINDING_KEY",
    "Binding",
    "BindingKind",
    "attribute",
    "text",
    "element",
    "child",
    "children",
    "namespace",
    "get_bindings",
]
