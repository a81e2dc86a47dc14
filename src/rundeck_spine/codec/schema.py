"""
Declarative document schema.

Each entity is described by an :class:`EntitySchema`: the dataclass it
builds and one :class:`FieldSpec` per field, saying where that field lives
in the element tree. A single generic walker decodes and encodes every
entity from those specs.

Manifesto:
    The job document is mostly regular. Describing it as data keeps the
    regular part out of hand-written code, so the only hand-written
    decoders are the ones the shape genuinely needs (choice lists, the
    argument wrapper, the configuration map, step variants).

Architecture:
    ::

        FieldKind     location                         zero value when absent
        ─────────     ────────                         ──────────────────────
        TEXT          text of child at path (a/b ok)   "", False, 0
        ATTR          attribute on current element     "", False, 0
        CHILD         nested entity at path (a/b ok)   schema.cls()
        REPEATED      one child element per item       []
        CUSTOM        delegated to a FieldCodec        codec decides

        VariantCodec  picks one of several schemas by which marker
                      child element is present (sum types)

Guardrails:
    ❌ DON'T: Fall back to a default when a value fails to coerce
    ✅ DO: Raise SchemaViolationError carrying the field path
    Booleans accept 1/t/T/TRUE/true/True and 0/f/F/FALSE/false/False;
    surrounding whitespace is trimmed for booleans and integers, and an
    empty value decodes to the zero value.

Tags:
    codec, schema, xml, declarative, rundeck-spine

Doc-Types:
    - API Reference
    - Architecture Decision Record
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol
from xml.etree.ElementTree import Element, SubElement

from rundeck_spine.core.errors import SchemaViolationError

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_INT = re.compile(r"[+-]?[0-9]+")
_INT_MIN, _INT_MAX = -(2**63), 2**63 - 1


class FieldKind(str, Enum):
    TEXT = "text"
    ATTR = "attr"
    CHILD = "child"
    REPEATED = "repeated"
    CUSTOM = "custom"


class ElementCodec(Protocol):
    """Turns one element into one value and back."""

    def decode_element(self, element: Element, location: str) -> Any:
        ...

    def encode_element(self, value: Any, element: Element) -> None:
        ...


class FieldCodec(Protocol):
    """Hand-written mapping for a field that the generic kinds cannot express."""

    def decode(self, element: Element, path: str, location: str) -> Any:
        ...

    def encode(self, element: Element, path: str, value: Any) -> None:
        ...


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    path: str
    type: type = str
    omit_empty: bool = False
    schema: EntitySchema | None = None
    codec: Any = None  # ElementCodec for REPEATED, FieldCodec for CUSTOM


# ── Field builders ────────────────────────────────────────────────────────


def text(name: str, path: str, type_: type = str, *, omit_empty: bool = False) -> FieldSpec:
    return FieldSpec(name, FieldKind.TEXT, path, type_, omit_empty)


def attr(name: str, path: str, type_: type = str, *, omit_empty: bool = False) -> FieldSpec:
    return FieldSpec(name, FieldKind.ATTR, path, type_, omit_empty)


def child(name: str, path: str, schema: EntitySchema) -> FieldSpec:
    return FieldSpec(name, FieldKind.CHILD, path, schema=schema)


def repeated(name: str, path: str, codec: ElementCodec) -> FieldSpec:
    return FieldSpec(name, FieldKind.REPEATED, path, codec=codec)


def custom(name: str, path: str, codec: FieldCodec) -> FieldSpec:
    return FieldSpec(name, FieldKind.CUSTOM, path, codec=codec)


# ── Scalar coercion ──────────────────────────────────────────────────────


def coerce(raw: str, type_: type, where: str) -> Any:
    """Convert raw markup text to ``type_``, naming ``where`` on failure."""
    if type_ is str:
        return raw
    value = raw.strip()
    if not value:
        return type_()
    if type_ is bool:
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
    elif type_ is int:
        if _INT.fullmatch(value) and _INT_MIN <= int(value) <= _INT_MAX:
            return int(value)
    raise SchemaViolationError(
        f"invalid {type_.__name__} value {raw!r} at {where}"
    ).with_context(field_path=where)


def format_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _ensure_path(element: Element, parts: list[str]) -> Element:
    """Find or create the chain of single children named by ``parts``."""
    for part in parts:
        found = element.find(part)
        element = found if found is not None else SubElement(element, part)
    return element


def _append_at(element: Element, path: str) -> Element:
    *parents, leaf = path.split("/")
    return SubElement(_ensure_path(element, parents), leaf)


# ── Entity schema ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EntitySchema:
    """Declarative mapping between a dataclass and an element."""

    cls: type
    tag: str
    fields: tuple[FieldSpec, ...]

    def decode_element(self, element: Element, location: str | None = None) -> Any:
        location = location or element.tag
        values = {spec.name: self._decode_field(element, spec, location) for spec in self.fields}
        return self.cls(**values)

    def encode_element(self, value: Any, element: Element) -> None:
        for spec in self.fields:
            self._encode_field(element, spec, getattr(value, spec.name))

    def to_element(self, value: Any) -> Element:
        element = Element(self.tag)
        self.encode_element(value, element)
        return element

    @staticmethod
    def _decode_field(element: Element, spec: FieldSpec, location: str) -> Any:
        if spec.kind is FieldKind.ATTR:
            raw = element.get(spec.path)
            if raw is None:
                return spec.type()
            return coerce(raw, spec.type, f"{location}@{spec.path}")

        if spec.kind is FieldKind.TEXT:
            found = element.find(spec.path)
            if found is None:
                return spec.type()
            return coerce(found.text or "", spec.type, f"{location}/{spec.path}")

        if spec.kind is FieldKind.CHILD:
            found = element.find(spec.path)
            if found is None:
                return spec.schema.cls()
            return spec.schema.decode_element(found, f"{location}/{spec.path}")

        if spec.kind is FieldKind.REPEATED:
            return [
                spec.codec.decode_element(item, f"{location}/{spec.path}[{index}]")
                for index, item in enumerate(element.findall(spec.path))
            ]

        return spec.codec.decode(element, spec.path, location)

    @staticmethod
    def _encode_field(element: Element, spec: FieldSpec, value: Any) -> None:
        if spec.kind is FieldKind.ATTR:
            if spec.omit_empty and not value:
                return
            element.set(spec.path, format_scalar(value))

        elif spec.kind is FieldKind.TEXT:
            if spec.omit_empty and not value:
                return
            _append_at(element, spec.path).text = format_scalar(value)

        elif spec.kind is FieldKind.CHILD:
            spec.schema.encode_element(value, _append_at(element, spec.path))

        elif spec.kind is FieldKind.REPEATED:
            for item in value:
                spec.codec.encode_element(item, _append_at(element, spec.path))

        else:
            spec.codec.encode(element, spec.path, value)


# ── Sum types ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class VariantCodec:
    """
    Decode an element into exactly one of several variant schemas.

    ``variants`` pairs a marker child tag with the schema used when that
    marker is present. Zero markers, or more than one, is a schema
    violation.
    """

    tag: str
    variants: tuple[tuple[str, EntitySchema], ...]

    def decode_element(self, element: Element, location: str) -> Any:
        present = [
            (marker, schema) for marker, schema in self.variants
            if element.find(marker) is not None
        ]
        if len(present) != 1:
            markers = ", ".join(marker for marker, _ in present) or "none"
            raise SchemaViolationError(
                f"<{self.tag}> at {location} must hold exactly one of "
                f"{', '.join(m for m, _ in self.variants)} (found: {markers})"
            ).with_context(element=self.tag, field_path=location)
        _, schema = present[0]
        return schema.decode_element(element, location)

    def encode_element(self, value: Any, element: Element) -> None:
        for _, schema in self.variants:
            if type(value) is schema.cls:
                schema.encode_element(value, element)
                return
        raise TypeError(f"{type(value).__name__} is not a <{self.tag}> variant")


__all__ = [
    "FieldKind",
    "FieldSpec",
    "EntitySchema",
    "VariantCodec",
    "ElementCodec",
    "FieldCodec",
    "text",
    "attr",
    "child",
    "repeated",
    "custom",
    "coerce",
    "format_scalar",
]
