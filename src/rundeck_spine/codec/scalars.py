"""Scalar field codecs.

Two fields do not map to markup the default way:

- option value-choices: a list packed into one comma-joined attribute
- job-reference arguments: a string carried in the ``line`` attribute of
  a synthetic child element instead of as text

Guardrails:
    ❌ DON'T: Escape or trim choices; commas inside a choice are not
       representable and ``"a,b"`` comes back as ``["a", "b"]``
    ❌ DON'T: Special-case ``values=""``; it decodes to ``[""]``
"""

from __future__ import annotations

from xml.etree.ElementTree import Element, SubElement

CHOICE_SEPARATOR = ","
ARGUMENTS_ATTR = "line"


# ── Comma-joined attribute list ──────────────────────────────────────────


def encode_value_choices(choices: list[str]) -> str | None:
    """Join ``choices`` with commas; ``None`` means omit the attribute."""
    if not choices:
        return None
    return CHOICE_SEPARATOR.join(choices)


def decode_value_choices(raw: str) -> list[str]:
    """Split an attribute value on commas (``""`` gives ``[""]``)."""
    return raw.split(CHOICE_SEPARATOR)


# ── Attribute-wrapped scalar ─────────────────────────────────────────────


def encode_wrapped_scalar(parent: Element, tag: str, value: str) -> Element:
    """Append ``<tag line="value"/>`` to ``parent``, even for an empty value."""
    return SubElement(parent, tag, {ARGUMENTS_ATTR: value})


def decode_wrapped_scalar(element: Element | None) -> str:
    """Read the ``line`` attribute; other attributes and children are ignored."""
    if element is None:
        return ""
    return element.get(ARGUMENTS_ATTR, "")


__all__ = [
    "encode_value_choices",
    "decode_value_choices",
    "encode_wrapped_scalar",
    "decode_wrapped_scalar",
]
