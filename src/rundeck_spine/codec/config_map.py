"""
Plugin configuration map codec.

A plugin's configuration is an unordered ``str -> str`` mapping. On the
wire it is a wrapper element holding one ``entry`` element per pair::

    <configuration>
      <entry key="retries" value="3"/>
      <entry key="timeout" value="30"/>
    </configuration>

Manifesto:
    - **Deterministic:** Entries are written in lexicographic key order, so
      the same mapping always serializes to the same bytes
    - **Absence means empty:** An empty mapping writes no wrapper at all
    - **All or nothing:** A structural violation aborts the decode; no
      partial mapping is ever returned

Architecture:
    ::

        decode: forward-only walk over the wrapper's tokens

            ┌────────────────────────┐  <entry key=..>   (insert pair)
            │  EXPECT_ENTRY_OR_END   │ ◄───────────────┐
            └──────────┬─────────────┘ ─────────────────┘
                       │ </wrapper>         other tag      → SchemaViolationError
                       ▼                    entry w/o key  → SchemaViolationError
            ┌────────────────────────┐      end of stream  → SchemaViolationError
            │        TERMINAL        │      text / other end tokens ignored
            └────────────────────────┘

Guardrails:
    ❌ DON'T: Iterate the mapping directly when encoding
    ✅ DO: Sort keys explicitly
    Duplicate keys decode last-write-wins without an error.

Tags:
    codec, map, state-machine, xml, rundeck-spine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Mapping
from xml.etree.ElementTree import Element, SubElement

from rundeck_spine.codec.tokens import EndElement, StartElement, Token
from rundeck_spine.core.errors import SchemaViolationError

CONFIG_TAG = "configuration"
ENTRY_TAG = "entry"
KEY_ATTR = "key"
VALUE_ATTR = "value"


class _State(str, Enum):
    EXPECT_ENTRY_OR_END = "expect-entry-or-end"
    TERMINAL = "terminal"


def encode_config(parent: Element, config: Mapping[str, str], tag: str = CONFIG_TAG) -> Element | None:
    """Append the wrapped, key-sorted entries to ``parent``.

    Returns the wrapper element, or ``None`` when ``config`` is empty and
    nothing was written.
    """
    if not config:
        return None
    wrapper = SubElement(parent, tag)
    for key in sorted(config):
        SubElement(wrapper, ENTRY_TAG, {KEY_ATTR: key, VALUE_ATTR: config[key]})
    return wrapper


def decode_config(tokens: Iterable[Token], start: StartElement) -> dict[str, str]:
    """Decode entries from ``tokens``, positioned just inside ``start``.

    Raises:
        SchemaViolationError: the stream ended before ``start`` was closed,
            a child other than ``entry`` appeared, or an entry had no key
    """
    result: dict[str, str] = {}
    state = _State.EXPECT_ENTRY_OR_END
    stream = iter(tokens)

    while state is _State.EXPECT_ENTRY_OR_END:
        token = next(stream, None)

        if token is None:
            raise SchemaViolationError(
                "unexpected end of input while decoding configuration"
            ).with_context(element=start.name)

        if isinstance(token, StartElement):
            if token.name != ENTRY_TAG:
                raise SchemaViolationError(
                    f"unexpected element <{token.name}> while looking for configuration entries"
                ).with_context(element=token.name)
            key = token.attrs.get(KEY_ATTR, "")
            if not key:
                raise SchemaViolationError(
                    "configuration entry missing key"
                ).with_context(element=ENTRY_TAG, attribute=KEY_ATTR)
            result[key] = token.attrs.get(VALUE_ATTR, "")

        elif isinstance(token, EndElement) and token.name == start.name:
            state = _State.TERMINAL

        # CharData and inner end tokens are skipped

    return result


__all__ = ["CONFIG_TAG", "ENTRY_TAG", "encode_config", "decode_config"]
