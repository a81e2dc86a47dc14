"""
Protocol definitions for rundeck-spine.

Manifesto:
    The codec and the retrieval client never talk to the network. They
    depend on the *shape* of a fetcher, so tests pass a stub and
    production passes :class:`rundeck_spine.transport.HttpJobFetcher`.

Architecture:
    ::

        protocols.py
        └── JobFetcher  : fetch(path_segments, query) -> raw document bytes

Guardrails:
    ❌ DON'T: Build request paths inside fetchers
    ✅ DO: Let the client pass path segments, the fetcher only joins them

Tags:
    protocol, transport, fetcher, rundeck-spine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import Mapping, Protocol, Sequence, runtime_checkable


@runtime_checkable
class JobFetcher(Protocol):
    """
    External fetch collaborator.

    Returns the raw document for ``path_segments`` (already stripped of any
    response envelope). Failures are raised as
    :class:`rundeck_spine.core.errors.TransportError` and are surfaced to the
    caller unchanged.
    """

    def fetch(
        self,
        path_segments: Sequence[str],
        query: Mapping[str, str] | None = None,
    ) -> bytes:
        ...


__all__ = ["JobFetcher"]
