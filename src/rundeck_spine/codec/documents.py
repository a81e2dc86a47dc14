"""
Job document schemas and top-level encode/decode.

Two collection documents are exchanged with the scheduling service::

    <jobs>                               <joblist>
      <job id="..">                        <job>
        <name/> <group/> <project/>          <id/> <name/> <group/>
        <description/>                       <context><project/><options/></context>
      </job>                                 <description/> <loglevel/>
    </jobs>                                  <multipleExecutions/>
                                             <dispatch>..</dispatch>
                                             <sequence>..</sequence>
                                             <nodefilters>..</nodefilters>
                                           </job>
                                         </joblist>

Manifesto:
    - **Bytes in, entities out:** Decoding is a pure function of the input
    - **No partial results:** Any violation aborts the whole document
    - **Deterministic output:** Encoding the same entities twice yields
      identical bytes

Examples:
    >>> jobs = decode_job_summaries(b'<jobs><job id="1"><name>backup</name></job></jobs>')
    >>> jobs[0].name
    'backup'

Tags:
    codec, xml, jobs, schema, rundeck-spine

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from typing import Any
from xml.etree import ElementTree
from xml.etree.ElementTree import Element, SubElement

from rundeck_spine.codec.config_map import decode_config, encode_config
from rundeck_spine.codec.scalars import (
    decode_value_choices,
    decode_wrapped_scalar,
    encode_value_choices,
    encode_wrapped_scalar,
)
from rundeck_spine.codec.schema import (
    EntitySchema,
    VariantCodec,
    attr,
    child,
    custom,
    repeated,
    text,
)
from rundeck_spine.codec.tokens import StartElement, element_tokens
from rundeck_spine.core.errors import MalformedDocumentError, SchemaViolationError
from rundeck_spine.models.jobs import (
    InlineScript,
    JobCommandJobRef,
    JobCommandSequence,
    JobDetail,
    JobNodeFilter,
    JobOption,
    JobOptions,
    JobPlugin,
    JobReference,
    JobSummary,
    NodeStepPlugin,
    ScriptFileInvocation,
    ShellCommand,
    StepPlugin,
)

SUMMARY_LIST_TAG = "jobs"
DETAIL_LIST_TAG = "joblist"
JOB_TAG = "job"


# =============================================================================
# Custom field codecs
# =============================================================================


class ValueChoicesField:
    """List field stored as one comma-joined attribute."""

    def decode(self, element: Element, path: str, location: str) -> list[str]:
        raw = element.get(path)
        if raw is None:
            return []
        return decode_value_choices(raw)

    def encode(self, element: Element, path: str, value: list[str]) -> None:
        joined = encode_value_choices(value)
        if joined is not None:
            element.set(path, joined)


class WrappedScalarField:
    """String field stored in the ``line`` attribute of a child element."""

    def decode(self, element: Element, path: str, location: str) -> str:
        return decode_wrapped_scalar(element.find(path))

    def encode(self, element: Element, path: str, value: str) -> None:
        encode_wrapped_scalar(element, path, value)


class PluginConfigField:
    """Mapping field stored as sorted ``entry`` elements under a wrapper."""

    def decode(self, element: Element, path: str, location: str) -> dict[str, str]:
        wrapper = element.find(path)
        if wrapper is None:
            return {}
        try:
            return decode_config(element_tokens(wrapper), StartElement.of(wrapper))
        except SchemaViolationError as exc:
            exc.with_context(field_path=f"{location}/{path}")
            raise

    def encode(self, element: Element, path: str, value: dict[str, str]) -> None:
        encode_config(element, value, tag=path)


# =============================================================================
# Entity schemas
# =============================================================================

JOB_SUMMARY = EntitySchema(JobSummary, JOB_TAG, (
    attr("id", "id"),
    text("name", "name"),
    text("group", "group"),
    text("project", "project"),
    text("description", "description", omit_empty=True),
))

JOB_OPTION = EntitySchema(JobOption, "option", (
    attr("default_value", "value", omit_empty=True),
    custom("value_choices", "values", ValueChoicesField()),
    attr("value_choices_url", "valuesUrl", omit_empty=True),
    attr("require_predefined_choice", "enforcedvalues", bool),
    attr("validation_regex", "regex", omit_empty=True),
    text("description", "description", omit_empty=True),
    attr("is_required", "required", bool),
    attr("allows_multiple_values", "multivalued", bool),
    attr("multi_value_delimiter", "delimeter"),
    attr("obscure_input", "secure", bool),
    attr("value_is_exposed_to_scripts", "valueExposed", bool),
))

JOB_OPTIONS = EntitySchema(JobOptions, "options", (
    text("preserve_order", "preserveOrder", bool),
    repeated("options", "option", JOB_OPTION),
))

JOB_REF = EntitySchema(JobCommandJobRef, "jobref", (
    attr("name", "name"),
    attr("group", "group"),
    attr("run_for_each_node", "nodeStep", bool),
    custom("arguments", "arg", WrappedScalarField()),
))

JOB_PLUGIN = EntitySchema(JobPlugin, "plugin", (
    attr("type", "type"),
    custom("config", "configuration", PluginConfigField()),
))

JOB_COMMAND = VariantCodec("command", (
    ("exec", EntitySchema(ShellCommand, "command", (
        text("command", "exec"),
    ))),
    ("script", EntitySchema(InlineScript, "command", (
        text("script", "script"),
    ))),
    ("scriptfile", EntitySchema(ScriptFileInvocation, "command", (
        text("path", "scriptfile"),
        text("args", "scriptargs", omit_empty=True),
    ))),
    ("jobref", EntitySchema(JobReference, "command", (
        child("job", "jobref", JOB_REF),
    ))),
    ("step-plugin", EntitySchema(StepPlugin, "command", (
        child("plugin", "step-plugin", JOB_PLUGIN),
    ))),
    ("node-step-plugin", EntitySchema(NodeStepPlugin, "command", (
        child("plugin", "node-step-plugin", JOB_PLUGIN),
    ))),
))

JOB_COMMAND_SEQUENCE = EntitySchema(JobCommandSequence, "sequence", (
    attr("continue_on_error", "keepgoing", bool),
    attr("ordering_strategy", "strategy"),
    repeated("commands", "command", JOB_COMMAND),
))

JOB_NODE_FILTER = EntitySchema(JobNodeFilter, "nodefilters", (
    text("exclude_precedence", "excludeprecedence", bool),
    text("query", "filter"),
))

JOB_DETAIL = EntitySchema(JobDetail, JOB_TAG, (
    text("id", "id", omit_empty=True),
    text("name", "name"),
    text("group", "group", omit_empty=True),
    text("project", "context/project", omit_empty=True),
    text("description", "description", omit_empty=True),
    text("log_level", "loglevel"),
    text("allow_concurrent_executions", "multipleExecutions", bool),
    child("options", "context/options", JOB_OPTIONS),
    text("max_thread_count", "dispatch/threadcount", int),
    text("continue_on_error", "dispatch/keepgoing", bool),
    text("rank_attribute", "dispatch/rankAttribute"),
    text("rank_order", "dispatch/rankOrder"),
    child("command_sequence", "sequence", JOB_COMMAND_SEQUENCE),
    child("node_filter", "nodefilters", JOB_NODE_FILTER),
))


# =============================================================================
# Collection documents
# =============================================================================


def parse_document(data: bytes | str) -> Element:
    """Parse raw markup, raising MalformedDocumentError on bad input."""
    try:
        return ElementTree.fromstring(data)
    except ElementTree.ParseError as exc:
        raise MalformedDocumentError(f"malformed document: {exc}", cause=exc) from exc


def _decode_collection(data: bytes | str, root_tag: str, schema: EntitySchema) -> list[Any]:
    root = parse_document(data)
    if root.tag != root_tag:
        raise SchemaViolationError(
            f"expected element type <{root_tag}> but have <{root.tag}>"
        ).with_context(element=root.tag)
    return [
        schema.decode_element(item, f"{root_tag}/{JOB_TAG}[{index}]")
        for index, item in enumerate(root.findall(JOB_TAG))
    ]


def _encode_collection(items: list[Any], root_tag: str, schema: EntitySchema) -> bytes:
    root = Element(root_tag)
    for item in items:
        schema.encode_element(item, SubElement(root, JOB_TAG))
    return ElementTree.tostring(root, encoding="utf-8")


def decode_job_summaries(data: bytes | str) -> list[JobSummary]:
    """Decode a ``<jobs>`` document."""
    return _decode_collection(data, SUMMARY_LIST_TAG, JOB_SUMMARY)


def decode_job_details(data: bytes | str) -> list[JobDetail]:
    """Decode a ``<joblist>`` document."""
    return _decode_collection(data, DETAIL_LIST_TAG, JOB_DETAIL)


def encode_job_summaries(jobs: list[JobSummary]) -> bytes:
    """Encode summaries as a ``<jobs>`` document."""
    return _encode_collection(jobs, SUMMARY_LIST_TAG, JOB_SUMMARY)


def encode_job_details(jobs: list[JobDetail]) -> bytes:
    """Encode full definitions as a ``<joblist>`` document."""
    return _encode_collection(jobs, DETAIL_LIST_TAG, JOB_DETAIL)


__all__ = [
    "JOB_SUMMARY",
    "JOB_DETAIL",
    "JOB_COMMAND",
    "parse_document",
    "decode_job_summaries",
    "decode_job_details",
    "encode_job_summaries",
    "encode_job_details",
]
