"""Job definition models.

Manifesto:
    Job summaries, full job definitions and their nested options, steps
    and node filters need typed dataclass representations so the codec
    and the client hand callers structured objects instead of raw markup.

Every field has a zero-value default: an element or attribute missing
from a document decodes to that default. Entities carry no back-reference
to their parent; the decoder builds a fresh tree on every call and the
caller owns it.

A step is one of six variant classes (``JobCommand`` is their union);
which variant a ``command`` element decodes to depends on the child
element it carries.

Tags:
    rundeck-spine, models, jobs, dataclasses, schema-mapping

Doc-Types:
    api-reference, data-model
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

# Plugin configuration: keys are unique, encode order is always sorted by key.
JobPluginConfig = dict[str, str]


# ---------------------------------------------------------------------------
# <jobs><job id="..">
# ---------------------------------------------------------------------------


@dataclass
class JobSummary:
    """One job as listed under a project."""

    id: str = ""
    name: str = ""
    group: str = ""
    project: str = ""
    description: str = ""


# ---------------------------------------------------------------------------
# <context><options>
# ---------------------------------------------------------------------------


@dataclass
class JobOption:
    """One user-supplied parameter definition."""

    default_value: str = ""
    # Comma-joined on the wire; a choice containing a comma cannot round-trip.
    value_choices: list[str] = field(default_factory=list)
    value_choices_url: str = ""
    require_predefined_choice: bool = False
    validation_regex: str = ""
    description: str = ""
    is_required: bool = False
    allows_multiple_values: bool = False
    multi_value_delimiter: str = ""
    obscure_input: bool = False
    value_is_exposed_to_scripts: bool = False


@dataclass
class JobOptions:
    """The option block of a job."""

    preserve_order: bool = False
    options: list[JobOption] = field(default_factory=list)


# ---------------------------------------------------------------------------
# <sequence><command>
# ---------------------------------------------------------------------------


@dataclass
class JobCommandJobRef:
    """Reference to another job, run as a step."""

    name: str = ""
    group: str = ""
    run_for_each_node: bool = False
    # Opaque argument line, tokenized by the scheduler.
    arguments: str = ""


@dataclass
class JobPlugin:
    """A named plugin invocation with its configuration."""

    type: str = ""
    config: JobPluginConfig = field(default_factory=dict)


@dataclass
class ShellCommand:
    """``<exec>``"""

    command: str = ""


@dataclass
class InlineScript:
    """``<script>``"""

    script: str = ""


@dataclass
class ScriptFileInvocation:
    """``<scriptfile>`` plus optional ``<scriptargs>``"""

    path: str = ""
    args: str = ""


@dataclass
class JobReference:
    """``<jobref>``"""

    job: JobCommandJobRef = field(default_factory=JobCommandJobRef)


@dataclass
class StepPlugin:
    """``<step-plugin>``"""

    plugin: JobPlugin = field(default_factory=JobPlugin)


@dataclass
class NodeStepPlugin:
    """``<node-step-plugin>``"""

    plugin: JobPlugin = field(default_factory=JobPlugin)


JobCommand = Union[
    ShellCommand,
    InlineScript,
    ScriptFileInvocation,
    JobReference,
    StepPlugin,
    NodeStepPlugin,
]


@dataclass
class JobCommandSequence:
    """Ordered execution steps of a job."""

    continue_on_error: bool = False
    ordering_strategy: str = ""
    commands: list[JobCommand] = field(default_factory=list)


# ---------------------------------------------------------------------------
# <nodefilters>
# ---------------------------------------------------------------------------


@dataclass
class JobNodeFilter:
    """Node-targeting rule."""

    exclude_precedence: bool = False
    query: str = ""


# ---------------------------------------------------------------------------
# <joblist><job>
# ---------------------------------------------------------------------------


@dataclass
class JobDetail:
    """Full definition of one job."""

    id: str = ""
    name: str = ""
    group: str = ""
    project: str = ""
    description: str = ""
    log_level: str = ""
    allow_concurrent_executions: bool = False
    options: JobOptions = field(default_factory=JobOptions)

    # Dispatch policy
    max_thread_count: int = 0
    continue_on_error: bool = False
    rank_attribute: str = ""
    rank_order: str = ""

    command_sequence: JobCommandSequence = field(default_factory=JobCommandSequence)
    node_filter: JobNodeFilter = field(default_factory=JobNodeFilter)


__all__ = [
    "JobSummary",
    "JobDetail",
    "JobOptions",
    "JobOption",
    "JobCommandSequence",
    "JobCommand",
    "ShellCommand",
    "InlineScript",
    "ScriptFileInvocation",
    "JobReference",
    "StepPlugin",
    "NodeStepPlugin",
    "JobCommandJobRef",
    "JobPlugin",
    "JobPluginConfig",
    "JobNodeFilter",
]
