"""
CLI layer for rundeck-spine.

Sub-commands delegate to :class:`rundeck_spine.client.JobsClient`; this
package handles only argument parsing and terminal output.

Entry point::

    rundeck-spine --help
"""

from rundeck_spine.cli.app import app

__all__ = ["app"]
