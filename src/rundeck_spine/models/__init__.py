"""Job definition models."""

from rundeck_spine.models.jobs import *  # noqa: F401,F403
from rundeck_spine.models.jobs import __all__  # noqa: F401
