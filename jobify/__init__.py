"""Derive one-shot Kubernetes jobs from running deployments."""

import logging
import os
import sys

__version__ = "0.1.0"

from .command_resolver import resolve_command, resolve_image_tag
from .errors import (
    ClusterConnectionError,
    CommandResolutionError,
    JobifyError,
    MissingCommandTemplate,
    MissingPrimaryContainerAnnotation,
    PrimaryContainerInvariantViolation,
    PrimaryContainerNotFound,
    ValidationError,
)
from .job_builder import build_job
from .status import JobState, classify_conditions, classify_job
from .validator import validate_deployment

__all__ = [
    "build_job",
    "classify_conditions",
    "classify_job",
    "resolve_command",
    "resolve_image_tag",
    "validate_deployment",
    "JobState",
    "JobifyError",
    "ValidationError",
    "MissingCommandTemplate",
    "MissingPrimaryContainerAnnotation",
    "PrimaryContainerNotFound",
    "CommandResolutionError",
    "PrimaryContainerInvariantViolation",
    "ClusterConnectionError",
]


def _resolve_log_level(name):
    """Numeric level for a level name, or None when the name is unknown."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else None


# Diagnostics go to stderr so they never mix with prompts and job output
def _setup_logging():
    root_logger = logging.getLogger('jobify')
    if not root_logger.handlers:
        level_name = os.environ.get("JOBIFY_LOG_LEVEL", "WARNING")
        level = _resolve_log_level(level_name)
        root_logger.setLevel(logging.WARNING if level is None else level)
        handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter(
            "[%(levelname)s %(asctime)s.%(msecs)03d jobify] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
        root_logger.propagate = False
        if level is None:
            root_logger.warning(f"Unknown JOBIFY_LOG_LEVEL '{level_name}', using WARNING")

_setup_logging()
