"""Eligibility checks for deployments that jobs are derived from."""

import logging

from .annotations import (
    COMMAND_TEMPLATE_ANNOTATION,
    PRIMARY_CONTAINER_ANNOTATION,
    get_command_template,
    get_primary_container,
)
from .errors import (
    MissingCommandTemplate,
    MissingPrimaryContainerAnnotation,
    PrimaryContainerNotFound,
)

logger = logging.getLogger(__name__)


def get_containers(deployment) -> list:
    """Containers of a deployment's pod template, empty if the template has none."""
    spec = deployment.spec
    if spec is None or spec.template is None or spec.template.spec is None:
        return []
    return spec.template.spec.containers or []


def validate_deployment(deployment) -> None:
    """Raise a ValidationError if a job cannot be derived from the deployment.

    Single-container deployments never need the primary container annotation.
    """
    name = deployment.metadata.name

    if get_command_template(deployment) is None:
        raise MissingCommandTemplate(
            f"Deployment {name} doesn't have command template annotation "
            f"{COMMAND_TEMPLATE_ANNOTATION}"
        )

    containers = get_containers(deployment)
    if len(containers) <= 1:
        return

    primary_container = get_primary_container(deployment)
    if primary_container is None:
        raise MissingPrimaryContainerAnnotation(
            f"Deployment {name} has multiple containers, but doesn't have primary "
            f"container annotation {PRIMARY_CONTAINER_ANNOTATION}"
        )

    if not any(c.name == primary_container for c in containers):
        raise PrimaryContainerNotFound(
            f"Deployment {name} has multiple containers, and none of them matches "
            f"the name '{primary_container}' in primary container annotation "
            f"{PRIMARY_CONTAINER_ANNOTATION}"
        )

    logger.debug(f"Deployment {name} is valid, primary container: {primary_container}")
