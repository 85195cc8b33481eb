"""Derives a one-shot Kubernetes Job from a Deployment's pod template."""

import copy
import logging
import random
import string
from typing import List, Optional

from kubernetes import client

from .annotations import (
    JOB_NAME_LABEL,
    JOBIFY_LABEL,
    LOG_URL_TEMPLATE_ANNOTATION,
    MANAGED_BY_LABEL,
    PRIMARY_CONTAINER_ANNOTATION,
    SAFE_TO_EVICT_ANNOTATION,
    SOURCE_ALIAS_ANNOTATION,
    SOURCE_DEPLOYMENT_ANNOTATION,
    USER_COMMAND_ANNOTATION,
    get_deployment_name,
    get_log_url_template,
    get_primary_container,
)
from .command_resolver import replace_image_tag, resolve_image_tag
from .errors import PrimaryContainerInvariantViolation
from .validator import get_containers

logger = logging.getLogger(__name__)

NAME_SUFFIX_LENGTH = 5
BACKOFF_LIMIT = 2
ACTIVE_DEADLINE_SECONDS = 24 * 60 * 60

# Seeded once per process; tests pass their own random.Random
_default_rng = random.SystemRandom()


def random_suffix(length: int = NAME_SUFFIX_LENGTH, rng: Optional[random.Random] = None) -> str:
    """Random lowercase ASCII letters for job names."""
    rng = rng or _default_rng
    return "".join(rng.choice(string.ascii_lowercase) for _ in range(length))


def get_primary_container_index(deployment) -> int:
    """Index of the container that receives the command and image overrides.

    Raises PrimaryContainerInvariantViolation when the deployment has no
    containers, or has several and none matches the annotation.
    """
    containers = get_containers(deployment)
    if not containers:
        raise PrimaryContainerInvariantViolation(
            f"Deployment {deployment.metadata.name} has no containers to run the command in"
        )
    if len(containers) <= 1:
        return 0

    primary_container = get_primary_container(deployment)
    for i, container in enumerate(containers):
        if container.name == primary_container:
            return i

    raise PrimaryContainerInvariantViolation(
        f"Primary container '{primary_container}' not found in deployment "
        f"{deployment.metadata.name}; build_job called without validate_deployment"
    )


def get_primary_container_image_tag(deployment, image_tag_override: Optional[str] = "") -> str:
    """Image tag the derived job's primary container will run with."""
    if image_tag_override:
        return image_tag_override
    container = get_containers(deployment)[get_primary_container_index(deployment)]
    return resolve_image_tag(container.image or "")


def build_job(
    deployment: client.V1Deployment,
    command: List[str],
    image_tag_override: Optional[str] = "",
    user_command: str = "",
    rng: Optional[random.Random] = None,
) -> client.V1Job:
    """Build a Job spec from a validated deployment.

    The deployment is never modified. Nothing is sent to the cluster.
    """
    deployment_name = get_deployment_name(deployment)
    job_name = f"{deployment_name}-{random_suffix(NAME_SUFFIX_LENGTH, rng)}"

    template = copy.deepcopy(deployment.spec.template)
    if template.metadata is None:
        template.metadata = client.V1ObjectMeta()

    # The job controller adds its own pod labels
    template.metadata.labels = {}
    template.metadata.annotations = dict(template.metadata.annotations or {})
    template.metadata.annotations[SAFE_TO_EVICT_ANNOTATION] = "false"
    template.spec.restart_policy = "Never"
    template.spec.share_process_namespace = True

    containers = template.spec.containers
    primary_index = get_primary_container_index(deployment)
    primary = containers[primary_index]

    if image_tag_override:
        old_image = primary.image or ""
        primary.image = replace_image_tag(old_image, image_tag_override)
        logger.info(f"Overriding image {old_image} -> {primary.image}")

    for container in containers:
        container.readiness_probe = None
        container.liveness_probe = None

    primary.command = list(command)

    annotations = {
        SOURCE_DEPLOYMENT_ANNOTATION: deployment.metadata.name,
        SOURCE_ALIAS_ANNOTATION: deployment_name,
        USER_COMMAND_ANNOTATION: user_command,
        PRIMARY_CONTAINER_ANNOTATION: primary.name,
    }
    log_url_template = get_log_url_template(deployment)
    if log_url_template is not None:
        annotations[LOG_URL_TEMPLATE_ANNOTATION] = log_url_template

    labels = {
        JOB_NAME_LABEL: job_name,
        JOBIFY_LABEL: "true",
        MANAGED_BY_LABEL: "jobify",
    }

    job = client.V1Job(
        api_version="batch/v1",
        kind="Job",
        metadata=client.V1ObjectMeta(
            name=job_name,
            namespace=deployment.metadata.namespace,
            labels=labels,
            annotations=annotations,
        ),
        spec=client.V1JobSpec(
            template=template,
            backoff_limit=BACKOFF_LIMIT,
            active_deadline_seconds=ACTIVE_DEADLINE_SECONDS,
        ),
    )

    logger.debug(
        f"Built job {job.metadata.namespace}/{job_name} from deployment "
        f"{deployment.metadata.name} (primary container: {primary.name})"
    )
    return job
