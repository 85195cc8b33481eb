"""Annotation and label keys shared by source deployments and derived jobs."""

from typing import Dict, Optional

COMMAND_TEMPLATE_ANNOTATION = "jobify/command-array-template"
PRIMARY_CONTAINER_ANNOTATION = "jobify/primary-container"
DEFAULT_COMMAND_ANNOTATION = "jobify/default-command"
SOURCE_ALIAS_ANNOTATION = "jobify/source-alias"
SOURCE_DEPLOYMENT_ANNOTATION = "jobify/source-deployment"
DEPLOYMENT_ALIAS_ANNOTATION = "jobify/deployment-alias"
USER_COMMAND_ANNOTATION = "jobify/user-command"
LOG_URL_TEMPLATE_ANNOTATION = "jobify/log-url-template"

# Substituted inside the command template
COMMAND_PLACEHOLDER = "$JOBIFY_COMMAND"

# Substituted inside the log URL template
LOG_URL_JOB_PLACEHOLDER = "$JOB"
LOG_URL_CONTAINER_PLACEHOLDER = "$CONTAINER"

# Set on the job pod template so the cluster autoscaler leaves a running job alone
SAFE_TO_EVICT_ANNOTATION = "cluster-autoscaler.kubernetes.io/safe-to-evict"

JOBIFY_LABEL = "jobify"
JOB_NAME_LABEL = "job-name"
MANAGED_BY_LABEL = "app.kubernetes.io/managed-by"
DEFAULT_LABEL_SELECTOR = f"{JOBIFY_LABEL}=true"


def _annotations(obj) -> Dict[str, str]:
    metadata = getattr(obj, "metadata", None)
    if metadata is None or metadata.annotations is None:
        return {}
    return metadata.annotations


def get_annotation(obj, key: str) -> Optional[str]:
    """Return an annotation value, or None when the key is absent.

    An annotation that is present with an empty value is returned as "".
    """
    return _annotations(obj).get(key)


def get_command_template(deployment) -> Optional[str]:
    return get_annotation(deployment, COMMAND_TEMPLATE_ANNOTATION)


def get_primary_container(obj) -> Optional[str]:
    return get_annotation(obj, PRIMARY_CONTAINER_ANNOTATION)


def get_log_url_template(obj) -> Optional[str]:
    return get_annotation(obj, LOG_URL_TEMPLATE_ANNOTATION)


def get_default_command(deployment) -> str:
    return get_annotation(deployment, DEFAULT_COMMAND_ANNOTATION) or ""


def get_deployment_name(deployment) -> str:
    """Display name of a deployment: its alias annotation, else its name."""
    alias = get_annotation(deployment, DEPLOYMENT_ALIAS_ANNOTATION)
    if alias is not None:
        return alias
    return deployment.metadata.name
