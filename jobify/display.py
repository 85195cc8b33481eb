"""Terminal rendering of jobs, pods and job confirmations."""

import logging
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from .annotations import (
    LOG_URL_CONTAINER_PLACEHOLDER,
    LOG_URL_JOB_PLACEHOLDER,
    PRIMARY_CONTAINER_ANNOTATION,
    SOURCE_ALIAS_ANNOTATION,
    SOURCE_DEPLOYMENT_ANNOTATION,
    get_deployment_name,
    get_log_url_template,
)
from .job_builder import get_primary_container_image_tag
from .status import JobState, classify_job

logger = logging.getLogger(__name__)

console = Console(highlight=False, emoji=False)

# Older pods are usually failed retries; only the newest are shown
MAX_PODS_SHOWN = 2


def print_attribute(key: str, value: str = "", indentation: int = 0):
    console.print(f"{'  ' * indentation}[dim]{escape(key)}:[/dim] [cyan]{escape(str(value))}[/cyan]")


def print_hint(message: str, command: str):
    console.print(f"[dim]{escape(message)}[/dim]")
    console.print(f"[cyan]{escape(command)}[/cyan]")


def print_error(message: str):
    console.print(f"[red]{escape(message)}[/red]")


def format_timestamp(timestamp) -> str:
    if timestamp is None:
        return ""
    return timestamp.strftime("%Y-%m-%d %H:%M:%S %z").strip()


def container_state_string(state) -> str:
    """One-line summary of a V1ContainerState."""
    if state is None:
        return ""
    if state.running is not None:
        return f"Running, Started at: {format_timestamp(state.running.started_at)}"
    if state.waiting is not None:
        return f"Waiting, Reason: {state.waiting.reason}, Message: {state.waiting.message or ''}"
    if state.terminated is not None:
        terminated = state.terminated
        return (
            f"Finished, Exit code: {terminated.exit_code}, "
            f"Finished at: {format_timestamp(terminated.finished_at)}, Reason: {terminated.reason}"
        )
    logger.warning("Unrecognized container state")
    return ""


def render_log_url(template: str, job_name: str, container_name: str) -> str:
    return (
        template
        .replace(LOG_URL_JOB_PLACEHOLDER, job_name)
        .replace(LOG_URL_CONTAINER_PLACEHOLDER, container_name)
    )


def job_pod_stats(job) -> str:
    status = job.status
    active = succeeded = failed = 0
    if status is not None:
        active, succeeded, failed = status.active or 0, status.succeeded or 0, status.failed or 0
    return f"Active: {active}, Succeeded: {succeeded}, Failed: {failed}"


def print_confirmation_details(deployment, image_tag_override: Optional[str], user_command: str):
    console.print()
    console.print("Job details:")
    print_attribute("Deployment Name", get_deployment_name(deployment))
    print_attribute("Namespace", deployment.metadata.namespace)
    print_attribute("Image Tag", get_primary_container_image_tag(deployment, image_tag_override))
    print_attribute("Command", user_command)


def print_job_created(job):
    namespace = job.metadata.namespace
    name = job.metadata.name
    console.print(f"Created job {escape(namespace)}/{escape(name)} successfully!")
    console.print()
    print_hint("Use the following command to view the job's details:", f"jobify view {namespace} {name}")


def print_job_details(job, pods: List):
    """Print a job's state, provenance, newest pods and where to find its logs.

    Pods are expected oldest first.
    """
    annotations = job.metadata.annotations or {}
    state = classify_job(job)
    alias = annotations.get(SOURCE_ALIAS_ANNOTATION, "")
    deployment_name = annotations.get(SOURCE_DEPLOYMENT_ANNOTATION, "")
    primary_container = annotations.get(PRIMARY_CONTAINER_ANNOTATION, "")

    console.print()
    console.print("--------- Details ----------")
    print_attribute("Name", job.metadata.name)
    print_attribute("Namespace", job.metadata.namespace)
    print_attribute("State", state.label)
    if alias and alias != deployment_name:
        print_attribute("Deployment Alias", alias)
    print_attribute("Deployment Name", deployment_name)
    print_attribute("Created At", format_timestamp(job.metadata.creation_timestamp))
    print_attribute("Pod Stats", job_pod_stats(job))

    if pods:
        if len(pods) > MAX_PODS_SHOWN:
            pods = pods[-MAX_PODS_SHOWN:]
            print_attribute("Pods (last two)")
        else:
            print_attribute("Pods")
        for pod in pods:
            print_attribute(pod.metadata.name, indentation=1)
            print_attribute("Status", pod.status.phase if pod.status else "", indentation=2)
            print_attribute("Created At", format_timestamp(pod.metadata.creation_timestamp), indentation=2)
            container_statuses = pod.status.container_statuses if pod.status else None
            if container_statuses:
                print_attribute("Containers", indentation=2)
                for container in container_statuses:
                    print_attribute(container.name, container_state_string(container.state), indentation=3)

        print_hint(
            "Use the following command to view logs (NOTE: this will not work once pods are garbage collected):",
            f"kubectl logs -n {job.metadata.namespace} -l job-name={job.metadata.name} "
            f"--container={primary_container}",
        )
    elif state != JobState.ACTIVE:
        console.print("No pods found! Pods were likely garbage collected")
    else:
        console.print("No pods found! Either they're being created, or there is a problem with the job")

    log_url_template = get_log_url_template(job)
    if log_url_template is not None:
        print_hint(
            "Visit the link below to view logs:",
            render_log_url(log_url_template, job.metadata.name, primary_container),
        )
