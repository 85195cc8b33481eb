"""The create, list, view and logs flows behind the CLI commands."""

import logging
import random
from typing import List, Optional

from kubernetes import client

from .annotations import PRIMARY_CONTAINER_ANNOTATION, get_command_template, get_default_command
from .command_resolver import resolve_command
from .display import console, print_error, print_job_created, print_job_details
from .job_builder import build_job
from .k8s_client import DEFAULT_LOG_TAIL_LINES, JobifyClient
from .prompts import (
    CREATE_JOB,
    prompt_command,
    prompt_confirmation,
    prompt_deployment_selection,
    prompt_job_selection,
    prompt_operation,
)
from .validator import validate_deployment

logger = logging.getLogger(__name__)


def _creation_time(obj) -> float:
    timestamp = obj.metadata.creation_timestamp
    return timestamp.timestamp() if timestamp is not None else 0.0


def sort_newest_first(objects: List) -> List:
    return sorted(objects, key=_creation_time, reverse=True)


def sort_oldest_first(objects: List) -> List:
    return sorted(objects, key=_creation_time)


def create(k8s: JobifyClient, rng: Optional[random.Random] = None) -> Optional[client.V1Job]:
    """Pick a deployment, prompt for a command and submit the derived job.

    Returns the created job, or None when there was nothing to do or the user cancelled.
    """
    console.print("Loading deployments...")
    deployments = k8s.list_deployments()
    if not deployments:
        print_error(f"No deployments found with label selector {k8s.label_selector}")
        return None

    deployment = deployments[prompt_deployment_selection(deployments)]
    validate_deployment(deployment)

    console.print()
    user_command = prompt_command(get_default_command(deployment))

    confirmed, image_tag_override, user_command = prompt_confirmation(deployment, "", user_command)
    if not confirmed:
        console.print("Cancelled job creation, terminating...")
        return None

    command = resolve_command(get_command_template(deployment), user_command)
    job = build_job(deployment, command, image_tag_override, user_command, rng=rng)

    console.print("Creating job...")
    created = k8s.create_job(job)
    print_job_created(job)
    return created


def list_jobs(k8s: JobifyClient):
    """Pick one of the jobify jobs, newest first, and show its details."""
    console.print("Loading jobs...")
    jobs = sort_newest_first(k8s.list_jobs())
    if not jobs:
        console.print("No jobs found")
        return

    view_job(k8s, jobs[prompt_job_selection(jobs)])


def view_job(k8s: JobifyClient, job: client.V1Job):
    pods = sort_oldest_first(k8s.list_job_pods(job.metadata.namespace, job.metadata.name))
    print_job_details(job, pods)


def view(k8s: JobifyClient, namespace: str, name: str):
    console.print("Loading job...")
    view_job(k8s, k8s.get_job(namespace, name))


def logs(k8s: JobifyClient, namespace: str, name: str, tail_lines: int = DEFAULT_LOG_TAIL_LINES) -> Optional[str]:
    """Print the tail of the primary container's logs from the job's newest pod."""
    job = k8s.get_job(namespace, name)
    pods = sort_newest_first(k8s.list_job_pods(namespace, name))
    if not pods:
        console.print("No pods found! Either they're being created, or they were garbage collected")
        return None

    pod = pods[0]
    container_name = (job.metadata.annotations or {}).get(PRIMARY_CONTAINER_ANNOTATION)
    logger.debug(f"Reading {tail_lines} log lines from pod {pod.metadata.name}, container {container_name}")
    text = k8s.get_pod_logs(namespace, pod.metadata.name, container_name, tail_lines)
    console.print(text, markup=False, end="" if text.endswith("\n") else "\n")
    return text


def interactive(k8s: JobifyClient):
    console.print("[dim]No command given, starting in interactive mode...[/dim]")
    if prompt_operation() == CREATE_JOB:
        create(k8s)
    else:
        list_jobs(k8s)
