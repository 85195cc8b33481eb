"""Interactive prompts built on questionary."""

from typing import List, Tuple

import questionary
from questionary import Choice, Style

from .annotations import SOURCE_ALIAS_ANNOTATION, USER_COMMAND_ANNOTATION, get_deployment_name
from .display import format_timestamp, print_confirmation_details
from .job_builder import get_primary_container_image_tag
from .status import STATE_MARKERS, classify_job

custom_style = Style(
    [
        ("qmark", "fg:#00afaf bold"),
        ("question", "bold"),
        ("answer", "fg:#00afaf bold"),
        ("pointer", "fg:#00afaf bold"),
        ("highlighted", "fg:#00afaf bold"),
        ("selected", "fg:#00afaf"),
        ("instruction", "fg:#858585"),
    ]
)

CREATE_JOB = "Create a new job"
VIEW_JOBS = "View existing jobs"

CONFIRM = "Confirm"
EDIT_IMAGE_TAG = "Edit image tag"
EDIT_COMMAND = "Edit command"
CANCEL = "Cancel"


class PromptInterrupted(Exception):
    """The user aborted a prompt with Ctrl-C."""
    pass


def _ask(question):
    # questionary returns None when the prompt is interrupted
    answer = question.ask()
    if answer is None:
        raise PromptInterrupted()
    return answer


def _select(message: str, choices: List, searchable: bool = False):
    return _ask(
        questionary.select(
            message,
            choices=choices,
            style=custom_style,
            use_search_filter=searchable,
            use_jk_keys=not searchable,
        )
    )


def prompt_operation() -> str:
    return _select("Select an operation to perform", [CREATE_JOB, VIEW_JOBS])


def prompt_deployment_selection(deployments: List) -> int:
    """Return the index of the chosen deployment."""
    choices = [
        Choice(title=f"{d.metadata.namespace}/{get_deployment_name(d)}", value=i)
        for i, d in enumerate(deployments)
    ]
    return _select("Select a deployment", choices, searchable=True)


def job_choice_title(job) -> str:
    annotations = job.metadata.annotations or {}
    command = annotations.get(USER_COMMAND_ANNOTATION, "")
    marker = STATE_MARKERS[classify_job(job)]
    created_at = format_timestamp(job.metadata.creation_timestamp)
    return f"{job.metadata.namespace}/{job.metadata.name}: {command} {marker} Created at: {created_at}"


def prompt_job_selection(jobs: List) -> int:
    """Return the index of the chosen job."""
    choices = [
        Choice(
            title=job_choice_title(job),
            value=i,
            description=(job.metadata.annotations or {}).get(SOURCE_ALIAS_ANNOTATION),
        )
        for i, job in enumerate(jobs)
    ]
    return _select("Select a job", choices, searchable=True)


def _require_command(text: str):
    if not text.strip():
        return "Must enter a command"
    return True


def prompt_command(default_command: str = "") -> str:
    return _ask(
        questionary.text(
            "Enter the job command",
            default=default_command,
            validate=_require_command,
            style=custom_style,
        )
    )


def prompt_image_tag(current_tag: str = "") -> str:
    return _ask(questionary.text("Enter the image tag", default=current_tag, style=custom_style))


def prompt_confirmation(
    deployment, image_tag_override: str, user_command: str
) -> Tuple[bool, str, str]:
    """Loop until the user confirms or cancels.

    Returns (confirmed, image_tag_override, user_command) with any edits applied.
    """
    while True:
        print_confirmation_details(deployment, image_tag_override, user_command)
        choice = _select("Confirm details?", [CONFIRM, EDIT_IMAGE_TAG, EDIT_COMMAND, CANCEL])

        if choice == CONFIRM:
            return True, image_tag_override, user_command
        elif choice == EDIT_IMAGE_TAG:
            image_tag_override = prompt_image_tag(
                get_primary_container_image_tag(deployment, image_tag_override)
            )
        elif choice == EDIT_COMMAND:
            user_command = prompt_command(user_command)
        else:
            return False, image_tag_override, user_command
