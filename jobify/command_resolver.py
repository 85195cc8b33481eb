"""Turns a deployment's command template and the user's command into a container command."""

import json
import logging
from typing import List, Optional

from .annotations import COMMAND_PLACEHOLDER
from .errors import CommandResolutionError

logger = logging.getLogger(__name__)


def resolve_command(command_template: str, user_command: str) -> List[str]:
    """Substitute the user command into the template and decode the JSON array.

    The placeholder is replaced in the raw template text before decoding, so the
    user command lands verbatim inside a JSON string literal. Commands with
    unescaped double quotes or backslashes produce invalid JSON and are reported
    as a CommandResolutionError rather than truncated.
    """
    text = command_template.replace(COMMAND_PLACEHOLDER, user_command)

    try:
        command = json.loads(text)
    except json.JSONDecodeError as e:
        logger.debug(f"Command template decode failed: {e}")
        raise CommandResolutionError(f"Command is not a valid JSON array ({e.msg})", text)

    if not isinstance(command, list) or not all(isinstance(arg, str) for arg in command):
        raise CommandResolutionError("Command must be a JSON array of strings", text)

    logger.debug(f"Resolved command: {command}")
    return command


def split_image(image: str):
    """Split an image reference into (repository, tag); tag is None when untagged.

    A colon followed by a path (``registry:5000/app``) is a registry port, not a tag.
    An ``@sha256:...`` digest is dropped, so the repository never carries it.
    """
    image = image.split("@", 1)[0]
    index = image.rfind(":")
    if index == -1 or "/" in image[index + 1:]:
        return image, None
    return image[:index], image[index + 1:]


def resolve_image_tag(image: str, override: Optional[str] = "") -> str:
    """Return the override tag if set, else the image reference's own tag or "".

    The tag follows the last colon unless a slash comes after it, so
    ``registry:5000/app`` has no tag; a trailing ``@digest`` is ignored.
    """
    if override:
        return override
    _, tag = split_image(image)
    return tag or ""


def replace_image_tag(image: str, tag: str) -> str:
    repository, _ = split_image(image)
    return f"{repository}:{tag}"

