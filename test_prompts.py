"""Prompt flows with questionary mocked out."""

from unittest.mock import MagicMock, patch

import pytest

from jobify import prompts
from jobify.prompts import PromptInterrupted, job_choice_title, prompt_confirmation


def _answers(*values):
    """Questions whose .ask() return the given values in order."""
    return [MagicMock(**{"ask.return_value": value}) for value in values]


@pytest.fixture
def mock_questionary():
    with patch("jobify.prompts.questionary") as mock_questionary, \
            patch("jobify.prompts.print_confirmation_details"):
        yield mock_questionary


def test_confirm_immediately(mock_questionary, make_deployment):
    mock_questionary.select.side_effect = _answers(prompts.CONFIRM)
    assert prompt_confirmation(make_deployment(), "", "ls") == (True, "", "ls")


def test_edit_command_then_confirm(mock_questionary, make_deployment):
    mock_questionary.select.side_effect = _answers(prompts.EDIT_COMMAND, prompts.CONFIRM)
    mock_questionary.text.side_effect = _answers("ls -la")

    assert prompt_confirmation(make_deployment(), "", "ls") == (True, "", "ls -la")
    assert mock_questionary.text.call_args.kwargs["default"] == "ls"


def test_edit_image_tag_seeded_with_current_tag(mock_questionary, make_deployment):
    mock_questionary.select.side_effect = _answers(prompts.EDIT_IMAGE_TAG, prompts.CONFIRM)
    mock_questionary.text.side_effect = _answers("2.0")

    assert prompt_confirmation(make_deployment(), "", "ls") == (True, "2.0", "ls")
    assert mock_questionary.text.call_args.kwargs["default"] == "1.0"


def test_cancel(mock_questionary, make_deployment):
    mock_questionary.select.side_effect = _answers(prompts.CANCEL)
    confirmed, _, _ = prompt_confirmation(make_deployment(), "", "ls")
    assert confirmed is False


def test_interrupted_prompt_raises(mock_questionary, make_deployment):
    mock_questionary.select.side_effect = _answers(None)
    with pytest.raises(PromptInterrupted):
        prompt_confirmation(make_deployment(), "", "ls")


def test_deployment_selection_returns_index(mock_questionary, make_deployment):
    mock_questionary.select.side_effect = _answers(1)
    deployments = [make_deployment(name="a"), make_deployment(name="b")]

    assert prompts.prompt_deployment_selection(deployments) == 1
    kwargs = mock_questionary.select.call_args.kwargs
    assert kwargs["use_search_filter"] is True
    assert kwargs["use_jk_keys"] is False


def test_command_required():
    assert prompts._require_command("  ") == "Must enter a command"
    assert prompts._require_command("ls") is True


def test_job_choice_title(make_job):
    job = make_job(
        name="web-abcde",
        annotations={"jobify/user-command": "rake db:migrate"},
        conditions=[("Complete", "True")],
    )
    assert job_choice_title(job) == (
        "apps/web-abcde: rake db:migrate ✅ Created at: 2024-05-01 12:00:00 +0000"
    )
