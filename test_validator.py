"""Deployment eligibility checks."""

import pytest

from jobify.annotations import COMMAND_TEMPLATE_ANNOTATION, PRIMARY_CONTAINER_ANNOTATION
from jobify.errors import (
    MissingCommandTemplate,
    MissingPrimaryContainerAnnotation,
    PrimaryContainerNotFound,
    ValidationError,
)
from jobify.validator import validate_deployment

TEMPLATE = '["sh", "-c", "$JOBIFY_COMMAND"]'


@pytest.mark.parametrize("container_count", [0, 1])
def test_zero_or_one_container_never_needs_primary_annotation(make_deployment, make_container, container_count):
    containers = [make_container() for _ in range(container_count)]
    deployment = make_deployment(containers=containers, annotations={COMMAND_TEMPLATE_ANNOTATION: TEMPLATE})
    validate_deployment(deployment)


def test_single_container_ignores_unknown_primary_annotation(make_deployment):
    deployment = make_deployment(annotations={
        COMMAND_TEMPLATE_ANNOTATION: TEMPLATE,
        PRIMARY_CONTAINER_ANNOTATION: "does-not-exist",
    })
    validate_deployment(deployment)


@pytest.mark.parametrize("container_count", [0, 1, 2])
def test_missing_command_template(make_deployment, make_container, container_count):
    containers = [make_container(name=f"c{i}") for i in range(container_count)]
    deployment = make_deployment(containers=containers, annotations={PRIMARY_CONTAINER_ANNOTATION: "c0"})
    with pytest.raises(MissingCommandTemplate):
        validate_deployment(deployment)


def test_missing_annotations_entirely(make_deployment):
    deployment = make_deployment()
    deployment.metadata.annotations = None
    with pytest.raises(MissingCommandTemplate):
        validate_deployment(deployment)


def test_empty_command_template_is_present(make_deployment):
    deployment = make_deployment(annotations={COMMAND_TEMPLATE_ANNOTATION: ""})
    validate_deployment(deployment)


def test_multiple_containers_without_primary_annotation(make_deployment, make_container):
    deployment = make_deployment(
        containers=[make_container(name="web"), make_container(name="proxy")],
        annotations={COMMAND_TEMPLATE_ANNOTATION: TEMPLATE},
    )
    with pytest.raises(MissingPrimaryContainerAnnotation) as exc_info:
        validate_deployment(deployment)
    assert PRIMARY_CONTAINER_ANNOTATION in str(exc_info.value)


def test_multiple_containers_primary_not_found(make_deployment, make_container):
    deployment = make_deployment(
        containers=[make_container(name="web"), make_container(name="proxy")],
        annotations={COMMAND_TEMPLATE_ANNOTATION: TEMPLATE, PRIMARY_CONTAINER_ANNOTATION: "worker"},
    )
    with pytest.raises(PrimaryContainerNotFound) as exc_info:
        validate_deployment(deployment)
    assert isinstance(exc_info.value, ValidationError)
    assert "worker" in str(exc_info.value)


def test_multiple_containers_primary_found(make_deployment, make_container):
    deployment = make_deployment(
        containers=[make_container(name="proxy"), make_container(name="web")],
        annotations={COMMAND_TEMPLATE_ANNOTATION: TEMPLATE, PRIMARY_CONTAINER_ANNOTATION: "web"},
    )
    validate_deployment(deployment)
