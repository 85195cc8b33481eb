"""Shared fixtures: real kubernetes model objects for deployments, jobs and pods."""

from datetime import datetime, timedelta, timezone

import pytest
from kubernetes import client

from jobify.annotations import COMMAND_TEMPLATE_ANNOTATION

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def _probe(path="/health"):
    return client.V1Probe(http_get=client.V1HTTPGetAction(path=path, port=8080))


@pytest.fixture
def make_container():
    def _make(name="web", image="app:1.0", command=None, probes=True):
        return client.V1Container(
            name=name,
            image=image,
            command=command,
            readiness_probe=_probe("/ready") if probes else None,
            liveness_probe=_probe("/live") if probes else None,
            env=[client.V1EnvVar(name="DATABASE_URL", value="postgres://db/app")],
        )
    return _make


@pytest.fixture
def make_deployment(make_container):
    def _make(
        name="web",
        namespace="apps",
        containers=None,
        annotations=None,
        template_annotations=None,
    ):
        if containers is None:
            containers = [make_container()]
        if annotations is None:
            annotations = {COMMAND_TEMPLATE_ANNOTATION: '["sh", "-c", "$JOBIFY_COMMAND"]'}
        return client.V1Deployment(
            api_version="apps/v1",
            kind="Deployment",
            metadata=client.V1ObjectMeta(name=name, namespace=namespace, annotations=annotations),
            spec=client.V1DeploymentSpec(
                selector=client.V1LabelSelector(match_labels={"app": name}),
                template=client.V1PodTemplateSpec(
                    metadata=client.V1ObjectMeta(
                        labels={"app": name, "tier": "backend"},
                        annotations=template_annotations,
                    ),
                    spec=client.V1PodSpec(
                        containers=containers,
                        restart_policy="Always",
                        volumes=[client.V1Volume(name="config", empty_dir=client.V1EmptyDirVolumeSource())],
                    ),
                ),
            ),
        )
    return _make


@pytest.fixture
def make_job():
    def _make(
        name="web-abcde",
        namespace="apps",
        conditions=None,
        annotations=None,
        created_minutes=0,
        active=None,
        succeeded=None,
        failed=None,
    ):
        return client.V1Job(
            metadata=client.V1ObjectMeta(
                name=name,
                namespace=namespace,
                annotations=annotations or {},
                creation_timestamp=BASE_TIME + timedelta(minutes=created_minutes),
            ),
            status=client.V1JobStatus(
                conditions=[
                    client.V1JobCondition(type=type_, status=status)
                    for type_, status in (conditions or [])
                ] or None,
                active=active,
                succeeded=succeeded,
                failed=failed,
            ),
        )
    return _make


@pytest.fixture
def make_pod():
    def _make(name="web-abcde-xyz12", created_minutes=0, phase="Running", container_states=None):
        container_statuses = None
        if container_states:
            container_statuses = [
                client.V1ContainerStatus(
                    name=container_name,
                    state=state,
                    image="app:1.0",
                    image_id="",
                    ready=False,
                    restart_count=0,
                )
                for container_name, state in container_states
            ]
        return client.V1Pod(
            metadata=client.V1ObjectMeta(
                name=name,
                namespace="apps",
                creation_timestamp=BASE_TIME + timedelta(minutes=created_minutes),
            ),
            status=client.V1PodStatus(phase=phase, container_statuses=container_statuses),
        )
    return _make
