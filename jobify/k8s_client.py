"""Thin wrapper over the Kubernetes API used by the jobify commands."""

import logging
import os
from typing import List, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException

from .annotations import DEFAULT_LABEL_SELECTOR, JOB_NAME_LABEL
from .errors import ClusterConnectionError

logger = logging.getLogger(__name__)

DEFAULT_LOG_TAIL_LINES = 10


class JobifyClient:
    """Reads deployments, jobs, pods and logs, and submits jobs.

    API errors are not caught here; callers see the ApiException as raised by
    the Kubernetes client.
    """

    def __init__(self, context: Optional[str] = None, label_selector: Optional[str] = None):
        self.context = context or os.environ.get("JOBIFY_KUBE_CONTEXT") or None
        self.label_selector = (
            label_selector or os.environ.get("JOBIFY_LABEL_SELECTOR") or DEFAULT_LABEL_SELECTOR
        )
        self._init_k8s_client()

    def _init_k8s_client(self):
        """Load in-cluster config, falling back to kubeconfig."""
        if self.context:
            self._load_kube_config()
        else:
            try:
                config.load_incluster_config()
                logger.info("Using in-cluster K8s configuration")
            except config.ConfigException:
                self._load_kube_config()

        try:
            self.k8s_apps = client.AppsV1Api()
            self.k8s_batch = client.BatchV1Api()
            self.k8s_core = client.CoreV1Api()

            # Validate connectivity before proceeding
            version = client.VersionApi().get_code()
            logger.debug(f"Connected to Kubernetes {version.git_version}")
        except Exception as e:
            logger.error(f"❌ Failed to initialize K8s clients: {e}")
            raise ClusterConnectionError(f"Kubernetes API connection failed: {e}")

    def _load_kube_config(self):
        try:
            config.load_kube_config(context=self.context)
            logger.info(f"Using kubeconfig K8s configuration (context: {self.context or 'current'})")
        except Exception as e:
            logger.error(f"❌ Failed to load K8s configuration: {e}")
            raise ClusterConnectionError(
                "Cannot connect to Kubernetes cluster. "
                "Ensure kubectl is configured or running in cluster. "
                f"Error: {e}"
            )

    def list_deployments(self, label_selector: Optional[str] = None) -> List[client.V1Deployment]:
        """Deployments in all namespaces matching the jobify label selector."""
        label_selector = label_selector or self.label_selector
        logger.debug(f"Listing deployments with label_selector: {label_selector}")
        deployments = self.k8s_apps.list_deployment_for_all_namespaces(label_selector=label_selector)
        logger.debug(f"Found {len(deployments.items)} deployments")
        return deployments.items

    def list_jobs(self, label_selector: Optional[str] = None) -> List[client.V1Job]:
        """Jobs in all namespaces matching the jobify label selector."""
        label_selector = label_selector or self.label_selector
        logger.debug(f"Listing jobs with label_selector: {label_selector}")
        jobs = self.k8s_batch.list_job_for_all_namespaces(label_selector=label_selector)
        logger.debug(f"Found {len(jobs.items)} jobs")
        return jobs.items

    def get_job(self, namespace: str, name: str) -> client.V1Job:
        return self.k8s_batch.read_namespaced_job(name=name, namespace=namespace)

    def list_job_pods(self, namespace: str, job_name: str) -> List[client.V1Pod]:
        pods = self.k8s_core.list_namespaced_pod(
            namespace=namespace,
            label_selector=f"{JOB_NAME_LABEL}={job_name}",
        )
        return pods.items

    def get_pod_logs(
        self,
        namespace: str,
        pod_name: str,
        container_name: Optional[str] = None,
        tail_lines: int = DEFAULT_LOG_TAIL_LINES,
    ) -> str:
        kwargs = {"tail_lines": tail_lines}
        if container_name:
            kwargs["container"] = container_name
        return self.k8s_core.read_namespaced_pod_log(name=pod_name, namespace=namespace, **kwargs)

    def create_job(self, job: client.V1Job) -> client.V1Job:
        namespace = job.metadata.namespace
        logger.info(f"🚀 Creating Kubernetes job '{job.metadata.name}' in namespace '{namespace}'")
        try:
            created = self.k8s_batch.create_namespaced_job(namespace=namespace, body=job)
        except ApiException as e:
            logger.error(f"❌ Job creation failed: {e.status} {e.reason}")
            raise
        logger.info(f"✅ Kubernetes job '{job.metadata.name}' created successfully")
        return created
