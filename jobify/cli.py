"""Command line interface for jobify."""

import logging
from contextlib import contextmanager
from typing import List, Optional, Tuple

import typer
from kubernetes.client.rest import ApiException

from . import __version__, operations
from .display import print_error
from .errors import JobifyError
from .k8s_client import DEFAULT_LOG_TAIL_LINES, JobifyClient
from .prompts import PromptInterrupted

logger = logging.getLogger(__name__)

JOB_REFERENCE_HELP = 'Job as "namespace job-name" or "namespace/job-name"'

app = typer.Typer(
    name="jobify",
    help="Run one-off commands as Kubernetes jobs derived from existing deployments.",
    add_completion=False,
)


@contextmanager
def _handle_errors():
    """Report failures to the user and exit non-zero."""
    try:
        yield
    except (PromptInterrupted, KeyboardInterrupt):
        print_error("The command was interrupted ^C")
        raise typer.Exit(1)
    except JobifyError as e:
        logger.debug("jobify error", exc_info=True)
        print_error(str(e))
        raise typer.Exit(1)
    except ApiException as e:
        logger.debug("Kubernetes API error", exc_info=True)
        print_error(f"Kubernetes API error: {e.status} {e.reason}")
        if e.body:
            print_error(str(e.body))
        raise typer.Exit(1)


def parse_job_reference(args: List[str]) -> Tuple[str, str]:
    """Accept ["namespace", "name"] or ["namespace/name"]."""
    namespace = name = ""
    if len(args) == 2:
        namespace, name = args
    elif len(args) == 1 and "/" in args[0]:
        namespace, name = args[0].split("/", 1)
    if namespace and name:
        return namespace, name
    raise typer.BadParameter(
        'job details must be provided in one of two formats "namespace job-name" or "namespace/job-name"'
    )


def _client(ctx: typer.Context) -> JobifyClient:
    return JobifyClient(context=ctx.obj.get("context"))


def _version_callback(value: bool):
    if value:
        typer.echo(f"jobify {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    context: Optional[str] = typer.Option(
        None, "--context", envvar="JOBIFY_KUBE_CONTEXT", help="Kubeconfig context to use"
    ),
):
    """Without a sub-command, jobify starts in interactive mode."""
    if verbose:
        logging.getLogger("jobify").setLevel(logging.DEBUG)
    ctx.obj = {"context": context}

    if ctx.invoked_subcommand is None:
        with _handle_errors():
            operations.interactive(_client(ctx))


@app.command()
def create(ctx: typer.Context):
    """Create a new job."""
    with _handle_errors():
        operations.create(_client(ctx))


@app.command("list")
def list_command(ctx: typer.Context):
    """List jobs and view the details of one."""
    with _handle_errors():
        operations.list_jobs(_client(ctx))


@app.command()
def view(
    ctx: typer.Context,
    job: List[str] = typer.Argument(..., help=JOB_REFERENCE_HELP),
):
    """View the details of a job."""
    namespace, name = parse_job_reference(job)
    with _handle_errors():
        operations.view(_client(ctx), namespace, name)


@app.command()
def logs(
    ctx: typer.Context,
    job: List[str] = typer.Argument(..., help=JOB_REFERENCE_HELP),
    tail: int = typer.Option(
        DEFAULT_LOG_TAIL_LINES, "--tail", "-n", envvar="JOBIFY_LOG_TAIL_LINES", min=1,
        help="Number of log lines to show",
    ),
):
    """Show the last log lines of a job's primary container."""
    namespace, name = parse_job_reference(job)
    with _handle_errors():
        operations.logs(_client(ctx), namespace, name, tail)


def main():
    app()
