"""Exceptions raised by jobify."""


class JobifyError(Exception):
    """Base class for errors reported to the user."""
    pass


class ValidationError(JobifyError):
    """A deployment is not eligible for job derivation."""
    pass


class MissingCommandTemplate(ValidationError):
    pass


class MissingPrimaryContainerAnnotation(ValidationError):
    pass


class PrimaryContainerNotFound(ValidationError):
    pass


class CommandResolutionError(JobifyError):
    """The command template did not resolve to a JSON array of strings."""

    def __init__(self, message: str, text: str):
        super().__init__(f"{message}: {text}")
        self.text = text


class PrimaryContainerInvariantViolation(JobifyError):
    """Primary container lookup failed on a deployment that should have been validated.

    This signals a bug in the calling sequence (a job was built without
    validating the deployment first), not a user error.
    """
    pass


class ClusterConnectionError(JobifyError):
    """Kubernetes configuration could not be loaded or the API is unreachable."""
    pass
