"""
Exceptions raised while synchronizing stacks.

Every failure is fatal: nothing here is retried, and the CLI reports the
first one it sees.
"""

from typing import Optional


class StackSyncError(Exception):
    """Base class for all stack synchronization failures."""


class ConfigurationError(StackSyncError):
    """Raised when the sync request cannot be assembled from its inputs."""


class InvalidOverrides(StackSyncError):
    """Raised when parameter overrides are not a flat JSON object."""


class CredentialsInvalid(StackSyncError):
    """Raised when AWS rejects the request signature or access key."""

    def __init__(self, message: str = "The given credentials are invalid"):
        super().__init__(message)


class PermissionDenied(StackSyncError):
    """Raised when the caller is not authorized for a CloudFormation call."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"The given credentials do not have adequate permissions to {operation}"
        )


class ProviderError(StackSyncError):
    """Raised for any other CloudFormation failure, with its message verbatim."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.code = code
        super().__init__(message)


class SourceNotFound(StackSyncError):
    """Raised when the source stack does not exist."""

    def __init__(self, stack_name: str):
        self.stack_name = stack_name
        super().__init__(f"The given source stack {stack_name} does not exist")


class StatusRejected(StackSyncError):
    """Raised when a source or existing target stack is not ready."""

    def __init__(self, status: str, role: str):
        self.status = status
        self.role = role
        super().__init__(f"{role.capitalize()} stack has unacceptable status {status}")


class ProvisioningError(StackSyncError):
    """Raised when CloudFormation rejects a create or update request."""

    def __init__(self, stack_name: str, action: str, message: str):
        self.stack_name = stack_name
        self.action = action
        super().__init__(f"Failed to {action} target stack {stack_name}: {message}")


class ProvisioningFailed(StackSyncError):
    """Raised when the target stack settles in a failed terminal status."""

    def __init__(self, stack_name: str, status: str):
        self.stack_name = stack_name
        self.status = status
        super().__init__(
            f"Target stack {stack_name} failed to update in state {status}"
        )


class StackDeleted(StackSyncError):
    """Raised when a newly created target stack failed and was deleted."""

    def __init__(self, stack_name: str):
        self.stack_name = stack_name
        super().__init__(
            f"Target stack {stack_name} failed to create and was deleted"
        )


class PollingTimeout(StackSyncError):
    """Raised when the target stack has not settled within the attempt ceiling."""

    def __init__(self, stack_name: str, attempts: int, status: str):
        self.stack_name = stack_name
        self.attempts = attempts
        self.status = status
        super().__init__(
            f"Target stack {stack_name} still in state {status} "
            f"after {attempts} status checks"
        )
