"""Exception hierarchy for private endpoint reconciliation."""

from __future__ import annotations


class PrivateEndpointError(Exception):
    """Base class for every error raised while reconciling a private endpoint."""


class EndpointSettingsError(PrivateEndpointError):
    """Raised when a configuration combination is rejected before any remote call."""


class InvalidResourceIdError(PrivateEndpointError):
    """Raised when an ARM resource ID cannot be parsed or has the wrong type."""


class RemoteOperationError(PrivateEndpointError):
    """Raised when a call against the network API fails."""

    def __init__(self, action: str, kind: str, name: str, resource_group: str, cause: object) -> None:
        self.action: str = action
        self.kind: str = kind
        self.name: str = name
        self.resource_group: str = resource_group
        super().__init__(f"Error {action} {kind} {name!r} (Resource Group {resource_group!r}): {cause}")


class OperationWaitError(RemoteOperationError):
    """Raised when a long-running operation started successfully but did not complete."""


class OperationTimeoutError(OperationWaitError):
    """Raised when a long-running operation outlives the operation deadline."""


class OperationCancelledError(PrivateEndpointError):
    """Raised when a remote call is attempted after the operation deadline expired."""


class MissingResourceIdError(PrivateEndpointError):
    """Raised when the service reports success but returns no resource ID."""


class ResourceAlreadyExistsError(PrivateEndpointError):
    """Raised when creating a resource that already exists outside of the stack."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        self.resource_type: str = resource_type
        self.resource_id: str = resource_id
        super().__init__(
            f"A resource with the ID {resource_id!r} already exists - to be managed by this "
            f"stack it needs to be imported first: pass "
            f"`pulumi.ResourceOptions(import_={resource_id!r})` to the {resource_type} resource."
        )
