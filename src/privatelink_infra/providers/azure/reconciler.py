"""Create, read, update and delete of Azure private link endpoints."""

from __future__ import annotations

import logging
from typing import Any

from azure.core.exceptions import AzureError, HttpResponseError, ResourceNotFoundError

from privatelink_infra.context import OperationContext
from privatelink_infra.errors import (
    MissingResourceIdError,
    OperationTimeoutError,
    OperationWaitError,
    RemoteOperationError,
    ResourceAlreadyExistsError,
)
from privatelink_infra.providers.azure.clients import NetworkClients
from privatelink_infra.providers.azure.marshal import (
    build_private_endpoint,
    first_private_ip_address,
    flatten_private_endpoint,
)
from privatelink_infra.resource_ids import NETWORK_INTERFACES, PRIVATE_ENDPOINTS, ResourceId
from privatelink_infra.schema import (
    PrivateEndpointArgs,
    PrivateEndpointState,
    validate_connection_settings,
)

logger: logging.Logger = logging.getLogger(__name__)

RESOURCE_TYPE = "privatelink:azure:PrivateEndpoint"
ENDPOINT_KIND = "Private Link Endpoint"
INTERFACE_KIND = "Network Interface"


def was_not_found(error: BaseException) -> bool:
    """Report whether ``error`` is the service saying the resource does not exist."""
    if isinstance(error, ResourceNotFoundError):
        return True
    return isinstance(error, HttpResponseError) and error.status_code == 404


class PrivateEndpointReconciler:
    """Reconciles desired endpoint state with the network API.

    Every remote call goes through the injected ``clients`` and honours the
    deadline carried by ``context``.
    """

    def __init__(
        self,
        clients: NetworkClients,
        context: OperationContext | None = None,
        import_protection: bool = False,
    ) -> None:
        self._clients: NetworkClients = clients
        self._context: OperationContext = context or OperationContext()
        self._import_protection: bool = import_protection

    def create_or_update(self, args: PrivateEndpointArgs, is_new: bool) -> PrivateEndpointState:
        """Create or update the endpoint described by ``args`` and return its state.

        Raises ``EndpointSettingsError`` before any remote call when the
        connection settings are invalid, and ``ResourceAlreadyExistsError``
        when import protection is on and a new endpoint's name is taken.
        """
        name = args.name
        resource_group = args.resource_group_name
        validate_connection_settings(args)

        if self._import_protection and is_new:
            existing_id = self.exists(name, resource_group)
            if existing_id is not None:
                logger.warning(
                    "private_endpoint_already_exists",
                    extra={"endpoint_name": name, "resource_group": resource_group, "id": existing_id},
                )
                raise ResourceAlreadyExistsError(RESOURCE_TYPE, existing_id)

        parameters = build_private_endpoint(args)
        logger.info(
            "private_endpoint_create_or_update_started",
            extra={"endpoint_name": name, "resource_group": resource_group, "is_new": is_new},
        )
        action = "creating" if is_new else "updating"
        try:
            self._context.ensure_active("create_or_update")
            poller = self._clients.private_endpoints.begin_create_or_update(resource_group, name, parameters)
        except AzureError as e:
            raise RemoteOperationError(action, ENDPOINT_KIND, name, resource_group, e) from e
        self._wait(poller, f"waiting for {action}", name, resource_group)

        endpoint = self._get_endpoint(name, resource_group)
        if not endpoint.id:
            raise MissingResourceIdError(
                f"API returned an empty ID for {ENDPOINT_KIND} {name!r} (Resource Group {resource_group!r})"
            )
        logger.info(
            "private_endpoint_create_or_update_completed",
            extra={"endpoint_name": name, "resource_group": resource_group, "id": endpoint.id},
        )

        state = self.read(endpoint.id)
        if state is None:
            raise RemoteOperationError(
                "reading", ENDPOINT_KIND, name, resource_group, "endpoint disappeared after creation"
            )
        return state

    def exists(self, name: str, resource_group: str) -> str | None:
        """Return the ID of an existing endpoint called ``name``, or ``None``."""
        try:
            endpoint = self._get_endpoint(name, resource_group)
        except RemoteOperationError as e:
            if e.__cause__ is not None and was_not_found(e.__cause__):
                return None
            raise
        if not endpoint.id:
            raise MissingResourceIdError(
                f"{ENDPOINT_KIND} {name!r} (Resource Group {resource_group!r}) exists but the API returned no ID"
            )
        return endpoint.id

    def read(self, resource_id: str) -> PrivateEndpointState | None:
        """Fetch the endpoint's remote state.

        Returns ``None`` when the endpoint no longer exists, so the caller can
        drop it from tracked state.
        """
        parsed = ResourceId.parse(resource_id, PRIVATE_ENDPOINTS)
        name = parsed.name
        resource_group = parsed.resource_group

        try:
            endpoint = self._get_endpoint(name, resource_group)
        except RemoteOperationError as e:
            if e.__cause__ is not None and was_not_found(e.__cause__):
                logger.info("private_endpoint_removed_from_state", extra={"id": resource_id})
                return None
            raise

        private_ip_address = ""
        if endpoint.network_interfaces:
            interface_ids = [i.id for i in endpoint.network_interfaces if i.id]
            if interface_ids:
                private_ip_address = self._private_ip_address(interface_ids[0], resource_group)

        return flatten_private_endpoint(endpoint, resource_group, private_ip_address)

    def delete(self, resource_id: str) -> None:
        """Delete the endpoint; an endpoint that is already gone counts as deleted."""
        parsed = ResourceId.parse(resource_id, PRIVATE_ENDPOINTS)
        name = parsed.name
        resource_group = parsed.resource_group

        logger.info(
            "private_endpoint_delete_started",
            extra={"endpoint_name": name, "resource_group": resource_group},
        )
        try:
            self._context.ensure_active("delete")
            poller = self._clients.private_endpoints.begin_delete(resource_group, name)
        except AzureError as e:
            if was_not_found(e):
                logger.info("private_endpoint_already_deleted", extra={"id": resource_id})
                return
            raise RemoteOperationError("deleting", ENDPOINT_KIND, name, resource_group, e) from e

        try:
            self._wait(poller, "waiting for deleting", name, resource_group)
        except OperationWaitError as e:
            if e.__cause__ is not None and was_not_found(e.__cause__):
                logger.info("private_endpoint_already_deleted", extra={"id": resource_id})
                return
            raise
        logger.info(
            "private_endpoint_delete_completed",
            extra={"endpoint_name": name, "resource_group": resource_group},
        )

    def _get_endpoint(self, name: str, resource_group: str) -> Any:
        try:
            return self._clients.private_endpoints.get(
                resource_group, name, **self._context.call_options("get")
            )
        except AzureError as e:
            raise RemoteOperationError("retrieving", ENDPOINT_KIND, name, resource_group, e) from e

    def _private_ip_address(self, interface_id: str, resource_group: str) -> str:
        interface_name = ResourceId.parse(interface_id, NETWORK_INTERFACES).name
        try:
            interface = self._clients.network_interfaces.get(
                resource_group, interface_name, **self._context.call_options("get_network_interface")
            )
        except AzureError as e:
            # A missing interface is an error here, not eventual consistency.
            raise RemoteOperationError("retrieving", INTERFACE_KIND, interface_name, resource_group, e) from e
        return first_private_ip_address(interface)

    def _wait(self, poller: Any, action: str, name: str, resource_group: str) -> Any:
        try:
            result = poller.result(**self._context.call_options(action))
        except AzureError as e:
            raise OperationWaitError(action, ENDPOINT_KIND, name, resource_group, e) from e
        if not poller.done():
            raise OperationTimeoutError(
                action, ENDPOINT_KIND, name, resource_group, "operation did not finish before the deadline"
            )
        return result
