"""Conversion between typed endpoint configuration and Azure SDK models.

``build_private_endpoint`` turns desired state into a request body and
``flatten_private_endpoint`` turns an API response back into state. Neither
touches the network, so both can be exercised without a client.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from azure.mgmt.network.models import (
    NetworkInterface,
    PrivateEndpoint,
    PrivateLinkServiceConnection,
    Subnet,
)

from privatelink_infra.schema import (
    PrivateEndpointArgs,
    PrivateEndpointState,
    ServiceConnectionArgs,
    normalize_location,
)

logger: logging.Logger = logging.getLogger(__name__)


def expand_service_connections(
    connections: Iterable[ServiceConnectionArgs], want_manual: bool
) -> list[PrivateLinkServiceConnection]:
    """Return the connections whose ``is_manual_connection`` equals ``want_manual``."""
    results: list[PrivateLinkServiceConnection] = []
    for connection in connections:
        if connection.is_manual_connection != want_manual:
            continue
        result = PrivateLinkServiceConnection(
            name=connection.name,
            private_link_service_id=connection.private_connection_resource_id,
            group_ids=list(connection.subresource_names),
        )
        if connection.request_message:
            result.request_message = connection.request_message
        results.append(result)
    return results


def _flatten_service_connection(
    item: PrivateLinkServiceConnection, is_manual: bool, private_ip_address: str
) -> ServiceConnectionArgs:
    status = None
    if (state := item.private_link_service_connection_state) is not None:
        status = state.status
    return ServiceConnectionArgs.model_construct(
        name=item.name,
        is_manual_connection=is_manual,
        private_connection_resource_id=item.private_link_service_id,
        subresource_names=list(item.group_ids) if item.group_ids is not None else [],
        request_message=item.request_message,
        provisioning_state=item.provisioning_state or None,
        status=status,
        private_ip_address=private_ip_address,
    )


def flatten_service_connections(
    automatic: Sequence[PrivateLinkServiceConnection] | None,
    manual: Sequence[PrivateLinkServiceConnection] | None,
    private_ip_address: str,
) -> list[ServiceConnectionArgs]:
    """Merge automatic and manual connections back into configuration blocks.

    Automatic connections come first; each list keeps its source order.
    """
    results = [_flatten_service_connection(item, False, private_ip_address) for item in automatic or []]
    results.extend(_flatten_service_connection(item, True, private_ip_address) for item in manual or [])
    return results


def flatten_interface_ids(interfaces: Sequence[NetworkInterface] | None) -> list[str]:
    """Return the IDs of the attached network interfaces, skipping unset ones."""
    if not interfaces:
        return []
    return [interface.id for interface in interfaces if interface.id is not None]


def first_private_ip_address(interface: NetworkInterface) -> str:
    """Return the private address of the interface's first IP configuration, or ``""``."""
    configurations = interface.ip_configurations or []
    if not configurations:
        return ""
    return configurations[0].private_ip_address or ""


def expand_tags(tags: dict[str, str]) -> dict[str, str]:
    return dict(tags)


def flatten_tags(tags: dict[str, str] | None) -> dict[str, str]:
    return dict(tags) if tags else {}


def build_private_endpoint(args: PrivateEndpointArgs) -> PrivateEndpoint:
    """Build the ``begin_create_or_update`` request body for ``args``."""
    return PrivateEndpoint(
        location=normalize_location(args.location),
        subnet=Subnet(id=args.subnet_id),
        private_link_service_connections=expand_service_connections(
            args.private_service_connection, want_manual=False
        ),
        manual_private_link_service_connections=expand_service_connections(
            args.private_service_connection, want_manual=True
        ),
        tags=expand_tags(args.tags),
    )


def flatten_private_endpoint(
    endpoint: PrivateEndpoint, resource_group: str, private_ip_address: str = ""
) -> PrivateEndpointState:
    """Build endpoint state from an API response.

    ``private_ip_address`` is resolved separately from the endpoint's first
    network interface and copied onto every connection block.
    """
    subnet_id = endpoint.subnet.id if endpoint.subnet is not None else ""
    return PrivateEndpointState.model_construct(
        id=endpoint.id,
        name=endpoint.name,
        resource_group_name=resource_group,
        location=normalize_location(endpoint.location) if endpoint.location else "",
        subnet_id=subnet_id or "",
        private_service_connection=flatten_service_connections(
            endpoint.private_link_service_connections,
            endpoint.manual_private_link_service_connections,
            private_ip_address,
        ),
        network_interface_ids=flatten_interface_ids(endpoint.network_interfaces),
        tags=flatten_tags(endpoint.tags),
    )
