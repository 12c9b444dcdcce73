"""Shared fakes for the Azure network API."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from azure.mgmt.network.models import (
    NetworkInterface,
    NetworkInterfaceIPConfiguration,
    PrivateEndpoint,
    PrivateLinkServiceConnection,
    PrivateLinkServiceConnectionState,
    Subnet,
)

from privatelink_infra.providers.azure.clients import NetworkClients

SUBSCRIPTION = "00000000-0000-0000-0000-000000000000"
ENDPOINT_ID = (
    f"/subscriptions/{SUBSCRIPTION}/resourceGroups/rg1"
    "/providers/Microsoft.Network/privateEndpoints/ep1"
)
INTERFACE_ID = (
    f"/subscriptions/{SUBSCRIPTION}/resourceGroups/rg1"
    "/providers/Microsoft.Network/networkInterfaces/ep1.nic.0001"
)
SUBNET_ID = (
    f"/subscriptions/{SUBSCRIPTION}/resourceGroups/rg1"
    "/providers/Microsoft.Network/virtualNetworks/vnet1/subnets/s1"
)
TARGET_ID = (
    f"/subscriptions/{SUBSCRIPTION}/resourceGroups/rg1"
    "/providers/Microsoft.Storage/storageAccounts/svc1"
)


def make_connection(
    name: str,
    target: str = TARGET_ID,
    group_ids: list[str] | None = None,
    request_message: str | None = None,
    provisioning_state: str | None = "Succeeded",
    status: str | None = "Approved",
) -> PrivateLinkServiceConnection:
    connection = PrivateLinkServiceConnection(
        name=name,
        private_link_service_id=target,
        group_ids=group_ids if group_ids is not None else ["blob"],
        request_message=request_message,
        private_link_service_connection_state=PrivateLinkServiceConnectionState(status=status),
    )
    connection.provisioning_state = provisioning_state
    return connection


def make_endpoint(
    automatic: list[PrivateLinkServiceConnection] | None = None,
    manual: list[PrivateLinkServiceConnection] | None = None,
    interface_ids: list[str] | None = None,
    endpoint_id: str | None = ENDPOINT_ID,
) -> PrivateEndpoint:
    endpoint = PrivateEndpoint(
        id=endpoint_id,
        location="West Europe",
        subnet=Subnet(id=SUBNET_ID),
        private_link_service_connections=automatic,
        manual_private_link_service_connections=manual,
        tags={"env": "test"},
    )
    endpoint.name = "ep1"
    if interface_ids is not None:
        endpoint.network_interfaces = [NetworkInterface(id=i) for i in interface_ids]
    return endpoint


def make_interface(*addresses: str) -> NetworkInterface:
    return NetworkInterface(
        id=INTERFACE_ID,
        ip_configurations=[
            NetworkInterfaceIPConfiguration(name=f"ipconfig{i}", private_ip_address=address)
            for i, address in enumerate(addresses)
        ],
    )


def make_poller(result: object = None, done: bool = True) -> MagicMock:
    poller = MagicMock()
    poller.result.return_value = result
    poller.done.return_value = done
    return poller


@pytest.fixture
def clients() -> NetworkClients:
    return NetworkClients(private_endpoints=MagicMock(), network_interfaces=MagicMock())
