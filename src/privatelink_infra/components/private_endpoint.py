"""Provider-agnostic private link endpoint component interface."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import pulumi

logger: logging.Logger = logging.getLogger(__name__)


class PrivateEndpointOutputs:
    """Resolved outputs from a provisioned private link endpoint component."""

    def __init__(
        self,
        endpoint_id: pulumi.Output[str],
        network_interface_ids: pulumi.Output[list[str]],
        private_service_connection: pulumi.Output[list[dict[str, Any]]],
    ) -> None:
        """Initialise private endpoint outputs.

        Args:
            endpoint_id: Provider resource ID of the endpoint.
            network_interface_ids: IDs of the interfaces projected into the subnet.
            private_service_connection: Connection blocks including computed
                status and private IP address.
        """
        self.endpoint_id: pulumi.Output[str] = endpoint_id
        self.network_interface_ids: pulumi.Output[list[str]] = network_interface_ids
        self.private_service_connection: pulumi.Output[list[dict[str, Any]]] = private_service_connection

    @property
    def private_ip_address(self) -> pulumi.Output[str]:
        """Private address of the first connection, or ``""`` when there is none."""
        return self.private_service_connection.apply(
            lambda connections: (connections[0].get("private_ip_address") or "") if connections else ""
        )


class PrivateLinkEndpoint(Protocol):
    """Provider-agnostic interface for a private link endpoint component."""

    @property
    def outputs(self) -> PrivateEndpointOutputs:
        """Return the resolved endpoint outputs."""
        ...
