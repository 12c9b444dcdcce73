"""Azure implementation of PrivateLinkEndpoint."""

from __future__ import annotations

import logging
from typing import Any

import pulumi

from privatelink_infra.components.private_endpoint import PrivateEndpointOutputs
from privatelink_infra.providers.azure.dynamic import PrivateEndpoint, PrivateEndpointProvider

logger: logging.Logger = logging.getLogger(__name__)


class AzureServiceConnectionArgs:
    """Arguments for the endpoint's private service connection.

    Args:
        name: Name of the connection.
        private_connection_resource_id: ID of the resource the endpoint connects to.
        is_manual_connection: Require the target's owner to approve the connection.
        subresource_names: Sub-resources of the target to connect to, e.g. ``blob``.
        request_message: Message for the approver; only valid on manual connections.
    """

    def __init__(
        self,
        name: pulumi.Input[str],
        private_connection_resource_id: pulumi.Input[str],
        is_manual_connection: pulumi.Input[bool] = False,
        subresource_names: list[pulumi.Input[str]] | None = None,
        request_message: pulumi.Input[str] | None = None,
    ) -> None:
        """Initialise service connection arguments."""
        self.name: pulumi.Input[str] = name
        self.private_connection_resource_id: pulumi.Input[str] = private_connection_resource_id
        self.is_manual_connection: pulumi.Input[bool] = is_manual_connection
        self.subresource_names: list[pulumi.Input[str]] = subresource_names or []
        self.request_message: pulumi.Input[str] | None = request_message

    def to_props(self) -> dict[str, Any]:
        props: dict[str, Any] = {
            "name": self.name,
            "is_manual_connection": self.is_manual_connection,
            "private_connection_resource_id": self.private_connection_resource_id,
            "subresource_names": self.subresource_names,
        }
        if self.request_message is not None:
            props["request_message"] = self.request_message
        return props


class AzurePrivateEndpointArgs:
    """Arguments for the Azure private endpoint component.

    Args:
        endpoint_name: Name of the endpoint in Azure; changing it replaces the endpoint.
        resource_group_name: Resource group holding the endpoint.
        location: Azure region of the endpoint.
        subnet_id: Subnet the endpoint's interface is placed in.
        service_connection: Optional connection to a target service.
        tags: Tags applied to the endpoint.
    """

    def __init__(
        self,
        endpoint_name: pulumi.Input[str],
        resource_group_name: pulumi.Input[str],
        location: pulumi.Input[str],
        subnet_id: pulumi.Input[str],
        service_connection: AzureServiceConnectionArgs | None = None,
        tags: dict[str, pulumi.Input[str]] | None = None,
    ) -> None:
        """Initialise private endpoint arguments."""
        self.endpoint_name: pulumi.Input[str] = endpoint_name
        self.resource_group_name: pulumi.Input[str] = resource_group_name
        self.location: pulumi.Input[str] = location
        self.subnet_id: pulumi.Input[str] = subnet_id
        self.service_connection: AzureServiceConnectionArgs | None = service_connection
        self.tags: dict[str, pulumi.Input[str]] = tags or {}

    def to_props(self) -> dict[str, Any]:
        return {
            "name": self.endpoint_name,
            "resource_group_name": self.resource_group_name,
            "location": self.location,
            "subnet_id": self.subnet_id,
            "private_service_connection": (
                [self.service_connection.to_props()] if self.service_connection is not None else []
            ),
            "tags": self.tags,
        }


class AzurePrivateEndpoint(pulumi.ComponentResource):
    """Azure private endpoint component satisfying ``PrivateLinkEndpoint``.

    Provisions one private endpoint in the given subnet with at most one
    automatic or manual service connection.
    """

    def __init__(
        self,
        name: str,
        args: AzurePrivateEndpointArgs,
        opts: pulumi.ResourceOptions | None = None,
        provider: PrivateEndpointProvider | None = None,
    ) -> None:
        """Initialise and provision the Azure private endpoint component.

        Args:
            name: Logical Pulumi resource name.
            args: Azure-specific private endpoint arguments.
            opts: Optional Pulumi resource options.
            provider: Dynamic provider override, used by tests.
        """
        super().__init__("privatelink:azure:PrivateEndpoint", name, {}, opts)

        logger.debug("provisioning_azure_private_endpoint", extra={"component_name": name})

        endpoint = PrivateEndpoint(
            f"{name}-pe",
            args.to_props(),
            opts=pulumi.ResourceOptions(parent=self),
            provider=provider,
        )

        self._outputs: PrivateEndpointOutputs = PrivateEndpointOutputs(
            endpoint_id=endpoint.id,
            network_interface_ids=endpoint.network_interface_ids,
            private_service_connection=endpoint.private_service_connection,
        )

        self.register_outputs(
            {
                "endpoint_id": self._outputs.endpoint_id,
                "network_interface_ids": self._outputs.network_interface_ids,
                "private_service_connection": self._outputs.private_service_connection,
            }
        )

    @property
    def outputs(self) -> PrivateEndpointOutputs:
        """Return the resolved private endpoint outputs."""
        return self._outputs
