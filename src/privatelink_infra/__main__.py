"""Pulumi stack entry point for the private link endpoint."""

from __future__ import annotations

import logging

import pulumi
import structlog

from privatelink_infra.config import StackConfig
from privatelink_infra.providers.azure.private_endpoint import (
    AzurePrivateEndpoint,
    AzurePrivateEndpointArgs,
    AzureServiceConnectionArgs,
)

logger: logging.Logger = logging.getLogger(__name__)


class PrivateLinkStack:
    """Provisions a private link endpoint from environment configuration."""

    def __init__(self, config: StackConfig) -> None:
        """Initialise the stack with resolved configuration."""
        self._config: StackConfig = config

    def run(self) -> AzurePrivateEndpoint:
        """Provision the endpoint and export its outputs."""
        config = self._config
        logger.info(
            "stack_run_started",
            extra={"endpoint_name": config.endpoint_name, "environment": config.environment},
        )

        connection = None
        if config.target_resource_id:
            connection = AzureServiceConnectionArgs(
                name=f"{config.endpoint_name}-connection",
                private_connection_resource_id=config.target_resource_id,
                is_manual_connection=config.is_manual_connection,
                subresource_names=list(config.subresource_names),
                request_message=config.request_message or None,
            )

        endpoint = AzurePrivateEndpoint(
            config.endpoint_name,
            AzurePrivateEndpointArgs(
                endpoint_name=config.endpoint_name,
                resource_group_name=config.resource_group_name,
                location=config.location,
                subnet_id=config.subnet_id,
                service_connection=connection,
                tags={"environment": config.environment},
            ),
        )

        pulumi.export("private_endpoint_id", endpoint.outputs.endpoint_id)
        pulumi.export("network_interface_ids", endpoint.outputs.network_interface_ids)
        pulumi.export("private_ip_address", endpoint.outputs.private_ip_address)
        return endpoint


if __name__ == "__main__":
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.INFO))
    PrivateLinkStack(config=StackConfig.load()).run()
