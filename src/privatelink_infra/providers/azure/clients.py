"""Azure network management client handles."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from azure.identity import DefaultAzureCredential
from azure.mgmt.network import NetworkManagementClient

from privatelink_infra.config import StackConfig

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkClients:
    """The operation groups the private endpoint reconciler calls into.

    ``private_endpoints`` exposes ``begin_create_or_update``, ``get`` and
    ``begin_delete``; ``network_interfaces`` exposes ``get``.
    """

    private_endpoints: Any
    network_interfaces: Any

    @classmethod
    def from_config(cls, config: StackConfig) -> NetworkClients:
        """Build clients authenticated with ``DefaultAzureCredential``."""
        logger.debug("network_client_created", extra={"subscription_id": config.subscription_id})
        client = NetworkManagementClient(
            credential=DefaultAzureCredential(),
            subscription_id=config.subscription_id,
        )
        return cls(
            private_endpoints=client.private_endpoints,
            network_interfaces=client.network_interfaces,
        )
