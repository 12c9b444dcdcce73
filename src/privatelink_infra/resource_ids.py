"""Parsing of opaque Azure Resource Manager IDs."""

from __future__ import annotations

from dataclasses import dataclass

from azure.mgmt.core.tools import is_valid_resource_id, parse_resource_id

from privatelink_infra.errors import InvalidResourceIdError

PRIVATE_ENDPOINTS = "privateEndpoints"
NETWORK_INTERFACES = "networkInterfaces"


@dataclass(frozen=True)
class ResourceId:
    """The components of an ARM ID needed to address a resource."""

    subscription: str
    resource_group: str
    resource_type: str
    name: str

    @classmethod
    def parse(cls, value: str, resource_type: str) -> ResourceId:
        """Parse ``value`` and check it addresses a ``resource_type`` resource.

        Raises ``InvalidResourceIdError`` when the ID is malformed, has no
        resource group, or names a different resource type.
        """
        if not value or not is_valid_resource_id(value):
            raise InvalidResourceIdError(f"Cannot parse Azure resource ID {value!r}")
        parts = parse_resource_id(value)
        resource_group = parts.get("resource_group")
        if not resource_group:
            raise InvalidResourceIdError(f"No resource group in Azure resource ID {value!r}")
        parsed_type = parts.get("type", "")
        if parsed_type.lower() != resource_type.lower() or not parts.get("name"):
            raise InvalidResourceIdError(
                f"Azure resource ID {value!r} does not address a {resource_type!r} resource"
            )
        return cls(
            subscription=parts["subscription"],
            resource_group=resource_group,
            resource_type=parsed_type,
            name=parts["name"],
        )
