"""Accepted configuration shape for the private link endpoint resource.

Inputs are validated once, at the boundary, into the models below. Everything
downstream of ``check`` works on typed values rather than raw property maps.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from privatelink_infra.errors import EndpointSettingsError

logger: logging.Logger = logging.getLogger(__name__)

REQUEST_MESSAGE_MAX_LENGTH = 140
MAX_TAG_COUNT = 50
MAX_TAG_KEY_LENGTH = 512
MAX_TAG_VALUE_LENGTH = 256

# Changing any of these replaces the endpoint instead of updating it in place.
FORCE_NEW_FIELDS: frozenset[str] = frozenset({"name", "location", "resource_group_name"})

# Populated from the remote resource; never sent in a request.
COMPUTED_FIELDS: frozenset[str] = frozenset({"network_interface_ids"})
COMPUTED_CONNECTION_FIELDS: frozenset[str] = frozenset(
    {"provisioning_state", "status", "private_ip_address"}
)


def _no_empty_string(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


NonEmptyStr = Annotated[str, AfterValidator(_no_empty_string)]


def validate_request_message(value: str) -> str:
    """Validate a private service connection request message."""
    if not value.strip():
        raise ValueError("must not be empty")
    if len(value) > REQUEST_MESSAGE_MAX_LENGTH:
        raise ValueError(f"must be at most {REQUEST_MESSAGE_MAX_LENGTH} characters long")
    return value


def normalize_location(location: str) -> str:
    """Return the canonical form of an Azure location, e.g. ``West Europe`` -> ``westeurope``."""
    return location.replace(" ", "").lower()


class ServiceConnectionArgs(BaseModel):
    """A single ``private_service_connection`` block."""

    model_config = ConfigDict(extra="forbid")

    name: NonEmptyStr
    is_manual_connection: bool
    private_connection_resource_id: NonEmptyStr
    subresource_names: list[NonEmptyStr] = Field(default_factory=list)
    request_message: str | None = None

    provisioning_state: str | None = None
    status: str | None = None
    private_ip_address: str | None = None

    @field_validator("request_message")
    @classmethod
    def _check_request_message(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return None
        return validate_request_message(value)


class PrivateEndpointArgs(BaseModel):
    """Desired state of a private link endpoint."""

    model_config = ConfigDict(extra="forbid")

    name: NonEmptyStr
    location: NonEmptyStr
    resource_group_name: NonEmptyStr
    subnet_id: NonEmptyStr
    private_service_connection: list[ServiceConnectionArgs] = Field(default_factory=list, max_length=1)
    tags: dict[str, str] = Field(default_factory=dict)

    @field_validator("location")
    @classmethod
    def _normalize_location(cls, value: str) -> str:
        return normalize_location(value)

    @field_validator("tags")
    @classmethod
    def _check_tags(cls, value: dict[str, str]) -> dict[str, str]:
        if len(value) > MAX_TAG_COUNT:
            raise ValueError(f"a maximum of {MAX_TAG_COUNT} tags can be applied to each resource")
        for key, tag_value in value.items():
            if len(key) > MAX_TAG_KEY_LENGTH:
                raise ValueError(f"the maximum length for a tag key is {MAX_TAG_KEY_LENGTH} characters: {key!r}")
            if len(tag_value) > MAX_TAG_VALUE_LENGTH:
                raise ValueError(
                    f"the maximum length for a tag value is {MAX_TAG_VALUE_LENGTH} characters: {key!r}"
                )
        return value

    @classmethod
    def from_inputs(cls, inputs: dict[str, Any]) -> PrivateEndpointArgs:
        """Build args from a raw property map, ignoring computed keys.

        Raises ``pydantic.ValidationError`` on invalid values.
        """
        data = {k: v for k, v in inputs.items() if k in cls.model_fields and v is not None}
        connections = data.get("private_service_connection")
        if connections is not None:
            data["private_service_connection"] = [
                {
                    k: v
                    for k, v in connection.items()
                    if k not in COMPUTED_CONNECTION_FIELDS and v is not None
                }
                for connection in connections
            ]
        return cls.model_validate(data)


class PrivateEndpointState(PrivateEndpointArgs):
    """Remote state of a private link endpoint, as flattened from the API."""

    id: str
    network_interface_ids: list[str] = Field(default_factory=list)

    def to_outputs(self) -> dict[str, Any]:
        """Return the property map handed back to the host framework."""
        return self.model_dump(mode="json")


def validate_connection_settings(args: PrivateEndpointArgs) -> None:
    """Reject connection attribute combinations the service does not accept.

    An automatic connection is approved without review, so it must not carry a
    request message; a manual connection must carry one for the approver.
    """
    for connection in args.private_service_connection:
        if not connection.is_manual_connection and connection.request_message:
            raise EndpointSettingsError(
                f"private_service_connection {connection.name!r} is invalid, the "
                "`request_message` attribute cannot have a value if the "
                "`is_manual_connection` attribute is set to `false`"
            )
        if connection.is_manual_connection and not connection.request_message:
            raise EndpointSettingsError(
                f"private_service_connection {connection.name!r} is invalid, the "
                "`request_message` attribute must not be empty when the "
                "`is_manual_connection` attribute is set to `true`"
            )
