"""Tests for input validation of the private endpoint schema."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from privatelink_infra.errors import EndpointSettingsError
from privatelink_infra.schema import (
    FORCE_NEW_FIELDS,
    REQUEST_MESSAGE_MAX_LENGTH,
    PrivateEndpointArgs,
    ServiceConnectionArgs,
    normalize_location,
    validate_connection_settings,
    validate_request_message,
)


def _inputs(**overrides: object) -> dict[str, object]:
    inputs: dict[str, object] = {
        "name": "ep1",
        "location": "westeurope",
        "resource_group_name": "rg1",
        "subnet_id": "/subnets/s1",
    }
    inputs.update(overrides)
    return inputs


def _connection(**overrides: object) -> dict[str, object]:
    connection: dict[str, object] = {
        "name": "conn1",
        "is_manual_connection": False,
        "private_connection_resource_id": "/services/svc1",
        "subresource_names": ["blob"],
    }
    connection.update(overrides)
    return connection


def test_minimal_inputs_are_valid() -> None:
    args = PrivateEndpointArgs.from_inputs(_inputs())
    assert args.private_service_connection == []
    assert args.tags == {}


@pytest.mark.parametrize("field", ["name", "location", "resource_group_name", "subnet_id"])
def test_required_strings_reject_empty(field: str) -> None:
    with pytest.raises(ValidationError):
        PrivateEndpointArgs.from_inputs(_inputs(**{field: "  "}))


def test_name_is_required() -> None:
    inputs = _inputs()
    del inputs["name"]
    with pytest.raises(ValidationError):
        PrivateEndpointArgs.from_inputs(inputs)


def test_at_most_one_connection() -> None:
    with pytest.raises(ValidationError):
        PrivateEndpointArgs.from_inputs(
            _inputs(private_service_connection=[_connection(), _connection(name="conn2")])
        )


def test_subresource_names_reject_empty_entries() -> None:
    with pytest.raises(ValidationError):
        ServiceConnectionArgs(**_connection(subresource_names=["blob", ""]))


def test_location_is_normalized() -> None:
    args = PrivateEndpointArgs.from_inputs(_inputs(location="West Europe"))
    assert args.location == "westeurope"
    assert normalize_location("East US 2") == "eastus2"


def test_computed_connection_keys_are_ignored() -> None:
    args = PrivateEndpointArgs.from_inputs(
        _inputs(
            private_service_connection=[
                _connection(status="Approved", provisioning_state="Succeeded", private_ip_address="10.0.0.4")
            ],
            network_interface_ids=["/nic/1"],
            __provider="serialized",
        )
    )
    connection = args.private_service_connection[0]
    assert connection.status is None
    assert connection.private_ip_address is None


def test_request_message_validator() -> None:
    assert validate_request_message("please approve") == "please approve"
    with pytest.raises(ValueError):
        validate_request_message("   ")
    with pytest.raises(ValueError):
        validate_request_message("x" * (REQUEST_MESSAGE_MAX_LENGTH + 1))


def test_too_long_request_message_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ServiceConnectionArgs(**_connection(is_manual_connection=True, request_message="x" * 141))


def test_tag_limits() -> None:
    with pytest.raises(ValidationError):
        PrivateEndpointArgs.from_inputs(_inputs(tags={f"k{i}": "v" for i in range(51)}))
    with pytest.raises(ValidationError):
        PrivateEndpointArgs.from_inputs(_inputs(tags={"k": "v" * 257}))
    with pytest.raises(ValidationError):
        PrivateEndpointArgs.from_inputs(_inputs(tags={"k" * 513: "v"}))


def test_force_new_fields() -> None:
    assert FORCE_NEW_FIELDS == {"name", "location", "resource_group_name"}


def test_automatic_connection_with_request_message_is_rejected() -> None:
    args = PrivateEndpointArgs.from_inputs(
        _inputs(private_service_connection=[_connection(request_message="hello")])
    )
    with pytest.raises(EndpointSettingsError, match="cannot have a value"):
        validate_connection_settings(args)


def test_manual_connection_without_request_message_is_rejected() -> None:
    args = PrivateEndpointArgs.from_inputs(
        _inputs(private_service_connection=[_connection(is_manual_connection=True)])
    )
    with pytest.raises(EndpointSettingsError, match="must not be empty"):
        validate_connection_settings(args)


def test_accepted_connection_settings() -> None:
    for connection in (
        _connection(),
        _connection(is_manual_connection=True, request_message="please approve"),
    ):
        args = PrivateEndpointArgs.from_inputs(_inputs(private_service_connection=[connection]))
        validate_connection_settings(args)
