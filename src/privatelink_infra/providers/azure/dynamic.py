"""Pulumi dynamic provider for Azure private link endpoints.

Pulumi serializes the provider instance into the program's state, so it holds
no client: each operation loads ``StackConfig`` and builds a fresh reconciler.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import pulumi
from pulumi.dynamic import (
    CheckFailure,
    CheckResult,
    CreateResult,
    DiffResult,
    ReadResult,
    ResourceProvider,
    UpdateResult,
)
from pydantic import ValidationError

from privatelink_infra.config import StackConfig
from privatelink_infra.context import OperationContext
from privatelink_infra.errors import EndpointSettingsError
from privatelink_infra.providers.azure.clients import NetworkClients
from privatelink_infra.providers.azure.reconciler import PrivateEndpointReconciler
from privatelink_infra.schema import (
    COMPUTED_CONNECTION_FIELDS,
    COMPUTED_FIELDS,
    FORCE_NEW_FIELDS,
    PrivateEndpointArgs,
    normalize_location,
    validate_connection_settings,
)

logger: logging.Logger = logging.getLogger(__name__)

ReconcilerFactory = Callable[[], PrivateEndpointReconciler]


def default_reconciler() -> PrivateEndpointReconciler:
    """Build a reconciler from the environment's ``StackConfig``."""
    config = StackConfig.load()
    return PrivateEndpointReconciler(
        clients=NetworkClients.from_config(config),
        context=OperationContext.with_timeout(config.operation_timeout_seconds),
        import_protection=config.import_protection,
    )


def _comparable(key: str, value: Any) -> Any:
    if value is None:
        return None
    if key == "resource_group_name":
        return value.lower()
    if key == "location":
        return normalize_location(value)
    if key == "private_service_connection":
        return [
            {k: v for k, v in connection.items() if k not in COMPUTED_CONNECTION_FIELDS and v is not None}
            for connection in value
        ]
    return value


class PrivateEndpointProvider(ResourceProvider):
    """Implements the resource lifecycle on top of ``PrivateEndpointReconciler``."""

    def __init__(self, reconciler_factory: ReconcilerFactory | None = None) -> None:
        super().__init__()
        self._reconciler_factory: ReconcilerFactory = reconciler_factory or default_reconciler

    def check(self, _olds: dict[str, Any], news: dict[str, Any]) -> CheckResult:
        try:
            args = PrivateEndpointArgs.from_inputs(news)
        except ValidationError as e:
            failures = [
                CheckFailure(".".join(str(part) for part in error["loc"]) or "inputs", error["msg"])
                for error in e.errors()
            ]
            return CheckResult(news, failures)
        try:
            validate_connection_settings(args)
        except EndpointSettingsError as e:
            return CheckResult(news, [CheckFailure("private_service_connection", str(e))])
        return CheckResult({**news, **args.model_dump(mode="json")}, [])

    def diff(self, _id: str, olds: dict[str, Any], news: dict[str, Any]) -> DiffResult:
        changes = sorted(
            key
            for key in PrivateEndpointArgs.model_fields
            if _comparable(key, olds.get(key)) != _comparable(key, news.get(key))
        )
        replaces = [key for key in changes if key in FORCE_NEW_FIELDS]
        return DiffResult(
            changes=bool(changes),
            replaces=replaces,
            stables=sorted(COMPUTED_FIELDS),
            delete_before_replace=True,
        )

    def create(self, props: dict[str, Any]) -> CreateResult:
        args = PrivateEndpointArgs.from_inputs(props)
        state = self._reconciler_factory().create_or_update(args, is_new=True)
        return CreateResult(id_=state.id, outs=state.to_outputs())

    def update(self, _id: str, _olds: dict[str, Any], news: dict[str, Any]) -> UpdateResult:
        args = PrivateEndpointArgs.from_inputs(news)
        state = self._reconciler_factory().create_or_update(args, is_new=False)
        return UpdateResult(outs=state.to_outputs())

    def read(self, id_: str, props: dict[str, Any]) -> ReadResult:
        state = self._reconciler_factory().read(id_)
        if state is None:
            return ReadResult(id_=None, outs={})
        return ReadResult(id_=state.id, outs=state.to_outputs())

    def delete(self, id_: str, _props: dict[str, Any]) -> None:
        self._reconciler_factory().delete(id_)


class PrivateEndpoint(pulumi.dynamic.Resource):
    """A private link endpoint managed through ``PrivateEndpointProvider``."""

    name: pulumi.Output[str]
    location: pulumi.Output[str]
    resource_group_name: pulumi.Output[str]
    subnet_id: pulumi.Output[str]
    private_service_connection: pulumi.Output[list[dict[str, Any]]]
    network_interface_ids: pulumi.Output[list[str]]
    tags: pulumi.Output[dict[str, str]]

    def __init__(
        self,
        resource_name: str,
        props: dict[str, Any],
        opts: pulumi.ResourceOptions | None = None,
        provider: PrivateEndpointProvider | None = None,
    ) -> None:
        super().__init__(
            provider or PrivateEndpointProvider(),
            resource_name,
            {**props, "network_interface_ids": None},
            opts,
        )
