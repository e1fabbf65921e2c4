"""Validation of the internal component configuration types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from componentbase.config import (
    ClientConnectionConfiguration,
    LeaderElectionConfiguration,
)

INVALID_VALUE = "Invalid value"


@dataclass(frozen=True)
class FieldError:
    """One validation problem found at a field path."""

    field: str
    bad_value: Any
    detail: str
    type: str = INVALID_VALUE

    def __str__(self) -> str:
        value = self.bad_value
        shown = f'"{value}"' if isinstance(value, str) else str(value)
        return f"{self.field}: {self.type}: {shown}: {self.detail}"


def _child(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def validate_client_connection_configuration(
    cc: ClientConnectionConfiguration, path: str = ""
) -> list[FieldError]:
    """Return the problems found in a client connection configuration."""
    errors: list[FieldError] = []
    if cc.burst < 0:
        errors.append(
            FieldError(_child(path, "burst"), cc.burst, "must be non-negative")
        )
    return errors


def validate_leader_election_configuration(
    cc: LeaderElectionConfiguration, path: str = ""
) -> list[FieldError]:
    """Return the problems found in a leader election configuration.

    Nothing is checked when leader election is disabled.
    """
    errors: list[FieldError] = []
    if not cc.leader_elect:
        return errors
    for name, value in (
        ("leaseDuration", cc.lease_duration),
        ("renewDeadline", cc.renew_deadline),
        ("retryPeriod", cc.retry_period),
    ):
        if value.total_seconds() <= 0:
            errors.append(
                FieldError(_child(path, name), value, "must be greater than zero")
            )
    if cc.lease_duration <= cc.renew_deadline:
        errors.append(
            FieldError(
                _child(path, "leaseDuration"),
                cc.renew_deadline,
                "LeaseDuration must be greater than RenewDeadline",
            )
        )
    for name, value, detail in (
        ("resourceLock", cc.resource_lock, "resourceLock is required"),
        ("resourceNamespace", cc.resource_namespace, "resourceNamespace is required"),
        ("resourceName", cc.resource_name, "resourceName is required"),
    ):
        if not value:
            errors.append(FieldError(_child(path, name), value, detail))
    return errors