"""Versioned (v1alpha1) configuration types, defaulting and conversion."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal
from typing import Any

from componentbase import config as internal

ENDPOINTS_RESOURCE_LOCK = "endpoints"

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000
_NS_PER_MIN = 60 * _NS_PER_S

_UNIT_NS: dict[str, int] = {
    "ns": 1,
    "us": _NS_PER_US,
    "µs": _NS_PER_US,
    "μs": _NS_PER_US,
    "ms": _NS_PER_MS,
    "s": _NS_PER_S,
    "m": _NS_PER_MIN,
    "h": 60 * _NS_PER_MIN,
}

_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def _frac(value: int, unit: int) -> str:
    whole, rem = divmod(value, unit)
    if not rem:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{str(rem).rjust(width, '0').rstrip('0')}"


def _format_duration(td: timedelta) -> str:
    """Render a duration as text such as "1h2m3.5s" or "150ms"."""
    ns = ((td.days * 86400 + td.seconds) * 1_000_000 + td.microseconds) * _NS_PER_US
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u < _NS_PER_US:
        return f"{sign}{u}ns"
    if u < _NS_PER_MS:
        return f"{sign}{_frac(u, _NS_PER_US)}µs"
    if u < _NS_PER_S:
        return f"{sign}{_frac(u, _NS_PER_MS)}ms"
    text = f"{_frac(u % _NS_PER_MIN, _NS_PER_S)}s"
    minutes = u // _NS_PER_MIN
    if minutes:
        hours, mins = divmod(minutes, 60)
        text = (f"{hours}h" if hours else "") + f"{mins}m" + text
    return sign + text


def _parse_duration(text: str) -> timedelta:
    """Parse duration text such as "-1h30m" or "2.5s"."""
    error = ValueError(f'time: invalid duration "{text}"')
    body = text
    negative = False
    if body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise error
    total = Decimal(0)
    pos = 0
    while pos < len(body):
        match = _PART_RE.match(body, pos)
        if match is None:
            raise error
        total += Decimal(match.group(1)) * _UNIT_NS[match.group(2)]
        pos = match.end()
    micros = int(total) // _NS_PER_US
    return timedelta(microseconds=-micros if negative else micros)


def _duration_field(data: dict[str, Any], key: str) -> timedelta:
    value = data.get(key)
    if value is None:
        return timedelta(0)
    if not isinstance(value, str):
        raise ValueError(f"{key}: expected a duration string, got {value!r}")
    return _parse_duration(value)


@dataclass
class LeaderElectionConfiguration:
    """Versioned leader election configuration; leader_elect may be unset."""

    leader_elect: bool | None = None
    lease_duration: timedelta = timedelta(0)
    renew_deadline: timedelta = timedelta(0)
    retry_period: timedelta = timedelta(0)
    resource_lock: str = ""
    resource_name: str = ""
    resource_namespace: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the serialised form with its wire field names."""
        return {
            "leaderElect": self.leader_elect,
            "leaseDuration": _format_duration(self.lease_duration),
            "renewDeadline": _format_duration(self.renew_deadline),
            "retryPeriod": _format_duration(self.retry_period),
            "resourceLock": self.resource_lock,
            "resourceName": self.resource_name,
            "resourceNamespace": self.resource_namespace,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LeaderElectionConfiguration":
        """Build from the serialised form; missing fields take zero values."""
        return cls(
            leader_elect=data.get("leaderElect"),
            lease_duration=_duration_field(data, "leaseDuration"),
            renew_deadline=_duration_field(data, "renewDeadline"),
            retry_period=_duration_field(data, "retryPeriod"),
            resource_lock=data.get("resourceLock") or "",
            resource_name=data.get("resourceName") or "",
            resource_namespace=data.get("resourceNamespace") or "",
        )


@dataclass
class DebuggingConfiguration:
    """Versioned debugging configuration; unset fields are omitted."""

    enable_profiling: bool | None = None
    enable_contention_profiling: bool | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the serialised form, leaving out unset fields."""
        result: dict[str, Any] = {}
        if self.enable_profiling is not None:
            result["enableProfiling"] = self.enable_profiling
        if self.enable_contention_profiling is not None:
            result["enableContentionProfiling"] = self.enable_contention_profiling
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DebuggingConfiguration":
        """Build from the serialised form."""
        return cls(
            enable_profiling=data.get("enableProfiling"),
            enable_contention_profiling=data.get("enableContentionProfiling"),
        )


@dataclass
class ClientConnectionConfiguration:
    """Versioned details for constructing a client."""

    kubeconfig: str = ""
    accept_content_types: str = ""
    content_type: str = ""
    qps: float = 0.0
    burst: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the serialised form with its wire field names."""
        return {
            "kubeconfig": self.kubeconfig,
            "acceptContentTypes": self.accept_content_types,
            "contentType": self.content_type,
            "qps": self.qps,
            "burst": self.burst,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientConnectionConfiguration":
        """Build from the serialised form; missing fields take zero values."""
        return cls(
            kubeconfig=data.get("kubeconfig") or "",
            accept_content_types=data.get("acceptContentTypes") or "",
            content_type=data.get("contentType") or "",
            qps=float(data.get("qps") or 0.0),
            burst=int(data.get("burst") or 0),
        )


def recommended_default_leader_election_configuration(
    obj: LeaderElectionConfiguration,
) -> None:
    """Fill unset leader election fields with the recommended defaults."""
    zero = timedelta(0)
    if obj.lease_duration == zero:
        obj.lease_duration = timedelta(seconds=15)
    if obj.renew_deadline == zero:
        obj.renew_deadline = timedelta(seconds=10)
    if obj.retry_period == zero:
        obj.retry_period = timedelta(seconds=2)
    if obj.resource_lock == "":
        obj.resource_lock = ENDPOINTS_RESOURCE_LOCK
    if obj.leader_elect is None:
        obj.leader_elect = True


def recommended_default_client_connection_configuration(
    obj: ClientConnectionConfiguration,
) -> None:
    """Fill unset client connection fields with the recommended defaults."""
    if not obj.content_type:
        obj.content_type = "application/vnd.kubernetes.protobuf"
    if obj.qps == 0.0:
        obj.qps = 50.0
    if obj.burst == 0:
        obj.burst = 100


def recommended_debugging_configuration(obj: DebuggingConfiguration) -> None:
    """Enable profiling unless it was explicitly configured."""
    if obj.enable_profiling is None:
        obj.enable_profiling = True


def new_recommended_debugging_configuration() -> DebuggingConfiguration:
    """Return a debugging configuration with the recommended defaults."""
    result = DebuggingConfiguration()
    recommended_debugging_configuration(result)
    return result


def client_connection_to_internal(
    obj: ClientConnectionConfiguration,
) -> internal.ClientConnectionConfiguration:
    """Convert to the internal client connection configuration."""
    return internal.ClientConnectionConfiguration(
        kubeconfig=obj.kubeconfig,
        accept_content_types=obj.accept_content_types,
        content_type=obj.content_type,
        qps=obj.qps,
        burst=obj.burst,
    )


def client_connection_from_internal(
    obj: internal.ClientConnectionConfiguration,
) -> ClientConnectionConfiguration:
    """Convert from the internal client connection configuration."""
    return ClientConnectionConfiguration(
        kubeconfig=obj.kubeconfig,
        accept_content_types=obj.accept_content_types,
        content_type=obj.content_type,
        qps=obj.qps,
        burst=obj.burst,
    )


def debugging_to_internal(
    obj: DebuggingConfiguration,
) -> internal.DebuggingConfiguration:
    """Convert to the internal debugging configuration; unset means False."""
    return internal.DebuggingConfiguration(
        enable_profiling=bool(obj.enable_profiling),
        enable_contention_profiling=bool(obj.enable_contention_profiling),
    )


def debugging_from_internal(
    obj: internal.DebuggingConfiguration,
) -> DebuggingConfiguration:
    """Convert from the internal debugging configuration."""
    return DebuggingConfiguration(
        enable_profiling=obj.enable_profiling,
        enable_contention_profiling=obj.enable_contention_profiling,
    )


def leader_election_to_internal(
    obj: LeaderElectionConfiguration,
) -> internal.LeaderElectionConfiguration:
    """Convert to the internal leader election configuration; unset means False."""
    return internal.LeaderElectionConfiguration(
        leader_elect=bool(obj.leader_elect),
        lease_duration=obj.lease_duration,
        renew_deadline=obj.renew_deadline,
        retry_period=obj.retry_period,
        resource_lock=obj.resource_lock,
        resource_name=obj.resource_name,
        resource_namespace=obj.resource_namespace,
    )


def leader_election_from_internal(
    obj: internal.LeaderElectionConfiguration,
) -> LeaderElectionConfiguration:
    """Convert from the internal leader election configuration."""
    return LeaderElectionConfiguration(
        leader_elect=obj.leader_elect,
        lease_duration=obj.lease_duration,
        renew_deadline=obj.renew_deadline,
        retry_period=obj.retry_period,
        resource_lock=obj.resource_lock,
        resource_name=obj.resource_name,
        resource_namespace=obj.resource_namespace,
    )