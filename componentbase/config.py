"""Internal configuration types shared by components."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timedelta


@dataclass
class ClientConnectionConfiguration:
    """Details for constructing a client connection to the server."""

    kubeconfig: str = ""
    accept_content_types: str = ""
    content_type: str = ""
    qps: float = 0.0
    burst: int = 0

    def deep_copy(self) -> "ClientConnectionConfiguration":
        """Return an independent copy."""
        return replace(self)


@dataclass
class LeaderElectionConfiguration:
    """Configuration of leader election for replicated components."""

    leader_elect: bool = False
    lease_duration: timedelta = timedelta(0)
    renew_deadline: timedelta = timedelta(0)
    retry_period: timedelta = timedelta(0)
    resource_lock: str = ""
    resource_name: str = ""
    resource_namespace: str = ""

    def deep_copy(self) -> "LeaderElectionConfiguration":
        """Return an independent copy."""
        return replace(self)


@dataclass
class DebuggingConfiguration:
    """Configuration for debugging related features."""

    enable_profiling: bool = False
    enable_contention_profiling: bool = False

    def deep_copy(self) -> "DebuggingConfiguration":
        """Return an independent copy."""
        return replace(self)