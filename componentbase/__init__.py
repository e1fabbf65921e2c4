"""Shared building blocks for server components: flag values, feature gates, config types, validation and a config endpoint."""

__version__ = "0.1.0"

__all__ = [
    "ciphersuites",
    "config",
    "configz",
    "featuregate",
    "flag_values",
    "leader_election_flags",
    "normalize",
    "sectioned",
    "v1alpha1",
    "validation",
]