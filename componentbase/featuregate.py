"""Feature gates: named on/off switches with maturity levels and defaults."""

from __future__ import annotations

import argparse
import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from enum import Enum

from componentbase.flag_values import FlagValueError, parse_bool

logger = logging.getLogger(__name__)

FLAG_NAME = "feature-gates"

ALL_ALPHA_GATE = "AllAlpha"
ALL_BETA_GATE = "AllBeta"


class PreRelease(str, Enum):
    """Maturity level of a feature."""

    ALPHA = "ALPHA"
    BETA = "BETA"
    GA = ""
    DEPRECATED = "DEPRECATED"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FeatureSpec:
    """Default state, lock and maturity of one feature."""

    default: bool = False
    lock_to_default: bool = False
    pre_release: PreRelease = PreRelease.GA


class FeatureGateError(ValueError):
    """Raised when a feature gate operation is rejected."""


class UnregisteredFeatureError(KeyError):
    """Raised when asking about a feature the gate does not know."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


_SpecialHandler = Callable[[dict[str, FeatureSpec], dict[str, bool], bool], None]


def _set_unset_gates(level: PreRelease) -> _SpecialHandler:
    def handler(
        known: dict[str, FeatureSpec], enabled: dict[str, bool], value: bool
    ) -> None:
        for name, spec in known.items():
            if spec.pre_release is level and name not in enabled:
                enabled[name] = value

    return handler


_DEFAULT_FEATURES: dict[str, FeatureSpec] = {
    ALL_ALPHA_GATE: FeatureSpec(default=False, pre_release=PreRelease.ALPHA),
    ALL_BETA_GATE: FeatureSpec(default=False, pre_release=PreRelease.BETA),
}

_SPECIAL_FEATURES: dict[str, _SpecialHandler] = {
    ALL_ALPHA_GATE: _set_unset_gates(PreRelease.ALPHA),
    ALL_BETA_GATE: _set_unset_gates(PreRelease.BETA),
}


class _FeatureGateAction(argparse.Action):
    def __init__(self, option_strings, dest, gate: "FeatureGate", **kwargs):
        super().__init__(option_strings, dest, **kwargs)
        self.gate = gate

    def __call__(self, parser, namespace, values, option_string=None):
        try:
            self.gate.set(values)
        except FeatureGateError as exc:
            raise argparse.ArgumentError(self, str(exc)) from exc
        setattr(namespace, self.dest, self.gate)


class FeatureGate:
    """Stores known features and the values explicitly set for them.

    Reads see a consistent snapshot: every write builds new maps and swaps
    them in under a lock.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._special = _SPECIAL_FEATURES
        self._lock = threading.Lock()
        self._known: dict[str, FeatureSpec] = dict(_DEFAULT_FEATURES)
        self._enabled: dict[str, bool] = {}
        self._closed = False

    def set(self, value: str) -> None:
        """Parse "key1=bool1,key2=bool2,..." and store the values."""
        mapping: dict[str, bool] = {}
        for item in value.split(","):
            if not item:
                continue
            key, sep, raw = item.partition("=")
            key = key.strip()
            if not sep:
                raise FeatureGateError(f"missing bool value for {key}")
            raw = raw.strip()
            try:
                mapping[key] = parse_bool(raw)
            except FlagValueError as exc:
                raise FeatureGateError(
                    f"invalid value of {key}={raw}, err: {exc}"
                ) from exc
        self.set_from_map(mapping)

    def set_from_map(self, mapping: Mapping[str, bool]) -> None:
        """Store values for known features; nothing is stored on error."""
        with self._lock:
            known = dict(self._known)
            enabled = dict(self._enabled)
            for key, value in mapping.items():
                spec = known.get(key)
                if spec is None:
                    raise FeatureGateError(f"unrecognized feature gate: {key}")
                if spec.lock_to_default and spec.default != value:
                    raise FeatureGateError(
                        f"cannot set feature gate {key} to {str(value).lower()}, "
                        f"feature is locked to {str(spec.default).lower()}"
                    )
                enabled[key] = value
                handler = self._special.get(key)
                if handler is not None:
                    handler(known, enabled, value)
                if spec.pre_release is PreRelease.DEPRECATED:
                    logger.warning(
                        "Setting deprecated feature gate %s=%s. "
                        "It will be removed in a future release.",
                        key,
                        str(value).lower(),
                    )
                elif spec.pre_release is PreRelease.GA:
                    logger.warning(
                        "Setting GA feature gate %s=%s. "
                        "It will be removed in a future release.",
                        key,
                        str(value).lower(),
                    )
            self._known = known
            self._enabled = enabled
        logger.debug("feature gates: %s", enabled)

    def __str__(self) -> str:
        return ",".join(
            sorted(f"{k}={str(v).lower()}" for k, v in self._enabled.items())
        )

    def type_name(self) -> str:
        return "mapStringBool"

    def add(self, features: Mapping[str, FeatureSpec]) -> None:
        """Register features; re-registering an identical spec is allowed."""
        with self._lock:
            if self._closed:
                raise FeatureGateError(
                    "cannot add a feature gate after adding it to the flag set"
                )
            known = dict(self._known)
            for name, spec in features.items():
                existing = known.get(name)
                if existing is not None:
                    if existing == spec:
                        continue
                    raise FeatureGateError(
                        f'feature gate "{name}" with different spec already '
                        f"exists: {existing}"
                    )
                known[name] = spec
            self._known = known

    def override_default(self, name: str, override: bool) -> None:
        """Change the registered default of a known, unlocked feature."""
        with self._lock:
            if self._closed:
                raise FeatureGateError(
                    f'cannot override default for feature "{name}": '
                    "gates already added to a flag set"
                )
            known = dict(self._known)
            spec = known.get(name)
            if spec is None:
                raise FeatureGateError(
                    f'cannot override default: feature "{name}" is not registered'
                )
            if spec.lock_to_default:
                raise FeatureGateError(
                    f'cannot override default: feature "{name}" default is '
                    f"locked to {str(spec.default).lower()}"
                )
            if spec.pre_release is PreRelease.DEPRECATED:
                logger.warning(
                    "Overriding default of deprecated feature gate %s=%s. "
                    "It will be removed in a future release.",
                    name,
                    str(override).lower(),
                )
            elif spec.pre_release is PreRelease.GA:
                logger.warning(
                    "Overriding default of GA feature gate %s=%s. "
                    "It will be removed in a future release.",
                    name,
                    str(override).lower(),
                )
            known[name] = replace(spec, default=override)
            self._known = known

    def get_all(self) -> dict[str, FeatureSpec]:
        """Return a copy of the known features and their specs."""
        return dict(self._known)

    def explicitly_set(self) -> dict[str, bool]:
        """Return a copy of the values that have been explicitly stored."""
        return dict(self._enabled)

    def enabled(self, key: str) -> bool:
        """Return whether a feature is on; unknown features raise."""
        enabled = self._enabled
        if key in enabled:
            return enabled[key]
        spec = self._known.get(key)
        if spec is not None:
            return spec.default
        raise UnregisteredFeatureError(
            f'feature "{key}" is not registered in FeatureGate "{self.name}"'
        )

    def add_flag(self, parser: argparse.ArgumentParser) -> None:
        """Add a --feature-gates option to an argparse parser.

        Afterwards no features may be added and no defaults overridden.
        """
        with self._lock:
            self._closed = True
        help_text = (
            "A set of key=value pairs that describe feature gates for "
            "alpha/experimental features. Options are:\n"
            + "\n".join(self.known_features())
        ).replace("%", "%%")
        parser.add_argument(
            f"--{FLAG_NAME}",
            action=_FeatureGateAction,
            gate=self,
            default=self,
            metavar=self.type_name(),
            help=help_text,
        )

    def known_features(self) -> list[str]:
        """Describe known features, hiding GA and deprecated ones."""
        return sorted(
            f"{name}=true|false ({spec.pre_release.value} - "
            f"default={str(spec.default).lower()})"
            for name, spec in self._known.items()
            if spec.pre_release not in (PreRelease.GA, PreRelease.DEPRECATED)
        )

    def deep_copy(self) -> "FeatureGate":
        """Return an independent gate with the same state."""
        copy = FeatureGate(self.name)
        copy._known = dict(self._known)
        copy._enabled = dict(self._enabled)
        copy._closed = self._closed
        return copy