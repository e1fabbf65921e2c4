"""Serve registered component configuration objects as JSON.

Each component that wants to expose its configuration registers a
:class:`Config` with :func:`new`, stores a value on it with
:meth:`Config.set`, and the program mounts :func:`configz_app` (a WSGI
application) under "/configz".
"""

from __future__ import annotations

import dataclasses
import enum
import json
import threading
from collections.abc import Callable, Iterable
from typing import Any

_lock = threading.RLock()
_configs: dict[str, "Config"] = {}


class RegistrationError(ValueError):
    """Raised when a configuration name is registered twice."""


def _encode_default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, enum.Enum):
        return obj.value
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _dumps(value: Any) -> str:
    return json.dumps(
        value,
        default=_encode_default,
        separators=(",", ":"),
        sort_keys=True,
        ensure_ascii=False,
    )


class Config:
    """A handle to one component's configuration; create it with :func:`new`."""

    def __init__(self) -> None:
        self._value: Any = None

    @property
    def value(self) -> Any:
        with _lock:
            return self._value

    def set(self, value: Any) -> None:
        """Store the configuration object served for this handle."""
        with _lock:
            self._value = value

    def to_json(self) -> str:
        """Return the stored configuration as JSON text."""
        return _dumps(self.value)


def new(name: str) -> Config:
    """Register and return a new :class:`Config` under ``name``."""
    with _lock:
        if name in _configs:
            raise RegistrationError(f'register config "{name}" twice')
        config = Config()
        _configs[name] = config
        return config


def delete(name: str) -> None:
    """Remove the named configuration; unknown names are ignored."""
    with _lock:
        _configs.pop(name, None)


def render() -> str:
    """Return every registered configuration as one JSON object."""
    with _lock:
        snapshot = {name: config._value for name, config in _configs.items()}
        try:
            return _dumps(snapshot)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"error marshaling json: {exc}") from exc


def configz_app(
    environ: dict[str, Any], start_response: Callable[..., Any]
) -> Iterable[bytes]:
    """WSGI application serving all registered configurations as JSON."""
    try:
        body = render().encode("utf-8")
    except ValueError as exc:
        message = (str(exc) + "\n").encode("utf-8")
        start_response(
            "500 Internal Server Error",
            [
                ("Content-Type", "text/plain; charset=utf-8"),
                ("X-Content-Type-Options", "nosniff"),
                ("Content-Length", str(len(message))),
            ],
        )
        return [message]
    start_response(
        "200 OK",
        [
            ("Content-Type", "application/json"),
            ("X-Content-Type-Options", "nosniff"),
            ("Content-Length", str(len(body))),
        ],
    )
    return [body]