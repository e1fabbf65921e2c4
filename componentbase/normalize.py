"""Flag name normalisation and flag logging helpers."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

_underscore_warnings: set[str] = set()


def word_sep_normalize(name: str) -> str:
    """Replace "_" separators in a flag name with "-"."""
    return name.replace("_", "-")


def warn_word_sep_normalize(name: str) -> str:
    """Like :func:`word_sep_normalize`, warning once per underscored name."""
    if "_" not in name:
        return name
    normalized = name.replace("_", "-")
    if name not in _underscore_warnings:
        logger.warning(
            "using an underscore in a flag name is not supported. "
            "%s has been converted to %s.",
            name,
            normalized,
        )
        _underscore_warnings.add(name)
    return normalized


def normalize_args(
    argv: Iterable[str], normalize: Callable[[str], str] = word_sep_normalize
) -> list[str]:
    """Normalise the names of long options in an argument list.

    Only "--name" and "--name=value" arguments are touched; everything after
    a bare "--" is passed through unchanged.
    """
    result: list[str] = []
    passthrough = False
    for arg in argv:
        if passthrough or not arg.startswith("--") or arg == "--":
            if arg == "--":
                passthrough = True
            result.append(arg)
            continue
        name, sep, rest = arg[2:].partition("=")
        result.append(f"--{normalize(name)}{sep}{rest}")
    return result


def log_flags(namespace: Any, level: int = logging.DEBUG) -> list[str]:
    """Log every parsed flag as 'FLAG: --name="value"' and return the lines.

    Accepts an argparse namespace or any mapping of flag names to values.
    Lines are emitted in order of flag name.
    """
    values = namespace if isinstance(namespace, Mapping) else vars(namespace)
    lines = [
        f"FLAG: --{name}={json.dumps(str(value), ensure_ascii=False)}"
        for name, value in sorted(
            (word_sep_normalize(key), val) for key, val in values.items()
        )
    ]
    for line in lines:
        logger.log(level, "%s", line)
    return lines