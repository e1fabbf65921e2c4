"""Command-line flag value types that parse and render their own text form."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from enum import Enum

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class FlagValueError(ValueError):
    """Raised when a flag value cannot be parsed or stored."""


def parse_bool(value: str) -> bool:
    """Parse the boolean spellings accepted on the command line."""
    if value in _TRUE_WORDS:
        return True
    if value in _FALSE_WORDS:
        return False
    raise FlagValueError(f'parse_bool: parsing "{value}": invalid syntax')


class OmitEmpty(abc.ABC):
    """A flag value that can report that it holds nothing and may be omitted."""

    @abc.abstractmethod
    def empty(self) -> bool:
        """Return True when the underlying value is empty."""


class ConfigurationMap(dict):
    """A string-to-string map set from "key=value,key2=value2" text."""

    def __str__(self) -> str:
        return ",".join(sorted(f"{k}={v}" for k, v in self.items()))

    def set(self, value: str) -> None:
        for item in value.split(","):
            if not item:
                continue
            key, sep, val = item.partition("=")
            self[key.strip()] = val.strip() if sep else ""

    def type_name(self) -> str:
        return "mapStringString"


class MapStringBool(OmitEmpty):
    """A string-to-bool map set from "key=bool" pairs.

    The first call to :meth:`set` clears whatever defaults the target held;
    later calls accumulate.
    """

    def __init__(self, target: dict[str, bool] | None) -> None:
        self.map = target
        self.initialized = False

    def __str__(self) -> str:
        if self.map is None:
            return ""
        return ",".join(sorted(f"{k}={str(v).lower()}" for k, v in self.map.items()))

    def set(self, value: str) -> None:
        if self.map is None:
            raise FlagValueError("no target (target map is None)")
        if not self.initialized:
            self.map.clear()
            self.initialized = True
        for item in value.split(","):
            if not item:
                continue
            key, sep, raw = item.partition("=")
            if not sep:
                raise FlagValueError("malformed pair, expect string=bool")
            key = key.strip()
            raw = raw.strip()
            try:
                self.map[key] = parse_bool(raw)
            except FlagValueError as exc:
                raise FlagValueError(
                    f"invalid value of {key}: {raw}, err: {exc}"
                ) from exc

    def empty(self) -> bool:
        return not self.map

    def type_name(self) -> str:
        return "mapStringBool"


@dataclass
class NamedCertKey:
    """A certificate and key file pair with optional SNI names.

    Parsed from "certfile,keyfile" or "certfile,keyfile:name,name,...".
    """

    names: list[str] = field(default_factory=list)
    cert_file: str = ""
    key_file: str = ""

    def __str__(self) -> str:
        text = f"{self.cert_file},{self.key_file}"
        if self.names:
            text += ":" + ",".join(self.names)
        return text

    def set(self, value: str) -> None:
        keycert, sep, names = value.partition(":")
        if sep:
            keycert, names = keycert.strip(), names.strip()
            if not names:
                raise FlagValueError("empty names list is not allowed")
            self.names = [name.strip() for name in names.split(",")]
        else:
            self.names = []
            keycert = keycert.strip()
        parts = keycert.split(",")
        if len(parts) != 2:
            raise FlagValueError(
                "expected comma separated certificate and key file paths"
            )
        self.cert_file = parts[0].strip()
        self.key_file = parts[1].strip()

    def type_name(self) -> str:
        return "namedCertKey"


class NamedCertKeyArray:
    """Collects one :class:`NamedCertKey` per flag occurrence into a list.

    The first occurrence replaces any defaults in the target list.
    """

    def __init__(self, target: list[NamedCertKey]) -> None:
        self.value = target
        self.changed = False

    def set(self, value: str) -> None:
        item = NamedCertKey()
        item.set(value)
        if not self.changed:
            self.value[:] = [item]
            self.changed = True
        else:
            self.value.append(item)

    def type_name(self) -> str:
        return "namedCertKey"

    def __str__(self) -> str:
        return "[" + ";".join(str(item) for item in self.value) + "]"


class NoOp:
    """A flag value that accepts any text and stores nothing."""

    def __str__(self) -> str:
        return ""

    def set(self, value: str) -> None:
        """Accept any string value and discard it."""
        if not isinstance(value, str):
            raise TypeError(f"flag value must be a string, not {type(value).__name__}")

    def type_name(self) -> str:
        return "NoOp"


class StringFlag:
    """A string flag that remembers whether a value was supplied."""

    def __init__(self, default: str = "") -> None:
        self._value = default
        self._provided = False

    @property
    def value(self) -> str:
        return self._value

    @property
    def provided(self) -> bool:
        return self._provided

    def set_default(self, value: str) -> None:
        self._value = value

    def set(self, value: str) -> None:
        self._value = value
        self._provided = True

    def __str__(self) -> str:
        return self._value

    def type_name(self) -> str:
        return "string"


class StringSlice:
    """Accumulates each flag occurrence into a list of strings.

    The first occurrence discards whatever defaults the target held.
    """

    def __init__(self, target: list[str] | None) -> None:
        self.value = target
        self.changed = False

    def __str__(self) -> str:
        if self.value is None:
            return ""
        return " ".join(self.value)

    def set(self, value: str) -> None:
        if self.value is None:
            raise FlagValueError("no target (target list is None)")
        if not self.changed:
            self.value.clear()
        self.value.append(value)
        self.changed = True

    def type_name(self) -> str:
        return "sliceString"


class Tristate(Enum):
    """A boolean flag that also records whether it was set at all."""

    UNSET = 0
    TRUE = 1
    FALSE = 2

    @classmethod
    def from_bool(cls, value: bool) -> "Tristate":
        return cls.TRUE if value else cls.FALSE

    @classmethod
    def parse(cls, value: str) -> "Tristate":
        return cls.from_bool(parse_bool(value))

    @property
    def provided(self) -> bool:
        return self is not Tristate.UNSET

    def __bool__(self) -> bool:
        return self is Tristate.TRUE

    def __str__(self) -> str:
        return str(bool(self)).lower()

    def type_name(self) -> str:
        return "tristate"