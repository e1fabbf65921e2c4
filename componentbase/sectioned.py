"""Named, ordered groups of command-line flags printed in sections."""

from __future__ import annotations

import argparse
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TextIO

_NO_WRAP_WIDTH = 1_000_000


class _SectionParser(argparse.ArgumentParser):
    """An argument parser that normalises long option names and keeps its flags."""

    def __init__(self, *args, normalize: Callable[[str], str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.normalize = normalize
        self.flags: list[argparse.Action] = []

    def add_argument(self, *args, **kwargs):
        if self.normalize is not None:
            args = tuple(
                "--" + self.normalize(arg[2:])
                if isinstance(arg, str) and arg.startswith("--")
                else arg
                for arg in args
            )
        action = super().add_argument(*args, **kwargs)
        self.flags.append(action)
        return action


@dataclass
class NamedFlagSets:
    """Flag sets kept by name, in the order they were first requested."""

    order: list[str] = field(default_factory=list)
    flag_sets: dict[str, argparse.ArgumentParser] = field(default_factory=dict)
    normalize: Callable[[str], str] | None = None

    def flag_set(self, name: str) -> argparse.ArgumentParser:
        """Return the flag set for ``name``, creating and ordering it if new."""
        if name not in self.flag_sets:
            self.flag_sets[name] = _SectionParser(
                prog=name, add_help=False, normalize=self.normalize
            )
            self.order.append(name)
        return self.flag_sets[name]


def _flags_of(parser: argparse.ArgumentParser) -> list[argparse.Action]:
    if isinstance(parser, _SectionParser):
        return parser.flags
    return [a for a in parser._actions if a.option_strings]


def print_sections(stream: TextIO, fss: NamedFlagSets, cols: int = 0) -> None:
    """Write each non-empty flag set as a titled section.

    Lines are wrapped at ``cols`` columns; zero means no wrapping.
    """
    width = cols if cols > 0 else _NO_WRAP_WIDTH
    for name in fss.order:
        parser = fss.flag_sets[name]
        flags = _flags_of(parser)
        if not flags:
            continue
        formatter = argparse.HelpFormatter(prog=name, width=width)
        formatter.start_section(None)
        formatter.add_arguments(flags)
        formatter.end_section()
        usages = formatter.format_help()
        title = name[:1].upper() + name[1:]
        stream.write(f"\n{title} flags:\n\n{usages}")