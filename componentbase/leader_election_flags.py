"""Command-line flags bound to a leader election configuration."""

from __future__ import annotations

import argparse
from datetime import timedelta

from componentbase.config import LeaderElectionConfiguration
from componentbase.flag_values import parse_bool
from componentbase.v1alpha1 import _parse_duration


def parse_duration(text: str) -> timedelta:
    """Parse duration text such as "15s", "1h30m" or "-2.5s"."""
    return _parse_duration(text.strip())


class _BindAction(argparse.Action):
    """Stores the parsed value on an attribute of a target object."""

    def __init__(self, option_strings, dest, target, attr, **kwargs):
        super().__init__(option_strings, dest, **kwargs)
        self.target = target
        self.attr = attr

    def __call__(self, parser, namespace, values, option_string=None):
        setattr(self.target, self.attr, values)
        setattr(namespace, self.dest, values)


def bind_leader_election_flags(
    config: LeaderElectionConfiguration, parser: argparse.ArgumentParser
) -> None:
    """Add leader election options whose values are written into ``config``.

    Each option defaults to the value the configuration holds when bound.
    """
    parser.add_argument(
        "--leader-elect",
        action=_BindAction,
        target=config,
        attr="leader_elect",
        nargs="?",
        const=True,
        type=parse_bool,
        default=config.leader_elect,
        metavar="bool",
        help="Start a leader election client and gain leadership before "
        "executing the main loop. Enable this when running replicated "
        "components for high availability.",
    )
    durations = (
        (
            "--leader-elect-lease-duration",
            "lease_duration",
            "The duration that non-leader candidates will wait after observing "
            "a leadership renewal until attempting to acquire leadership of a "
            "led but unrenewed leader slot. This is effectively the maximum "
            "duration that a leader can be stopped before it is replaced by "
            "another candidate. This is only applicable if leader election is "
            "enabled.",
        ),
        (
            "--leader-elect-renew-deadline",
            "renew_deadline",
            "The interval between attempts by the acting master to renew a "
            "leadership slot before it stops leading. This must be less than "
            "the lease duration. This is only applicable if leader election is "
            "enabled.",
        ),
        (
            "--leader-elect-retry-period",
            "retry_period",
            "The duration the clients should wait between attempting "
            "acquisition and renewal of a leadership. This is only applicable "
            "if leader election is enabled.",
        ),
    )
    for option, attr, help_text in durations:
        parser.add_argument(
            option,
            action=_BindAction,
            target=config,
            attr=attr,
            type=parse_duration,
            default=getattr(config, attr),
            metavar="duration",
            help=help_text,
        )
    strings = (
        (
            "--leader-elect-resource-lock",
            "resource_lock",
            "The type of resource object that is used for locking during "
            "leader election. Supported options are 'leases', "
            "'endpointsleases' and 'configmapsleases'.",
        ),
        (
            "--leader-elect-resource-name",
            "resource_name",
            "The name of resource object that is used for locking during "
            "leader election.",
        ),
        (
            "--leader-elect-resource-namespace",
            "resource_namespace",
            "The namespace of resource object that is used for locking during "
            "leader election.",
        ),
    )
    for option, attr, help_text in strings:
        parser.add_argument(
            option,
            action=_BindAction,
            target=config,
            attr=attr,
            default=getattr(config, attr),
            metavar="string",
            help=help_text,
        )