"""Reporters for collection snapshots.

PlainTextReporter uses stdlib only; ConsoleReporter uses rich.
"""

from depfilter.application.reporters._base import BaseReporter
from depfilter.application.reporters.console import ConsoleConfig, ConsoleReporter
from depfilter.application.reporters.plain_text import PlainTextReporter

__all__ = [
    "BaseReporter",
    "ConsoleConfig",
    "ConsoleReporter",
    "PlainTextReporter",
]
