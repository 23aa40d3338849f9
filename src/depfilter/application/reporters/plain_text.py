"""Plain text reporter using print().

Stdlib-only reporter for simple text output.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from depfilter.application.reporters._base import BaseReporter

if TYPE_CHECKING:
    from depfilter.domain.model.snapshot import CollectionSnapshot, FilterInfo


class PlainTextReporter(BaseReporter):
    """Plain text reporter using print().

    Outputs to stdout by default, can be configured for any TextIO.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
        """
        self._output = output if output is not None else sys.stdout

    def report(self, snapshot: CollectionSnapshot) -> None:
        self._write("=" * 70)
        self._write("Filter Collection")
        self._write("=" * 70)
        self._write()
        self._write(f"  Groups: {snapshot.group_count}")
        self._write(f"  Filters: {snapshot.filter_count} ({snapshot.enabled_count} enabled)")
        self._write(f"  Dependencies: {snapshot.edge_count}")
        self._write(f"  Status: {'FINISHED' if snapshot.finished else 'BUILDING'}")

        if snapshot.filters:
            self._write()
            self._write("-" * 70)
            for info in snapshot.filters:
                self._report_filter(info)

        self._write("=" * 70)

    def _write(self, text: str = "") -> None:
        print(text, file=self._output)

    def _report_filter(self, info: FilterInfo) -> None:
        state = "on" if info.enabled else "off"
        mode = "static" if info.is_static else "dynamic"
        self._write(f"{info.total_key} [{state}, {mode}]")
        for dependent in info.dependent_keys:
            self._write(f"   → {dependent}")
