"""Console reporter: CollectionSnapshot → rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from depfilter.domain.model.snapshot import CollectionSnapshot


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        width: Console width in characters.
        show_disabled: Include filters whose precondition is off.
    """

    width: int = 120
    show_disabled: bool = True

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width < 20:
            raise ValueError(f"width must be >= 20, got {self.width}")


class ConsoleReporter:
    """Console reporter: outputs rich formatted text.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        self._config = config or ConsoleConfig()

    def report(self, snapshot: CollectionSnapshot) -> str:
        """Format snapshot as rich formatted string."""
        output = StringIO()
        console = Console(file=output, force_terminal=True, width=self._config.width)

        console.print()
        console.rule("[bold]FILTER COLLECTION[/bold]")
        console.print()
        status = "[green]finished[/green]" if snapshot.finished else "[yellow]building[/yellow]"
        console.print(
            f"[bold]Groups:[/bold] {snapshot.group_count}  "
            f"[bold]Filters:[/bold] {snapshot.filter_count} "
            f"({snapshot.enabled_count} enabled)  "
            f"[bold]Dependencies:[/bold] {snapshot.edge_count}  {status}"
        )
        console.print()

        table = Table(show_header=True, header_style="bold", highlight=False)
        table.add_column("Filter")
        table.add_column("Enabled", justify="center")
        table.add_column("Mode")
        table.add_column("Dependents")

        for info in snapshot.filters:
            if not info.enabled and not self._config.show_disabled:
                continue
            table.add_row(
                info.total_key,
                "[green]yes[/green]" if info.enabled else "[dim]no[/dim]",
                "static" if info.is_static else "dynamic",
                ", ".join(info.dependent_keys) or "-",
            )

        console.print(table)
        return output.getvalue()
