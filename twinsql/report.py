from rich.console import Console
from rich.markup import escape

from .outcome import Outcome


class ConsoleReporter:
    """Reporting callback printing each inconsistency with rich."""

    def __init__(self, source_name="source", target_name="target", console=None):
        self.source_name = source_name
        self.target_name = target_name
        self.console = console or Console()
        self.count = 0

    def __call__(self, statement: str, source: Outcome, target: Outcome):
        self.count += 1
        self.console.print(f"[bold red]NOK {self.count}[/bold red] qry:{escape(statement)}")
        self.console.print(f"[bold]{self.source_name}[/bold]")
        self.console.print(escape(str(source)), highlight=False)
        self.console.print(f"[bold]{self.target_name}[/bold]")
        self.console.print(escape(str(target)), highlight=False)

    def summary(self, total: int):
        if self.count:
            self.console.print(f"[bold red]{self.count}/{total} statements are different")
        else:
            self.console.print(f"[bold blue]{total} statements are identicals")
