import logging
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.box import ROUNDED

from musiccli.domain.interfaces.user_interface import UserInterface

logger = logging.getLogger(__name__)


class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Console = None, error_console: Console = None):
        """Initializes the rich Consoles (stdout for results, stderr for messages)."""
        self._console = console or Console()
        self._error_console = error_console or Console(stderr=True)

    @property
    def console(self):
        """Get the Rich console instance for direct operations."""
        return self._console

    def display_json(self, data: Any, **kwargs: Any) -> None:
        """Pretty-prints a response body.

        JSON values are highlighted; a raw text body is printed as-is.
        """
        if isinstance(data, str):
            self._console.print(data, markup=False, highlight=False)
            return
        try:
            self._console.print_json(data=data, indent=kwargs.get("indent", 2))
        except TypeError as e:
            logger.debug(f"Response body is not JSON serializable ({e}), printing repr")
            self._console.print(repr(data), markup=False)

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        title = kwargs.get("title", "Error")
        self._error_console.print(Panel(
            error_message,
            title=f"[bold red]{title}[/bold red]",
            border_style="red",
            box=ROUNDED,
        ))

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        self._error_console.print(f"[bold yellow]Warning:[/bold yellow] {warning_message}")

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        self._error_console.print(f"[cyan]{info_message}[/cyan]")
