"""
UI Components

Shared console output helpers for WowzaDeploy commands.
"""

from rich.console import Console
from rich.markup import escape

BRAND_COLOR = "color(214)"


def show_header(
    title: str,
    subtitle: str = None,
    app: str = None,
    host: str = None,
    details: dict = None,
    console: Console = None,
):
    """
    Display a standardized WowzaDeploy command header.

    Args:
        title: Main title (e.g., "Create Configuration")
        subtitle: Optional subtitle line
        app: Wowza application name
        host: Target server
        details: Additional key-value pairs to display
        console: Rich Console instance (creates new if None)
    """
    if console is None:
        console = Console()

    prefix = f" [bold {BRAND_COLOR}]wowzadeploy[/bold {BRAND_COLOR}] [dim]›[/dim]"

    console.print(f"{prefix} [bold white]{escape(title)}[/bold white]")

    if subtitle:
        console.print(f"{prefix} [dim]{escape(subtitle)}[/dim]")
    if app:
        console.print(f"{prefix} App: [cyan]{escape(app)}[/cyan]")
    if host:
        console.print(f"{prefix} Server: [cyan]{escape(host)}[/cyan]")
    if details:
        for key, value in details.items():
            console.print(f"{prefix} {escape(str(key))}: [cyan]{escape(str(value))}[/cyan]")

    console.print()
