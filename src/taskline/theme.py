"""Console theming for taskline output."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.theme import Theme

from .task import Task, TaskKind


# City Lights palette
CITY_LIGHTS_COLORS = {
    'primary': '#68D5F3',
    'secondary': '#5CCFE6',
    'accent': '#B7C5D3',
    'success': '#8BD649',
    'warning': '#FFD93D',
    'error': '#F78C6C',
    'text_muted': '#4F5B66',
    'text_bright': '#FFFFFF',
    'surface_light': '#41505E',
}

TASKLINE_THEME = Theme({
    'muted': f"{CITY_LIGHTS_COLORS['text_muted']}",
    'success': f"{CITY_LIGHTS_COLORS['success']} bold",
    'warning': f"{CITY_LIGHTS_COLORS['warning']} bold",
    'error': f"{CITY_LIGHTS_COLORS['error']} bold",
    'primary': f"{CITY_LIGHTS_COLORS['primary']} bold",
    'accent': f"{CITY_LIGHTS_COLORS['accent']}",
    'header': f"{CITY_LIGHTS_COLORS['text_bright']} bold",
    'border': f"{CITY_LIGHTS_COLORS['surface_light']}",
    'task_todo': f"{CITY_LIGHTS_COLORS['primary']}",
    'task_deadline': f"{CITY_LIGHTS_COLORS['warning']}",
    'task_event': f"{CITY_LIGHTS_COLORS['secondary']}",
    'task_done': f"{CITY_LIGHTS_COLORS['success']}",
})

KIND_STYLES = {
    TaskKind.TODO: 'task_todo',
    TaskKind.DEADLINE: 'task_deadline',
    TaskKind.EVENT: 'task_event',
}


def get_themed_console(no_color: bool = False) -> Console:
    """Get a console with the taskline theme applied."""
    return Console(theme=TASKLINE_THEME, no_color=no_color, highlight=False)


def format_task_for_display(task: Task, number: Optional[int] = None) -> str:
    """Rich markup for one task line.

    The plain text is exactly ``task.to_display_string()`` (prefixed with
    ``"<number>. "`` when a number is given); styling only adds color.
    """
    style = 'task_done' if task.done else KIND_STYLES[task.kind]
    prefix = f"[muted]{number}.[/muted] " if number is not None else "  "
    return f"{prefix}[{style}]{escape(task.to_display_string())}[/{style}]"


def show_startup_banner(console: Console) -> None:
    """Display the welcome banner for the interactive shell."""
    console.print(Panel(
        "[header]Hello! I'm taskline.[/header]\n"
        "[accent]What can I do for you?[/accent]\n"
        "[muted]Type 'help' for the list of commands, 'bye' to leave.[/muted]",
        border_style="border",
        padding=(1, 2),
    ))
