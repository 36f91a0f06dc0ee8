"""Rich renderables for each session mode."""

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from den.constants import INPUT_PLACEHOLDER
from den.list_view import FilterState
from den.models import Project
from den.state import CONTEXT_OPTIONS, AddingDirectory, ContextMenu, SessionState
from den.theme import Theme

SHADES = "░▒▓█"


def gradient_bar(width: int) -> str:
    """A bar that is solid in the middle and fades toward both edges."""
    half = max(width // 2, 1)
    bar = []
    for i in range(width):
        distance = abs(half - i)
        bar.append(SHADES[min(max(3 - distance * 4 // half, 0), 3)])
    return "".join(bar)


def render_header(title: str, width: int, theme: Theme) -> RenderableType:
    width = width or len(title) + 6
    bar = gradient_bar(width)
    header = Text(justify="center", style=theme.primary)
    header.append(bar + "\n")
    header.append(title.center(width) + "\n", style=f"bold {theme.primary}")
    header.append(bar)
    return header


def render_project(project: Project, selected: bool, theme: Theme) -> Text:
    star = "★ " if project.favorite else "  "
    text = Text()
    if selected:
        text.append(f"> {star}{project.name}\n", style=f"bold {theme.primary}")
        text.append(f"    {project.description}", style=f"underline {theme.selected_text}")
    else:
        text.append(f"  {star}{project.name}\n", style=theme.text)
        text.append(f"    {project.description}", style=theme.secondary)
    return text


def render_list(state: SessionState, theme: Theme) -> RenderableType:
    list_view = state.list_view
    rows: list[RenderableType] = []

    if list_view.filter_state is not FilterState.UNFILTERED:
        cursor = "_" if list_view.is_filtering else ""
        rows.append(Text(f"Filter: {list_view.filter_text}{cursor}", style=theme.primary))

    visible = list_view.visible_items()
    if not visible:
        rows.append(Text("No projects found. Press 'a' to add a directory.", style=theme.secondary))
    for index, project in enumerate(visible):
        rows.append(render_project(project, index == list_view.cursor, theme))

    if state.favorites_only:
        rows.append(Text(" Showing Favorites Only ", style=f"{theme.background} on {theme.primary}"))

    return Group(*rows)


def render_context_menu(mode: ContextMenu, theme: Theme) -> RenderableType:
    menu = Text(justify="center")
    for index, option in enumerate(CONTEXT_OPTIONS):
        if index:
            menu.append(" • ", style="dim")
        if index == mode.cursor:
            menu.append(option.value, style="bold color(87)")
        else:
            menu.append(option.value, style="dim")
    return Panel(menu, title=mode.project.name, border_style=theme.border)


def render_adding_directory(mode: AddingDirectory, theme: Theme) -> RenderableType:
    parts: list[RenderableType] = [
        Text("Add Project Directory", style=f"bold {theme.primary}"),
        Panel(
            "Enter the path to your projects directory.\n"
            "Press Tab to autocomplete, Esc to cancel, Enter to confirm.",
            border_style=theme.border,
        ),
    ]

    if mode.input:
        parts.append(Text(mode.input, style=theme.primary))
    else:
        parts.append(Text(INPUT_PLACEHOLDER, style="dim"))

    suggestions = mode.suggestions
    if suggestions.suggestions:
        heading = "Suggestions:"
        if suggestions.page_count > 1:
            heading += f" (Page {suggestions.page + 1}/{suggestions.page_count})"
        table = Table.grid()
        for offset, path in enumerate(suggestions.page_items()):
            if suggestions.page_start + offset == suggestions.index:
                table.add_row(Text(f"> {path}", style=f"bold {theme.primary}"))
            else:
                table.add_row(Text(f"  {path}", style=theme.secondary))
        parts.extend([Text(heading), table])

    if mode.error:
        parts.append(Text(f"Error: {mode.error}", style=theme.error))

    hint = "Enter: confirm • Tab: complete • ↑/↓: navigate • ←/→: more • Esc: "
    hint += "quit" if mode.first_run else "cancel"
    parts.append(Text(hint, style=theme.secondary))
    return Group(*parts)


def render_session(state: SessionState, theme: Theme) -> RenderableType:
    """Render the whole screen for the active mode."""
    mode = state.mode
    if isinstance(mode, AddingDirectory):
        body = render_adding_directory(mode, theme)
    else:
        parts = [
            render_header(state.list_view.title, state.width, theme),
            Text(""),
            render_list(state, theme),
        ]
        if isinstance(mode, ContextMenu):
            parts.append(render_context_menu(mode, theme))
        body = Group(*parts)

    if state.status:
        body = Group(body, Text(""), Text(state.status, style=theme.success))
    return body
