from typing import Dict, List, Optional
from textual.app import App, ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Header, Footer, ListView, ListItem, Static, Label
from textual.binding import Binding
from rich.syntax import Syntax
from rich.text import Text

from libsync.annotator import DependencyStatus, StatusAnnotator
from libsync.generator import GeneratedModules
from libsync.models import Dependency
from libsync.renderer import KotlinRenderer

STATUS_ICONS: Dict[DependencyStatus, str] = {
    DependencyStatus.UP_TO_DATE: "✅",
    DependencyStatus.OUTDATED: "🔄",
    DependencyStatus.EXCEEDED: "⏫",
    DependencyStatus.REJECTED: "❌",
}


class DependencyItem(ListItem):
    def __init__(self, dependency: Dependency, status: DependencyStatus):
        super().__init__()
        self.dependency = dependency
        self.status = status
        self.add_class(status.name.lower().replace("_", "-"))
        self._label = Label(self._get_display_text())

    def _get_display_text(self) -> str:
        d = self.dependency
        return f"{STATUS_ICONS[self.status]} {d.escaped_name}\n  {d.group}:{d.name}:{d.version}"

    def compose(self) -> ComposeResult:
        yield self._label


class DeclarationViewer(VerticalScroll):
    can_focus = True

    def compose(self) -> ComposeResult:
        yield Static(id="declaration-content")

    def show_source(self, source: str) -> None:
        content = self.query_one("#declaration-content", Static)
        if not source.strip():
            content.update(Text("Nothing selected.", style="dim italic"))
            return

        content.update(Syntax(source, "kotlin", theme="monokai", line_numbers=False))
        self.scroll_home(animate=False)


class LibsBrowserApp(App):
    CSS = """
    Screen {
        layout: vertical;
    }

    Horizontal {
        height: 1fr;
    }

    #dependency-list {
        width: 50;
        border-right: tall $primary;
        background: $surface;
    }

    #declaration-viewer {
        width: 1fr;
        background: $background;
    }

    #declaration-viewer:focus {
        border: tall $accent;
    }

    #declaration-content {
        padding: 1;
    }

    ListItem {
        padding: 0 1;
        height: 3;
    }

    ListItem.rejected {
        color: $error;
    }

    #status-bar {
        height: 1;
        background: $primary-darken-2;
        color: $text-disabled;
        padding: 0 1;
        text-style: italic;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("f", "toggle_filter", "Only updates", show=True),
        Binding("up,k", "cursor_up", "Up", show=False),
        Binding("down,j", "cursor_down", "Down", show=False),
        Binding("u", "scroll_half_up", "Half Up", show=True),
        Binding("d", "scroll_half_down", "Half Down", show=True),
    ]

    def __init__(
        self,
        dependencies: List[Dependency],
        modules: GeneratedModules,
        annotator: Optional[StatusAnnotator] = None,
    ):
        super().__init__()
        self.dependencies = dependencies
        self.modules = modules
        self.annotator = annotator or StatusAnnotator()
        self.kotlin_renderer = KotlinRenderer()
        self.statuses: Dict[str, DependencyStatus] = {
            d.escaped_name: self.annotator.status(d) for d in dependencies
        }
        self.only_updates = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal():
            yield ListView(*self._items(), id="dependency-list")
            yield DeclarationViewer(id="declaration-viewer")
        yield Static(id="status-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.title = "Libs"
        self.sub_title = f"{len(self.dependencies)} dependencies"
        self.query_one("#dependency-list").focus()
        self._update_status_bar()

    def _items(self) -> List[DependencyItem]:
        return [
            DependencyItem(d, self.statuses[d.escaped_name])
            for d in self.dependencies
            if not self.only_updates
            or self.statuses[d.escaped_name] != DependencyStatus.UP_TO_DATE
        ]

    def declarations(self, dependency: Dependency) -> str:
        """Kotlin declarations generated for `dependency` in both modules."""
        name = dependency.escaped_name
        return "\n\n".join(
            f"// {module.name}.kt\n"
            + self.kotlin_renderer.render_constant(module.constant(name))
            for module in self.modules
        )

    def _update_status_bar(self) -> None:
        counts = {status: 0 for status in DependencyStatus}
        for status in self.statuses.values():
            counts[status] += 1
        summary = ", ".join(f"{counts[s]} {s.value}" for s in DependencyStatus)
        self.query_one("#status-bar", Static).update(summary)

    def action_cursor_up(self) -> None:
        self.query_one("#dependency-list", ListView).action_cursor_up()

    def action_cursor_down(self) -> None:
        self.query_one("#dependency-list", ListView).action_cursor_down()

    def action_scroll_half_up(self) -> None:
        viewer = self.query_one("#declaration-viewer", DeclarationViewer)
        step = viewer.size.height // 2
        viewer.scroll_relative(y=-step, animate=False)

    def action_scroll_half_down(self) -> None:
        viewer = self.query_one("#declaration-viewer", DeclarationViewer)
        step = viewer.size.height // 2
        viewer.scroll_relative(y=step, animate=False)

    async def action_toggle_filter(self) -> None:
        """Show only dependencies that are not up-to-date, or everything again."""
        self.only_updates = not self.only_updates
        dependency_list = self.query_one("#dependency-list", ListView)
        await dependency_list.clear()
        await dependency_list.extend(self._items())
        self.query_one("#declaration-viewer", DeclarationViewer).show_source("")

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        item = event.item
        if isinstance(item, DependencyItem):
            viewer = self.query_one("#declaration-viewer", DeclarationViewer)
            viewer.show_source(self.declarations(item.dependency))
            comment = self.annotator.annotate(item.dependency).splitlines()[0]
            self.query_one("#status-bar", Static).update(
                f"{item.dependency.group}:{item.dependency.name}: {comment}"
            )
