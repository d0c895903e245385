"""Interactive fuzzy-filtered dyno picker built on Textual."""

from typing import Awaitable, Callable, Optional, Sequence

from textual.app import App, ComposeResult
from textual.widgets import Input, OptionList, Static

from java_heapdump.errors import SelectionAbortedError
from java_heapdump.fuzzy import fuzzy_filter

Selector = Callable[[Sequence[str], str], Awaitable[str]]


class DynoPicker(App[Optional[str]]):
    """Single-select prompt that re-filters the candidates on every keystroke."""

    CSS = """
    Screen {
        layout: vertical;
        height: auto;
    }

    #prompt {
        height: 1;
    }

    #matches {
        height: auto;
        max-height: 12;
        border: solid $primary;
    }
    """

    BINDINGS = [
        ("escape", "abort", "Abort"),
        ("down", "cursor_down", "Down"),
        ("up", "cursor_up", "Up"),
    ]

    def __init__(self, candidates: Sequence[str], seed: str = "", message: str = "Select a Dyno:") -> None:
        super().__init__()
        self._candidates = list(candidates)
        self._seed = seed
        self._message = message
        self._matches: list[str] = []

    @property
    def matches(self) -> list[str]:
        return list(self._matches)

    def compose(self) -> ComposeResult:
        yield Static(self._message, id="prompt")
        yield Input(value=self._seed, placeholder="type to filter", id="filter")
        yield OptionList(id="matches")

    def on_mount(self) -> None:
        self._refilter(self._seed)
        self.query_one("#filter", Input).focus()

    def _refilter(self, text: str) -> None:
        self._matches = fuzzy_filter(text, self._candidates)
        options = self.query_one("#matches", OptionList)
        options.clear_options()
        options.add_options(self._matches)
        if self._matches:
            options.highlighted = 0

    def on_input_changed(self, event: Input.Changed) -> None:
        self._refilter(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        highlighted = self.query_one("#matches", OptionList).highlighted
        if highlighted is None or not self._matches:
            self.bell()
            return
        self.exit(self._matches[highlighted])

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.exit(self._matches[event.option_index])

    def action_cursor_down(self) -> None:
        self.query_one("#matches", OptionList).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#matches", OptionList).action_cursor_up()

    def action_abort(self) -> None:
        self.exit(None, return_code=1)


async def select_one(candidates: Sequence[str], seed: str = "") -> str:
    """Prompt for one of ``candidates``; blocks until the user confirms."""
    choice = await DynoPicker(candidates, seed).run_async(inline=True)
    if choice is None:
        raise SelectionAbortedError()
    return choice
