from typing import Optional

from rich.console import Console
from rich.theme import Theme

from taskorder.messaging.bus import MessageStore
from taskorder.messaging.renderer import for_display, level_value

# Define a custom theme for Rich
custom_theme = Theme(
    {
        "debug": "dim",
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
    }
)


class RichCliRenderer:
    """
    A renderer that uses the 'rich' library for formatted, colorful output.
    """

    def __init__(
        self,
        store: MessageStore,
        min_level: str = "INFO",
        console: Optional[Console] = None,
    ):
        self._store = store
        self._console = console or Console(theme=custom_theme, stderr=True)
        self._min_level_val = level_value(min_level)

    def render(self, msg_id: str, level: str, **kwargs):
        if level_value(level) < self._min_level_val:
            return
        message = self._store.get(msg_id, **for_display(kwargs))

        # Use style tags that match our theme
        style = level.lower() if level.lower() in custom_theme.styles else ""

        # markup=False: task names are user data and may contain brackets
        self._console.print(message, style=style, markup=False, highlight=False)
