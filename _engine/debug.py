import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Custom theme for consistent styling
custom_theme = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "bold red",
    }
)

# Diagnostics always go to the diagnostic stream
err_console = Console(stderr=True, theme=custom_theme)


class DebugPrinter:
    """
    Prints "[DEBUG] ..." diagnostics when enabled.

    One instance is created from the -v flag and handed to every component
    that reports diagnostics. A disabled printer is a no-op.
    """

    def __init__(self, enabled: bool = False, console: Optional[Console] = None):
        self.enabled = enabled
        self.console = console or err_console

    def __call__(self, message: str) -> None:
        if not self.enabled:
            return
        # out() skips markup so user content such as titles is shown as is
        self.console.out(f"[DEBUG] {message}", style="dim", highlight=False)


DISABLED = DebugPrinter(False)


def enable_http_trace(console: Optional[Console] = None) -> logging.Handler:
    """
    Show urllib3's connection-level log (connects, request lines, statuses).

    Headers are not part of that log, so the API key never appears in it.
    Calling this more than once reuses the handler already attached.
    """
    logger = logging.getLogger("urllib3")
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        if isinstance(handler, RichHandler):
            return handler

    handler = RichHandler(
        console=console or err_console,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    return handler
