import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "update-check-rich"


def setup_logging(verbose: bool = False, console: Console | None = None):
    """Send update_check logs to stderr through rich. Safe to call repeatedly."""
    logger = logging.getLogger("update_check")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
