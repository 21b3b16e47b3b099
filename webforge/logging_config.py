"""Logging setup.

Library modules obtain loggers through :func:`get_logger` and never print.
The CLI calls :func:`configure_logging` once to route records through a
Rich handler that shares the console used for user-facing output.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from webforge.utils import console

_ROOT_LOGGER = "webforge"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``webforge`` namespace."""
    if name != _ROOT_LOGGER and not name.startswith(_ROOT_LOGGER + "."):
        name = f"{_ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | int = "WARNING", rich_output: bool = True) -> logging.Logger:
    """Attach a single handler to the package root logger.

    Calling this more than once replaces the previous handler instead of
    stacking duplicates.

    Args:
        level: Log level name or number.
        rich_output: Use :class:`rich.logging.RichHandler` when ``True``,
            a plain stream handler otherwise.

    Returns:
        The configured package root logger.
    """
    global _configured

    root = logging.getLogger(_ROOT_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    for handler in list(root.handlers):
        root.removeHandler(handler)

    if rich_output:
        handler: logging.Handler = RichHandler(
            console=console,
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    _configured = True
    return root


def is_configured() -> bool:
    """Whether :func:`configure_logging` has been called in this process."""
    return _configured
