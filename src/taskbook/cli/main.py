# src/taskbook/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loading the task file), then runs the
console REPL in the main thread.
"""

from __future__ import annotations

import logging
import signal

from ..cli.bootstrap import create_initial_state, save_tasks
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..tasks.task_errors import TaskError

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Flush unsaved changes (no exceptions should escape)."""
    if not state.dirty:
        return
    try:
        save_tasks(state)
    except TaskError:
        logger.exception("Failed to save tasks on shutdown.")


def _handle_sigterm(signum, _frame) -> None:
    # Unwind through the console loop like Ctrl+C so _shutdown still runs.
    logger.info("Signal %s received, shutting down...", signum)
    raise KeyboardInterrupt


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    setup_logging(
        log_dir=settings.data_dir,
        console_level=console_level,
        log_to_file=settings.log_to_file,
    )

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    try:
        signal.signal(signal.SIGTERM, _handle_sigterm)
    except (ValueError, OSError):
        # Not in the main thread, or the platform lacks SIGTERM.
        pass

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
