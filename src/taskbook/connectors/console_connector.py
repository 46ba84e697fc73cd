# src/taskbook/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.bootstrap import save_tasks
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_errors import TaskError

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("quit", "exit", "/quit", "/exit")


def _save_after_change(state: AppState) -> None:
    try:
        save_tasks(state)
    except TaskError as e:
        # Keep going: state stays dirty and shutdown retries the save.
        logger.warning("Save failed: %s", e)
        print(f"Warning: Could not save tasks: {e}")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (tasks=%s).", state.store.count_tasks())
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "taskbook"))

    print(f"=== {app_name} ===")
    print("Type 'help' for available commands\n")
    if state.store.count_tasks() > 0:
        print(f"Loaded {state.store.count_tasks()} tasks from storage\n")

    while True:
        try:
            user_input = input("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            print()
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input)
        except TaskError as e:
            print(f"Error: {e}")
            continue
        except Exception:
            logger.exception("Command handler crashed.")
            print("Internal error while handling a command.")
            continue

        if reply is not None:
            print(reply)

        if state.dirty:
            _save_after_change(state)

    print("Goodbye!")
    logger.info("Console connector finished.")
