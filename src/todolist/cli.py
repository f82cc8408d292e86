# src/todolist/cli.py

"""
Command-line interface for todolist.

This module:
- defines argument parsing and subcommands,
- runs the interactive single-screen session,
- maps typed commands (user gestures) onto store operations.

Domain rules live in engine modules; this file only wires them up.
"""

import argparse
import logging
from dataclasses import dataclass, field

from todolist.config import AppConfig, configure_logging, load_config
from todolist.engine.ids import make_id_generator
from todolist.engine.render import ScreenRows, render_screen
from todolist.engine.state import RestoreError, dump_state, load_state, restore_state
from todolist.engine.store import TaskListStore
from todolist.engine.validate import compute_validation


logger = logging.getLogger(__name__)

HELP_TEXT = """\
Commands:
  draft <text>    set the input text (also: type)
  add [<text>]    add the input text as a task (<text> replaces it first)
  toggle <N>      mark row N done/undone
  delete <N>      delete row N
  clear           clear completed tasks
  rotate          rebuild the screen from saved state
  state           print the saved state (YAML)
  help            show this help
  quit            exit (also: q, exit)"""


# ---------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todolist")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level for stderr output (default: $TODOLIST_LOG_LEVEL or WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    p_run = sub.add_parser(
        "run",
        help="Open the interactive to-do screen (default)",
    )
    _add_store_options(p_run)
    p_run.set_defaults(func=cmd_run)

    p_demo = sub.add_parser(
        "demo",
        help="Render the initial screen once and exit",
    )
    _add_store_options(p_demo)
    p_demo.set_defaults(func=cmd_demo)

    p_validate = sub.add_parser(
        "validate",
        help="Check whether text would be accepted as a task",
    )
    p_validate.add_argument("text", nargs="?", default="", help="Draft text")
    p_validate.set_defaults(func=cmd_validate)

    return parser


def _add_store_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--empty",
        action="store_true",
        help="Start with no tasks instead of the sample list",
    )
    p.add_argument(
        "--ids",
        type=str,
        default=None,
        choices=["random", "counter"],
        help="Task id generator (default: $TODOLIST_ID_MODE or random)",
    )
    p.add_argument(
        "--no-color",
        action="store_true",
        help="Disable coloured output",
    )


# ---------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------

@dataclass(slots=True)
class Session:
    """
    One open screen: the store behind it and how it is drawn.

    `rows` is the snapshot the user last saw; row numbers typed by the
    user are resolved against it.
    """

    store: TaskListStore
    config: AppConfig
    rows: ScreenRows = field(init=False)

    def __post_init__(self) -> None:
        self.rows = ScreenRows.of(self.store)

    def draw(self) -> None:
        self.rows = ScreenRows.of(self.store)
        print(render_screen(self.store, color=self.config.color))


def _new_store(config: AppConfig) -> TaskListStore:
    gen = make_id_generator(config.id_mode)
    if config.seed == "empty":
        return TaskListStore(id_generator=gen)
    return TaskListStore.with_samples(id_generator=gen)


def _row_id(session: Session, arg: str) -> int | None:
    try:
        n = int(arg.strip())
    except ValueError:
        print(f"Error: not a row number: {arg.strip() or '<empty>'}")
        return None

    task_id = session.rows.task_id_at(n)
    if task_id is None:
        print(f"Error: no row {n}")
    return task_id


def handle_command(session: Session, line: str) -> bool:
    """
    Apply one typed command to the session.

    Returns False when the session should end.
    """
    name, _, arg = line.lstrip().partition(" ")
    name = name.lower()
    store = session.store

    if not name:
        return True

    if name in {"quit", "q", "exit"}:
        return False

    if name == "help":
        print(HELP_TEXT)
        return True

    if name in {"draft", "type"}:
        store.set_draft(arg)

    elif name == "add":
        if arg.strip():
            store.set_draft(arg)
        if store.add_task() is None:
            print(f"Not added: {store.validation.message}")

    elif name == "toggle":
        task_id = _row_id(session, arg)
        if task_id is None:
            return True
        store.toggle(task_id)

    elif name == "delete":
        task_id = _row_id(session, arg)
        if task_id is None:
            return True
        store.delete(task_id)

    elif name == "clear":
        store.clear_completed()

    elif name == "rotate":
        try:
            session.store = _rotate(session.store, session.config)
        except RestoreError as e:
            logger.warning("restore failed: %s", e)
            print(f"Error: {e}")
            return True

    elif name == "state":
        print(dump_state(store.export()).rstrip())
        return True

    else:
        print(f"Unknown command: {name} (type 'help')")
        return True

    session.draw()
    return True


def _rotate(store: TaskListStore, config: AppConfig) -> TaskListStore:
    """
    Tear the screen down and build it again from saved state.

    The state goes through its text encoding so nothing survives that
    the flat state does not carry.
    """
    text = dump_state(store.export())
    restored = restore_state(load_state(text), id_generator=make_id_generator(config.id_mode))
    logger.debug("screen rebuilt with %d task(s)", len(restored))
    return restored


# ---------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------

def _resolve_config(args: argparse.Namespace) -> AppConfig:
    config = load_config()
    if getattr(args, "empty", False):
        config.seed = "empty"
    if getattr(args, "ids", None):
        config.id_mode = args.ids
    if getattr(args, "no_color", False):
        config.color = False
    return config


def cmd_run(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    session = Session(store=_new_store(config), config=config)
    session.draw()
    print("(type 'help' for commands)")

    while True:
        try:
            line = input("todo> ")
        except EOFError:
            print()
            break

        if not handle_command(session, line):
            break

    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    Session(store=_new_store(config), config=config).draw()
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    v = compute_validation(args.text or "")
    if v.valid:
        print(f"OK: {v.trimmed}")
        return 0

    print(f"Error: {v.message}")
    return 1


# ---------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level or load_config().log_level)

    func = getattr(args, "func", None)
    if func is None:
        return cmd_run(args)

    return func(args)


if __name__ == "__main__":
    raise SystemExit(main())
