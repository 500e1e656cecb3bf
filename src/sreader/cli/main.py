from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, List, Optional

from ..config_actions import CONFIG_ACTIONS, get_action
from ..display import ConsoleSink
from ..session import ReaderSession
from ..stores import JsonSettings, JsonStateStore
from ..utils.io import DATA_DIR, SETTINGS_FILE, STATE_FILE, ensure_dirs
from ..utils.logging import configure_logging

REPL_HELP = "[enter/n] next  [p] previous  [s] show/hide  [h] hide  [e] settings  [c] clear all  [q] quit"


def build_session(data_dir: Path, workspace: Optional[Path], sink=None) -> ReaderSession:
    ensure_dirs(data_dir)
    return ReaderSession(
        settings=JsonSettings(data_dir / SETTINGS_FILE),
        store=JsonStateStore(data_dir / STATE_FILE),
        sink=sink or ConsoleSink(),
        base_dir=workspace,
    )


def edit_interactively(session: ReaderSession, read: Callable[[str], str] = input) -> bool:
    """Ask which setting to change, then ask for its value."""
    for idx, action in enumerate(CONFIG_ACTIONS, start=1):
        session.sink.message(f"  {idx}. {action.label}")
    choice = read("Choose a setting: ").strip()
    action = get_action(choice)
    if action is None and choice.isdigit() and 1 <= int(choice) <= len(CONFIG_ACTIONS):
        action = CONFIG_ACTIONS[int(choice) - 1]
    if action is None:
        session.sink.error(f"Unknown setting: {choice!r}")
        return False
    raw = read(f"{action.prompt}: ")
    return session.edit_settings(action, raw)


def run_repl(session: ReaderSession, read: Callable[[str], str] = input) -> bool:
    """Interactive viewer loop; returns once the user quits or input ends."""
    ok = session.show()
    session.sink.message(REPL_HELP)
    while True:
        try:
            key = read("> ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            return session.quit() and ok
        if key in ("", "n"):
            session.page_forward()
        elif key == "p":
            session.page_backward()
        elif key == "s":
            session.toggle()
        elif key == "h":
            session.hide()
        elif key == "e":
            edit_interactively(session, read)
        elif key == "c":
            session.clear_all_positions()
        elif key == "q":
            return session.quit()
        else:
            session.sink.message(REPL_HELP)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="sreader", description="Page through a text file a few characters at a time")
    parser.add_argument("--data-dir", type=Path, default=DATA_DIR, help="Where settings.json and state.json live")
    parser.add_argument("--workspace", type=Path, default=Path.cwd(), help="Base directory for relative text paths")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("show", help="Show the page at the saved position")
    sub.add_parser("forward", help="Move one page forward")
    sub.add_parser("backward", help="Move one page backward")
    sub.add_parser("quit", help="Save the position and close the viewer")
    sub.add_parser("clear", help="Forget saved positions for every document")
    set_parser = sub.add_parser("set", help="Change one setting")
    set_parser.add_argument("setting", choices=[a.key for a in CONFIG_ACTIONS])
    set_parser.add_argument("value")
    sub.add_parser("edit", help="Change a setting interactively")
    sub.add_parser("repl", help="Interactive viewer")
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose)
    session = build_session(args.data_dir, args.workspace)
    logging.debug("Data dir: %s, workspace: %s", args.data_dir, args.workspace)

    if args.command == "show":
        ok = session.show()
    elif args.command == "forward":
        ok = session.page_forward()
    elif args.command == "backward":
        ok = session.page_backward()
    elif args.command == "quit":
        ok = session.quit()
    elif args.command == "clear":
        ok = session.clear_all_positions()
    elif args.command == "set":
        ok = session.edit_settings(get_action(args.setting), args.value)
    elif args.command == "edit":
        ok = edit_interactively(session)
    else:
        ok = run_repl(session)
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
