#!/usr/bin/env python3
"""
Notes TUI.

Card grid of notes with a full-screen editor for one note at a time.

Usage:
    python tui.py
    python tui.py --debug

Keys:
    ctrl+n  new note      escape  close note
    ctrl+d  delete note   ctrl+q  quit
"""

import sys
from pathlib import Path

import structlog

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from notes_app.core.config import validate_project_root
from notes_app.core.logging import resolve_log_level, setup_logging


def main() -> None:
    validate_project_root()

    setup_logging(level=resolve_log_level(debug="--debug" in sys.argv))
    structlog.contextvars.bind_contextvars(source="tui")

    from notes_app.tui.app import NotesApp

    app = NotesApp()
    app.run()
    sys.exit(app.return_code or 0)


if __name__ == "__main__":
    main()
