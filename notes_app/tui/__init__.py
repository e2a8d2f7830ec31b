# Textual terminal interface
from notes_app.tui.app import NotesApp

__all__ = ["NotesApp"]
