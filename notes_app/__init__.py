"""
Notes App.

- core/: configuration, logging, database engine, exceptions
- models/: SQLAlchemy note model and colour palette
- repositories/: data access over an AsyncSession
- schemas/: detached pydantic copies of notes
- services/: note store and the editor state machine
- tui/: Textual terminal interface
"""

__version__ = "0.1.0"
