"""
Note Model.

Database model for the single entity of the app: a colour-coded note card.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notes_app.models.base import Base, TimestampMixin, UUIDMixin
from notes_app.models.palette import color_for


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    Title and content default to empty strings so a freshly created
    note is blank until the user types into it. The colour is stored as
    a palette key and resolved through the palette on read.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )
    content: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )
    color_key: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
    )

    @property
    def color(self) -> str:
        """Hex colour for this note's palette key."""
        return color_for(self.color_key)

    @property
    def is_empty(self) -> bool:
        return not self.title and not self.content

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, color_key={self.color_key!r})>"
