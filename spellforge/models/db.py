"""
SQLAlchemy ORM models for persistent storage.

The only server-side state is the short-link table: a short random id
mapped to an encoded deck/team token and the builder path to reopen it on.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ShareLinkDB(Base):
    """
    A short link to a shared deck or team.

    Rows expire after a fixed TTL; expired rows are ignored on lookup and
    removed by ``purge_expired_share_links``.
    """

    __tablename__ = "share_links"

    id: Mapped[str] = mapped_column(String(16), primary_key=True)
    hash: Mapped[str] = mapped_column(Text)
    # "deck" or "team"
    type: Mapped[str] = mapped_column(String(10))
    path: Mapped[str] = mapped_column(String(255))

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

    def __repr__(self) -> str:
        return f"<ShareLinkDB(id={self.id}, type={self.type})>"
