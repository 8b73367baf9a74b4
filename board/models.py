from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from board.database import Base


# ---------------------------------------------------------------------------
# Article
# ---------------------------------------------------------------------------
class Article(Base):
    """
    Schema declaration for the ``article`` table.

    The service layer never queries through this class; it talks SQL via
    ``SqlRunner`` and maps rows with ``ArticleDto.from_row``.  Column names
    are camelCase on the database side, so every column is named explicitly.
    """

    __tablename__ = "article"

    __table_args__ = (
        # Previous/next navigation: range scan on id restricted to visible rows
        Index("ix_article_isBlind_id", "isBlind", "id"),
        # Never reuse ids of deleted rows on SQLite (ids must grow monotonically)
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_date: Mapped[datetime] = mapped_column("createdDate", DateTime, nullable=False)
    modified_date: Mapped[datetime] = mapped_column("modifiedDate", DateTime, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    is_blind: Mapped[bool] = mapped_column(
        "isBlind", Boolean, nullable=False, default=False, server_default=false()
    )
