"""
Article service — CRUD plus previous/next navigation for the Article
aggregate.

Design notes
------------
- Every public method issues exactly one SQL statement through the
  injected ``SqlRunner``; the service keeps no state of its own, so two
  services over the same database always agree.
- Ordering is by ``id`` (monotonic with creation), never by
  ``createdDate``, which can tie.
- Navigation is delegated to the database as a one-sided range query
  with ``LIMIT 1``; blinded articles are filtered out in the WHERE
  clause, so whole blinded gaps are skipped in one step and the pivot
  itself is excluded by the strict comparison.
- "Not found" is never an error: lookups and navigation return None,
  ``modify``/``delete`` of a missing id return False.
"""
import logging
from datetime import datetime

from board.schemas import ArticleDto
from board.sql_runner import SqlRunner

logger = logging.getLogger(__name__)

ArticleRef = ArticleDto | int

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_SELECT_ALL = "SELECT * FROM article ORDER BY id ASC"

_SELECT_BY_ID = "SELECT * FROM article WHERE id = ?"

_COUNT = "SELECT COUNT(*) FROM article"

_INSERT = """
    INSERT INTO article ("createdDate", "modifiedDate", title, body, "isBlind")
    VALUES (?, ?, ?, ?, ?)
    RETURNING id
"""

_UPDATE = """
    UPDATE article
    SET "modifiedDate" = ?,
        title = ?,
        body = ?,
        "isBlind" = ?
    WHERE id = ?
"""

_DELETE = "DELETE FROM article WHERE id = ?"

_SELECT_NEXT = """
    SELECT * FROM article
    WHERE id > ? AND "isBlind" = ?
    ORDER BY id ASC
    LIMIT 1
"""

_SELECT_PREVIOUS = """
    SELECT * FROM article
    WHERE id < ? AND "isBlind" = ?
    ORDER BY id DESC
    LIMIT 1
"""


def _pivot_id(reference: ArticleRef) -> int:
    """Resolve a navigation reference (record or raw id) to an id."""
    if isinstance(reference, ArticleDto):
        return reference.id
    return int(reference)


class ArticleService:
    def __init__(self, sql_runner: SqlRunner) -> None:
        self.sql_runner = sql_runner

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_articles(self) -> list[ArticleDto]:
        """Return every article, blinded ones included, ordered by id."""
        rows = await self.sql_runner.select_rows(_SELECT_ALL)
        return [ArticleDto.from_row(row) for row in rows]

    async def get_article_by_id(self, article_id: int) -> ArticleDto | None:
        row = await self.sql_runner.select_row(_SELECT_BY_ID, article_id)
        if row is None:
            logger.debug("Article %s not found", article_id)
        return ArticleDto.from_row_or_none(row)

    async def get_articles_count(self) -> int:
        return await self.sql_runner.select_long(_COUNT)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def write(self, title: str, body: str, is_blind: bool) -> int:
        """Insert a new article and return its id."""
        now = datetime.now()
        article_id = await self.sql_runner.insert(_INSERT, now, now, title, body, is_blind)
        logger.info("Article %s written (blind=%s)", article_id, is_blind)
        return article_id

    async def modify(self, article_id: int, title: str, body: str, is_blind: bool) -> bool:
        """
        Overwrite title, body and blind flag of *article_id* and refresh its
        ``modifiedDate``.

        Returns False (and changes nothing) when the article does not exist.
        """
        affected = await self.sql_runner.run(
            _UPDATE, datetime.now(), title, body, is_blind, article_id
        )
        if affected:
            logger.info("Article %s modified (blind=%s)", article_id, is_blind)
        else:
            logger.debug("Modify skipped: article %s not found", article_id)
        return affected > 0

    async def delete(self, article_id: int) -> bool:
        affected = await self.sql_runner.run(_DELETE, article_id)
        if affected:
            logger.info("Article %s deleted", article_id)
        return affected > 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def get_next_article(self, reference: ArticleRef) -> ArticleDto | None:
        """
        Return the non-blind article with the smallest id greater than the
        pivot, or None.

        *reference* may be an ``ArticleDto`` or a raw id; the pivot does not
        have to exist.
        """
        row = await self.sql_runner.select_row(_SELECT_NEXT, _pivot_id(reference), False)
        return ArticleDto.from_row_or_none(row)

    async def get_previous_article(self, reference: ArticleRef) -> ArticleDto | None:
        """Mirror of ``get_next_article``: largest non-blind id below the pivot."""
        row = await self.sql_runner.select_row(_SELECT_PREVIOUS, _pivot_id(reference), False)
        return ArticleDto.from_row_or_none(row)
