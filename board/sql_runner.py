"""
SqlRunner — thin parameterized-SQL helper over an async session factory.

Design notes
------------
- SQL is written with positional ``?`` placeholders.  Each placeholder
  outside a quoted literal/identifier or a comment is rewritten to a named bind
  (``:p0``, ``:p1``, ...) and bound with ``bindparam(name, value)`` so
  SQLAlchemy infers the type from the Python value; ``datetime`` and
  ``bool`` are therefore adapted correctly for both PostgreSQL and SQLite.
- Literal colons in the caller's SQL are escaped so ``text()`` never
  mistakes ``'10:30'`` or ``::int`` for a bind parameter.
- Every call opens its own session, executes exactly one statement,
  fetches, commits and closes.  Nothing is cached between calls.
- ``SQLAlchemyError`` is wrapped in ``DatabaseError``; the caller decides
  what a failure means, the runner never retries.
"""
import logging
from typing import Any, Callable

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.elements import TextClause

from board.exceptions import DatabaseError, QueryParameterError

logger = logging.getLogger(__name__)
sql_logger = logging.getLogger("board.sql")

_QUOTES = frozenset("'\"`")


def compile_sql(sql: str, params: tuple) -> TextClause:
    """
    Turn *sql* with ``?`` placeholders into a ``TextClause`` with *params*
    bound by position.

    Raises ``QueryParameterError`` when the number of placeholders does not
    match ``len(params)``.
    """
    parts: list[str] = []
    index = 0
    # Closing token of the quoted literal or comment being skipped, if any.
    closer: str | None = None
    pos = 0
    while pos < len(sql):
        ch = sql[pos]
        pair = sql[pos:pos + 2]
        if ch == ":":
            parts.append("\\:")
        elif closer is not None:
            if sql.startswith(closer, pos):
                parts.append(closer)
                pos += len(closer)
                closer = None
                continue
            parts.append(ch)
        elif ch in _QUOTES:
            closer = ch
            parts.append(ch)
        elif pair in ("--", "/*"):
            closer = "\n" if pair == "--" else "*/"
            parts.append(pair)
            pos += 2
            continue
        elif ch == "?":
            parts.append(f":p{index}")
            index += 1
        else:
            parts.append(ch)
        pos += 1

    if index != len(params):
        raise QueryParameterError(sql, index, len(params))

    stmt = text("".join(parts))
    if params:
        stmt = stmt.bindparams(*(bindparam(f"p{i}", value) for i, value in enumerate(params)))
    return stmt


class SqlRunner:
    """
    Executes parameterized SQL and returns affected-row counts, row
    mappings or scalars.

    ``dev_mode`` may be flipped at any time; while it is on, every
    statement is logged with its parameters on the ``board.sql`` logger.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        dev_mode: bool = False,
    ) -> None:
        self._session_factory = session_factory
        self.dev_mode = dev_mode

    # ------------------------------------------------------------------
    # Core execution
    # ------------------------------------------------------------------

    async def _execute(self, sql: str, params: tuple, fetch: Callable[[Result], Any]) -> Any:
        stmt = compile_sql(sql, params)
        if self.dev_mode:
            sql_logger.info("%s | params=%r", " ".join(sql.split()), params)

        async with self._session_factory() as session:
            try:
                result = await session.execute(stmt)
                value = fetch(result)
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error("SQL execution failed: %s | sql=%s", exc, " ".join(sql.split()))
                raise DatabaseError(sql, exc) from exc
        return value

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def run(self, sql: str, *params: Any) -> int:
        """Execute a DML/DDL statement and return the affected-row count."""
        return await self._execute(sql, params, lambda result: result.rowcount)

    async def insert(self, sql: str, *params: Any) -> int:
        """
        Execute an INSERT and return the generated id.

        Statements ending in ``RETURNING id`` yield the returned value;
        otherwise the driver's ``lastrowid`` is used.
        """

        def _new_id(result: Result) -> int:
            if result.returns_rows:
                return int(result.scalar_one())
            return int(result.lastrowid)

        return await self._execute(sql, params, _new_id)

    async def select_row(self, sql: str, *params: Any) -> dict | None:
        """Return the first row as a column-name mapping, or None."""

        def _first(result: Result) -> dict | None:
            row = result.mappings().first()
            return dict(row) if row is not None else None

        return await self._execute(sql, params, _first)

    async def select_rows(self, sql: str, *params: Any) -> list[dict]:
        return await self._execute(
            sql, params, lambda result: [dict(row) for row in result.mappings().all()]
        )

    async def select_long(self, sql: str, *params: Any) -> int:
        """Return the first column of the first row as int (0 for no row / NULL)."""
        value = await self._execute(sql, params, lambda result: result.scalar())
        return int(value) if value is not None else 0

    async def select_str(self, sql: str, *params: Any) -> str | None:
        value = await self._execute(sql, params, lambda result: result.scalar())
        return str(value) if value is not None else None

    async def select_bool(self, sql: str, *params: Any) -> bool:
        value = await self._execute(sql, params, lambda result: result.scalar())
        return bool(value)
