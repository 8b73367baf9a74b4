"""
Statement counting for an engine.

``build_container`` installs a counter when ``DEV_MODE`` is on; the test
suite installs its own to check that each service operation costs one
statement.
"""
from sqlalchemy import event


class QueryCounter:
    """Number of statements an engine has executed since the last reset."""

    def __init__(self) -> None:
        self.count: int = 0

    def reset(self) -> None:
        self.count = 0


def install_query_counter(engine) -> QueryCounter:
    """
    Hook a fresh ``QueryCounter`` onto *engine*'s ``before_cursor_execute``.

    Schema DDL counts as well, so reset the counter before the operation
    being measured.  Installing twice on one engine gives two independent
    counters, both incremented.
    """
    counter = QueryCounter()
    sync_engine = engine.sync_engine

    @event.listens_for(sync_engine, "before_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        counter.count += 1

    return counter
