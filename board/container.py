"""
Process-wide dependency container and the composition root.

``build_container`` is the only place where objects are wired together.
Everything it registers is constructed explicitly with its collaborators
as arguments; nothing looks itself up in the container.

Usage::

    container = build_container()
    service = container.get(ArticleService)
"""
import logging
from typing import Any, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from board.config import Settings, settings as default_settings
from board.database import create_engine, create_session_factory
from board.exceptions import UnregisteredDependencyError
from board.instrumentation import QueryCounter, install_query_counter
from board.services.article_service import ArticleService
from board.sql_runner import SqlRunner

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Container:
    """
    Registry of lazily-built singletons keyed by type.

    A factory receives the container itself so it can ``get`` its own
    collaborators.  Each factory runs at most once per container.
    """

    def __init__(self) -> None:
        self._factories: dict[type, Callable[["Container"], Any]] = {}
        self._instances: dict[type, Any] = {}

    def register(self, dependency_type: type[T], factory: Callable[["Container"], T]) -> None:
        self._factories[dependency_type] = factory
        self._instances.pop(dependency_type, None)

    def register_instance(self, dependency_type: type[T], instance: T) -> None:
        self._factories[dependency_type] = lambda _container: instance
        self._instances[dependency_type] = instance

    def get(self, dependency_type: type[T]) -> T:
        if dependency_type in self._instances:
            return self._instances[dependency_type]
        try:
            factory = self._factories[dependency_type]
        except KeyError:
            raise UnregisteredDependencyError(dependency_type) from None
        instance = factory(self)
        self._instances[dependency_type] = instance
        logger.debug("Container built %s", dependency_type.__name__)
        return instance

    def __contains__(self, dependency_type: type) -> bool:
        return dependency_type in self._factories


def _build_sql_runner(container: Container) -> SqlRunner:
    dev_mode = container.get(Settings).DEV_MODE
    if dev_mode:
        # Count from the first statement the runner sends.
        container.get(QueryCounter)
    return SqlRunner(container.get(async_sessionmaker), dev_mode=dev_mode)


def build_container(
    app_settings: Settings | None = None,
    engine: AsyncEngine | None = None,
) -> Container:
    """
    Wire Settings → AsyncEngine → async_sessionmaker → SqlRunner →
    ArticleService.

    Pass *engine* to reuse an existing engine (tests hand in an in-memory
    SQLite engine); otherwise one is created from ``DATABASE_URL``.  With
    ``DEV_MODE`` on, building the runner also installs a ``QueryCounter``
    on the engine.
    """
    container = Container()
    container.register_instance(Settings, app_settings or default_settings)

    if engine is not None:
        container.register_instance(AsyncEngine, engine)
    else:
        container.register(AsyncEngine, lambda c: create_engine(c.get(Settings)))

    container.register(QueryCounter, lambda c: install_query_counter(c.get(AsyncEngine)))
    container.register(async_sessionmaker, lambda c: create_session_factory(c.get(AsyncEngine)))
    container.register(SqlRunner, _build_sql_runner)
    container.register(ArticleService, lambda c: ArticleService(c.get(SqlRunner)))
    return container
