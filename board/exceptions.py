from typing import Any, Dict, Optional


class BoardError(Exception):
    """Base class for every error raised by the board package."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InfrastructureError(BoardError):
    """Database, schema or mapping failure. Fatal; never retried."""
    pass


class DatabaseError(InfrastructureError):
    """A statement could not be executed."""

    def __init__(self, sql: str, cause: Exception):
        super().__init__(
            f"SQL execution failed: {cause}",
            details={"sql": sql, "cause": type(cause).__name__},
        )


class RowMappingError(InfrastructureError):
    """A result row does not carry the columns the entity needs."""

    def __init__(self, entity: str, columns: list[str], cause: Exception):
        super().__init__(
            f"Cannot map row to {entity}: {cause}",
            details={"entity": entity, "columns": columns},
        )


class QueryParameterError(InfrastructureError):
    """Placeholder count and parameter count disagree."""

    def __init__(self, sql: str, expected: int, given: int):
        super().__init__(
            f"SQL expects {expected} parameter(s), got {given}",
            details={"sql": sql, "expected": expected, "given": given},
        )


class UnregisteredDependencyError(KeyError):
    """``Container.get`` was asked for a type nobody registered."""

    def __init__(self, dependency_type: type):
        self.dependency_type = dependency_type
        super().__init__(f"No factory registered for {dependency_type.__name__}")

    def __str__(self) -> str:
        return self.args[0]
