from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from board.exceptions import RowMappingError


# --- Article ---

class ArticleDto(BaseModel):
    """
    One ``article`` row.

    Field aliases are the database column names, so a row mapping can be
    validated as-is; unknown columns are ignored.
    """

    id: int
    created_date: datetime = Field(alias="createdDate")
    modified_date: datetime = Field(alias="modifiedDate")
    title: str
    body: str
    is_blind: bool = Field(alias="isBlind")

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @field_validator("created_date", "modified_date", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> Any:
        # SQLite hands timestamps back as "YYYY-MM-DD HH:MM:SS[.ffffff]".
        if isinstance(value, str):
            return datetime.fromisoformat(value)
        return value

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ArticleDto":
        """Map a result row to an ``ArticleDto``; raises ``RowMappingError``."""
        try:
            return cls.model_validate(dict(row))
        except ValidationError as exc:
            raise RowMappingError(cls.__name__, sorted(row.keys()), exc) from exc

    @classmethod
    def from_row_or_none(cls, row: Mapping[str, Any] | None) -> "ArticleDto | None":
        return cls.from_row(row) if row is not None else None
