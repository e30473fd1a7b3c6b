"""Result models returned by the cleaning engine.

Field names are snake_case in Python; ``to_dict()`` produces the camelCase
shape (``originalUrl``, ``removedCount``...) that hosts and fixtures consume.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .patterns import TrackingCategory


class RemovedParam(BaseModel):
    """A query parameter stripped from a URL."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class CleanResult(BaseModel):
    """Outcome of cleaning a single URL."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    success: bool
    error: Optional[str] = None
    original_url: Any = None
    cleaned_url: Optional[str] = None
    removed_params: List[RemovedParam] = Field(default_factory=list)
    removed_count: int = 0
    # Only set on success
    has_changes: Optional[bool] = None
    saved_bytes: Optional[int] = None

    @classmethod
    def failure(cls, original_url: Any, error: str) -> "CleanResult":
        return cls(success=False, error=error, original_url=original_url)

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True)
        if not self.success:
            data.pop("hasChanges", None)
            data.pop("savedBytes", None)
        return data


def empty_categories() -> Dict[str, List[RemovedParam]]:
    return {category.value: [] for category in TrackingCategory}


class AnalysisResult(CleanResult):
    """Clean result plus a per-category breakdown of the removed parameters."""

    categories: Dict[str, List[RemovedParam]] = Field(default_factory=empty_categories)
    summary: Dict[str, int] = Field(
        default_factory=lambda: {category.value: 0 for category in TrackingCategory}
    )
