"""Categorize removed tracking parameters for reporting."""

from typing import Any, Dict, List

from ..config import BADGE_MAX_COUNT
from ..logging import get_logger
from .models import AnalysisResult, RemovedParam
from .patterns import CATEGORY_KEYS, TrackingCategory
from .url_cleaner import clean_url

logger = get_logger(__name__)


def classify_param(key: str) -> TrackingCategory:
    """
    Pick the category for a tracking parameter key.

    The utm_ prefix wins over every set, so utm_ad reports as UTM. Keys
    that fall through every set are reported as analytics.
    """
    key_lower = key.lower()
    if key_lower.startswith("utm_"):
        return TrackingCategory.UTM
    for category, keys in CATEGORY_KEYS:
        if key_lower in keys:
            return category
    return TrackingCategory.ANALYTICS


def analyze_url(url: Any) -> AnalysisResult:
    """
    Clean a URL and break the removed parameters down by category.

    Failed results carry empty categories and zero counts, never an exception.
    """
    result = clean_url(url)
    data = result.model_dump()

    if not result.success:
        return AnalysisResult(**data)

    categories: Dict[str, List[RemovedParam]] = {category.value: [] for category in TrackingCategory}
    for param in result.removed_params:
        categories[classify_param(param.key).value].append(param)

    summary = {name: len(params) for name, params in categories.items()}
    logger.debug(f"Analyzed {url}: {summary}")

    data["removed_params"] = result.removed_params
    return AnalysisResult(**data, categories=categories, summary=summary)


def tracking_param_count(url: Any) -> int:
    """Number of tracking parameters in a URL, 0 when it cannot be cleaned."""
    result = analyze_url(url)
    return result.removed_count if result.success else 0


def badge_text(count: int) -> str:
    """Badge label for a tracking count: empty for zero, capped at '99+'."""
    if count <= 0:
        return ""
    if count > BADGE_MAX_COUNT:
        return f"{BADGE_MAX_COUNT}+"
    return str(count)
