"""Search module for the project."""

from .pipeline import (
    SearchPipeline,
    SearchSummary,
    e_value_from_score,
    rank_results,
    search,
)

__all__ = [
    "SearchPipeline",
    "SearchSummary",
    "e_value_from_score",
    "rank_results",
    "search",
]
