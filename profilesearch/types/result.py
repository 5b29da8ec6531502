"""Alignment and search result types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class PathStep:
    """One state visited on a Viterbi path.

    Attributes:
        state: "M", "I" or "D"
        model_position: 0-based model column of the state
        residue_position: 0-based sequence index emitted here, None for Delete
    """

    state: str
    model_position: int
    residue_position: Optional[int]


@dataclass(frozen=True)
class ViterbiResult:
    """Result of aligning one sequence to a profile HMM.

    Attributes:
        score: Best path log-probability; -inf when no path is viable
        end_position: Model column of the best final Match state
        path: Traceback in forward order, only when the full table was kept
    """

    score: float
    end_position: Optional[int] = None
    path: Optional[List[PathStep]] = None


@dataclass(frozen=True)
class SearchResult:
    """Ranked search hit for a single sequence."""

    sequence_id: str
    score: float
    e_value: float
    alignment_start: int
    alignment_end: int


__all__ = ["PathStep", "ViterbiResult", "SearchResult"]
