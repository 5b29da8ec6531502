"""
This module defines key data types for the parameters of a profile Hidden Markov
Model (HMM) over protein sequences. Each model position carries a Match, an
Insert and a Delete state; the tables here hold per-position transition and
emission probabilities (in probability space, not log-space) together with the
shared amino acid alphabet and background residue frequencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from profilesearch.errors import MalformedModelParametersError

AMINO_ACIDS: str = "ACDEFGHIKLMNPQRSTVWY"
ALPHABET_SIZE: int = len(AMINO_ACIDS)
PROFILE_STATES: Tuple[str, str, str] = ("M", "I", "D")

# Background amino acid frequencies, in AMINO_ACIDS order.
BACKGROUND_FREQUENCIES: Tuple[float, ...] = (
    0.074,
    0.025,
    0.054,
    0.062,
    0.042,
    0.073,
    0.023,
    0.052,
    0.024,
    0.058,
    0.099,
    0.045,
    0.039,
    0.057,
    0.073,
    0.073,
    0.052,
    0.013,
    0.034,
    0.068,
)

TRANSITION_NAMES: Tuple[str, ...] = (
    "match_to_match",
    "match_to_insert",
    "match_to_delete",
    "insert_to_match",
    "insert_to_insert",
    "delete_to_match",
    "delete_to_delete",
)

Row = Tuple[float, ...]


def _as_row(values: Sequence[float], context: str) -> Row:
    try:
        return tuple(float(v) for v in values)
    except (TypeError, ValueError) as exc:
        raise MalformedModelParametersError(
            f"{context} must contain numeric probabilities"
        ) from exc


def _as_table(rows: Sequence[Sequence[float]], context: str) -> Tuple[Row, ...]:
    table = tuple(_as_row(row, f"{context}[{i}]") for i, row in enumerate(rows))
    bad = [i for i, row in enumerate(table) if len(row) != ALPHABET_SIZE]
    if bad:
        raise MalformedModelParametersError(
            f"{context} rows must have {ALPHABET_SIZE} columns; bad rows: {bad}"
        )
    return table


@dataclass(frozen=True)
class TransitionParameters:
    """Per-position transition probabilities between profile states."""

    match_to_match: Row
    match_to_insert: Row
    match_to_delete: Row
    insert_to_match: Row
    insert_to_insert: Row
    delete_to_match: Row
    delete_to_delete: Row

    def __post_init__(self) -> None:
        for name in TRANSITION_NAMES:
            object.__setattr__(self, name, _as_row(getattr(self, name), name))

        lengths = {name: len(getattr(self, name)) for name in TRANSITION_NAMES}
        if len(set(lengths.values())) != 1:
            raise MalformedModelParametersError(
                f"transition arrays must share one length, got {lengths}"
            )

    @property
    def length(self) -> int:
        """Number of model positions covered by the transition arrays."""
        return len(self.match_to_match)

    def as_dict(self) -> dict:
        return {name: list(getattr(self, name)) for name in TRANSITION_NAMES}


@dataclass(frozen=True)
class EmissionParameters:
    """Match and insert emission distributions, one 20-wide row per position."""

    match: Tuple[Row, ...]
    insert: Tuple[Row, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "match", _as_table(self.match, "match emissions"))
        object.__setattr__(self, "insert", _as_table(self.insert, "insert emissions"))

        if len(self.match) != len(self.insert):
            raise MalformedModelParametersError(
                "match and insert emissions must have the same number of rows: "
                f"{len(self.match)} vs {len(self.insert)}"
            )

    @property
    def length(self) -> int:
        """Number of model positions covered by the emission tables."""
        return len(self.match)


@dataclass(frozen=True)
class ProfileParameters:
    """Aggregate container for profile HMM transition/emission parameters."""

    transitions: TransitionParameters
    emissions: EmissionParameters

    def __post_init__(self) -> None:
        if self.transitions.length != self.emissions.length:
            raise MalformedModelParametersError(
                "transition and emission tables disagree on model length: "
                f"{self.transitions.length} vs {self.emissions.length}"
            )

    @property
    def length(self) -> int:
        return self.transitions.length


__all__ = [
    "AMINO_ACIDS",
    "ALPHABET_SIZE",
    "BACKGROUND_FREQUENCIES",
    "PROFILE_STATES",
    "TRANSITION_NAMES",
    "TransitionParameters",
    "EmissionParameters",
    "ProfileParameters",
]
