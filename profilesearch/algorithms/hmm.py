"""Profile Hidden Markov Model utilities."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence, Tuple

import numpy as np

from profilesearch.errors import (
    InvalidModelLengthError,
    MalformedModelParametersError,
)
from profilesearch.types.parameters import (
    ALPHABET_SIZE,
    TRANSITION_NAMES,
    ProfileParameters,
)

LOGGER = logging.getLogger(__name__)

NEG_INF = float("-inf")

LogRow = Tuple[float, ...]


def log_probabilities(values: Sequence[float]) -> np.ndarray:
    """Natural log of an array of probabilities, with p <= 0 mapped to -inf."""
    arr = np.asarray(values, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        logs = np.log(arr)
    return np.where(arr <= 0.0, NEG_INF, logs)


def _validate_positive(params: ProfileParameters) -> None:
    """Reject probabilities that cannot feed a logarithm."""
    tables = {
        name: np.asarray(getattr(params.transitions, name), dtype=float)
        for name in TRANSITION_NAMES
    }
    tables["match emissions"] = np.asarray(params.emissions.match, dtype=float)
    tables["insert emissions"] = np.asarray(params.emissions.insert, dtype=float)

    for context, arr in tables.items():
        bad = ~(np.isfinite(arr) & (arr > 0.0))
        if bad.any():
            positions = sorted({int(idx[0]) for idx in np.argwhere(bad)})
            raise MalformedModelParametersError(
                f"{context} has non-positive or non-finite probabilities "
                f"at positions {positions}"
            )


@dataclass(frozen=True)
class ProfileHMM:
    """Immutable profile HMM exposing log-space parameters.

    Probabilities are converted to natural logs once, at construction. The
    instance is never mutated afterwards and can be shared by any number of
    concurrent alignments.
    """

    params: ProfileParameters
    log_transitions: Mapping[str, LogRow]
    log_match_emissions: Tuple[LogRow, ...]
    log_insert_emissions: Tuple[LogRow, ...]

    def __init__(self, params: ProfileParameters, validate: bool = False) -> None:
        if params.length < 1:
            raise InvalidModelLengthError(
                f"profile HMM needs at least one position, got {params.length}"
            )
        if validate:
            _validate_positive(params)

        object.__setattr__(self, "params", params)

        log_transitions = {
            name: tuple(log_probabilities(getattr(params.transitions, name)).tolist())
            for name in TRANSITION_NAMES
        }
        object.__setattr__(self, "log_transitions", MappingProxyType(log_transitions))
        object.__setattr__(
            self,
            "log_match_emissions",
            tuple(tuple(row) for row in log_probabilities(params.emissions.match).tolist()),
        )
        object.__setattr__(
            self,
            "log_insert_emissions",
            tuple(tuple(row) for row in log_probabilities(params.emissions.insert).tolist()),
        )
        LOGGER.debug("Built profile HMM with %d positions", params.length)

    @property
    def length(self) -> int:
        """Number of model positions."""
        return self.params.length

    def log_transition(self, kind: str, position: int) -> float:
        """Return the log transition probability ``kind`` at a model position."""
        if kind not in self.log_transitions:
            raise ValueError(f"kind must be one of {TRANSITION_NAMES}, got '{kind}'")
        return self.log_transitions[kind][position]

    def log_match_emission(self, position: int, residue: int) -> float:
        """Return the log match-state emission for an alphabet index."""
        self._assert_residue(residue)
        return self.log_match_emissions[position][residue]

    def log_insert_emission(self, position: int, residue: int) -> float:
        """Return the log insert-state emission for an alphabet index."""
        self._assert_residue(residue)
        return self.log_insert_emissions[position][residue]

    def _assert_residue(self, residue: int) -> None:
        if not 0 <= residue < ALPHABET_SIZE:
            raise ValueError(
                f"residue index must be in [0, {ALPHABET_SIZE}), got {residue}"
            )


__all__ = ["ProfileHMM", "log_probabilities", "NEG_INF"]
