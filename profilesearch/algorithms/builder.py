"""
Construction of profile HMMs.

Two paths lead to a ``ProfileHMM``:

- ``build_profile_hmm`` fills every position with fixed placeholder statistics
  (constant transitions, background residue frequencies with a mild positional
  bias for match emissions, uniform insert emissions). It makes the engine
  runnable without any trained model.
- ``profile_hmm_from_probabilities`` accepts externally trained per-position
  parameters, e.g. loaded from a model file, and returns a model behind the
  same interface.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Sequence

from profilesearch.algorithms.hmm import ProfileHMM
from profilesearch.errors import (
    InvalidModelLengthError,
    MalformedModelParametersError,
)
from profilesearch.types.parameters import (
    ALPHABET_SIZE,
    BACKGROUND_FREQUENCIES,
    TRANSITION_NAMES,
    EmissionParameters,
    ProfileParameters,
    TransitionParameters,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_TRANSITIONS: Dict[str, float] = {
    "match_to_match": 0.8,
    "match_to_insert": 0.1,
    "match_to_delete": 0.1,
    "insert_to_match": 0.5,
    "insert_to_insert": 0.5,
    "delete_to_match": 0.5,
    "delete_to_delete": 0.5,
}
UNIFORM_INSERT_EMISSION = 0.05
POSITIONAL_BIAS = 0.2


def default_parameters(length: int) -> ProfileParameters:
    """Placeholder parameters for a model with ``length`` positions."""
    if length < 1:
        raise InvalidModelLengthError(
            f"profile HMM needs at least one position, got {length}"
        )

    transitions = TransitionParameters(
        **{name: [DEFAULT_TRANSITIONS[name]] * length for name in TRANSITION_NAMES}
    )
    match = [
        [freq * (1.0 + POSITIONAL_BIAS * (i / length)) for freq in BACKGROUND_FREQUENCIES]
        for i in range(length)
    ]
    insert = [[UNIFORM_INSERT_EMISSION] * ALPHABET_SIZE for _ in range(length)]

    return ProfileParameters(
        transitions=transitions,
        emissions=EmissionParameters(match=match, insert=insert),
    )


def build_profile_hmm(length: int) -> ProfileHMM:
    """Build a profile HMM with fixed placeholder statistics."""
    params = default_parameters(length)
    LOGGER.info("Initialized placeholder profile HMM of length %d", length)
    return ProfileHMM(params)


def profile_hmm_from_probabilities(
    transitions: Mapping[str, Sequence[float]],
    match_emissions: Sequence[Sequence[float]],
    insert_emissions: Sequence[Sequence[float]],
    validate: bool = False,
) -> ProfileHMM:
    """Build a profile HMM from externally supplied probabilities.

    Args:
        transitions: One per-position array for each name in TRANSITION_NAMES.
        match_emissions: One 20-wide row per position.
        insert_emissions: One 20-wide row per position.
        validate: Reject non-positive probabilities instead of letting them
            contribute -inf to the alignment scores.
    """
    missing = [name for name in TRANSITION_NAMES if name not in transitions]
    if missing:
        raise MalformedModelParametersError(f"transitions missing keys: {missing}")
    unexpected = [name for name in transitions if name not in TRANSITION_NAMES]
    if unexpected:
        raise MalformedModelParametersError(
            f"transitions has unexpected keys: {unexpected}"
        )

    params = ProfileParameters(
        transitions=TransitionParameters(
            **{name: transitions[name] for name in TRANSITION_NAMES}
        ),
        emissions=EmissionParameters(match=match_emissions, insert=insert_emissions),
    )
    return ProfileHMM(params, validate=validate)


__all__ = [
    "DEFAULT_TRANSITIONS",
    "default_parameters",
    "build_profile_hmm",
    "profile_hmm_from_probabilities",
]
