"""Unit tests for the ProfileHMM wrapper and its parameter types."""

from __future__ import annotations

import dataclasses
import math

import pytest

from profilesearch.algorithms.builder import profile_hmm_from_probabilities
from profilesearch.algorithms.hmm import ProfileHMM, log_probabilities
from profilesearch.errors import (
    InvalidModelLengthError,
    MalformedModelParametersError,
)
from profilesearch.types.parameters import (
    TRANSITION_NAMES,
    EmissionParameters,
    ProfileParameters,
    TransitionParameters,
)


def _uniform_tables(length: int, transition: float = 0.5, emission: float = 0.05):
    transitions = {name: [transition] * length for name in TRANSITION_NAMES}
    match = [[emission] * 20 for _ in range(length)]
    insert = [[emission] * 20 for _ in range(length)]
    return transitions, match, insert


def test_profile_hmm_stores_log_probabilities():
    """Test that transitions and emissions are exposed in natural-log space."""
    transitions, match, insert = _uniform_tables(3)
    hmm = profile_hmm_from_probabilities(transitions, match, insert)

    assert hmm.length == 3
    assert math.isclose(hmm.log_transition("match_to_match", 0), math.log(0.5))
    assert math.isclose(hmm.log_match_emission(2, 19), math.log(0.05))
    assert math.isclose(hmm.log_insert_emission(1, 0), math.log(0.05))


def test_log_probabilities_maps_non_positive_values_to_negative_infinity():
    """Test that zero and negative probabilities become -inf instead of erroring."""
    logs = log_probabilities([1.0, 0.0, -0.5])

    assert logs[0] == 0.0
    assert logs[1] == float("-inf")
    assert logs[2] == float("-inf")


def test_zero_probabilities_degrade_without_validation():
    """Test that a zero probability is accepted and contributes -inf."""
    transitions, match, insert = _uniform_tables(2)
    transitions["match_to_delete"] = [0.0, 0.5]
    hmm = profile_hmm_from_probabilities(transitions, match, insert)

    assert hmm.log_transition("match_to_delete", 0) == float("-inf")


def test_validation_rejects_non_positive_probabilities():
    """Test that validate=True surfaces bad probabilities at construction time."""
    transitions, match, insert = _uniform_tables(2)
    match[1][4] = 0.0

    with pytest.raises(MalformedModelParametersError):
        profile_hmm_from_probabilities(transitions, match, insert, validate=True)


def test_validation_rejects_nan_probabilities():
    """Test that NaN probabilities are rejected when validating."""
    transitions, match, insert = _uniform_tables(2)
    transitions["insert_to_insert"] = [0.5, float("nan")]

    with pytest.raises(MalformedModelParametersError):
        profile_hmm_from_probabilities(transitions, match, insert, validate=True)


def test_transition_arrays_must_share_length():
    """Test that TransitionParameters rejects arrays of different lengths."""
    transitions, _, _ = _uniform_tables(3)
    transitions["delete_to_delete"] = [0.5, 0.5]

    with pytest.raises(MalformedModelParametersError):
        TransitionParameters(**transitions)


def test_emission_rows_must_be_twenty_wide():
    """Test that EmissionParameters rejects rows that are not 20 columns."""
    _, match, insert = _uniform_tables(2)
    match[0] = match[0][:19]

    with pytest.raises(MalformedModelParametersError):
        EmissionParameters(match=match, insert=insert)


def test_emission_tables_must_have_same_row_count():
    """Test that match and insert emissions must cover the same positions."""
    _, match, insert = _uniform_tables(2)

    with pytest.raises(MalformedModelParametersError):
        EmissionParameters(match=match, insert=insert[:1])


def test_transition_and_emission_lengths_must_agree():
    """Test that ProfileParameters rejects mismatched table lengths."""
    transitions, match, insert = _uniform_tables(3)
    _, short_match, short_insert = _uniform_tables(2)

    with pytest.raises(MalformedModelParametersError):
        ProfileParameters(
            transitions=TransitionParameters(**transitions),
            emissions=EmissionParameters(match=short_match, insert=short_insert),
        )


def test_missing_transition_name_is_rejected():
    """Test that the probability builder requires all seven transitions."""
    transitions, match, insert = _uniform_tables(2)
    del transitions["delete_to_match"]

    with pytest.raises(MalformedModelParametersError):
        profile_hmm_from_probabilities(transitions, match, insert)


def test_empty_model_is_rejected():
    """Test that a zero-length model cannot be constructed."""
    transitions, match, insert = _uniform_tables(0)
    params = ProfileParameters(
        transitions=TransitionParameters(**transitions),
        emissions=EmissionParameters(match=match, insert=insert),
    )

    with pytest.raises(InvalidModelLengthError):
        ProfileHMM(params)


def test_profile_hmm_frozen_dataclass():
    """Test that ProfileHMM cannot be modified after initialization."""
    transitions, match, insert = _uniform_tables(2)
    hmm = profile_hmm_from_probabilities(transitions, match, insert)

    with pytest.raises(dataclasses.FrozenInstanceError):
        hmm.params = None
    with pytest.raises(TypeError):
        hmm.log_transitions["match_to_match"] = (0.0, 0.0)


def test_profile_hmm_rejects_unknown_transition_or_residue():
    """Test that accessors validate their arguments."""
    transitions, match, insert = _uniform_tables(2)
    hmm = profile_hmm_from_probabilities(transitions, match, insert)

    with pytest.raises(ValueError):
        hmm.log_transition("match_to_end", 0)
    with pytest.raises(ValueError):
        hmm.log_match_emission(0, 20)
