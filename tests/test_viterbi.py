"""Unit tests for the profile HMM Viterbi aligner."""

from __future__ import annotations

import math

import pytest

from profilesearch.algorithms.builder import (
    build_profile_hmm,
    profile_hmm_from_probabilities,
)
from profilesearch.algorithms.hmm import ProfileHMM
from profilesearch.algorithms.viterbi import (
    MemoryStrategy,
    ViterbiAligner,
    _best_of_three,
    _best_of_two,
)
from profilesearch.errors import UnrecognizedResidueError
from profilesearch.types import BACKGROUND_FREQUENCIES, ProteinSequence
from profilesearch.types.alphabet import residue_index
from profilesearch.types.parameters import TRANSITION_NAMES
from profilesearch.utils.synthetic import synthetic_sequence

NEG_INF = float("-inf")

# Log transition feeding each (previous state, next state) pair, and the
# column offset the transition is read from relative to the next state's column.
_TRANSITION_FOR = {
    ("M", "M"): ("match_to_match", -1),
    ("I", "M"): ("insert_to_match", -1),
    ("D", "M"): ("delete_to_match", -1),
    ("M", "I"): ("match_to_insert", 0),
    ("I", "I"): ("insert_to_insert", 0),
    ("M", "D"): ("match_to_delete", -1),
    ("D", "D"): ("delete_to_delete", -1),
}


def _seq(residues: str, identifier: str = "query") -> ProteinSequence:
    return ProteinSequence(identifier=identifier, residues=residues)


def _path_log_probability(hmm: ProfileHMM, sequence: ProteinSequence, path) -> float:
    """Recompute a path's log-probability independently of the DP tables."""
    total = 0.0
    prev_state = "M"
    for step in path:
        name, offset = _TRANSITION_FOR[(prev_state, step.state)]
        total += hmm.log_transition(name, step.model_position + offset)
        if step.state != "D":
            aa = residue_index(sequence.residues[step.residue_position])
            if step.state == "M":
                total += hmm.log_match_emission(step.model_position, aa)
            else:
                total += hmm.log_insert_emission(step.model_position, aa)
        prev_state = step.state
    return total


def _tie_model() -> ProfileHMM:
    """Length-3 model where every probability is 0.5, except match[1]['C']."""
    transitions = {name: [0.5] * 3 for name in TRANSITION_NAMES}
    match = [[0.5] * 20 for _ in range(3)]
    insert = [[0.5] * 20 for _ in range(3)]
    match[1][residue_index("C")] = 0.25
    return profile_hmm_from_probabilities(transitions, match, insert)


@pytest.mark.parametrize("strategy", list(MemoryStrategy))
def test_empty_sequence_scores_start_state(strategy):
    """Test that an empty sequence scores log(1) = 0 for any model."""
    aligner = ViterbiAligner(strategy=strategy)

    for length in (1, 2, 10):
        result = aligner.align(build_profile_hmm(length), _seq(""))
        assert result.score == 0.0
        assert result.end_position == 0


def test_empty_sequence_has_empty_path():
    """Test that the traceback of an empty sequence visits no states."""
    aligner = ViterbiAligner(strategy=MemoryStrategy.TRACEBACK)

    assert aligner.align(build_profile_hmm(5), _seq("")).path == []


def test_single_residue_score_matches_hand_computation():
    """Test a one-residue alignment against a hand-computed log-probability."""
    hmm = build_profile_hmm(2)
    result = ViterbiAligner().align(hmm, _seq("A"))

    # start -> M1 emitting A
    expected = math.log(0.8) + math.log(BACKGROUND_FREQUENCIES[0] * 1.1)
    assert math.isclose(result.score, expected)
    assert result.end_position == 1


def test_single_position_model_has_no_viable_path():
    """Test that a length-1 model cannot end a non-empty sequence in Match."""
    result = ViterbiAligner().align(build_profile_hmm(1), _seq("ACD"))

    assert result.score == NEG_INF
    assert result.end_position is None


def test_zero_probability_yields_negative_infinity():
    """Test that impossible transitions give -inf instead of raising."""
    transitions = {name: [0.5] * 3 for name in TRANSITION_NAMES}
    transitions["match_to_match"] = [0.0] * 3
    transitions["match_to_insert"] = [0.0] * 3
    match = [[0.05] * 20 for _ in range(3)]
    insert = [[0.05] * 20 for _ in range(3)]
    hmm = profile_hmm_from_probabilities(transitions, match, insert)

    # Only start -> D1 -> M2 remains, so one residue is viable and two are not
    one = ViterbiAligner().align(hmm, _seq("A"))
    two = ViterbiAligner(strategy=MemoryStrategy.TRACEBACK).align(hmm, _seq("AA"))

    expected = math.log(0.5) + math.log(0.5) + math.log(0.05)
    assert math.isclose(one.score, expected)
    assert two.score == NEG_INF
    assert two.path is None


def test_reference_sequence_score_is_finite_and_reproducible():
    """Test the length-10 model against ACDEFGHIKL."""
    hmm = build_profile_hmm(10)
    aligner = ViterbiAligner()

    first = aligner.align(hmm, _seq("ACDEFGHIKL")).score
    second = aligner.align(hmm, _seq("ACDEFGHIKL")).score

    assert math.isfinite(first)
    assert first < 0
    assert first == second
    assert math.isclose(first, -34.241626639048455, rel_tol=1e-12)


def test_strategies_produce_identical_scores():
    """Test that full-table and rolling-row strategies agree bit for bit."""
    hmm = build_profile_hmm(12)
    full = ViterbiAligner(strategy=MemoryStrategy.TRACEBACK)
    rolling = ViterbiAligner(strategy=MemoryStrategy.SCORE_ONLY)

    for index, length in enumerate((0, 1, 3, 12, 30)):
        seq = synthetic_sequence(index, length)
        full_result = full.align(hmm, seq)
        rolling_result = rolling.align(hmm, seq)
        assert full_result.score == rolling_result.score
        assert full_result.end_position == rolling_result.end_position
        assert rolling_result.path is None


def test_traceback_path_reproduces_score():
    """Test that the recovered path's log-probability equals the Viterbi score."""
    hmm = build_profile_hmm(10)
    aligner = ViterbiAligner(strategy=MemoryStrategy.TRACEBACK)

    for residues in ("ACDEFGHIKL", "WWWW", "ACDEFGHIKLMNPQRSTVWY"):
        seq = _seq(residues)
        result = aligner.align(hmm, seq)

        assert result.path[-1].state == "M"
        assert result.path[-1].model_position == result.end_position
        emitted = [s.residue_position for s in result.path if s.state != "D"]
        assert emitted == list(range(len(seq)))
        assert math.isclose(
            _path_log_probability(hmm, seq, result.path), result.score
        )


def test_traceback_prefers_match_over_insert_on_ties():
    """Test that equal Match and Insert predecessors resolve to Match."""
    hmm = _tie_model()
    result = ViterbiAligner(strategy=MemoryStrategy.TRACEBACK).align(
        hmm, _seq("AAC")
    )

    assert math.isclose(result.score, 6 * math.log(0.5))
    assert result.end_position == 2
    # Choosing Insert at the final cell would give M, I, M instead
    assert [step.state for step in result.path] == ["I", "M", "M"]
    assert [step.model_position for step in result.path] == [0, 1, 2]
    assert [step.residue_position for step in result.path] == [0, 1, 2]


def test_tie_break_helpers_precedence():
    """Test Match over Insert over Delete on equal predecessor scores."""
    assert _best_of_three(-1.0, -1.0, -1.0) == (-1.0, "M")
    assert _best_of_three(-2.0, -1.0, -1.0) == (-1.0, "I")
    assert _best_of_three(-2.0, -3.0, -1.0) == (-1.0, "D")
    assert _best_of_three(NEG_INF, NEG_INF, NEG_INF) == (NEG_INF, "M")
    assert _best_of_two(-1.0, -1.0, "I") == (-1.0, "M")
    assert _best_of_two(-2.0, -1.0, "D") == (-1.0, "D")


def test_lowercase_and_unknown_residues():
    """Test case folding and the index-0 fallback inside the aligner."""
    hmm = build_profile_hmm(8)
    aligner = ViterbiAligner()

    assert aligner.score(hmm, _seq("acdef")) == aligner.score(hmm, _seq("ACDEF"))
    assert aligner.score(hmm, _seq("XCDEF")) == aligner.score(hmm, _seq("ACDEF"))


def test_strict_residues_raise():
    """Test that strict mode rejects residues outside the alphabet."""
    aligner = ViterbiAligner(strict_residues=True)

    with pytest.raises(UnrecognizedResidueError):
        aligner.align(build_profile_hmm(4), _seq("ACXD"))


def test_strategy_accepts_string_value():
    """Test that the memory strategy can be given by value."""
    assert ViterbiAligner(strategy="traceback").retain_traceback
    assert not ViterbiAligner(strategy="score_only").retain_traceback
    with pytest.raises(ValueError):
        ViterbiAligner(strategy="everything")
