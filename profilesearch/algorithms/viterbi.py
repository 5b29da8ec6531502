"""Viterbi alignment of a sequence against a profile HMM."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from profilesearch.algorithms.base import ProfileAligner
from profilesearch.algorithms.hmm import NEG_INF, ProfileHMM
from profilesearch.types import PathStep, ProteinSequence, ViterbiResult

# Offset of each state inside the 3-wide block of a model column
STATE_OFFSETS = {"M": 0, "I": 1, "D": 2}

Row = List[float]
PointerRow = List[Optional[str]]


class MemoryStrategy(str, Enum):
    """How much of the DP lattice the aligner keeps."""

    TRACEBACK = "traceback"
    SCORE_ONLY = "score_only"


def _best_of_three(match: float, insert: float, delete: float) -> Tuple[float, str]:
    """Maximum of three predecessors, preferring M over I over D on ties."""
    if match >= insert and match >= delete:
        return match, "M"
    if insert >= delete:
        return insert, "I"
    return delete, "D"


def _best_of_two(match: float, other: float, other_state: str) -> Tuple[float, str]:
    """Maximum of a Match predecessor and one other, preferring Match on ties."""
    if match >= other:
        return match, "M"
    return other, other_state


class ViterbiAligner(ProfileAligner):
    """Best-path alignment of a sequence to a profile HMM.

    The lattice has one row per sequence position (plus the start row) and
    three states (M, I, D) per model column, laid out as ``3 * column + offset``.
    ``MemoryStrategy.TRACEBACK`` keeps every row and its backpointers so the
    path can be recovered; ``MemoryStrategy.SCORE_ONLY`` keeps two rows and
    swaps them after each residue. Both run the same row recurrence.
    """

    def __init__(
        self,
        strategy: MemoryStrategy = MemoryStrategy.SCORE_ONLY,
        strict_residues: bool = False,
    ) -> None:
        self.strategy = MemoryStrategy(strategy)
        self.strict_residues = strict_residues

    @property
    def retain_traceback(self) -> bool:
        return self.strategy is MemoryStrategy.TRACEBACK

    def _start_row(self, width: int) -> Row:
        """Row 0: only the start state (column 0 Match) has probability 1."""
        row = [NEG_INF] * width
        row[0] = 0.0
        return row

    def _fill_row(
        self,
        hmm: ProfileHMM,
        prev: Optional[Row],
        curr: Row,
        residue: Optional[int],
        pointers: Optional[PointerRow],
    ) -> None:
        """Run the recurrences for one lattice row.

        ``prev`` is None for the start row, where only Delete states (which
        emit nothing) can be filled. Delete at column j reads Match and Delete
        at column j - 1 of the same row, so columns are filled left to right.
        """
        trans = hmm.log_transitions
        m2m = trans["match_to_match"]
        m2i = trans["match_to_insert"]
        m2d = trans["match_to_delete"]
        i2m = trans["insert_to_match"]
        i2i = trans["insert_to_insert"]
        d2m = trans["delete_to_match"]
        d2d = trans["delete_to_delete"]

        for j in range(hmm.length):
            m = 3 * j

            if prev is not None:
                if j > 0:
                    best, state = _best_of_three(
                        prev[m - 3] + m2m[j - 1],
                        prev[m - 2] + i2m[j - 1],
                        prev[m - 1] + d2m[j - 1],
                    )
                    curr[m] = hmm.log_match_emissions[j][residue] + best
                    if pointers is not None and best != NEG_INF:
                        pointers[m] = state

                best, state = _best_of_two(
                    prev[m] + m2i[j], prev[m + 1] + i2i[j], "I"
                )
                curr[m + 1] = hmm.log_insert_emissions[j][residue] + best
                if pointers is not None and best != NEG_INF:
                    pointers[m + 1] = state

            if j > 0:
                best, state = _best_of_two(
                    curr[m - 3] + m2d[j - 1], curr[m - 1] + d2d[j - 1], "D"
                )
                curr[m + 2] = best
                if pointers is not None and best != NEG_INF:
                    pointers[m + 2] = state

    def _best_end(self, hmm: ProfileHMM, last_row: Row) -> Tuple[float, Optional[int]]:
        """Best Match state in the final row; the lowest column wins ties."""
        best = NEG_INF
        end = None
        for j in range(hmm.length):
            value = last_row[3 * j]
            if value > best:
                best = value
                end = j
        return best, end

    def _score_only(self, hmm: ProfileHMM, residues: List[int]) -> ViterbiResult:
        width = 3 * hmm.length
        blank = [NEG_INF] * width

        prev = self._start_row(width)
        self._fill_row(hmm, None, prev, None, None)
        curr = list(blank)

        for residue in residues:
            curr[:] = blank
            self._fill_row(hmm, prev, curr, residue, None)
            prev, curr = curr, prev

        score, end = self._best_end(hmm, prev)
        return ViterbiResult(score=score, end_position=end)

    def _full_table(self, hmm: ProfileHMM, residues: List[int]) -> ViterbiResult:
        width = 3 * hmm.length

        rows = [self._start_row(width)]
        pointers: List[PointerRow] = [[None] * width]
        self._fill_row(hmm, None, rows[0], None, pointers[0])

        for residue in residues:
            row = [NEG_INF] * width
            pointer_row: PointerRow = [None] * width
            self._fill_row(hmm, rows[-1], row, residue, pointer_row)
            rows.append(row)
            pointers.append(pointer_row)

        score, end = self._best_end(hmm, rows[-1])
        path = None
        if end is not None:
            path = self._traceback(pointers, len(residues), end)
        return ViterbiResult(score=score, end_position=end, path=path)

    def _traceback(
        self, pointers: List[PointerRow], n: int, end: int
    ) -> List[PathStep]:
        """Follow backpointers from the final Match state to the start state."""
        i, j, state = n, end, "M"
        steps: List[PathStep] = []

        while not (i == 0 and j == 0 and state == "M"):
            previous = pointers[i][3 * j + STATE_OFFSETS[state]]
            if previous is None:
                raise RuntimeError(
                    f"Traceback reached unreachable cell ({i}, {j}, {state})"
                )

            if state == "M":
                steps.append(PathStep(state="M", model_position=j, residue_position=i - 1))
                i -= 1
                j -= 1
            elif state == "I":
                steps.append(PathStep(state="I", model_position=j, residue_position=i - 1))
                i -= 1
            else:  # state == "D"
                steps.append(PathStep(state="D", model_position=j, residue_position=None))
                j -= 1
            state = previous

        steps.reverse()
        return steps

    def align(self, hmm: ProfileHMM, sequence: ProteinSequence) -> ViterbiResult:
        """Compute the Viterbi score (and path, if retained) for a sequence."""
        residues = sequence.encode(strict=self.strict_residues)
        if self.retain_traceback:
            return self._full_table(hmm, residues)
        return self._score_only(hmm, residues)


__all__ = ["MemoryStrategy", "ViterbiAligner"]
