"""Batch search of protein sequences against a profile HMM."""

from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from profilesearch.algorithms.base import ProfileAligner
from profilesearch.algorithms.hmm import ProfileHMM
from profilesearch.algorithms.viterbi import ViterbiAligner
from profilesearch.errors import ModelError, UnrecognizedResidueError
from profilesearch.types import ProteinSequence, SearchResult

LOGGER = logging.getLogger(__name__)


def e_value_from_score(score: float) -> float:
    """Placeholder significance: ``exp(-score)``, saturating to inf on overflow.

    This is a monotone transform of the score, not an E-value calibrated
    against a score distribution.
    """
    with np.errstate(over="ignore"):
        return float(np.exp(-np.float64(score)))


def _score_sequence(
    hmm: ProfileHMM, aligner: ProfileAligner, sequence: ProteinSequence
) -> SearchResult:
    try:
        score = aligner.score(hmm, sequence)
    except UnrecognizedResidueError:
        raise
    except (IndexError, ValueError, TypeError) as exc:
        raise ModelError(
            f"Could not score sequence '{sequence.identifier}': {exc}"
        ) from exc
    if math.isnan(score):
        raise ModelError(
            f"Score for sequence '{sequence.identifier}' is NaN; "
            "check the model parameters"
        )

    return SearchResult(
        sequence_id=sequence.identifier,
        score=score,
        e_value=e_value_from_score(score),
        alignment_start=0,
        alignment_end=len(sequence),
    )


def rank_results(results: Sequence[SearchResult]) -> List[SearchResult]:
    """Sort results by descending score, keeping input order among ties."""
    return sorted(results, key=lambda result: result.score, reverse=True)


def search(
    hmm: ProfileHMM,
    sequences: Sequence[ProteinSequence],
    aligner: Optional[ProfileAligner] = None,
    workers: int = 1,
) -> List[SearchResult]:
    """Score every sequence against the model and return the ranked hits.

    Args:
        hmm: Model shared read-only by all alignments.
        sequences: Batch to score; every sequence yields exactly one result.
        aligner: Aligner to use, a score-only ViterbiAligner by default.
        workers: Number of threads to spread the alignments over.

    Raises:
        ModelError: if any sequence cannot be scored. The batch is not
            partially returned.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")
    aligner = aligner or ViterbiAligner()

    if workers == 1 or len(sequences) < 2:
        results = [_score_sequence(hmm, aligner, seq) for seq in sequences]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(
                executor.map(lambda seq: _score_sequence(hmm, aligner, seq), sequences)
            )

    return rank_results(results)


@dataclass(frozen=True)
class SearchSummary:
    """Throughput statistics for one search run."""

    num_sequences: int
    total_residues: int
    elapsed_seconds: float

    @property
    def seconds_per_sequence(self) -> float:
        if self.num_sequences == 0:
            return 0.0
        return self.elapsed_seconds / self.num_sequences

    @property
    def residues_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return math.inf if self.total_residues else 0.0
        return self.total_residues / self.elapsed_seconds


class SearchPipeline:
    """Owns a model and an aligner and runs batch searches with them."""

    def __init__(
        self,
        hmm: ProfileHMM,
        aligner: Optional[ProfileAligner] = None,
        workers: int = 1,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.hmm = hmm
        self.aligner = aligner or ViterbiAligner()
        self.workers = workers
        self.last_summary: Optional[SearchSummary] = None

    def run(self, sequences: Sequence[ProteinSequence]) -> List[SearchResult]:
        """Search a batch and record timing in ``last_summary``."""
        LOGGER.info(
            "Searching %d sequences against a model of length %d",
            len(sequences),
            self.hmm.length,
        )
        start = time.perf_counter()
        results = search(self.hmm, sequences, self.aligner, workers=self.workers)
        elapsed = time.perf_counter() - start

        self.last_summary = SearchSummary(
            num_sequences=len(sequences),
            total_residues=sum(len(seq) for seq in sequences),
            elapsed_seconds=elapsed,
        )
        LOGGER.info(
            "Search completed in %.3fs (%.0f residues/s)",
            elapsed,
            self.last_summary.residues_per_second,
        )
        return results


__all__ = [
    "e_value_from_score",
    "rank_results",
    "search",
    "SearchPipeline",
    "SearchSummary",
]
