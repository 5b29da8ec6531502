"""Shared interfaces for profile alignment algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod

from profilesearch.algorithms.hmm import ProfileHMM
from profilesearch.types import ProteinSequence, ViterbiResult


class ProfileAligner(ABC):
    """Abstract base class for sequence-to-profile alignment algorithms."""

    @abstractmethod
    def align(self, hmm: ProfileHMM, sequence: ProteinSequence) -> ViterbiResult:
        """Align a sequence against the provided profile HMM."""
        raise NotImplementedError

    def score(self, hmm: ProfileHMM, sequence: ProteinSequence) -> float:
        """Return only the best-path score for a sequence."""
        return self.align(hmm, sequence).score


__all__ = ["ProfileAligner"]
