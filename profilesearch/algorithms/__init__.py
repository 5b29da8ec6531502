"""Algorithms for the project."""

from .base import ProfileAligner
from .builder import build_profile_hmm, profile_hmm_from_probabilities
from .hmm import ProfileHMM
from .viterbi import MemoryStrategy, ViterbiAligner


__all__ = [
    "ProfileAligner",
    "ProfileHMM",
    "MemoryStrategy",
    "ViterbiAligner",
    "build_profile_hmm",
    "profile_hmm_from_probabilities",
]
