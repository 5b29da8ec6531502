"""Profile HMM sequence search."""

from .algorithms import (
    MemoryStrategy,
    ProfileHMM,
    ViterbiAligner,
    build_profile_hmm,
    profile_hmm_from_probabilities,
)
from .config import SearchConfig
from .search import SearchPipeline, search
from .types import ProteinSequence, SearchResult, ViterbiResult

__version__ = "0.1.0"

__all__ = [
    "MemoryStrategy",
    "ProfileHMM",
    "ViterbiAligner",
    "build_profile_hmm",
    "profile_hmm_from_probabilities",
    "SearchConfig",
    "SearchPipeline",
    "search",
    "ProteinSequence",
    "SearchResult",
    "ViterbiResult",
]
