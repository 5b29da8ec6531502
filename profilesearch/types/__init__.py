"""Types for the project."""

from .alphabet import encode_residues, residue_index
from .parameters import (
    AMINO_ACIDS,
    BACKGROUND_FREQUENCIES,
    PROFILE_STATES,
    EmissionParameters,
    ProfileParameters,
    TransitionParameters,
)
from .result import PathStep, SearchResult, ViterbiResult
from .sequence import ProteinSequence


__all__ = [
    "AMINO_ACIDS",
    "BACKGROUND_FREQUENCIES",
    "PROFILE_STATES",
    "EmissionParameters",
    "ProfileParameters",
    "TransitionParameters",
    "PathStep",
    "SearchResult",
    "ViterbiResult",
    "ProteinSequence",
    "encode_residues",
    "residue_index",
]
