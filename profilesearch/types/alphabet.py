"""Residue to alphabet-index mapping for the amino acid alphabet."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, List, Mapping

from profilesearch.errors import UnrecognizedResidueError
from profilesearch.types.parameters import AMINO_ACIDS

FALLBACK_INDEX = 0

RESIDUE_INDEX: Mapping[str, int] = MappingProxyType(
    {residue: index for index, residue in enumerate(AMINO_ACIDS)}
)


def residue_index(residue: str, strict: bool = False) -> int:
    """Return the alphabet index of a residue.

    Lookup folds ASCII case only. Residues outside the alphabet map to index 0
    unless ``strict`` is set, in which case ``UnrecognizedResidueError`` is raised.
    """
    folded = residue.upper() if residue.isascii() else residue
    index = RESIDUE_INDEX.get(folded)
    if index is not None:
        return index
    if strict:
        raise UnrecognizedResidueError(
            f"residue must be one of {AMINO_ACIDS}, got '{residue}'"
        )
    return FALLBACK_INDEX


def encode_residues(residues: Iterable[str], strict: bool = False) -> List[int]:
    """Map every residue of a sequence to its alphabet index."""
    return [residue_index(residue, strict=strict) for residue in residues]


__all__ = ["FALLBACK_INDEX", "RESIDUE_INDEX", "residue_index", "encode_residues"]
