"""Deterministic synthetic protein sequences for benchmarking."""

from typing import List, Optional

from profilesearch.types import AMINO_ACIDS, ProteinSequence

BASE_LENGTH = 50
LENGTH_SPREAD = 200


def synthetic_sequence(index: int, length: Optional[int] = None) -> ProteinSequence:
    """Return synthetic sequence number ``index``.

    Residue j is ``AMINO_ACIDS[(17 * index + 31 * j) % 20]``; the default length
    cycles through 50..249 with the index.
    """
    if length is None:
        length = BASE_LENGTH + index % LENGTH_SPREAD
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")

    residues = "".join(
        AMINO_ACIDS[(index * 17 + j * 31) % len(AMINO_ACIDS)] for j in range(length)
    )
    return ProteinSequence(
        identifier=f"synthetic_seq_{index}",
        residues=residues,
        description="synthetic",
    )


def synthetic_sequences(count: int) -> List[ProteinSequence]:
    """Generate ``count`` synthetic sequences with varying lengths."""
    return [synthetic_sequence(i) for i in range(count)]


__all__ = ["synthetic_sequence", "synthetic_sequences"]
