"""Functions for working with FASTA files."""

import io
import logging
from pathlib import Path
from typing import List, Optional, Union

import skbio.io
from skbio import Sequence
from skbio.io import FASTAFormatError

from profilesearch.types import ProteinSequence
from .synthetic import synthetic_sequences

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


def protein_sequence_from_skbio(record: Sequence) -> ProteinSequence:
    """Convert a scikit-bio record to a ProteinSequence."""
    metadata = getattr(record, "metadata", {}) or {}
    identifier = metadata.get("id") or ""
    description = metadata.get("description") or None
    residues = b"".join(record.values).decode()

    return ProteinSequence(
        identifier=identifier,
        residues=residues,
        description=description,
    )


def _record_lines(file_path: PathLike) -> List[str]:
    """Return the FASTA lines of every record that carries residues.

    Blank lines, text before the first header and headers with no sequence
    lines are dropped, so scikit-bio only sees well-formed records.
    """
    kept: List[str] = []
    header: Optional[str] = None
    with open(file_path, "r", encoding="utf-8") as handle:
        for raw in handle:
            line = raw.strip()
            if not line:
                continue
            if line.startswith(">"):
                if header is not None:
                    LOGGER.debug("Skipping empty record '%s'", header[1:])
                header = line
            elif header is not None:
                kept.append(header)
                header = None
                kept.append(line)
            elif kept:
                kept.append(line)
    if header is not None:
        LOGGER.debug("Skipping empty record '%s'", header[1:])
    return kept


def read_protein_fasta(
    file_path: PathLike, max_sequences: Optional[int] = None
) -> List[ProteinSequence]:
    """Read a FASTA file and return a list of ProteinSequence.

    Records without residues and text before the first header are skipped.
    Reading stops once ``max_sequences`` records have been collected.
    """
    sequences: List[ProteinSequence] = []
    if max_sequences is not None and max_sequences <= 0:
        return sequences
    lines = _record_lines(file_path)
    if not lines:
        return sequences

    text = io.StringIO("\n".join(lines) + "\n")
    for record in skbio.io.read(text, format="fasta"):
        sequences.append(protein_sequence_from_skbio(record))
        if max_sequences is not None and len(sequences) >= max_sequences:
            break
    return sequences


def load_sequences(
    file_path: PathLike, max_sequences: int, allow_synthetic: bool = True
) -> List[ProteinSequence]:
    """Read up to ``max_sequences`` sequences, falling back to synthetic ones.

    When the file is missing or holds no usable records, ``max_sequences``
    synthetic sequences are generated instead and a warning is logged. With
    ``allow_synthetic=False`` those conditions raise.
    """
    path = Path(file_path)
    if not path.exists():
        if not allow_synthetic:
            raise FileNotFoundError(f"Sequence file not found: {path}")
        LOGGER.warning(
            "Sequence file %s not found; generating %d synthetic protein sequences",
            path,
            max_sequences,
        )
        return synthetic_sequences(max_sequences)

    try:
        sequences = read_protein_fasta(path, max_sequences=max_sequences)
    except FASTAFormatError as exc:
        if not allow_synthetic:
            raise ValueError(f"No well-formed FASTA records in {path}") from exc
        LOGGER.warning(
            "Could not parse %s (%s); generating %d synthetic protein sequences",
            path,
            exc,
            max_sequences,
        )
        return synthetic_sequences(max_sequences)

    if not sequences and max_sequences > 0:
        if not allow_synthetic:
            raise ValueError(f"No sequences found in {path}")
        LOGGER.warning(
            "No sequences in %s; generating %d synthetic protein sequences",
            path,
            max_sequences,
        )
        return synthetic_sequences(max_sequences)

    LOGGER.info("Read %d sequences from %s", len(sequences), path)
    return sequences


__all__ = ["read_protein_fasta", "load_sequences"]
