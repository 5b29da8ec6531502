"""Configuration dataclasses for the search runner.

Bundles the knobs of one search run so they can be validated once and passed
around as a single value.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from profilesearch.algorithms.viterbi import MemoryStrategy


@dataclass(frozen=True)
class SearchConfig:
    """Configuration for a batch profile search.

    Attributes:
        model_length: Positions in the placeholder model (ignored with model_file).
        max_sequences: Maximum number of sequences read or generated.
        sequence_file: FASTA file with the candidate sequences.
        model_file: Optional YAML model replacing the placeholder model.
        strategy: Whether alignments keep the full table for traceback.
        workers: Threads used to score the batch.
        strict_residues: Reject residues outside the amino acid alphabet.
        top: Number of hits printed to the console.
        results_file: Tab-separated output path.
        csv_file: Optional CSV output path.
    """

    model_length: int = 50
    max_sequences: int = 1000
    sequence_file: Path = Path("sequences.fasta")
    model_file: Optional[Path] = None
    strategy: MemoryStrategy = MemoryStrategy.SCORE_ONLY
    workers: int = 1
    strict_residues: bool = False
    top: int = 10
    results_file: Path = Path("hmmer_results.txt")
    csv_file: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.model_length < 1:
            raise ValueError(f"model_length must be at least 1, got {self.model_length}")
        if self.max_sequences < 0:
            raise ValueError(
                f"max_sequences must be non-negative, got {self.max_sequences}"
            )
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.top < 0:
            raise ValueError(f"top must be non-negative, got {self.top}")


__all__ = ["SearchConfig"]
