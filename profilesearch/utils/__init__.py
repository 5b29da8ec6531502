"""Utility functions for the project."""

from .fasta import load_sequences, read_protein_fasta
from .log import configure_logging
from .report import (
    format_results_table,
    results_to_frame,
    write_results,
    write_results_csv,
)
from .serialization import load_profile_hmm, parameters_to_dict, save_profile_hmm
from .synthetic import synthetic_sequence, synthetic_sequences

__all__ = [
    "load_sequences",
    "read_protein_fasta",
    "configure_logging",
    "format_results_table",
    "results_to_frame",
    "write_results",
    "write_results_csv",
    "load_profile_hmm",
    "parameters_to_dict",
    "save_profile_hmm",
    "synthetic_sequence",
    "synthetic_sequences",
]
