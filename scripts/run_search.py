#!/usr/bin/env python3
"""Search protein sequences against a profile HMM and report the ranked hits."""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

# Ensure repository modules are importable when invoked as a script
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from profilesearch.algorithms import (  # pylint: disable=C0413
    MemoryStrategy,
    ViterbiAligner,
    build_profile_hmm,
)
from profilesearch.config import SearchConfig  # pylint: disable=C0413
from profilesearch.search import SearchPipeline  # pylint: disable=C0413
from profilesearch.utils import (  # pylint: disable=C0413
    configure_logging,
    format_results_table,
    load_profile_hmm,
    load_sequences,
    write_results,
    write_results_csv,
)
from scripts.constants import (  # pylint: disable=C0413
    DEFAULT_HMM_LENGTH,
    DEFAULT_INPUT_SIZE,
    RESULTS_FILE,
    SEQUENCE_FASTA,
    TOP_RESULTS,
)


def parse_args(argv: Optional[List[str]] = None) -> SearchConfig:
    """Parse command-line arguments into a SearchConfig."""
    parser = argparse.ArgumentParser(
        description="Search protein sequences against a profile HMM."
    )
    parser.add_argument(
        "input_size",
        nargs="?",
        type=int,
        default=DEFAULT_INPUT_SIZE,
        help="Maximum number of sequences to search.",
    )
    parser.add_argument(
        "hmm_length",
        nargs="?",
        type=int,
        default=DEFAULT_HMM_LENGTH,
        help="Length of the placeholder model (ignored with --model).",
    )
    parser.add_argument(
        "sequence_file",
        nargs="?",
        type=Path,
        default=SEQUENCE_FASTA,
        help="FASTA file; synthetic sequences are used if it does not exist.",
    )
    parser.add_argument(
        "-m", "--model", type=Path, default=None, help="YAML model file to load."
    )
    parser.add_argument(
        "--traceback",
        action="store_true",
        help="Keep the full DP table so alignment paths can be recovered.",
    )
    parser.add_argument(
        "-w", "--workers", type=int, default=1, help="Threads used for scoring."
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on residues outside the 20-letter amino acid alphabet.",
    )
    parser.add_argument(
        "-o", "--output", type=Path, default=RESULTS_FILE, help="Results file."
    )
    parser.add_argument("--csv", type=Path, default=None, help="Optional CSV output.")
    parser.add_argument(
        "--top", type=int, default=TOP_RESULTS, help="Number of hits to print."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress.")
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    return SearchConfig(
        model_length=args.hmm_length,
        max_sequences=args.input_size,
        sequence_file=args.sequence_file,
        model_file=args.model,
        strategy=(
            MemoryStrategy.TRACEBACK if args.traceback else MemoryStrategy.SCORE_ONLY
        ),
        workers=args.workers,
        strict_residues=args.strict,
        top=args.top,
        results_file=args.output,
        csv_file=args.csv,
    )


def run(config: SearchConfig) -> None:
    """Run one search as described by ``config`` and print a report."""
    print("Profile HMM Protein Sequence Search")
    print(f"Input size: {config.max_sequences} sequences")
    if config.model_file is not None:
        print(f"Model file: {config.model_file}")
    else:
        print(f"HMM length: {config.model_length} states")
    print(f"Sequence file: {config.sequence_file}")
    print()

    start = time.perf_counter()
    if config.model_file is not None:
        hmm = load_profile_hmm(config.model_file)
    else:
        hmm = build_profile_hmm(config.model_length)
    print(f"HMM initialized in {time.perf_counter() - start:.6f}s")

    start = time.perf_counter()
    sequences = load_sequences(config.sequence_file, config.max_sequences)
    print(f"Read {len(sequences)} sequences in {time.perf_counter() - start:.6f}s")

    aligner = ViterbiAligner(
        strategy=config.strategy, strict_residues=config.strict_residues
    )
    pipeline = SearchPipeline(hmm, aligner=aligner, workers=config.workers)
    results = pipeline.run(sequences)
    summary = pipeline.last_summary

    print(f"Search completed in {summary.elapsed_seconds:.6f}s")
    print(f"Processed {summary.num_sequences} sequences")
    print(f"Average time per sequence: {summary.seconds_per_sequence:.6f}s")
    print()

    print(f"Top {config.top} results:")
    print(format_results_table(results, top=config.top))

    write_results(
        results,
        config.results_file,
        header={
            "Input size": f"{config.max_sequences} sequences",
            "HMM length": f"{hmm.length} states",
            "Search time": f"{summary.elapsed_seconds:.6f}s",
        },
    )
    print(f"\nResults written to {config.results_file}")
    if config.csv_file is not None:
        write_results_csv(results, config.csv_file)
        print(f"CSV written to {config.csv_file}")

    print("\nPerformance Statistics:")
    print(f"Total residues processed: {summary.total_residues}")
    print(f"Throughput: {summary.residues_per_second:.0f} residues/second")


def main(argv: Optional[List[str]] = None) -> None:
    run(parse_args(argv))


if __name__ == "__main__":
    main()
