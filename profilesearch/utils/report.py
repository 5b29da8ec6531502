"""Rendering and persistence of ranked search results."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from profilesearch.types import SearchResult

RESULT_COLUMNS: List[str] = ["sequence", "score", "e_value", "start", "end"]
NAME_WIDTH = 20


def results_to_frame(results: Iterable[SearchResult]) -> pd.DataFrame:
    """Return the results as a DataFrame, one row per hit, in ranked order."""
    rows = [
        {
            "sequence": result.sequence_id,
            "score": result.score,
            "e_value": result.e_value,
            "start": result.alignment_start,
            "end": result.alignment_end,
        }
        for result in results
    ]
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def _display_name(name: str) -> str:
    if len(name) > NAME_WIDTH:
        return name[: NAME_WIDTH - 3]
    return name


def format_results_table(results: Sequence[SearchResult], top: int = 10) -> str:
    """Return a fixed-width table of the ``top`` best hits."""
    lines = [
        f"{'Sequence':<20} {'Score':<12} {'E-value':<12} {'Start':<10} {'End':<10}",
        "-" * 70,
    ]
    for result in results[:top]:
        score = f"{result.score:.2f}"
        e_value = f"{result.e_value:.2e}"
        lines.append(
            f"{_display_name(result.sequence_id):<20} {score:<12} {e_value:<12} "
            f"{result.alignment_start:<10} {result.alignment_end:<10}"
        )
    return "\n".join(lines)


def write_results(
    results: Iterable[SearchResult],
    path: Path,
    header: Optional[Mapping[str, object]] = None,
) -> None:
    """Write results as tab-separated rows, after optional ``key: value`` lines."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as handle:
        if header:
            handle.write("Profile HMM Search Results\n")
            for key, value in header.items():
                handle.write(f"{key}: {value}\n")
            handle.write("\n")
        for result in results:
            handle.write(
                f"{result.sequence_id}\t{result.score:.2f}\t{result.e_value:.2e}\t"
                f"{result.alignment_start}\t{result.alignment_end}\n"
            )


def write_results_csv(results: Iterable[SearchResult], path: Path) -> None:
    """Write results to CSV with a header row."""
    path.parent.mkdir(parents=True, exist_ok=True)
    results_to_frame(results).to_csv(path, index=False)


__all__ = [
    "RESULT_COLUMNS",
    "results_to_frame",
    "format_results_table",
    "write_results",
    "write_results_csv",
]
