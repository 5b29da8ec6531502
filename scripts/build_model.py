"""CLI to build the placeholder profile HMM and dump it as YAML."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add the repository root to the Python path
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from profilesearch.algorithms import build_profile_hmm  # pylint: disable=C0413
from profilesearch.utils import save_profile_hmm  # pylint: disable=C0413
from scripts.constants import (  # pylint: disable=C0413
    DEFAULT_HMM_LENGTH,
    MODEL_YAML,
    PRECISION,
)


def main() -> None:
    """Build a placeholder model and write it to YAML."""
    parser = argparse.ArgumentParser(
        description="Write the placeholder profile HMM to a YAML model file."
    )
    parser.add_argument("-l", "--length", type=int, default=DEFAULT_HMM_LENGTH)
    parser.add_argument("-o", "--output", type=Path, default=MODEL_YAML)
    args = parser.parse_args()

    hmm = build_profile_hmm(args.length)
    save_profile_hmm(
        hmm,
        args.output,
        metadata={"source": "placeholder"},
        float_precision=PRECISION,
    )

    print(
        f"Wrote profile HMM with {hmm.length} positions to {args.output}",
        file=sys.stdout,
    )


if __name__ == "__main__":
    main()
