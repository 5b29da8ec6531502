"""Constants for the project."""

from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent

# ============================================================================
# Inputs
# ============================================================================
SEQUENCE_FASTA = Path("sequences.fasta")

# ============================================================================
# Results
# ============================================================================
RESULTS_FOLDER = PROJECT_ROOT / "results"
MODEL_YAML = RESULTS_FOLDER / "models" / "profile_hmm.yaml"
RESULTS_FILE = Path("hmmer_results.txt")

# ============================================================================
# Search parameters
# ============================================================================
DEFAULT_INPUT_SIZE = 1000
DEFAULT_HMM_LENGTH = 50
TOP_RESULTS = 10
PRECISION = 6
