"""Serialization utilities for profile HMM parameters (load and save)."""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from profilesearch.algorithms.builder import profile_hmm_from_probabilities
from profilesearch.algorithms.hmm import ProfileHMM
from profilesearch.errors import MalformedModelParametersError
from profilesearch.types.parameters import AMINO_ACIDS, ProfileParameters


def _convert_values(value: Any, precision: int | None) -> Any:
    """
    Recursively convert dataclasses/dicts/tuples to plain YAML types and
    optionally round floats.
    """
    if is_dataclass(value):
        return _convert_values(asdict(value), precision)
    if isinstance(value, dict):
        return {key: _convert_values(val, precision) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_convert_values(item, precision) for item in value]
    if isinstance(value, float) and precision is not None:
        return round(value, precision)
    return value


def parameters_to_dict(
    params: ProfileParameters, float_precision: int | None = None
) -> Dict[str, Any]:
    """
    Convert ProfileParameters into a plain dictionary suitable for YAML.
    """
    return _convert_values(params, float_precision)


def save_profile_hmm(
    hmm: ProfileHMM,
    yaml_path: Path,
    metadata: Optional[Mapping[str, Any]] = None,
    float_precision: int | None = None,
) -> None:
    """Write the model's probability tables to a YAML file."""
    payload = {
        "metadata": {
            "length": hmm.length,
            "alphabet": AMINO_ACIDS,
            **dict(metadata or {}),
        },
        "parameters": parameters_to_dict(hmm.params, float_precision),
    }
    yaml_path.parent.mkdir(parents=True, exist_ok=True)
    with yaml_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(payload, handle, sort_keys=False)


def load_profile_hmm(yaml_path: Path, validate: bool = False) -> ProfileHMM:
    """Load ProfileHMM parameters from a YAML file."""
    with yaml_path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle)

    if not isinstance(payload, dict):
        raise MalformedModelParametersError(f"{yaml_path} does not hold a model")

    params_dict = payload.get("parameters", payload)
    try:
        transitions = params_dict["transitions"]
        emissions = params_dict["emissions"]
        match, insert = emissions["match"], emissions["insert"]
    except (KeyError, TypeError) as exc:
        raise MalformedModelParametersError(
            f"{yaml_path} is missing model parameters: {exc}"
        ) from exc

    return profile_hmm_from_probabilities(
        transitions=transitions,
        match_emissions=match,
        insert_emissions=insert,
        validate=validate,
    )


__all__ = ["parameters_to_dict", "save_profile_hmm", "load_profile_hmm"]
