"""Sequence types."""

from dataclasses import dataclass
from typing import List, Optional

from profilesearch.types.alphabet import encode_residues


@dataclass(frozen=True)
class ProteinSequence:
    """Protein sequence with an identifier and optional description."""

    identifier: str
    residues: str
    description: Optional[str] = None

    def __post_init__(self) -> None:
        # Drop embedded whitespace so wrapped record lines join cleanly
        object.__setattr__(self, "residues", "".join(self.residues.split()))

    def __len__(self) -> int:
        return len(self.residues)

    def __str__(self) -> str:
        class_name = self.__class__.__name__
        return (
            f"{class_name} (\n"
            f"   id: {self.identifier} (length: {len(self)})\n"
            f"   description: {self.description}\n"
            f"   residues: {self.residues}\n"
            f")"
        )

    def encode(self, strict: bool = False) -> List[int]:
        """Return the residues as alphabet indices."""
        return encode_residues(self.residues, strict=strict)


__all__ = ["ProteinSequence"]
