"""Exception types raised by the profile search engine."""


class ProfileSearchError(Exception):
    """Base class for all profilesearch errors."""


class InvalidModelLengthError(ProfileSearchError, ValueError):
    """A profile HMM was requested with fewer than one model position."""


class MalformedModelParametersError(ProfileSearchError, ValueError):
    """Transition or emission tables have inconsistent shapes or bad values."""


class UnrecognizedResidueError(ProfileSearchError, ValueError):
    """A residue outside the amino acid alphabet was seen in strict mode."""


class ModelError(ProfileSearchError, RuntimeError):
    """A batch search failed because a sequence could not be scored."""


__all__ = [
    "ProfileSearchError",
    "InvalidModelLengthError",
    "MalformedModelParametersError",
    "UnrecognizedResidueError",
    "ModelError",
]
