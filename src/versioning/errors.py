"""Errors raised while resolving capabilities into manifest versions."""


class ResolutionError(ValueError):
    """Base class for failures that make a manifest update impossible."""


class DataIntegrityError(ResolutionError):
    """Raised when a required capability is missing from every applicable profile."""

    def __init__(self, capability: str, profiles=None):
        self.capability = capability
        self.profiles = list(profiles or [])
        where = ", ".join(self.profiles) or "any profile"
        super().__init__(f"Capability '{capability}' is not defined in {where}")


class EmptyApplicabilityError(ResolutionError):
    """Raised when no profile is left to resolve against."""


class InputContractViolation(ResolutionError):
    """Raised when the resolver is called with an empty descriptor list."""


class InvalidVersionRangeError(ResolutionError):
    """Raised when a host version range cannot be parsed."""


class ProfileLoadError(ResolutionError):
    """Raised when a custom profile file is malformed."""
