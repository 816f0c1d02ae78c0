"""Exceptions raised while loading circuits and building or checking proofs."""

from __future__ import annotations


class ProofError(Exception):
    """Base class for every error raised by this package."""


class MissingSectionError(ProofError):
    """A required section is absent from a binary circuit file."""

    def __init__(self, section: int | None = None) -> None:
        super().__init__("Missing header section")
        self.section = section


class InvalidCircuitSizeError(ProofError):
    """The requested circuit size has no matching artifacts."""

    def __init__(self, size: int | None = None) -> None:
        super().__init__("Invalid circuit size")
        self.size = size


class InvalidManifestError(ProofError):
    """A manifest could not be used to build circuit inputs."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid manifest: {reason}")
        self.reason = reason


class VerifyFailedError(ProofError):
    """A proof did not verify."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to verify proof: {reason}")
        self.reason = reason