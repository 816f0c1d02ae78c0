"""Elements of the BN254 scalar field used by the primary curve."""

from __future__ import annotations

from circomfold.errors import ProofError

MODULUS = 21888242871839275222246405745257275088548364400416034343698204186575808495617
"""Order of the BN254 scalar field."""

REPR_SIZE = 32
"""Length in bytes of the canonical little-endian representation."""


def reduce(value: int) -> int:
    """Return ``value`` reduced into the range ``[0, MODULUS)``."""
    return value % MODULUS


def field_from_repr(data: bytes) -> int:
    """Decode a canonical 32-byte little-endian representation into a field element."""
    data = bytes(data)
    if len(data) != REPR_SIZE:
        raise ProofError(
            f"field element representation must be {REPR_SIZE} bytes, got {len(data)}"
        )
    value = int.from_bytes(data, "little")
    if value >= MODULUS:
        raise ProofError("Failed to convert representation to field element")
    return value


def field_to_repr(value: int) -> bytes:
    """Encode a field element as its canonical 32-byte little-endian representation."""
    return reduce(value).to_bytes(REPR_SIZE, "little")


def to_decimal_string(value: int) -> str:
    """Render a field element as a base-10 string of its canonical value."""
    return str(reduce(value))