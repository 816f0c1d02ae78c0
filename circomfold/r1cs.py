"""Reading of the binary R1CS constraint-system format written by circom."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Union

from circomfold.errors import MissingSectionError, ProofError
from circomfold.field import REPR_SIZE, field_from_repr

MAGIC = b"r1cs"
VERSION = 1
HEADER_SECTION = 1
CONSTRAINT_SECTION = 2
WIRE2LABEL_SECTION = 3

LinearTerm = tuple[int, int]
Constraint = tuple[list[LinearTerm], list[LinearTerm], list[LinearTerm]]


@dataclass
class Header:
    """The header section of an R1CS file."""

    field_size: int = 0
    prime_size: bytes = b""
    n_wires: int = 0
    n_pub_out: int = 0
    n_pub_in: int = 0
    n_prv_in: int = 0
    n_labels: int = 0
    n_constraints: int = 0


@dataclass
class R1CS:
    """A rank-1 constraint system with its variable counts."""

    num_private_inputs: int = 0
    num_public_inputs: int = 0
    num_public_outputs: int = 0
    num_inputs: int = 0
    num_aux: int = 0
    num_variables: int = 0
    constraints: list[Constraint] = field(default_factory=list)

    @classmethod
    def from_bytes(cls, data: bytes) -> R1CS:
        """Parse an R1CS from the bytes of a file."""
        return read_r1cs(io.BytesIO(bytes(data)))

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> R1CS:
        """Parse an R1CS from a file on disk."""
        with open(path, "rb") as stream:
            return read_r1cs(stream)

    @classmethod
    def from_type(cls, r1cs_type: R1CSType) -> R1CS:
        """Parse an R1CS from either a file path or raw bytes."""
        if r1cs_type.file is not None:
            return cls.from_path(r1cs_type.file)
        return cls.from_bytes(r1cs_type.raw)


@dataclass(frozen=True)
class R1CSType:
    """Where an R1CS comes from: a file path or raw bytes, exactly one of them."""

    file: Path | None = None
    raw: bytes | None = None

    def __post_init__(self) -> None:
        if (self.file is None) == (self.raw is None):
            raise ValueError("exactly one of file or raw must be given")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> R1CSType:
        return cls(file=Path(path))

    @classmethod
    def from_raw(cls, data: bytes) -> R1CSType:
        return cls(raw=bytes(data))

    def to_dict(self) -> dict:
        """Serialize as ``{"file": path}`` or ``{"raw": [bytes...]}``."""
        if self.file is not None:
            return {"file": str(self.file)}
        return {"raw": list(self.raw)}

    @classmethod
    def from_dict(cls, data: dict) -> R1CSType:
        if len(data) != 1:
            raise ValueError(f"expected exactly one R1CS type key, got {sorted(data)}")
        if "file" in data:
            return cls.from_file(data["file"])
        if "raw" in data:
            return cls.from_raw(bytes(data["raw"]))
        raise ValueError(f"unknown R1CS type {next(iter(data))!r}")


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise ProofError("unexpected end of R1CS data")
    return data


def _read_u32(stream: BinaryIO) -> int:
    return struct.unpack("<I", _read_exact(stream, 4))[0]


def _read_u64(stream: BinaryIO) -> int:
    return struct.unpack("<Q", _read_exact(stream, 8))[0]


def _read_header(stream: BinaryIO, size: int) -> Header:
    field_size = _read_u32(stream)
    prime_size = _read_exact(stream, field_size)
    if size != 32 + field_size:
        raise ProofError(f"header section size {size} does not match field size {field_size}")
    return Header(
        field_size=field_size,
        prime_size=prime_size,
        n_wires=_read_u32(stream),
        n_pub_out=_read_u32(stream),
        n_pub_in=_read_u32(stream),
        n_prv_in=_read_u32(stream),
        n_labels=_read_u64(stream),
        n_constraints=_read_u32(stream),
    )


def _read_linear_combination(stream: BinaryIO) -> list[LinearTerm]:
    count = _read_u32(stream)
    return [
        (_read_u32(stream), field_from_repr(_read_exact(stream, REPR_SIZE)))
        for _ in range(count)
    ]


def _read_constraints(stream: BinaryIO, header: Header) -> list[Constraint]:
    return [
        (
            _read_linear_combination(stream),
            _read_linear_combination(stream),
            _read_linear_combination(stream),
        )
        for _ in range(header.n_constraints)
    ]


def read_r1cs(stream: BinaryIO) -> R1CS:
    """Read an R1CS from a seekable binary stream."""
    if _read_exact(stream, 4) != MAGIC:
        raise ProofError("not an R1CS file: bad magic number")
    version = _read_u32(stream)
    if version != VERSION:
        raise ProofError(f"unsupported R1CS version {version}")

    num_sections = _read_u32(stream)
    offsets: dict[int, int] = {}
    sizes: dict[int, int] = {}
    for _ in range(num_sections):
        section_type = _read_u32(stream)
        section_size = _read_u64(stream)
        offsets[section_type] = stream.tell()
        sizes[section_type] = section_size
        stream.seek(section_size, io.SEEK_CUR)

    def seek_section(section: int) -> None:
        if section not in offsets:
            raise MissingSectionError(section)
        stream.seek(offsets[section])

    seek_section(HEADER_SECTION)
    header = _read_header(stream, sizes[HEADER_SECTION])
    if header.field_size != REPR_SIZE:
        raise ProofError(f"unsupported field size {header.field_size}")

    seek_section(CONSTRAINT_SECTION)
    constraints = _read_constraints(stream, header)

    seek_section(WIRE2LABEL_SECTION)

    num_inputs = 1 + header.n_pub_in + header.n_pub_out
    num_aux = header.n_wires - num_inputs
    if num_aux < 0:
        raise ProofError(
            f"wire count {header.n_wires} is smaller than the input count {num_inputs}"
        )
    return R1CS(
        num_private_inputs=header.n_prv_in,
        num_public_inputs=header.n_pub_in,
        num_public_outputs=header.n_pub_out,
        num_inputs=num_inputs,
        num_aux=num_aux,
        num_variables=header.n_wires,
        constraints=constraints,
    )