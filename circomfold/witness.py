"""Loading and generating circuit witnesses in the circom ``.wtns`` format."""

from __future__ import annotations

import enum
import io
import logging
import struct
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Union

from circomfold.errors import ProofError
from circomfold.field import REPR_SIZE, field_from_repr

logger = logging.getLogger(__name__)

WTNS_MAGIC = b"wtns"
MAX_WTNS_VERSION = 2
WTNS_SECTIONS = 2
HEADER_SECTION_SIZE = 4 + REPR_SIZE + 4
INPUT_FILE_NAME = "circom_input.json"
WITNESS_SCRIPT_NAME = "generate_witness.js"


class WitnessGeneratorKind(enum.Enum):
    """The ways a witness can be produced for a circuit."""

    BROWSER = "browser"
    WASM = "wasm"
    PATH = "Path"
    RAW = "Raw"


@dataclass(frozen=True)
class WitnessGeneratorType:
    """How to produce a witness: in a browser, from a wasm binary, or from a graph."""

    kind: WitnessGeneratorKind
    path: str | None = None
    wtns_path: str | None = None
    raw: bytes | None = None

    def __post_init__(self) -> None:
        kind = self.kind
        if kind is WitnessGeneratorKind.WASM:
            if self.path is None or self.wtns_path is None:
                raise ValueError("a wasm witness generator needs path and wtns_path")
        elif kind is WitnessGeneratorKind.PATH:
            if self.path is None:
                raise ValueError("a path witness generator needs a path")
        elif kind is WitnessGeneratorKind.RAW:
            if self.raw is None:
                raise ValueError("a raw witness generator needs raw bytes")

    @classmethod
    def browser(cls) -> WitnessGeneratorType:
        return cls(WitnessGeneratorKind.BROWSER)

    @classmethod
    def wasm(cls, path: str, wtns_path: str) -> WitnessGeneratorType:
        return cls(WitnessGeneratorKind.WASM, path=str(path), wtns_path=str(wtns_path))

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> WitnessGeneratorType:
        return cls(WitnessGeneratorKind.PATH, path=str(path))

    @classmethod
    def from_raw(cls, data: bytes) -> WitnessGeneratorType:
        return cls(WitnessGeneratorKind.RAW, raw=bytes(data))

    def to_dict(self) -> Union[str, dict]:
        """Serialize in the externally tagged form used by setup files."""
        kind = self.kind
        if kind is WitnessGeneratorKind.BROWSER:
            return kind.value
        if kind is WitnessGeneratorKind.WASM:
            return {kind.value: {"path": self.path, "wtns_path": self.wtns_path}}
        if kind is WitnessGeneratorKind.PATH:
            return {kind.value: self.path}
        return {kind.value: list(self.raw)}

    @classmethod
    def from_dict(cls, data: Union[str, dict]) -> WitnessGeneratorType:
        if data == WitnessGeneratorKind.BROWSER.value:
            return cls.browser()
        if not isinstance(data, dict) or len(data) != 1:
            raise ValueError(f"invalid witness generator type: {data!r}")
        (tag, value), = data.items()
        try:
            kind = WitnessGeneratorKind(tag)
        except ValueError:
            raise ValueError(f"unknown witness generator type {tag!r}") from None
        if kind is WitnessGeneratorKind.WASM:
            return cls.wasm(value["path"], value["wtns_path"])
        if kind is WitnessGeneratorKind.PATH:
            return cls.from_path(value)
        if kind is WitnessGeneratorKind.RAW:
            return cls.from_raw(bytes(value))
        raise ValueError(f"invalid witness generator type: {data!r}")


def _read_exact(reader: BinaryIO, size: int) -> bytes:
    data = reader.read(size)
    if len(data) != size:
        raise ProofError("unexpected end of witness data")
    return data


def _read_u32(reader: BinaryIO) -> int:
    return struct.unpack("<I", _read_exact(reader, 4))[0]


def _read_u64(reader: BinaryIO) -> int:
    return struct.unpack("<Q", _read_exact(reader, 8))[0]


def _expect(condition: bool, message: str) -> None:
    if not condition:
        raise ProofError(message)


def load_witness_from_bin_reader(reader: BinaryIO) -> list[int]:
    """Read the field elements of a ``.wtns`` witness from a binary stream."""
    _expect(_read_exact(reader, 4) == WTNS_MAGIC, "not a witness file: bad magic number")
    version = _read_u32(reader)
    _expect(version <= MAX_WTNS_VERSION, f"unsupported witness version {version}")
    num_sections = _read_u32(reader)
    _expect(num_sections == WTNS_SECTIONS, f"expected 2 sections, found {num_sections}")

    sec_type = _read_u32(reader)
    _expect(sec_type == 1, f"expected header section, found section {sec_type}")
    sec_size = _read_u64(reader)
    _expect(sec_size == HEADER_SECTION_SIZE, f"bad header section size {sec_size}")
    field_size = _read_u32(reader)
    _expect(field_size == REPR_SIZE, f"unsupported field size {field_size}")
    _read_exact(reader, field_size)
    witness_len = _read_u32(reader)

    sec_type = _read_u32(reader)
    _expect(sec_type == 2, f"expected witness section, found section {sec_type}")
    sec_size = _read_u64(reader)
    _expect(
        sec_size == witness_len * field_size,
        f"witness section size {sec_size} does not match {witness_len} elements",
    )
    return [field_from_repr(_read_exact(reader, REPR_SIZE)) for _ in range(witness_len)]


def load_witness_from_bytes(data: bytes) -> list[int]:
    """Read the field elements of a ``.wtns`` witness held in memory."""
    return load_witness_from_bin_reader(io.BytesIO(bytes(data)))


def generate_witness_from_wasm_file(
    input_json: str,
    wasm_path: Union[str, Path],
    wtns_path: Union[str, Path],
) -> list[int]:
    """Run the circuit's node witness script on ``input_json`` and load the result."""
    wasm_path = Path(wasm_path)
    wtns_path = Path(wtns_path)
    input_path = Path.cwd() / INPUT_FILE_NAME
    witness_js = wasm_path.parent / WITNESS_SCRIPT_NAME
    try:
        input_path.write_text(input_json, encoding="utf-8")
    except OSError as exc:
        raise ProofError(str(exc)) from exc

    try:
        try:
            output = subprocess.run(
                ["node", str(witness_js), str(wasm_path), str(input_path), str(wtns_path)],
                capture_output=True,
                check=False,
            )
        except OSError as exc:
            raise ProofError(f"failed to execute process: {exc}") from exc
        if output.stdout or output.stderr:
            try:
                logger.debug("%s", output.stdout.decode("utf-8"))
                logger.error("%s", output.stderr.decode("utf-8"))
            except UnicodeDecodeError as exc:
                raise ProofError(str(exc)) from exc
    finally:
        input_path.unlink(missing_ok=True)

    try:
        with open(wtns_path, "rb") as reader:
            witness = load_witness_from_bin_reader(reader)
    except OSError as exc:
        raise ProofError(f"unable to open witness file {wtns_path}: {exc}") from exc
    finally:
        wtns_path.unlink(missing_ok=True)
    return witness


def generate_witness_from_generator_type(
    input_json: str, witness_generator_type: WitnessGeneratorType
) -> list[int]:
    """Produce a witness for ``input_json`` with the given generator."""
    kind = witness_generator_type.kind
    if kind is WitnessGeneratorKind.BROWSER:
        raise ProofError("browser type witness generation cannot be generated in process")
    if kind is WitnessGeneratorKind.WASM:
        return generate_witness_from_wasm_file(
            input_json, witness_generator_type.path, witness_generator_type.wtns_path
        )
    if kind is WitnessGeneratorKind.PATH:
        try:
            Path(witness_generator_type.path).read_bytes()
        except OSError as exc:
            raise ProofError(str(exc)) from exc
    raise ProofError("graph witness calculation is not available in this environment")