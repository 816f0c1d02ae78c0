"""Locations of the prebuilt circuit artifacts and loading of them from disk."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from circomfold.data import MAX_ROM_LENGTH, UninitializedSetup
from circomfold.errors import InvalidCircuitSizeError, ProofError
from circomfold.r1cs import R1CSType
from circomfold.witness import WitnessGeneratorType

logger = logging.getLogger(__name__)

__all__ = [
    "MAX_ROM_LENGTH",
    "artifact_path",
    "construct_setup_data_from_fs",
    "load_artifact_bytes",
    "load_proving_params_512",
    "wasm_witness_generator_types_512b",
]

CIRCUIT_SIZE_64 = 64
CIRCUIT_SIZE_256 = 256
CIRCUIT_SIZE_512 = 512
PUBLIC_IO_VARS = 11
MAX_STACK_HEIGHT = 12

VERSION_ENV = "WEB_PROVER_CIRCUITS_VERSION"
DEFAULT_CIRCUITS_VERSION = "0.10.0"
ARTIFACTS_ROOT = "proofs/web_proof_circuits"

PLAINTEXT_AUTHENTICATION_NOIR_PROGRAM = "build/plaintext_authentication.json"
NOIR_SETUP_PATH = "build/setup.bytes"
PROVING_PARAMS_512_NAME = "serialized_setup_512b_rom_length_100.bin"

CIRCUIT_NAMES = ("plaintext_authentication", "http_verification", "json_extraction")
_WTNS_NAMES = ("pa.wtns", "hv.wtns", "je.wtns")
_SUPPORTED_SIZES = (CIRCUIT_SIZE_256, CIRCUIT_SIZE_512)


def _version(version: Optional[str]) -> str:
    if version is not None:
        return version
    return os.environ.get(VERSION_ENV, DEFAULT_CIRCUITS_VERSION)


def artifact_path(circuit_size: int, name: str, version: Optional[str] = None) -> str:
    """Path, relative to the workspace root, of an artifact file for a circuit size."""
    return f"{ARTIFACTS_ROOT}/circom-artifacts-{circuit_size}b-v{_version(version)}/{name}"


def load_artifact_bytes(path: Union[str, Path]) -> bytes:
    """Read an artifact file; ``OSError`` is raised when it cannot be read."""
    logger.info("loading artifact=%r", str(path))
    return Path(path).read_bytes()


def load_proving_params_512(version: Optional[str] = None) -> bytes:
    """Read the serialized proving parameters for the 512-byte circuits."""
    return load_artifact_bytes(artifact_path(CIRCUIT_SIZE_512, PROVING_PARAMS_512_NAME, version))


def wasm_witness_generator_types_512b(
    version: Optional[str] = None,
) -> list[WitnessGeneratorType]:
    """Wasm witness generators for the three 512-byte circuits."""
    return [
        WitnessGeneratorType.wasm(
            artifact_path(CIRCUIT_SIZE_512, f"{name}_512b.wasm", version), wtns
        )
        for name, wtns in zip(CIRCUIT_NAMES, _WTNS_NAMES)
    ]


def _load(path: str) -> bytes:
    try:
        return load_artifact_bytes(path)
    except OSError as exc:
        raise ProofError(f"cannot read artifact {path}: {exc}") from exc


def construct_setup_data_from_fs(
    circuit_size: int, version: Optional[str] = None
) -> UninitializedSetup:
    """Load the R1CS and witness graph of every circuit of the given size."""
    if circuit_size not in _SUPPORTED_SIZES:
        raise InvalidCircuitSizeError(circuit_size)
    r1cs_types = [
        R1CSType.from_raw(_load(artifact_path(circuit_size, f"{name}_{circuit_size}b.r1cs", version)))
        for name in CIRCUIT_NAMES
    ]
    witness_generator_types = [
        WitnessGeneratorType.from_raw(
            _load(artifact_path(circuit_size, f"{name}_{circuit_size}b.bin", version))
        )
        for name in CIRCUIT_NAMES
    ]
    return UninitializedSetup(
        r1cs_types=r1cs_types,
        witness_generator_types=witness_generator_types,
        max_rom_length=MAX_ROM_LENGTH,
    )