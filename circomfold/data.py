"""Setup, ROM and per-instance input data for folding proofs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from circomfold.errors import ProofError
from circomfold.r1cs import R1CS, R1CSType
from circomfold.witness import WitnessGeneratorType

logger = logging.getLogger(__name__)

MAX_ROM_LENGTH = 100
"""Default maximum number of instructions in a program ROM."""


@dataclass
class FoldInput:
    """Signal values for one circuit, spread evenly over the circuit's folds."""

    value: dict[str, list[Any]] = field(default_factory=dict)

    def split(self, freq: int) -> list[dict[str, list[Any]]]:
        """Split every signal's values into ``freq`` equal consecutive chunks."""
        if freq <= 0:
            raise ProofError(f"cannot split fold inputs into {freq} parts")
        parts: list[dict[str, list[Any]]] = [{} for _ in range(freq)]
        for key, values in self.value.items():
            logger.debug("key: %r, freq: %d, value_len: %d", key, freq, len(values))
            if len(values) % freq:
                raise ProofError(
                    f"fold input {key!r} has {len(values)} values, "
                    f"which do not split evenly into {freq} parts"
                )
            size = len(values) // freq
            if size == 0:
                raise ProofError(f"fold input {key!r} has no values to split")
            for number, part in enumerate(parts):
                part[key] = list(values[number * size:(number + 1) * size])
        return parts

    def to_dict(self) -> dict[str, list[Any]]:
        """Return the flat signal mapping."""
        return {key: list(values) for key, values in self.value.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FoldInput:
        if not isinstance(data, Mapping):
            raise ProofError("fold input must be a JSON object")
        value = {}
        for key, values in data.items():
            if not isinstance(values, list):
                raise ProofError(f"fold input {key!r} must be an array")
            value[key] = list(values)
        return cls(value=value)


@dataclass
class UninitializedSetup:
    """Circuit setup whose constraint systems have not been loaded yet."""

    r1cs_types: list[R1CSType] = field(default_factory=list)
    witness_generator_types: list[WitnessGeneratorType] = field(default_factory=list)
    max_rom_length: int = 0

    @classmethod
    def from_raw_r1cs_types_with_browser_witness(
        cls, r1cs_types: Iterable[bytes]
    ) -> UninitializedSetup:
        """Build a setup from raw R1CS bytes, generating witnesses in the browser."""
        types = [R1CSType.from_raw(data) for data in r1cs_types]
        return cls(
            r1cs_types=types,
            witness_generator_types=[WitnessGeneratorType.browser() for _ in types],
            max_rom_length=MAX_ROM_LENGTH,
        )

    @classmethod
    def from_raw_parts(
        cls, r1cs_types: Iterable[bytes], witness_generator_types: Iterable[bytes]
    ) -> UninitializedSetup:
        """Build a setup from raw R1CS bytes and raw witness graph bytes."""
        return cls(
            r1cs_types=[R1CSType.from_raw(data) for data in r1cs_types],
            witness_generator_types=[
                WitnessGeneratorType.from_raw(data) for data in witness_generator_types
            ],
            max_rom_length=MAX_ROM_LENGTH,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "r1cs_types": [r1cs.to_dict() for r1cs in self.r1cs_types],
            "witness_generator_types": [
                generator.to_dict() for generator in self.witness_generator_types
            ],
            "max_rom_length": self.max_rom_length,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UninitializedSetup:
        try:
            return cls(
                r1cs_types=[R1CSType.from_dict(item) for item in data["r1cs_types"]],
                witness_generator_types=[
                    WitnessGeneratorType.from_dict(item)
                    for item in data["witness_generator_types"]
                ],
                max_rom_length=int(data["max_rom_length"]),
            )
        except KeyError as exc:
            raise ProofError(f"missing field `{exc.args[0]}`") from None
        except ValueError as exc:
            raise ProofError(str(exc)) from exc


@dataclass
class InitializedSetup:
    """Circuit setup with every constraint system loaded for proving."""

    r1cs: list[R1CS] = field(default_factory=list)
    witness_generator_types: list[WitnessGeneratorType] = field(default_factory=list)
    max_rom_length: int = 0


@dataclass(frozen=True)
class CircuitData:
    """Auxiliary data for one ROM instruction: the opcode of its circuit."""

    opcode: int

    def to_dict(self) -> dict[str, int]:
        return {"opcode": self.opcode}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CircuitData:
        try:
            return cls(opcode=int(data["opcode"]))
        except KeyError:
            raise ProofError("missing field `opcode`") from None


@dataclass
class ProofParams:
    """The program logic: the sequence of circuit labels to run."""

    rom: list[str] = field(default_factory=list)


@dataclass
class InstanceParams:
    """Inputs for one proof: the initial public input and the per-step private inputs.

    ``fold_inputs`` holds inputs still to be spread over the ROM; it is ``None``
    once they have been expanded into ``private_inputs``.
    """

    nivc_input: list[int] = field(default_factory=list)
    private_inputs: list[dict[str, Any]] = field(default_factory=list)
    fold_inputs: Optional[dict[str, FoldInput]] = None

    @property
    def is_expanded(self) -> bool:
        return self.fold_inputs is None

    def into_expanded(self, proof_params: ProofParams) -> InstanceParams:
        """Distribute fold inputs over every ROM position that runs their circuit."""
        if self.fold_inputs is None:
            raise ProofError("instance parameters are already expanded")
        rom = proof_params.rom
        if len(self.private_inputs) != len(rom):
            raise ProofError(
                f"{len(self.private_inputs)} private inputs given for a ROM of {len(rom)}"
            )

        usage: dict[str, list[int]] = {}
        for position, circuit in enumerate(rom):
            usage.setdefault(circuit, []).append(position)

        private_inputs = [dict(inputs) for inputs in self.private_inputs]
        for label, fold_input in self.fold_inputs.items():
            positions = usage.get(label)
            if positions is None:
                raise ProofError(f"Circuit label '{label}' not found in rom")
            for position, part in zip(positions, fold_input.split(len(positions))):
                private_inputs[position].update(part)

        return InstanceParams(nivc_input=list(self.nivc_input), private_inputs=private_inputs)