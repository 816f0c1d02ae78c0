"""Programs of circuits run step by step from a ROM of opcodes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from circomfold.circom import CircomCircuit
from circomfold.data import InitializedSetup, UninitializedSetup
from circomfold.errors import ProofError
from circomfold.r1cs import R1CS
from circomfold.witness import WitnessGeneratorType

logger = logging.getLogger(__name__)

DEFAULT_CIRCUIT_INDEX = 2**64 - 2
"""Circuit index of a placeholder circuit that takes no part in a program."""


def _default_generator() -> WitnessGeneratorType:
    return WitnessGeneratorType.from_raw(b"")


@dataclass
class RomCircuit:
    """A circuit placed in a program ROM, with its per-step inputs."""

    circuit: CircomCircuit = field(default_factory=CircomCircuit)
    circuit_index: int = DEFAULT_CIRCUIT_INDEX
    rom_size: int = 0
    nivc_io: Optional[list[int]] = None
    private_input: Optional[dict[str, Any]] = None
    witness_generator_type: WitnessGeneratorType = field(default_factory=_default_generator)

    def arity(self) -> int:
        """Public inputs of the circuit plus the ROM index and every ROM slot."""
        return self.circuit.arity() + 1 + self.rom_size


@dataclass
class Memory:
    """The circuits of a program together with its ROM of opcodes."""

    circuits: list[RomCircuit] = field(default_factory=list)
    rom: list[int] = field(default_factory=list)

    def num_circuits(self) -> int:
        """Number of distinct circuits the program can run."""
        return len(self.circuits)

    def primary_circuit(self, circuit_index: int) -> RomCircuit:
        """An independent copy of the circuit with the given index."""
        original = self.circuits[circuit_index]
        return replace(
            original,
            circuit=replace(
                original.circuit,
                witness=None if original.circuit.witness is None else list(original.circuit.witness),
            ),
            nivc_io=None if original.nivc_io is None else list(original.nivc_io),
            private_input=None if original.private_input is None else dict(original.private_input),
        )

    def initial_circuit_index(self) -> int:
        """Opcode of the first instruction in the ROM."""
        if not self.rom:
            raise ProofError("the ROM is empty")
        return self.rom[0]


def initialize_setup_data(setup_data: UninitializedSetup) -> InitializedSetup:
    """Load every constraint system named by an uninitialized setup."""
    r1cs_list: list[R1CS] = []
    generators: list[WitnessGeneratorType] = []
    for r1cs_type, generator in zip(setup_data.r1cs_types, setup_data.witness_generator_types):
        try:
            r1cs = R1CS.from_type(r1cs_type)
        except OSError as exc:
            raise ProofError(str(exc)) from exc
        r1cs_list.append(r1cs)
        generators.append(generator)
    logger.debug("initialized %d circuits", len(r1cs_list))
    return InitializedSetup(
        r1cs=r1cs_list,
        witness_generator_types=generators,
        max_rom_length=setup_data.max_rom_length,
    )


def initialize_circuit_list(setup_data: InitializedSetup) -> list[RomCircuit]:
    """Build one ROM circuit per loaded constraint system, indexed in order."""
    return [
        RomCircuit(
            circuit=CircomCircuit(r1cs=r1cs, witness=None),
            circuit_index=index,
            rom_size=setup_data.max_rom_length,
            nivc_io=None,
            private_input=None,
            witness_generator_type=generator,
        )
        for index, (r1cs, generator) in enumerate(
            zip(setup_data.r1cs, setup_data.witness_generator_types)
        )
    ]