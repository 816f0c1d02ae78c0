"""Setup parameters shared by every proof generated for one circuit program."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Union

from circomfold.data import CircuitData, InitializedSetup, UninitializedSetup
from circomfold.errors import ProofError
from circomfold.field import field_from_repr, field_to_repr, reduce

logger = logging.getLogger(__name__)

ROM_PADDING = 2**64 - 1
"""Opcode that fills the unused tail of a ROM."""


@dataclass
class SetupParams:
    """Public parameters, key digests, circuit setup and the opcode of every ROM label.

    ``public_params`` is opaque and takes no part in equality.
    """

    public_params: Any = field(default=b"", compare=False, repr=False)
    vk_digest_primary: int = 0
    vk_digest_secondary: int = 0
    setup_data: Union[InitializedSetup, UninitializedSetup] = field(
        default_factory=UninitializedSetup
    )
    rom_data: dict[str, CircuitData] = field(default_factory=dict)

    def extend_public_inputs(
        self, rom: Sequence[str], initial_nivc_input: Iterable[int]
    ) -> tuple[list[int], list[int]]:
        """Resolve the ROM to opcodes padded to the maximum ROM length.

        Returns the primary public input (the initial input, a ROM index of
        zero, then every opcode) and the padded opcode list.
        """
        opcodes = []
        for label in rom:
            config = self.rom_data.get(label)
            if config is None:
                raise ProofError(f"Opcode config '{label}' not found in rom_data")
            opcodes.append(config.opcode)

        max_length = self.setup_data.max_rom_length
        opcodes = opcodes[:max_length]
        opcodes.extend([ROM_PADDING] * (max_length - len(opcodes)))

        z0_primary = [reduce(value) for value in initial_nivc_input]
        z0_primary.append(0)
        z0_primary.extend(reduce(opcode) for opcode in opcodes)
        logger.debug("z0_primary=%r", z0_primary)
        return z0_primary, opcodes

    def to_dict(self) -> dict[str, Any]:
        """Serialize parameters whose setup data has not been initialized."""
        if not isinstance(self.setup_data, UninitializedSetup):
            raise ProofError("only parameters with uninitialized setup data can be serialized")
        if not isinstance(self.public_params, (bytes, bytearray)):
            raise ProofError("public parameters must be bytes to be serialized")
        return {
            "public_params": list(self.public_params),
            "vk_digest_primary": field_to_repr(self.vk_digest_primary).hex(),
            "vk_digest_secondary": field_to_repr(self.vk_digest_secondary).hex(),
            "setup_data": self.setup_data.to_dict(),
            "rom_data": {label: data.to_dict() for label, data in self.rom_data.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SetupParams:
        try:
            return cls(
                public_params=bytes(data["public_params"]),
                vk_digest_primary=field_from_repr(bytes.fromhex(data["vk_digest_primary"])),
                vk_digest_secondary=field_from_repr(bytes.fromhex(data["vk_digest_secondary"])),
                setup_data=UninitializedSetup.from_dict(data["setup_data"]),
                rom_data={
                    label: CircuitData.from_dict(item)
                    for label, item in data["rom_data"].items()
                },
            )
        except KeyError as exc:
            raise ProofError(f"missing field `{exc.args[0]}`") from None
        except ValueError as exc:
            raise ProofError(str(exc)) from exc