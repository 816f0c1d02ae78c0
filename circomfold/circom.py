"""Circuit inputs, circuit JSON descriptions and circuits backed by an R1CS."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from circomfold.errors import ProofError
from circomfold.r1cs import R1CS


@dataclass
class CircomInput:
    """Input for a circom circuit: the step inputs plus any named extra signals."""

    step_in: list[str]
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the flat mapping the witness generators read."""
        return {"step_in": list(self.step_in), **self.extra}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CircomInput:
        if not isinstance(data, dict):
            raise ProofError("circuit input must be a JSON object")
        extra = dict(data)
        if "step_in" not in extra:
            raise ProofError("missing field `step_in`")
        step_in = extra.pop("step_in")
        if not isinstance(step_in, list) or not all(isinstance(s, str) for s in step_in):
            raise ProofError("`step_in` must be a list of strings")
        return cls(step_in=step_in, extra=extra)


@dataclass
class CircuitJson:
    """The JSON description of a circuit's constraints and sizes."""

    constraints: list[list[dict[str, str]]]
    num_inputs: int
    num_outputs: int
    num_variables: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CircuitJson:
        try:
            return cls(
                constraints=data["constraints"],
                num_inputs=data["nPubInputs"],
                num_outputs=data["nOutputs"],
                num_variables=data["nVars"],
            )
        except KeyError as exc:
            raise ProofError(f"missing field `{exc.args[0]}`") from None

    def to_dict(self) -> dict[str, Any]:
        return {
            "constraints": self.constraints,
            "nPubInputs": self.num_inputs,
            "nOutputs": self.num_outputs,
            "nVars": self.num_variables,
        }


@dataclass
class CircomCircuit:
    """A circuit's constraint system with an optional witness."""

    r1cs: R1CS = field(default_factory=R1CS)
    witness: Optional[list[int]] = None

    def arity(self) -> int:
        """Number of public inputs of the circuit."""
        return self.r1cs.num_public_inputs