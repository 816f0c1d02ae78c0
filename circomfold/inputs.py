"""Conversion of public and private inputs into the forms witness generators read."""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from typing import Any

from circomfold.circom import CircomInput
from circomfold.errors import ProofError
from circomfold.field import to_decimal_string

_INTEGER = re.compile(r"[+-]?[0-9]+")


def into_circom_input(
    public_input: Iterable[int], private_input: Mapping[str, Any]
) -> CircomInput:
    """Combine field-element public inputs and named private inputs."""
    return CircomInput(
        step_in=[to_decimal_string(x) for x in public_input],
        extra=dict(private_input),
    )


def into_input_json(public_input: Iterable[int], private_input: Mapping[str, Any]) -> str:
    """Render the combined inputs as compact JSON."""
    circom_input = into_circom_input(public_input, private_input)
    return json.dumps(circom_input.to_dict(), separators=(",", ":"))


def _parse_integer(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ProofError(f"invalid digit found in string: {text!r}")
    return int(text)


def remap_inputs(input_json: str) -> list[tuple[str, list[int]]]:
    """Turn circuit input JSON into ``(name, values)`` pairs, ``step_in`` first."""
    try:
        data = json.loads(input_json)
    except json.JSONDecodeError as exc:
        raise ProofError(str(exc)) from exc
    circom_input = CircomInput.from_dict(data)

    remapped = [("step_in", [_parse_integer(s) for s in circom_input.step_in])]
    for key, value in circom_input.extra.items():
        if not isinstance(value, list):
            raise ProofError(f"Expected array for key {key}")
        values = []
        for item in value:
            if not isinstance(item, str):
                raise ProofError(f"Expected string for key {key}")
            values.append(_parse_integer(item))
        remapped.append((key, values))
    return remapped