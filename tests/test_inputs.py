import json

import pytest

from circomfold.errors import ProofError
from circomfold.field import MODULUS
from circomfold.inputs import into_circom_input, into_input_json, remap_inputs


def test_into_circom_input_decimal_strings():
    ci = into_circom_input([1, 42, 0], {"data": [1, 2]})
    assert ci.step_in == ["1", "42", "0"]
    assert ci.extra == {"data": [1, 2]}


def test_into_circom_input_reduces_into_field():
    ci = into_circom_input([-1, MODULUS], {})
    assert ci.step_in == [str(MODULUS - 1), "0"]


def test_into_circom_input_copies_private_input():
    private = {"a": ["1"]}
    ci = into_circom_input([], private)
    ci.extra["b"] = ["2"]
    assert private == {"a": ["1"]}


def test_into_input_json_is_flat_and_compact():
    text = into_input_json([5, 6], {"key": ["7"]})
    assert json.loads(text) == {"step_in": ["5", "6"], "key": ["7"]}
    assert " " not in text


def test_remap_round_trip():
    text = into_input_json([3, MODULUS - 1], {"plaintext": ["10", "11"], "key": ["12"]})
    remapped = dict(remap_inputs(text))
    assert remapped == {
        "step_in": [3, MODULUS - 1],
        "plaintext": [10, 11],
        "key": [12],
    }


def test_remap_puts_step_in_first():
    text = into_input_json([1], {"z": ["2"]})
    assert remap_inputs(text)[0] == ("step_in", [1])


def test_remap_non_array_raises():
    text = json.dumps({"step_in": [], "key": "1"})
    with pytest.raises(ProofError, match="Expected array for key key"):
        remap_inputs(text)


def test_remap_non_string_element_raises():
    text = json.dumps({"step_in": [], "key": [1]})
    with pytest.raises(ProofError, match="Expected string for key key"):
        remap_inputs(text)


def test_remap_bad_integer_raises():
    with pytest.raises(ProofError):
        remap_inputs(json.dumps({"step_in": ["12a"]}))


def test_remap_invalid_json_raises():
    with pytest.raises(ProofError):
        remap_inputs("{not json")


def test_remap_missing_step_in_raises():
    with pytest.raises(ProofError):
        remap_inputs(json.dumps({"key": ["1"]}))