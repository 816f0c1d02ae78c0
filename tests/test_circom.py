import pytest

from circomfold.circom import CircomCircuit, CircomInput, CircuitJson
from circomfold.errors import ProofError
from circomfold.r1cs import R1CS


def test_circom_input_flattens_extra():
    ci = CircomInput(step_in=["1", "2"], extra={"data": [1, 2], "key": "k"})
    assert ci.to_dict() == {"step_in": ["1", "2"], "data": [1, 2], "key": "k"}


def test_circom_input_round_trip():
    ci = CircomInput(step_in=["9"], extra={"plaintext": ["3", "4"]})
    assert CircomInput.from_dict(ci.to_dict()) == ci


def test_circom_input_from_dict_does_not_mutate():
    data = {"step_in": ["1"], "x": [1]}
    CircomInput.from_dict(data)
    assert data == {"step_in": ["1"], "x": [1]}


def test_circom_input_missing_step_in_raises():
    with pytest.raises(ProofError):
        CircomInput.from_dict({"data": []})


def test_circom_input_bad_step_in_raises():
    with pytest.raises(ProofError):
        CircomInput.from_dict({"step_in": [1, 2]})


def test_circuit_json_renamed_fields():
    data = {
        "constraints": [[{"0": "1"}, {}, {}]],
        "nPubInputs": 2,
        "nOutputs": 1,
        "nVars": 7,
    }
    cj = CircuitJson.from_dict(data)
    assert (cj.num_inputs, cj.num_outputs, cj.num_variables) == (2, 1, 7)
    assert cj.constraints == [[{"0": "1"}, {}, {}]]
    assert cj.to_dict() == data


def test_circuit_json_missing_field_raises():
    with pytest.raises(ProofError, match="nVars"):
        CircuitJson.from_dict({"constraints": [], "nPubInputs": 1, "nOutputs": 1})


def test_default_circuit_arity_is_zero():
    circuit = CircomCircuit()
    assert circuit.arity() == 0
    assert circuit.witness is None


def test_circuit_arity_is_public_input_count():
    circuit = CircomCircuit(r1cs=R1CS(num_public_inputs=2, num_public_outputs=2))
    assert circuit.arity() == 2