import struct

import pytest

from circomfold.circom import CircomCircuit
from circomfold.data import InitializedSetup, UninitializedSetup
from circomfold.errors import ProofError
from circomfold.program import (
    DEFAULT_CIRCUIT_INDEX,
    Memory,
    RomCircuit,
    initialize_circuit_list,
    initialize_setup_data,
)
from circomfold.r1cs import R1CS, R1CSType
from circomfold.witness import WitnessGeneratorKind, WitnessGeneratorType


def _field(value):
    return value.to_bytes(32, "little")


def _lc(terms):
    out = struct.pack("<I", len(terms))
    for wire, value in terms:
        out += struct.pack("<I", wire) + _field(value)
    return out


def _section(kind, body):
    return struct.pack("<IQ", kind, len(body)) + body


def make_r1cs(n_wires=9, n_pub_out=2, n_pub_in=2, n_prv_in=2):
    header = (
        struct.pack("<I", 32)
        + bytes(32)
        + struct.pack("<IIII", n_wires, n_pub_out, n_pub_in, n_prv_in)
        + struct.pack("<Q", n_wires)
        + struct.pack("<I", 1)
    )
    constraints = _lc([(1, 1)]) + _lc([(0, 1)]) + _lc([(2, 1)])
    return (
        b"r1cs"
        + struct.pack("<II", 1, 3)
        + _section(1, header)
        + _section(2, constraints)
        + _section(3, b"")
    )


def test_default_rom_circuit():
    circuit = RomCircuit()
    assert circuit.circuit_index == DEFAULT_CIRCUIT_INDEX
    assert circuit.rom_size == 0
    assert circuit.nivc_io is None
    assert circuit.private_input is None
    assert circuit.witness_generator_type.kind is WitnessGeneratorKind.RAW
    assert circuit.witness_generator_type.raw == b""
    assert circuit.arity() == circuit.circuit.arity() + 1


def test_rom_circuit_arity_counts_rom_slots():
    r1cs = R1CS.from_bytes(make_r1cs())
    circuit = RomCircuit(circuit=CircomCircuit(r1cs=r1cs), rom_size=4)
    assert circuit.arity() == 7


def test_initialize_setup_data_loads_r1cs():
    setup = UninitializedSetup(
        r1cs_types=[R1CSType.from_raw(make_r1cs())],
        witness_generator_types=[WitnessGeneratorType.browser()],
        max_rom_length=4,
    )
    initialized = initialize_setup_data(setup)
    assert initialized.max_rom_length == 4
    assert len(initialized.r1cs) == 1
    r1cs = initialized.r1cs[0]
    assert r1cs.num_inputs == 5
    assert r1cs.num_private_inputs == 2
    assert r1cs.num_public_inputs == 2
    assert r1cs.num_public_outputs == 2
    assert initialized.witness_generator_types == [WitnessGeneratorType.browser()]


def test_initialize_setup_data_pairs_shortest():
    setup = UninitializedSetup(
        r1cs_types=[R1CSType.from_raw(make_r1cs()), R1CSType.from_raw(make_r1cs())],
        witness_generator_types=[WitnessGeneratorType.from_raw(b"\x01")],
        max_rom_length=2,
    )
    initialized = initialize_setup_data(setup)
    assert len(initialized.r1cs) == 1
    assert len(initialized.witness_generator_types) == 1


def test_initialize_setup_data_from_file(tmp_path):
    path = tmp_path / "circuit.r1cs"
    path.write_bytes(make_r1cs())
    setup = UninitializedSetup(
        r1cs_types=[R1CSType.from_file(path)],
        witness_generator_types=[WitnessGeneratorType.browser()],
        max_rom_length=3,
    )
    initialized = initialize_setup_data(setup)
    assert initialized.r1cs[0] == R1CS.from_bytes(make_r1cs())


def test_initialize_setup_data_missing_file(tmp_path):
    setup = UninitializedSetup(
        r1cs_types=[R1CSType.from_file(tmp_path / "absent.r1cs")],
        witness_generator_types=[WitnessGeneratorType.browser()],
        max_rom_length=1,
    )
    with pytest.raises(ProofError):
        initialize_setup_data(setup)


def test_initialize_setup_data_bad_bytes():
    setup = UninitializedSetup(
        r1cs_types=[R1CSType.from_raw(b"nope")],
        witness_generator_types=[WitnessGeneratorType.browser()],
        max_rom_length=1,
    )
    with pytest.raises(ProofError):
        initialize_setup_data(setup)


def test_initialize_circuit_list():
    r1cs = R1CS.from_bytes(make_r1cs())
    generators = [WitnessGeneratorType.browser(), WitnessGeneratorType.from_raw(b"\x02")]
    setup = InitializedSetup(r1cs=[r1cs, r1cs], witness_generator_types=generators, max_rom_length=4)
    circuits = initialize_circuit_list(setup)
    assert [c.circuit_index for c in circuits] == [0, 1]
    assert all(c.rom_size == 4 for c in circuits)
    assert all(c.circuit.witness is None for c in circuits)
    assert all(c.circuit.r1cs is r1cs for c in circuits)
    assert [c.witness_generator_type for c in circuits] == generators


def test_memory_queries():
    r1cs = R1CS.from_bytes(make_r1cs())
    setup = InitializedSetup(
        r1cs=[r1cs, r1cs],
        witness_generator_types=[WitnessGeneratorType.browser()] * 2,
        max_rom_length=3,
    )
    memory = Memory(circuits=initialize_circuit_list(setup), rom=[1, 0, 2**64 - 1])
    assert memory.num_circuits() == 2
    assert memory.initial_circuit_index() == 1
    assert memory.primary_circuit(1).circuit_index == 1


def test_primary_circuit_is_independent_copy():
    r1cs = R1CS.from_bytes(make_r1cs())
    original = RomCircuit(circuit=CircomCircuit(r1cs=r1cs), circuit_index=0, rom_size=2)
    memory = Memory(circuits=[original], rom=[0, 0])
    copy = memory.primary_circuit(0)
    copy.circuit.witness = [1, 2, 3]
    copy.private_input = {"data": [1]}
    assert memory.circuits[0].circuit.witness is None
    assert memory.circuits[0].private_input is None
    assert copy.arity() == original.arity()


def test_primary_circuit_out_of_range():
    memory = Memory(circuits=[RomCircuit()], rom=[0])
    with pytest.raises(IndexError):
        memory.primary_circuit(1)


def test_initial_circuit_index_empty_rom():
    with pytest.raises(ProofError):
        Memory(circuits=[], rom=[]).initial_circuit_index()