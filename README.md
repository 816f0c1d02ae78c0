# circomfold

Readers for Circom circuit files and the data structures needed to lay out a
program of circuits for non-uniform incrementally verifiable computation
(NIVC) over the BN254 scalar field.

## Modules

- `circomfold.field` – field elements are plain `int`s. `field_from_repr`
  decodes a canonical 32-byte little-endian value (raising `ProofError` for a
  wrong length or a value not below the modulus), `field_to_repr` encodes one,
  `reduce` brings an integer into range and `to_decimal_string` renders it in
  base 10.
- `circomfold.r1cs` – `R1CS.from_bytes`, `R1CS.from_path`, `R1CS.from_type`
  and `read_r1cs` parse the binary `.r1cs` format (version 1, 32-byte field)
  into an `R1CS` with `num_inputs`, `num_public_inputs`,
  `num_public_outputs`, `num_private_inputs`, `num_aux`, `num_variables` and
  the `constraints`. `R1CSType` names the source: a file (`R1CSType.from_file`)
  or raw bytes (`R1CSType.from_raw`). A missing header, constraint or
  wire-to-label section raises `MissingSectionError`.
- `circomfold.witness` – `load_witness_from_bytes` and
  `load_witness_from_bin_reader` read `.wtns` witness files (version 2 or
  lower). `generate_witness_from_wasm_file` writes `circom_input.json` to the
  current directory, runs `node generate_witness.js` found next to the wasm
  file, loads the resulting witness and removes both files.
  `WitnessGeneratorType` describes a generator as `browser()`,
  `wasm(path, wtns_path)`, `from_path(path)` or `from_raw(data)`;
  `generate_witness_from_generator_type` dispatches on it.
- `circomfold.circom` – `CircomInput` (`step_in` plus extra signals, with
  `to_dict`/`from_dict`), `CircuitJson` (the `constraints`, `nPubInputs`,
  `nOutputs`, `nVars` description) and `CircomCircuit`, whose `arity()` is the
  number of public inputs of its R1CS.
- `circomfold.inputs` – `into_circom_input` and `into_input_json` combine
  field-element public inputs with named private inputs; `remap_inputs` parses
  such JSON back into `(name, [int, ...])` pairs, `step_in` first.
- `circomfold.data` – `FoldInput.split`, `UninitializedSetup` (with
  `from_raw_r1cs_types_with_browser_witness` and `from_raw_parts`, both using a
  maximum ROM length of 100), `InitializedSetup`, `CircuitData`, `ProofParams`
  and `InstanceParams.into_expanded`, which spreads each circuit's fold inputs
  evenly over the ROM positions that run it.
- `circomfold.program` – `initialize_setup_data` loads every R1CS of a setup;
  `initialize_circuit_list` builds one `RomCircuit` per circuit. `Memory`
  holds the circuits and the opcode ROM (`num_circuits`, `primary_circuit`,
  `initial_circuit_index`). `RomCircuit.arity()` is the circuit's arity plus
  one plus the ROM size.
- `circomfold.setup_params` – `SetupParams.extend_public_inputs` maps ROM
  labels to opcodes, pads the ROM to `max_rom_length` with `2**64 - 1` and
  returns the primary public input (initial input, a ROM index of 0, then the
  opcodes) with the padded ROM. `to_dict`/`from_dict` serialize parameters
  whose setup data is an `UninitializedSetup`.
- `circomfold.circuits` – `artifact_path`, `load_artifact_bytes`,
  `load_proving_params_512`, `wasm_witness_generator_types_512b` and
  `construct_setup_data_from_fs`, which loads the plaintext authentication,
  HTTP verification and JSON extraction R1CS and graph files for circuit size
  256 or 512 (any other size raises `InvalidCircuitSizeError`). Artifacts are
  looked up under `proofs/web_proof_circuits/circom-artifacts-<size>b-v<version>/`,
  the version defaulting to the `WEB_PROVER_CIRCUITS_VERSION` environment
  variable or `0.10.0`.

Every error is a subclass of `circomfold.errors.ProofError`.

## Installation

```
pip install circomfold
```

There are no runtime dependencies. Generating a witness from a wasm circuit
needs `node` on the `PATH`.

## Example

```python
from pathlib import Path

from circomfold.data import UninitializedSetup
from circomfold.program import initialize_circuit_list, initialize_setup_data
from circomfold.r1cs import R1CS

r1cs = R1CS.from_path("add.r1cs")
print(r1cs.num_inputs, r1cs.num_public_outputs, len(r1cs.constraints))

setup = UninitializedSetup.from_raw_r1cs_types_with_browser_witness(
    [Path("add.r1cs").read_bytes()]
)
circuits = initialize_circuit_list(initialize_setup_data(setup))
print([circuit.arity() for circuit in circuits])
```

## What it does not do

- It does not create, compress or verify proofs; it prepares the circuits,
  ROM and inputs that a prover consumes.
- It does not compute witnesses from witness graphs: a `WitnessGeneratorType`
  of path or raw kind raises `ProofError`, as does the browser kind. Only the
  wasm kind, through Node.js, produces a witness.
- It has no command-line interface.

## Tests

```
pip install "circomfold[test]"
pytest
```