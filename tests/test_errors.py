import pytest

from circomfold.errors import (
    InvalidCircuitSizeError,
    InvalidManifestError,
    MissingSectionError,
    ProofError,
    VerifyFailedError,
)


def test_missing_section_message_and_section():
    err = MissingSectionError(3)
    assert str(err) == "Missing header section"
    assert err.section == 3


def test_invalid_circuit_size_message():
    err = InvalidCircuitSizeError(100)
    assert str(err) == "Invalid circuit size"
    assert err.size == 100


def test_invalid_manifest_message():
    err = InvalidManifestError("no body")
    assert str(err) == "Invalid manifest: no body"
    assert err.reason == "no body"


def test_verify_failed_message():
    err = VerifyFailedError("digest mismatch")
    assert str(err) == "Failed to verify proof: digest mismatch"


@pytest.mark.parametrize(
    "error",
    [
        MissingSectionError(),
        InvalidCircuitSizeError(),
        InvalidManifestError("x"),
        VerifyFailedError("y"),
    ],
)
def test_all_errors_are_caught_as_proof_error(error):
    with pytest.raises(ProofError) as info:
        raise error
    assert info.value is error