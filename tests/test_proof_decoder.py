import json

import pytest

from adapters.commitment.mock_snark import commit
from adapters.commitment.proof_decoder import (
    ProofVerifier,
    decode_proof_document,
    decode_proof_fields,
    parse_expected_result,
    verify_untrusted,
)
from contracts import ProofDecodeFailure


def _fields(proof):
    data = proof.to_json_dict()
    return (
        json.dumps(data["a"]),
        json.dumps(data["b"]),
        json.dumps(data["c"]),
        json.dumps(data["publicSignals"]),
    )


def test_decode_proof_fields_round_trip():
    proof = commit("60 plus 7", 67)

    assert decode_proof_fields(*_fields(proof)) == proof


def test_decode_proof_fields_reports_non_json_field():
    a, _, c, signals = _fields(commit("60+7", 67))

    with pytest.raises(ProofDecodeFailure) as exc_info:
        decode_proof_fields(a, "not json", c, signals)

    issues = exc_info.value.issues
    assert [(i.field_path, i.code) for i in issues] == [("b", "INVALID_JSON")]


def test_decode_proof_fields_reports_every_bad_field():
    with pytest.raises(ProofDecodeFailure) as exc_info:
        decode_proof_fields("[", "{", '["x","y","z"]', "67,")

    assert [i.field_path for i in exc_info.value.issues] == ["a", "b", "publicSignals"]


def test_decode_proof_fields_reports_wrong_shape():
    _, b, c, signals = _fields(commit("60+7", 67))

    with pytest.raises(ProofDecodeFailure) as exc_info:
        decode_proof_fields('["only", "two"]', b, c, signals)

    issue = exc_info.value.issues[0]
    assert issue.code == "INVALID_SHAPE"
    assert issue.field_path.startswith("a")


def test_decode_proof_fields_rejects_numeric_public_signal():
    a, b, c, _ = _fields(commit("60+7", 67))

    with pytest.raises(ProofDecodeFailure) as exc_info:
        decode_proof_fields(a, b, c, "[67]")

    assert exc_info.value.issues[0].field_path.startswith("publicSignals")


def test_decode_proof_document_accepts_legacy_export_keys():
    proof = commit("5! - 53", 67)
    data = proof.to_json_dict()
    legacy = {
        "pi_a": data["a"],
        "pi_b": data["b"],
        "pi_c": data["c"],
        "publicSignals": data["publicSignals"],
    }

    assert decode_proof_document(json.dumps(legacy, indent=2)) == proof


def test_decode_proof_document_rejects_non_object():
    with pytest.raises(ProofDecodeFailure) as exc_info:
        decode_proof_document("[1, 2, 3]")

    assert exc_info.value.issues[0].code == "INVALID_SHAPE"


def test_parse_expected_result():
    assert parse_expected_result("67") == 67
    with pytest.raises(ProofDecodeFailure) as exc_info:
        parse_expected_result("sixty seven")
    assert exc_info.value.issues[0].field_path == "expected"


def test_verify_untrusted_valid_proof():
    report = verify_untrusted(*_fields(commit("60+7", 67)), expected="67")

    assert report.status == "valid"
    assert report.is_valid
    assert report.claimed == "67"


def test_verify_untrusted_wrong_result_is_invalid_not_decode_error():
    report = verify_untrusted(*_fields(commit("2+2", 4)), expected="67")

    assert report.status == "invalid"
    assert report.issues == []


def test_verify_untrusted_non_json_is_decode_error_not_invalid():
    report = verify_untrusted("garbage", "garbage", "garbage", "garbage")

    assert report.status == "decode_error"
    assert not report.is_valid
    assert {i.field_path for i in report.issues} == {"a", "b", "c", "publicSignals"}


def test_verifier_collects_expected_and_field_issues_together():
    a, b, c, _ = _fields(commit("60+7", 67))

    report = ProofVerifier().verify_fields(a, b, c, "oops", "abc")

    assert report.status == "decode_error"
    assert [i.field_path for i in report.issues] == ["publicSignals", "expected"]


def test_verifier_verify_document():
    document = json.dumps(commit("60+7", 67).to_json_dict())

    assert ProofVerifier().verify_document(document, "67").status == "valid"
    assert ProofVerifier().verify_document(document, "68").status == "invalid"
