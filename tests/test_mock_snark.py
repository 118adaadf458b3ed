import pytest
from pydantic import ValidationError

from adapters.commitment.digest import digest
from adapters.commitment.mock_snark import MockSnarkEngine, check, commit, parse_leading_int
from contracts import ProofObject
from ports.commitment import CommitmentEngine


def test_mock_snark_engine_implements_port():
    assert isinstance(MockSnarkEngine(), CommitmentEngine)


def test_commit_is_deterministic():
    first = commit("60 plus 7", 67)
    second = commit("60 plus 7", 67)

    assert first == second
    assert first.to_json_dict() == second.to_json_dict()


def test_commit_uses_fixed_slot_tags():
    expr = "5! - 53"

    proof = commit(expr, 67)

    assert proof.a == (digest(expr + "a"), digest(expr + "a2"), digest(expr + "a3"))
    assert proof.b[0] == (digest(expr + "b1"), digest(expr + "b2"))
    assert proof.b[2] == (digest(expr + "b5"), digest(expr + "b6"))
    assert proof.c == (digest(expr + "c"), digest(expr + "c2"), digest(expr + "c3"))
    assert proof.public_signals == ("67",)


def test_commit_for_different_expressions_usually_differs():
    first = commit("60+7", 67)
    second = commit("70-3", 67)

    assert first.public_signals == second.public_signals
    assert (first.a, first.b, first.c) != (second.a, second.b, second.c)


def test_proof_json_shape():
    data = commit("60+7", 67).to_json_dict()

    assert set(data) == {"a", "b", "c", "publicSignals"}
    assert data["publicSignals"] == ["67"]
    assert len(data["b"]) == 3 and all(len(pair) == 2 for pair in data["b"])


def test_proof_is_immutable():
    proof = commit("60+7", 67)

    with pytest.raises(ValidationError):
        proof.public_signals = ("68",)


@pytest.mark.parametrize("result", [67, 0, -5, 10**30])
def test_check_round_trip(result):
    assert check(commit("anything", result), result) is True


def test_check_rejects_other_result():
    proof = commit("60+7", 67)

    assert check(proof, 68) is False
    assert check(proof, -67) is False


def test_check_ignores_a_b_c_soundness_gap():
    # Atrapa: a/b/c nie są sprawdzane. Sfabrykowany dowód z dobrym
    # publicSignals przechodzi — test pilnuje, by to nie zmieniło się po cichu.
    fabricated = ProofObject(
        a=("deadbeef", "0", "not even hex"),
        b=(("x", "y"), ("x", "y"), ("x", "y")),
        c=("", "", ""),
        public_signals=("67",),
    )

    assert check(fabricated, 67) is True


def test_check_never_raises_on_malformed_public_signals():
    base = commit("60+7", 67)

    empty = base.model_copy(update={"public_signals": ()})
    garbage = base.model_copy(update={"public_signals": ("sixty-seven",)})

    assert check(empty, 67) is False
    assert check(garbage, 67) is False


def test_check_parses_leading_integer():
    proof = commit("60+7", 67).model_copy(update={"public_signals": (" 67abc",)})

    assert check(proof, 67) is True


def test_parse_leading_int():
    assert parse_leading_int("67") == 67
    assert parse_leading_int("-3.9") == -3
    assert parse_leading_int("+12x") == 12
    assert parse_leading_int("abc") is None
    assert parse_leading_int("") is None


def test_commit_and_check_handle_results_beyond_int_str_limit():
    result = 10**5000

    proof = commit("x", result)

    assert proof.public_signals[0] == "1" + "0" * 5000
    assert check(proof, result) is True
    assert check(proof, result + 1) is False
