import json
import sys

import pytest

import zk67
from adapters.commitment.digest import digest


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["zk67", *argv])
    zk67.main()


def test_cli_digest(monkeypatch, capsys):
    _run(monkeypatch, "digest", "hello")

    assert capsys.readouterr().out.strip() == digest("hello")


def test_cli_prove_writes_proof_file(monkeypatch, tmp_path):
    out = tmp_path / "proof.json"

    _run(monkeypatch, "prove", "60 plus 7", "--out", str(out))

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["publicSignals"] == ["67"]


def test_cli_prove_refuses_other_result(monkeypatch):
    with pytest.raises(SystemExit) as exc_info:
        _run(monkeypatch, "prove", "2+2")

    assert exc_info.value.code == 1


def test_cli_verify_file(monkeypatch, tmp_path):
    out = tmp_path / "proof.json"
    _run(monkeypatch, "prove", "5! - 53", "--out", str(out))

    _run(monkeypatch, "verify", "--file", str(out))

    with pytest.raises(SystemExit) as exc_info:
        _run(monkeypatch, "verify", "--file", str(out), "--expected", "68")
    assert exc_info.value.code == 1


def test_cli_verify_decode_error_exits_with_1(monkeypatch):
    with pytest.raises(SystemExit) as exc_info:
        _run(monkeypatch, "verify", "--a", "[", "--b", "[]", "--c", "[]", "--signals", '["67"]')

    assert exc_info.value.code == 1
