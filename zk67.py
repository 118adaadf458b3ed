#!/usr/bin/env python3
"""
zk67.py — CLI narzędzie zk67.

Działa całkowicie lokalnie, nie wymaga uruchomionego serwera API.
Konfiguracja: zmienne środowiskowe z prefiksem ZK67_ lub plik .env.

Podkomendy:
    eval      — policz wyrażenie i pokaż kroki
    digest    — skrót tekstu (16 znaków hex)
    prove     — policz wyrażenie i wygeneruj atrapę dowodu (JSON)
    verify    — zweryfikuj dowód z pliku lub z czterech pól JSON
    terminal  — interaktywny terminal "zK-67"

Użycie:
    python zk67.py eval "60 plus 7"
    python zk67.py eval --strict "6 7"
    python zk67.py digest "5!-53a"
    python zk67.py prove "5! - 53" --out proof.json
    python zk67.py verify --file proof.json --expected 67
    python zk67.py verify --a '["..","..",".."]' --b '[[..]]' --c '[..]' --signals '["67"]'
    python zk67.py terminal
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table


# -- helpers ---------------------------------------------------------------

_CONSOLE: Console | None = None


def _console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False)
    return _CONSOLE


def _safe_terminal_text(value: Any) -> str:
    s = str(value)
    s = s.replace("✓", "OK").replace("✗", "X").replace("→", "->")
    encoding = sys.stdout.encoding or "utf-8"
    try:
        s.encode(encoding)
        return s
    except UnicodeEncodeError:
        return s.encode(encoding, errors="replace").decode(encoding, errors="replace")


def _print_kv_table(title: str, rows: list[tuple[str, Any]]) -> None:
    table = Table(title=title, box=box.ASCII, show_header=False, pad_edge=False)
    table.add_column("Key", no_wrap=True, style="bold cyan")
    table.add_column("Value")
    for key, value in rows:
        table.add_row(_safe_terminal_text(key), _safe_terminal_text(value))
    _console().print(table)


def _print_issues_table(issues: list[Any]) -> None:
    table = Table(title=f"Decode issues [{len(issues)}]", box=box.ASCII)
    table.add_column("Field", no_wrap=True, style="cyan")
    table.add_column("Code", no_wrap=True)
    table.add_column("Message")
    for issue in issues:
        table.add_row(
            _safe_terminal_text(issue.field_path or "-"),
            _safe_terminal_text(issue.code),
            _safe_terminal_text(issue.message),
        )
    _console().print(table)


def _settings():
    from config import Settings
    return Settings()


def _evaluator(args: argparse.Namespace):
    from adapters.evaluator.expression_evaluator import ExpressionEvaluator

    settings = _settings()
    if getattr(args, "strict", False):
        settings.strict_tokens = True
    return ExpressionEvaluator.from_settings(settings)


def _read_expression(args: argparse.Namespace) -> str:
    text = args.expression or sys.stdin.read().strip()
    if not text:
        print("Błąd: podaj wyrażenie jako argument lub przez stdin", file=sys.stderr)
        sys.exit(1)
    return text


# -- podkomendy ------------------------------------------------------------

def _eval(args: argparse.Namespace) -> None:
    text = _read_expression(args)
    outcome = _evaluator(args).try_evaluate(text)
    target = _settings().target_value

    rows: list[tuple[str, Any]] = [
        ("expression", outcome.expression),
        ("normalized", outcome.normalized or "-"),
    ]
    if outcome.ok:
        rows.append(("result", outcome.value))
        rows.append((f"equals {target}", "yes" if outcome.value == target else "no"))
    else:
        rows.append(("result", "0 (invalid)"))
        rows.append(("error", f"{outcome.error.code}: {outcome.error.message}"))
    _print_kv_table("Evaluation", rows)

    if outcome.steps and not args.quiet:
        for i, step in enumerate(outcome.steps, 1):
            _console().print(f"  {i:>3}. {_safe_terminal_text(step)}")
    if not outcome.ok:
        sys.exit(1)


def _digest(args: argparse.Namespace) -> None:
    from adapters.commitment.digest import digest

    print(digest(args.text))


def _prove(args: argparse.Namespace) -> None:
    from adapters.commitment.mock_snark import MockSnarkEngine

    text = _read_expression(args)
    outcome = _evaluator(args).try_evaluate(text)
    if not outcome.ok:
        print(f"Błąd: {outcome.error.code}: {outcome.error.message}", file=sys.stderr)
        sys.exit(1)

    target = _settings().target_value
    if outcome.value != target and not args.any_result:
        print(
            f"Błąd: wyrażenie nie równa się {target} (wynik: {outcome.value}); "
            f"użyj --any-result, aby mimo to wygenerować dowód",
            file=sys.stderr,
        )
        sys.exit(1)

    proof = MockSnarkEngine().commit(text, outcome.value)
    payload = json.dumps(proof.to_json_dict(), indent=2)
    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
        print(f"Zapisano dowód do {args.out}")
    else:
        print(payload)


def _verify(args: argparse.Namespace) -> None:
    from adapters.commitment.proof_decoder import ProofVerifier

    verifier = ProofVerifier()
    if args.file:
        try:
            with open(args.file, encoding="utf-8") as f:
                document = f.read()
        except OSError as e:
            print(f"Błąd odczytu pliku: {e}", file=sys.stderr)
            sys.exit(1)
        report = verifier.verify_document(document, args.expected)
    else:
        missing = [n for n in ("a", "b", "c", "signals") if getattr(args, n) is None]
        if missing:
            print(
                "Błąd: podaj --file albo wszystkie pola: --a --b --c --signals "
                f"(brak: {', '.join(missing)})",
                file=sys.stderr,
            )
            sys.exit(1)
        report = verifier.verify_fields(args.a, args.b, args.c, args.signals, args.expected)

    if report.status == "decode_error":
        _print_issues_table(report.issues)
        sys.exit(1)

    _print_kv_table("Verification", [
        ("status", "VALID ✓" if report.is_valid else "INVALID ✗"),
        ("claimed", report.claimed),
        ("expected", report.expected),
        ("note", "only publicSignals is checked; a/b/c are not bound"),
    ])
    if not report.is_valid:
        sys.exit(1)


def _terminal(args: argparse.Namespace) -> None:
    from adapters.commitment.mock_snark import MockSnarkEngine
    from adapters.terminal.session import TerminalSession

    settings = _settings()
    session = TerminalSession(
        evaluator=_evaluator(args),
        engine=MockSnarkEngine(),
        target=settings.target_value,
    )
    for message in session.messages:
        _print_message(message)

    while True:
        try:
            line = input("zk67> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if line.strip().lower() in ("exit", "quit"):
            break
        for message in session.submit(line):
            _print_message(message)


_MESSAGE_STYLES = {
    "system": "green",
    "equation": "bold cyan",
    "proof": "magenta",
    "verification": "bold",
}


def _print_message(message: Any) -> None:
    style = _MESSAGE_STYLES.get(message.type, "")
    if message.type == "verification":
        style = "bold green" if message.verified else "bold red"
    _console().print(_safe_terminal_text(message.content), style=style, markup=False)
    if message.proof is not None:
        _console().print_json(json.dumps(message.proof.to_json_dict()))


# -- main ------------------------------------------------------------------

def main() -> None:
    parser = argparse.ArgumentParser(
        prog="zk67",
        description="zk67 — CLI (lokalny, bez serwera API)",
    )
    parser.add_argument("--log-level", default=None,
                        help="Poziom logowania (domyślnie z ZK67_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    # eval
    p = sub.add_parser("eval", help="Policz wyrażenie")
    p.add_argument("expression", nargs="?", help="Wyrażenie (lub stdin)")
    p.add_argument("--strict", action="store_true",
                   help="Odrzucaj nieznane znaki zamiast je usuwać")
    p.add_argument("--quiet", "-q", action="store_true", help="Bez kroków obliczeń")

    # digest
    p = sub.add_parser("digest", help="Skrót tekstu (16 znaków hex)")
    p.add_argument("text", help="Tekst do skrócenia")

    # prove
    p = sub.add_parser("prove", help="Wygeneruj atrapę dowodu dla wyrażenia")
    p.add_argument("expression", nargs="?", help="Wyrażenie (lub stdin)")
    p.add_argument("--strict", action="store_true")
    p.add_argument("--out", "-o", help="Zapisz dowód do pliku JSON")
    p.add_argument("--any-result", action="store_true",
                   help="Generuj dowód także gdy wynik != wartość docelowa")

    # verify
    p = sub.add_parser("verify", help="Zweryfikuj dowód")
    p.add_argument("--file", "-f", help="Plik z całym dowodem (JSON)")
    p.add_argument("--a", help="Pole a (JSON)")
    p.add_argument("--b", help="Pole b (JSON)")
    p.add_argument("--c", help="Pole c (JSON)")
    p.add_argument("--signals", help="Pole publicSignals (JSON)")
    p.add_argument("--expected", default="67", help="Oczekiwany wynik (domyślnie 67)")

    # terminal
    p = sub.add_parser("terminal", help="Interaktywny terminal zK-67")
    p.add_argument("--strict", action="store_true")

    args = parser.parse_args()
    logging.basicConfig(level=(args.log_level or _settings().log_level).upper())

    commands = {
        "eval":     _eval,
        "digest":   _digest,
        "prove":    _prove,
        "verify":   _verify,
        "terminal": _terminal,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
