from adapters.terminal.session import TerminalSession


def _types(messages):
    return [m.type for m in messages]


def test_new_session_starts_with_banner():
    session = TerminalSession()

    assert _types(session.messages) == ["system", "system"]
    assert "67" in session.messages[1].content


def test_submit_equation_equal_to_target_generates_and_verifies_proof():
    session = TerminalSession()

    added = session.submit("60 plus 7")

    assert _types(added) == ["system", "equation", "system", "proof", "system", "verification"]
    assert added[0].content == "> 60 plus 7"
    assert added[1].content == "60 plus 7 = 67"
    assert added[3].proof.public_signals == ("67",)
    assert added[5].verified is True


def test_submit_equation_with_other_result_is_rejected():
    session = TerminalSession()

    added = session.submit("2+2")

    assert _types(added) == ["system", "equation", "system"]
    assert added[2].content == "✗ Equation does not equal 67 (result: 4)"


def test_submit_invalid_equation_reports_error():
    session = TerminalSession()

    added = session.submit("((")

    assert added[1].content == "(( = 0"
    assert added[2].content.startswith("✗ Could not evaluate equation")


def test_log_is_append_only():
    session = TerminalSession()
    before = session.messages

    session.submit("help")
    session.submit("5! - 53")

    assert session.messages[: len(before)] == before
    assert len(session.messages) > len(before)


def test_blank_input_adds_nothing():
    session = TerminalSession()

    assert session.submit("   ") == []
    assert len(session.messages) == 2


def test_session_can_resume_from_history():
    first = TerminalSession()
    first.submit("2+2")

    resumed = TerminalSession(history=first.messages)
    resumed.submit("60 plus 7")

    assert resumed.messages[: len(first.messages)] == first.messages
    assert resumed.messages[-1].verified is True


def test_custom_target():
    session = TerminalSession(target=4)

    added = session.submit("2+2")

    assert added[-1].type == "verification"
    assert added[-1].verified is True
