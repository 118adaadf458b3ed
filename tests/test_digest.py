from adapters.commitment.digest import digest


def test_digest_is_sixteen_lowercase_hex_chars():
    value = digest("5! - 53")

    assert len(value) == 16
    assert value == value.lower()
    int(value, 16)


def test_digest_known_values():
    assert digest("") == "0000000000000000"
    assert digest("a") == "0000000000000061"
    assert digest("ab") == "0000000000000c21"
    assert digest("hello") == "0000000005e918d2"


def test_digest_wraps_to_signed_32_bits():
    # hash tego napisu to dokładnie -2**31; abs() daje 2**31
    assert digest("polygenelubricants") == "0000000080000000"


def test_digest_is_stable_for_long_inputs():
    value = digest("a" * 100)

    assert value == digest("a" * 100)
    assert len(value) == 16


def test_digest_collisions_are_possible():
    # niekryptograficzny skrót: "Aa" i "BB" mają ten sam hash
    assert digest("Aa") == digest("BB") == "0000000000000840"
