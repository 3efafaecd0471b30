import logging

import pytest

from pw_core import (
    EXAMPLE_PASSWORDS,
    MESSAGES,
    Violation,
    describe,
    evaluate,
    normalize_text,
    suggestions,
    validate_policy,
)
from pw_patterns import DEFAULT_CATALOG, PatternCatalog
from pw_policy import DEFAULT_SETTINGS, normalize
from pw_strength import Tier, score, tier

DEFAULT_POLICY = normalize(DEFAULT_SETTINGS)


def only(**flags):
    return normalize({"enabled": True, **flags})


# --- concrete scenarios ---

def test_common_password_with_default_policy():
    assert evaluate("password", DEFAULT_POLICY, DEFAULT_CATALOG) == [
        Violation.MISSING_UPPERCASE,
        Violation.MISSING_DIGIT,
        Violation.MISSING_SPECIAL_CHAR,
        Violation.COMMON_PASSWORD,
    ]


def test_strong_password_with_default_policy():
    password = "MyS3cur3P@ssw0rd!"
    assert evaluate(password, DEFAULT_POLICY, DEFAULT_CATALOG) == []
    assert score(password) >= 80
    assert tier(score(password)) is Tier.VERY_STRONG


def test_empty_password_is_not_checked():
    assert evaluate("", DEFAULT_POLICY, DEFAULT_CATALOG) == []
    assert score("") == 0


def test_keyboard_pattern_only():
    policy = only(prevent_keyboard_patterns=True)
    assert evaluate("mypassword1qaz2wsx", policy, DEFAULT_CATALOG) == [Violation.KEYBOARD_PATTERNS]


def test_repetitive_chars_only():
    policy = only(prevent_repetitive_chars=True)
    assert evaluate("aaa11111", policy, DEFAULT_CATALOG) == [Violation.REPETITIVE_CHARS]


def test_min_length_out_of_range_normalizes_to_default():
    assert normalize({"minLength": 100}).min_length == 8


# --- properties ---

@pytest.mark.parametrize("password", ["password", "a", "a" * 2000, "MyS3cur3P@ssw0rd!"])
def test_disabled_policy_accepts_anything(password):
    policy = normalize({**DEFAULT_SETTINGS, "enabled": False})
    assert evaluate(password, policy, DEFAULT_CATALOG) == []


@pytest.mark.parametrize("password", ["a" * 1001, "Aa1!" * 300, "password" * 200])
def test_over_max_length_reports_only_too_long(password):
    assert evaluate(password, DEFAULT_POLICY, DEFAULT_CATALOG) == [Violation.TOO_LONG]


def test_exactly_max_length_is_checked_normally():
    assert evaluate("Xy7!" * 250, DEFAULT_POLICY, DEFAULT_CATALOG) == []


def test_missing_uppercase_is_the_only_class_violation():
    policy = only(require_uppercase=True)
    assert evaluate("lowercase only 123!", policy, DEFAULT_CATALOG) == [Violation.MISSING_UPPERCASE]


def test_non_ascii_letters_do_not_count_as_uppercase():
    policy = only(require_uppercase=True)
    assert evaluate("ÄÖÜ12345", policy, DEFAULT_CATALOG) == [Violation.MISSING_UPPERCASE]


def test_evaluate_is_repeatable():
    first = evaluate("aaa", DEFAULT_POLICY, DEFAULT_CATALOG)
    assert evaluate("aaa", DEFAULT_POLICY, DEFAULT_CATALOG) == first


def test_all_violations_are_collected_in_rule_order():
    assert evaluate("aaa", DEFAULT_POLICY, DEFAULT_CATALOG) == [
        Violation.TOO_SHORT,
        Violation.MISSING_UPPERCASE,
        Violation.MISSING_DIGIT,
        Violation.MISSING_SPECIAL_CHAR,
        Violation.REPETITIVE_CHARS,
    ]


@pytest.mark.parametrize("flag, password, expected", [
    ("require_lowercase", "MYPASSWORD123", Violation.MISSING_LOWERCASE),
    ("require_numbers", "MyPassword", Violation.MISSING_DIGIT),
    ("require_special_chars", "MyPassword123", Violation.MISSING_SPECIAL_CHAR),
    ("prevent_sequential_chars", "my1234567890pw", Violation.SEQUENTIAL_CHARS),
    ("prevent_keyboard_patterns", "myPass_ZXC_9", Violation.KEYBOARD_PATTERNS),
    ("prevent_repetitive_chars", "mypasswordaaa", Violation.REPETITIVE_CHARS),
    ("prevent_common_passwords", "PASSWORD", Violation.COMMON_PASSWORD),
])
def test_each_rule(flag, password, expected):
    assert evaluate(password, only(**{flag: True}), DEFAULT_CATALOG) == [expected]


@pytest.mark.parametrize("flag, password", [
    ("require_special_chars", "password!"),
    ("require_special_chars", "pass\\word"),
    ("prevent_common_passwords", "password1x"),
    ("prevent_repetitive_chars", "mypassword11"),
])
def test_rule_passes(flag, password):
    assert evaluate(password, only(**{flag: True}), DEFAULT_CATALOG) == []


def test_min_length_rule():
    assert evaluate("short", only(min_length=10), DEFAULT_CATALOG) == [Violation.TOO_SHORT]
    assert evaluate("short", only(min_length=50), DEFAULT_CATALOG) == [Violation.TOO_SHORT]
    assert evaluate("密碼123", only(min_length=4), DEFAULT_CATALOG) == []


def test_surrounding_whitespace_is_trimmed():
    assert evaluate("  abc  ", only(min_length=4), DEFAULT_CATALOG) == [Violation.TOO_SHORT]
    assert evaluate("  password123  ", only(min_length=8), DEFAULT_CATALOG) == []
    assert evaluate("    ", DEFAULT_POLICY, DEFAULT_CATALOG) == []


def test_absent_password_or_policy():
    assert evaluate(None, DEFAULT_POLICY, DEFAULT_CATALOG) == []
    assert evaluate("password", None, DEFAULT_CATALOG) == []


def test_unnormalized_policy_reports_validation_error(caplog):
    with caplog.at_level(logging.ERROR, logger="pw_core"):
        assert evaluate("password", {"enabled": True}, DEFAULT_CATALOG) == [Violation.VALIDATION_ERROR]
    assert "validation error" in caplog.text


def test_injected_catalog():
    catalog = PatternCatalog(common_passwords=["correcthorse"])
    policy = only(prevent_common_passwords=True)
    assert evaluate("CorrectHorse", policy, catalog) == [Violation.COMMON_PASSWORD]
    assert evaluate("CorrectHorse", policy, DEFAULT_CATALOG) == []


@pytest.mark.parametrize("password", EXAMPLE_PASSWORDS)
def test_example_passwords_pass_default_policy(password):
    assert evaluate(password, DEFAULT_POLICY, DEFAULT_CATALOG) == []


# --- messages and helpers ---

def test_every_violation_has_a_message():
    assert set(MESSAGES) == set(Violation)


def test_describe_uses_policy_limits():
    assert "12" in describe(Violation.TOO_SHORT, only(min_length=12))
    assert "8" in describe(Violation.TOO_SHORT)
    assert "1000" in describe(Violation.TOO_LONG)


def test_suggestions_for_weak_password():
    violations = evaluate("password", DEFAULT_POLICY, DEFAULT_CATALOG)
    hints = suggestions("password", violations, DEFAULT_POLICY)
    assert hints[0] == "Add at least one uppercase letter (A-Z)"
    assert len(hints) == len(violations) + 1
    assert "combination" in hints[-1]


def test_suggestions_for_strong_password():
    assert suggestions("MyS3cur3P@ssw0rd!", []) == []


def test_validate_policy():
    ok, message = validate_policy("password")
    assert not ok
    assert "uppercase" in message
    assert validate_policy("MyS3cur3P@ssw0rd!") == (True, "Password meets all requirements.")
    assert validate_policy("weak", None)[0]


def test_normalize_text():
    assert normalize_text("  ｐａｓｓ  ") == "pass"
    assert normalize_text(None) == ""


@pytest.mark.parametrize("password", [b"abc", 12345, ["password"]])
def test_non_string_password_reports_validation_error(password):
    assert evaluate(password, DEFAULT_POLICY, DEFAULT_CATALOG) == [Violation.VALIDATION_ERROR]


def test_str_subclass_password_is_checked():
    class Secret(str):
        pass
    assert evaluate(Secret("MyS3cur3P@ssw0rd!"), DEFAULT_POLICY, DEFAULT_CATALOG) == []
