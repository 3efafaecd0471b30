# pw_core.py
import re, logging, unicodedata
from enum import Enum
from typing import List, Optional

from pw_patterns import DEFAULT_CATALOG, SPECIAL_CHARS, PatternCatalog
from pw_policy import DEFAULT_SETTINGS, PolicyConfig, normalize
from pw_strength import score

log = logging.getLogger("pw_core")

UPPERCASE_REGEX = re.compile(r"[A-Z]")
LOWERCASE_REGEX = re.compile(r"[a-z]")
NUMBERS_REGEX = re.compile(r"[0-9]")
REPETITIVE_CHARS_REGEX = re.compile(r"(.)\1{2,}", re.DOTALL)

EXAMPLE_PASSWORDS = (
    "MyS3cur3P@ssw0rd!",
    "N3wS3cur3P@ssw0rd!",
    "C0mpl3xP@ssw0rd!",
    "S3cur3P@ssw0rd2024!",
    "V3ryS3cur3P@ssw0rd!",
)


class Violation(str, Enum):
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    MISSING_UPPERCASE = "missing_uppercase"
    MISSING_LOWERCASE = "missing_lowercase"
    MISSING_DIGIT = "missing_digit"
    MISSING_SPECIAL_CHAR = "missing_special_char"
    SEQUENTIAL_CHARS = "sequential_chars"
    KEYBOARD_PATTERNS = "keyboard_patterns"
    REPETITIVE_CHARS = "repetitive_chars"
    COMMON_PASSWORD = "common_password"
    VALIDATION_ERROR = "validation_error"


MESSAGES = {
    Violation.TOO_SHORT: "Password is too short. Use at least {min_length} characters.",
    Violation.TOO_LONG: "Password is too long. Use no more than {max_length} characters.",
    Violation.MISSING_UPPERCASE: "Password must contain an uppercase letter. Add at least one of A-Z.",
    Violation.MISSING_LOWERCASE: "Password must contain a lowercase letter. Add at least one of a-z.",
    Violation.MISSING_DIGIT: "Password must contain a digit. Add at least one of 0-9.",
    Violation.MISSING_SPECIAL_CHAR: "Password must contain a special character. Add at least one of !@#$%^&* etc.",
    Violation.SEQUENTIAL_CHARS: "Password must not contain sequential characters such as 1234567890 or abcdef...",
    Violation.KEYBOARD_PATTERNS: "Password must not contain keyboard patterns such as 1qaz2wsx, qwe or 147.",
    Violation.REPETITIVE_CHARS: "Password must not repeat a character three times in a row (aaa, 111).",
    Violation.COMMON_PASSWORD: "Password is too common. Choose something more unique.",
    Violation.VALIDATION_ERROR: "Password could not be validated. Use a mix of upper/lowercase letters, digits and symbols.",
}

HINTS = {
    Violation.TOO_SHORT: "Increase the length to at least {min_length} characters",
    Violation.TOO_LONG: "Shorten the password to at most {max_length} characters",
    Violation.MISSING_UPPERCASE: "Add at least one uppercase letter (A-Z)",
    Violation.MISSING_LOWERCASE: "Add at least one lowercase letter (a-z)",
    Violation.MISSING_DIGIT: "Add at least one digit (0-9)",
    Violation.MISSING_SPECIAL_CHAR: "Add at least one special character (!@#$%^&*)",
    Violation.SEQUENTIAL_CHARS: "Avoid runs like 123456 or abcdef",
    Violation.KEYBOARD_PATTERNS: "Avoid keyboard patterns (1qaz, WSX, 3edc, 147, qwe); they are easy to guess",
    Violation.REPETITIVE_CHARS: "Avoid repeated characters like aaa or 111",
    Violation.COMMON_PASSWORD: "Pick a more unique and complex password",
}

WEAK_SCORE = 40


def normalize_text(s: str) -> str:
    return unicodedata.normalize("NFKC", s or "").strip()


def _check_rules(value: str, policy: PolicyConfig, catalog: PatternCatalog) -> List[Violation]:
    found = []
    if policy.min_length > 0 and len(value) < policy.min_length:
        found.append(Violation.TOO_SHORT)
    if policy.require_uppercase and not UPPERCASE_REGEX.search(value):
        found.append(Violation.MISSING_UPPERCASE)
    if policy.require_lowercase and not LOWERCASE_REGEX.search(value):
        found.append(Violation.MISSING_LOWERCASE)
    if policy.require_numbers and not NUMBERS_REGEX.search(value):
        found.append(Violation.MISSING_DIGIT)
    if policy.require_special_chars and not SPECIAL_CHARS.intersection(value):
        found.append(Violation.MISSING_SPECIAL_CHAR)
    if policy.prevent_sequential_chars and catalog.has_sequential(value):
        found.append(Violation.SEQUENTIAL_CHARS)
    if policy.prevent_keyboard_patterns and catalog.has_keyboard_pattern(value):
        found.append(Violation.KEYBOARD_PATTERNS)
    if policy.prevent_repetitive_chars and REPETITIVE_CHARS_REGEX.search(value):
        found.append(Violation.REPETITIVE_CHARS)
    if policy.prevent_common_passwords and catalog.is_common(value):
        found.append(Violation.COMMON_PASSWORD)
    return found


def evaluate(password: Optional[str], policy: Optional[PolicyConfig],
             catalog: PatternCatalog = DEFAULT_CATALOG) -> List[Violation]:
    """Return every rule the password breaks, in rule order.

    An empty list means the password is accepted. Blank passwords and absent
    or disabled policies are not checked at all. Internal faults come back as
    [Violation.VALIDATION_ERROR] instead of raising.
    """
    if password is None or policy is None:
        return []
    try:
        if not isinstance(password, str):
            raise TypeError(f"password must be str, not {type(password).__name__}")
        value = str(password).strip()
        if not value or not policy.enabled:
            return []
        if len(value) > policy.max_length:
            log.debug("Password over %d chars, skipping remaining rules", policy.max_length)
            return [Violation.TOO_LONG]
        found = _check_rules(value, policy, catalog)
        if found:
            log.debug("Password rejected: %s", ", ".join(v.value for v in found))
        return found
    except Exception as e:
        log.exception("Password validation error: %s", e)
        return [Violation.VALIDATION_ERROR]


def describe(violation: Violation, policy: Optional[PolicyConfig] = None) -> str:
    policy = policy or PolicyConfig()
    return MESSAGES[violation].format(min_length=policy.min_length, max_length=policy.max_length)


def suggestions(password: str, violations, policy: Optional[PolicyConfig] = None) -> List[str]:
    """Improvement hints for the given violations, plus a general hint when
    the password scores as weak."""
    policy = policy or PolicyConfig()
    out = []
    for v in violations:
        hint = HINTS.get(v)
        if hint:
            hint = hint.format(min_length=policy.min_length, max_length=policy.max_length)
            if hint not in out:
                out.append(hint)
    if score(password) < WEAK_SCORE:
        out.append("Consider a longer, more varied combination of characters")
    return out


def validate_policy(password: str, settings=DEFAULT_SETTINGS, catalog: PatternCatalog = DEFAULT_CATALOG):
    """Normalize `settings`, evaluate, and return (ok, message)."""
    policy = normalize(settings)
    violations = evaluate(password, policy, catalog)
    if violations:
        return False, describe(violations[0], policy)
    return True, "Password meets all requirements."
