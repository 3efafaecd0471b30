# pw_policy.py
"""
Policy settings normalization.

Raw settings come from the host as a flat string-keyed map whose values may be
real booleans/ints or their string forms ("1", "true", "10"). normalize() never
fails: anything malformed is repaired to a safe default.
"""
import re
from dataclasses import dataclass, asdict
from typing import Any, Mapping, Optional

MIN_LENGTH_RANGE = (1, 50)
DEFAULT_MIN_LENGTH = 8
MAX_LENGTH = 1000

BOOLEAN_SETTINGS = (
    "enabled",
    "require_uppercase",
    "require_lowercase",
    "require_numbers",
    "require_special_chars",
    "prevent_common_passwords",
    "prevent_sequential_chars",
    "prevent_keyboard_patterns",
    "prevent_repetitive_chars",
)

DEFAULT_SETTINGS = {
    "enabled": True,
    "min_length": DEFAULT_MIN_LENGTH,
    "require_uppercase": True,
    "require_lowercase": True,
    "require_numbers": True,
    "require_special_chars": True,
    "prevent_common_passwords": True,
    "prevent_sequential_chars": True,
    "prevent_keyboard_patterns": True,
    "prevent_repetitive_chars": True,
}

_TRUTHY = (True, 1, "1", "true")
_BOOLISH = (True, False, 1, 0, "1", "0", "true", "false")
_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class PolicyConfig:
    enabled: bool = False
    min_length: int = DEFAULT_MIN_LENGTH
    require_uppercase: bool = False
    require_lowercase: bool = False
    require_numbers: bool = False
    require_special_chars: bool = False
    prevent_common_passwords: bool = False
    prevent_sequential_chars: bool = False
    prevent_keyboard_patterns: bool = False
    prevent_repetitive_chars: bool = False

    @property
    def max_length(self) -> int:
        # not configurable
        return MAX_LENGTH

    def as_settings(self) -> dict:
        return asdict(self)


def _canonical_key(key: str) -> str:
    return _CAMEL.sub("_", str(key)).lower()


def _canonical(raw: Mapping[str, Any]) -> dict:
    return {_canonical_key(k): v for k, v in raw.items()}


def coerce_bool(value: Any) -> bool:
    """1, "1", True and "true" are true; everything else is false."""
    if isinstance(value, float):
        return False
    try:
        return value in _TRUTHY
    except TypeError:
        return False


def _parse_length(value: Any) -> Optional[int]:
    """Integer within MIN_LENGTH_RANGE, or None."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        n = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        return None
    lo, hi = MIN_LENGTH_RANGE
    if n < lo or n > hi:
        return None
    return n


def coerce_min_length(value: Any) -> int:
    n = _parse_length(value)
    return DEFAULT_MIN_LENGTH if n is None else n


def normalize(raw) -> Optional[PolicyConfig]:
    """Build a PolicyConfig from raw settings.

    Returns None when no settings exist at all; callers treat that as
    "no policy", which is different from a policy with enabled=False.
    """
    if raw is None:
        return None
    if isinstance(raw, PolicyConfig):
        raw = raw.as_settings()
    try:
        settings = _canonical(raw)
    except (AttributeError, TypeError):
        settings = {}
    values = {name: coerce_bool(settings.get(name)) for name in BOOLEAN_SETTINGS}
    values["min_length"] = coerce_min_length(settings.get("min_length"))
    return PolicyConfig(**values)


def validate_config(raw: Mapping[str, Any]) -> list:
    """List problems in raw settings without changing anything.

    normalize() repairs all of these; hosts may log the list as warnings.
    """
    problems = []
    if raw is None:
        return problems
    try:
        settings = _canonical(raw)
    except (AttributeError, TypeError):
        return [f"settings must be a mapping (got {type(raw).__name__})"]
    # a missing key is an unset rule, not a repair
    for name in BOOLEAN_SETTINGS:
        value = settings.get(name)
        if value is None:
            continue
        if isinstance(value, float) or not _is_boolish(value):
            problems.append(f"{name} must be a boolean (got {value!r})")

    value = settings.get("min_length")
    lo, hi = MIN_LENGTH_RANGE
    if value is not None and _parse_length(value) is None:
        problems.append(f"min_length must be between {lo} and {hi} (got {value!r}), using {DEFAULT_MIN_LENGTH}")
    return problems


def _is_boolish(value: Any) -> bool:
    try:
        return value in _BOOLISH
    except TypeError:
        return False
