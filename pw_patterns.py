# pw_patterns.py
"""
Static pattern catalog: sequential runs, keyboard patterns and common passwords.

All entries are lowercase. A catalog is immutable once built; DEFAULT_CATALOG is
built at import time and shared by every evaluation.
"""
import os
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

DEFAULT_MAX_WORDLIST_LINES = 200_000

SPECIAL_CHARS = frozenset("!@#$%^&*()_+-=[]{};':\"\\|,.<>/?")

SEQUENTIAL_PATTERNS = frozenset({
    "1234567890", "0987654321",
    "abcdefghijklmnopqrstuvwxyz", "zyxwvutsrqponmlkjihgfedcba",
    "qwertyuiop", "asdfghjkl", "zxcvbnm",
    "1qaz2wsx3edc4rfv5tgb6yhn7ujm8ik9ol0p",
})

KEYBOARD_PATTERNS = frozenset({
    # vertical columns on a QWERTY board
    "1qaz", "2wsx", "3edc", "4rfv", "5tgb", "6yhn", "7ujm",
    "zaq1", "xsw2", "cde3", "vfr4", "bgt5", "nhy6", "mju7",
    "1qaz2wsx", "2wsx3edc", "3edc4rfv", "4rfv5tgb", "5tgb6yhn", "6yhn7ujm", "7ujm8ik9", "8ik9ol0p",
    "qaz2wsx3", "wsx3edc4", "edc4rfv5", "rfv5tgb6", "tgb6yhn7", "yhn7ujm8", "ujm8ik9o", "ik9ol0p",
    # reversed
    "p0lo9ki8mju7nhy6bgt5vfr4cde3xsw2zaq1",
    "0p9o8i7u6y5t4r3e2w1q",
    # shifted
    "!qaz@wsx#edc$rfv%tgb^yhn&ujm*ik(ol)p",
    "1qaz@wsx#edc$rfv%tgb^yhn&ujm*ik(ol)p",
    "!@#$%^&*()", ")(*&^%$#@!",
    # interleaved rows
    "q1w2e3r4t5y6u7i8o9p0", "p0o9i8u7y6t5r4e3w2q1",
})

COMMON_PASSWORDS = frozenset({
    "password", "123456", "123456789", "qwerty", "abc123",
    "password123", "admin", "letmein", "welcome", "monkey",
    "12345678", "111111", "iloveyou", "sunshine", "dragon",
    "admin123", "user123", "test123",
})

KEYBOARD_ROWS = ("1234567890", "qwertyuiop", "asdfghjkl", "zxcvbnm")
KEYPAD_DIAGONALS = ("147", "258", "369")
SHIFTED_ROW_RUNS = ("!@#", "$%^", "&*()")
WINDOW_SIZES = range(3, 7)


def keyboard_windows(rows=KEYBOARD_ROWS, sizes=WINDOW_SIZES) -> FrozenSet[str]:
    """Every contiguous run of each row for the given sizes, both directions,
    plus keypad diagonals and shifted-symbol runs."""
    found = set()
    for row in rows:
        for size in sizes:
            for start in range(len(row) - size + 1):
                window = row[start:start + size]
                found.add(window)
                found.add(window[::-1])
    for seq in KEYPAD_DIAGONALS + SHIFTED_ROW_RUNS:
        found.add(seq)
        found.add(seq[::-1])
    return frozenset(found)


@dataclass(frozen=True)
class PatternCatalog:
    sequential_patterns: FrozenSet[str] = SEQUENTIAL_PATTERNS
    keyboard_patterns: FrozenSet[str] = KEYBOARD_PATTERNS
    common_passwords: FrozenSet[str] = COMMON_PASSWORDS
    keyboard_runs: FrozenSet[str] = field(default_factory=keyboard_windows)

    def __post_init__(self):
        # accept any iterable, store lowercase frozensets
        for name in ("sequential_patterns", "keyboard_patterns", "common_passwords", "keyboard_runs"):
            object.__setattr__(self, name, frozenset(p.lower() for p in getattr(self, name) if p))

    def has_sequential(self, password: str) -> bool:
        p = password.lower()
        return any(pattern in p for pattern in self.sequential_patterns)

    def has_keyboard_pattern(self, password: str) -> bool:
        p = password.lower()
        if any(pattern in p for pattern in self.keyboard_patterns):
            return True
        return any(run in p for run in self.keyboard_runs)

    def is_common(self, password: str) -> bool:
        return password.lower() in self.common_passwords

    def extended(self, words: Iterable[str]) -> "PatternCatalog":
        """Return a copy whose common-password set also holds `words`."""
        return PatternCatalog(
            sequential_patterns=self.sequential_patterns,
            keyboard_patterns=self.keyboard_patterns,
            common_passwords=self.common_passwords | {w.lower() for w in words if w},
            keyboard_runs=self.keyboard_runs,
        )


DEFAULT_CATALOG = PatternCatalog()


def load_wordlist(path: str, max_lines: int = DEFAULT_MAX_WORDLIST_LINES) -> set:
    if not path or path.endswith(".gz") or not os.path.isfile(path):
        return set()
    wordset = set()
    with open(path, "r", encoding="latin-1", errors="ignore") as fh:
        for i, line in enumerate(fh):
            if max_lines and i >= max_lines: break
            w = line.strip().lower()
            if w: wordset.add(w)
    return wordset
