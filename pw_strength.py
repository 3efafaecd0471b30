# pw_strength.py
"""
Advisory 0-100 strength score. Independent of the policy rules; never used to
accept or reject a password.

| Criterion                                    | Points         |
|----------------------------------------------|:--------------:|
| Length                                       | 2/char, max 25 |
| Contains uppercase letter                    | +10            |
| Contains lowercase letter                    | +10            |
| Contains digit                               | +10            |
| Contains symbol (!@#$%^&* etc.)              | +10            |
| All four classes and length >= 16            | +35            |
"""
import re
from enum import Enum
from typing import Optional

from pw_patterns import SPECIAL_CHARS

LENGTH_POINTS_PER_CHAR = 2
LENGTH_POINTS_MAX = 25
CLASS_POINTS = 10
BONUS_LENGTH = 16
BONUS_POINTS = 35
MAX_SCORE = 100


class Tier(str, Enum):
    VERY_WEAK = "very_weak"
    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"
    VERY_STRONG = "very_strong"


# upper bound (inclusive) of each tier
TIER_BOUNDS = (
    (20, Tier.VERY_WEAK),
    (40, Tier.WEAK),
    (60, Tier.MEDIUM),
    (80, Tier.STRONG),
    (MAX_SCORE, Tier.VERY_STRONG),
)

TIER_LABELS = {
    Tier.VERY_WEAK: ("Very weak", "#ff4444"),
    Tier.WEAK: ("Weak", "#ff8800"),
    Tier.MEDIUM: ("Medium", "#ffaa00"),
    Tier.STRONG: ("Strong", "#00aa00"),
    Tier.VERY_STRONG: ("Very strong", "#008800"),
}


def character_classes(password: str) -> int:
    classes = 0
    if re.search(r"[A-Z]", password): classes += 1
    if re.search(r"[a-z]", password): classes += 1
    if re.search(r"[0-9]", password): classes += 1
    if SPECIAL_CHARS.intersection(password): classes += 1
    return classes


def score(password: Optional[str]) -> int:
    if not password:
        return 0
    points = min(len(password) * LENGTH_POINTS_PER_CHAR, LENGTH_POINTS_MAX)
    classes = character_classes(password)
    points += classes * CLASS_POINTS
    if classes == 4 and len(password) >= BONUS_LENGTH:
        points += BONUS_POINTS
    return min(points, MAX_SCORE)


def tier(value: int) -> Tier:
    for upper, name in TIER_BOUNDS:
        if value <= upper:
            return name
    return Tier.VERY_STRONG
