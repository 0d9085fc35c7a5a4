"""
Static scoring tables.

Responsibilities:
- Define the fixed category set.
- Define the questionnaire rule table, career path weights and
  catalog name patterns.
- Hold the blending constants used by the scorer and normalizer.

Non-Responsibilities:
- No scoring.
- No I/O.

Invariant:
CATEGORIES, every rule delta and every weight vector use the same
category set. Adding a category means updating all three together.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

CATEGORIES: Tuple[str, ...] = (
    "frontend",
    "backend",
    "data",
    "cloud",
    "mobile",
    "security",
)


@dataclass(frozen=True)
class InterestRule:
    """One questionnaire rule: if the response matches, add the deltas."""

    question_id: int
    match: str  # "exact" | "contains"
    values: Tuple[str, ...]
    deltas: Tuple[Tuple[str, float], ...]

    def matches(self, response: str) -> bool:
        if self.match == "exact":
            return response in self.values
        if self.match == "contains":
            return any(v in response for v in self.values)
        raise ValueError(f"Unknown match mode: {self.match}")


INTEREST_RULES_VERSION = 1

# Rules for the same question are tried in order; the first match applies.
INTEREST_RULES: Tuple[InterestRule, ...] = (
    # 1: visual design and UI (likert)
    InterestRule(1, "exact", ("5", "4"), (("frontend", 2), ("mobile", 1))),
    # 2: backend vs frontend preference
    InterestRule(2, "contains", ("Backend",), (("backend", 3), ("cloud", 1))),
    InterestRule(2, "contains", ("Frontend",), (("frontend", 3), ("mobile", 1))),
    InterestRule(2, "contains", ("Both",), (("frontend", 1), ("backend", 1))),
    # 3: math and statistics (likert)
    InterestRule(3, "exact", ("5", "4"), (("data", 3), ("backend", 1))),
    # 4: area of interest
    InterestRule(4, "contains", ("web applications",), (("frontend", 2), ("backend", 2))),
    InterestRule(4, "contains", ("data",), (("data", 3),)),
    InterestRule(4, "contains", ("cloud",), (("cloud", 3),)),
    InterestRule(4, "contains", ("mobile",), (("mobile", 3),)),
    InterestRule(4, "contains", ("security",), (("security", 3),)),
    # 5: problem-solving enjoyment (likert)
    InterestRule(5, "exact", ("5", "4"), (("backend", 1), ("data", 1))),
)

CAREER_PATH_WEIGHTS: Dict[str, Dict[str, float]] = {
    "fullstack": {
        "frontend": 0.4,
        "backend": 0.4,
        "data": 0.1,
        "cloud": 0.05,
        "mobile": 0.05,
        "security": 0.0,
    },
    "datascience": {
        "frontend": 0.05,
        "backend": 0.15,
        "data": 0.7,
        "cloud": 0.05,
        "mobile": 0.0,
        "security": 0.05,
    },
    "cloud": {
        "frontend": 0.05,
        "backend": 0.25,
        "data": 0.1,
        "cloud": 0.55,
        "mobile": 0.0,
        "security": 0.05,
    },
    "mobile": {
        "frontend": 0.3,
        "backend": 0.15,
        "data": 0.05,
        "cloud": 0.05,
        "mobile": 0.45,
        "security": 0.0,
    },
    "security": {
        "frontend": 0.05,
        "backend": 0.2,
        "data": 0.1,
        "cloud": 0.1,
        "mobile": 0.0,
        "security": 0.55,
    },
}

# Tried in order per key; the first catalog record matching wins.
PATH_PATTERNS: Dict[str, Tuple[str, ...]] = {
    "fullstack": (r"full\s*stack", r"fullstack", r"full-stack"),
    "datascience": (r"data\s*science", r"datascience", r"data-science"),
    "cloud": (r"cloud", r"cloud\s*infrastructure"),
    "mobile": (r"mobile", r"mobile\s*dev"),
    "security": (r"cybersecurity", r"security"),
}

PERFORMANCE_WEIGHT = 0.6
INTEREST_WEIGHT = 0.4
PERFORMANCE_SCALE = 100
INTEREST_SCALE = 10
INTEREST_CAP = 100

SOFTMAX_TEMPERATURE = 10.0
CONFIDENCE_CAP = 95.0

# Stand-in accuracy when a user has no graded attempts yet.
NEUTRAL_CORRECT = 1
NEUTRAL_TOTAL = 2


def check_tables(
    rules: Tuple[InterestRule, ...] = INTEREST_RULES,
    weights: Dict[str, Dict[str, float]] = CAREER_PATH_WEIGHTS,
    patterns: Dict[str, Tuple[str, ...]] = PATH_PATTERNS,
) -> List[str]:
    """
    Check that the tables agree on categories and path keys.

    Returns a list of problems. Empty list means consistent.
    """
    problems: List[str] = []
    expected = set(CATEGORIES)

    for key, vector in weights.items():
        if set(vector) != expected:
            missing = sorted(expected - set(vector))
            extra = sorted(set(vector) - expected)
            problems.append(f"Weights for '{key}' differ from categories (missing={missing}, extra={extra})")

    for rule in rules:
        for category, _ in rule.deltas:
            if category not in expected:
                problems.append(f"Rule for question {rule.question_id} uses unknown category '{category}'")
        if rule.match not in ("exact", "contains"):
            problems.append(f"Rule for question {rule.question_id} has unknown match mode '{rule.match}'")

    if set(patterns) != set(weights):
        problems.append(
            f"Pattern keys {sorted(patterns)} differ from weight keys {sorted(weights)}"
        )

    return problems
