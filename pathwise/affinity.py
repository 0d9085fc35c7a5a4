"""
Interest Affinity Mapping.

Responsibilities:
- Turn questionnaire answers into per-category affinity scores
  using the rule table.

Non-Responsibilities:
- No validation of answer values.
- No knowledge of specific questions; those live in the rule table.

Invariant:
Answers to unknown questions contribute nothing. Every category in
CATEGORIES is present in the result, starting at zero.
"""

from typing import Dict, Iterable, List, Tuple

from .models import AffinityVector, InterestAnswer
from .tables import CATEGORIES, INTEREST_RULES, InterestRule


def _rules_by_question(rules: Iterable[InterestRule]) -> Dict[int, List[InterestRule]]:
    grouped: Dict[int, List[InterestRule]] = {}
    for rule in rules:
        grouped.setdefault(rule.question_id, []).append(rule)
    return grouped


def map_affinities(
    answers: Iterable[InterestAnswer],
    rules: Tuple[InterestRule, ...] = INTEREST_RULES,
) -> AffinityVector:
    """
    Accumulate affinity deltas for each answer.

    Rules for one question are tried in table order and only the first
    match applies. Separate answers always add up independently.
    """
    affinities: AffinityVector = {c: 0.0 for c in CATEGORIES}
    grouped = _rules_by_question(rules)

    for answer in answers:
        response = str(answer.response)
        for rule in grouped.get(answer.question_id, ()):
            if rule.matches(response):
                for category, delta in rule.deltas:
                    affinities[category] += delta
                break

    return affinities
