"""
Career Path Resolution.

Responsibilities:
- Map internal path keys to catalog record ids by name patterns.
- Fall back to the first catalog record for unmatched keys.

Non-Responsibilities:
- No scoring.
- No catalog loading.

Invariant:
Resolution is deterministic: pattern order per key, then catalog order.
An empty catalog leaves internal keys in place instead of failing.
"""

import re
from typing import Dict, List, Optional, Sequence, Tuple

from .logger import get_logger
from .models import CareerPathCandidate, CareerPathRecord
from .tables import PATH_PATTERNS


def match_record(
    patterns: Sequence[str],
    catalog: Sequence[CareerPathRecord],
) -> Optional[CareerPathRecord]:
    """Return the first record matching the earliest pattern that matches anything."""
    for pattern in patterns:
        regex = re.compile(pattern, re.IGNORECASE)
        for record in catalog:
            if regex.search(record.name):
                return record
    return None


def build_path_mapping(
    catalog: Sequence[CareerPathRecord],
    patterns: Dict[str, Tuple[str, ...]] = PATH_PATTERNS,
) -> Tuple[Dict[str, str], List[str]]:
    """
    Map every path key to a catalog id.

    Returns:
        Tuple of (mapping, keys that used the first-record fallback)
    """
    mapping: Dict[str, str] = {}
    fallbacks: List[str] = []
    if not catalog:
        return mapping, fallbacks

    for key, key_patterns in patterns.items():
        record = match_record(key_patterns, catalog)
        if record is not None:
            mapping[key] = record.id
        else:
            mapping[key] = catalog[0].id
            fallbacks.append(key)

    return mapping, fallbacks


def resolve_path_ids(
    candidates: List[CareerPathCandidate],
    catalog: Sequence[CareerPathRecord],
    patterns: Dict[str, Tuple[str, ...]] = PATH_PATTERNS,
) -> List[CareerPathCandidate]:
    """Set career_path_id on each candidate, keeping list order."""
    logger = get_logger()
    if not catalog:
        logger.warning("No career paths found in catalog", candidates=len(candidates))
        for candidate in candidates:
            candidate.career_path_id = candidate.path_key
        return candidates

    mapping, fallbacks = build_path_mapping(catalog, patterns)
    if fallbacks:
        logger.record_fallback_mapping(len(fallbacks))
        logger.debug(
            "Path keys fell back to first catalog record",
            keys=fallbacks,
            fallback_id=catalog[0].id,
        )

    for candidate in candidates:
        candidate.career_path_id = mapping.get(candidate.path_key, catalog[0].id)

    return candidates
