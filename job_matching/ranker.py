"""
Ranker

Orders match results by final score, highest first. Equal scores fall back
to subject_id in plain string order so the output never depends on input order.
"""

import logging
from typing import List, Sequence

from .config import DEFAULT_LIMIT
from .errors import InvalidArgument
from .models import MatchResult

logger = logging.getLogger(__name__)


def validate_limit(limit) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        logger.warning(f"Rejected ranking limit: {limit!r}")
        raise InvalidArgument(f"limit must be a positive integer, got {limit!r}")
    return limit


def rank(results: Sequence[MatchResult], limit: int = DEFAULT_LIMIT) -> List[MatchResult]:
    """
    Sort results and keep the top `limit`.

    Args:
        results: Scored matches (not modified)
        limit: Maximum number of results to return, must be > 0

    Returns:
        At most `limit` results, score descending, ties by subject_id ascending

    Raises:
        InvalidArgument: If limit is not a positive integer
    """
    validate_limit(limit)
    ordered = sorted(results, key=lambda r: (-r.final_score, r.subject_id))
    return ordered[:limit]
