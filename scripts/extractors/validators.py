"""
Data quality validation for extracted poll results.

Runs over a completed store before any report is written.
"""

from typing import Iterable, List, Optional

from .config import DISTRICT_IDS
from .results import PollResult, ResultStore


def validate_results(
    store: ResultStore,
    expected_districts: Optional[Iterable[int]] = None,
) -> List[str]:
    """
    Validate an extracted result store.

    Args:
        store: Completed result store
        expected_districts: Districts that must be present (default: all 27)

    Returns:
        List of validation issues (empty if valid)
    """
    issues = []
    expected = DISTRICT_IDS if expected_districts is None else expected_districts

    for district in expected:
        if district not in store:
            issues.append(f"District {district}: missing from results")

    for district in store.districts():
        polls = store.polls(district)
        if not polls:
            continue

        parties = set(polls[0].votes)
        for result in polls:
            for issue in validate_poll(result):
                issues.append(f"District {district}: {issue}")

            if set(result.votes) != parties:
                issues.append(
                    f"District {district}: poll {result.poll} parties "
                    f"{sorted(result.votes)} differ from {sorted(parties)}"
                )

    return issues


def validate_poll(result: PollResult) -> List[str]:
    """Validate a single poll result."""
    issues = []

    if not result.votes:
        issues.append(f"Poll {result.poll} has no party columns")
        return issues

    for party, votes in result.votes.items():
        if not party:
            issues.append(f"Poll {result.poll} has an empty party label")

        if not isinstance(votes, int) or isinstance(votes, bool):
            issues.append(f"Poll {result.poll} votes for '{party}' must be an integer")
            continue

        if votes < 0:
            issues.append(f"Poll {result.poll} has negative votes for '{party}': {votes}")

    return issues
