"""
Poll-level reports over a completed result store.

Outputs to the data directory:
- pei-election-results.json: every poll result, unfiltered
- pei-election-poll-winners.csv: winning party per poll (ties omitted)
- pei-election-poll-secondplace.csv: second-place party per poll
- pei-election-poll-green-first-or-second.csv: polls where Green placed first or second

The CSV reports skip delayed districts and polls that have not reported
(all counts zero).
"""

import csv
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .config import (
    CSV_HEADER,
    DELAYED_DISTRICTS,
    GREEN_CSV,
    RESULTS_JSON,
    RUNNER_UPS_CSV,
    THRESHOLD_PARTY,
    WINNERS_CSV,
)
from .results import PollResult, ResultStore

ReportRow = dict[str, str]


def reporting_polls(
    store: ResultStore,
    excluded_districts: Iterable[int] = DELAYED_DISTRICTS,
) -> Iterator[PollResult]:
    """Polls with at least one vote, outside the excluded districts."""
    excluded = set(excluded_districts)
    for district in store.districts():
        if district in excluded:
            continue
        for result in store.polls(district):
            if result.total > 0:
                yield result


def poll_winner(result: PollResult) -> Optional[str]:
    """Party with the most votes, or None when the top count is tied."""
    if not result.votes:
        return None
    top = max(result.votes.values())
    leaders = [party for party, votes in result.votes.items() if votes == top]
    return leaders[0] if len(leaders) == 1 else None


def poll_runner_up(result: PollResult) -> Optional[str]:
    """
    Party in second position after a stable descending sort.

    Ties are not skipped here: with two parties tied for first, the one
    further right in the table is reported as runner-up.
    """
    ranked = result.ranked()
    return ranked[1][0] if len(ranked) > 1 else None


def green_first_or_second(result: PollResult, party: str = THRESHOLD_PARTY) -> bool:
    """Whether the party placed first or second in the poll."""
    return party in [name for name, _ in result.ranked()[:2]]


def _row(result: PollResult, party: str) -> ReportRow:
    return {"distpoll": result.distpoll, "winner": party}


def winner_rows(store: ResultStore, excluded_districts: Iterable[int] = DELAYED_DISTRICTS) -> list[ReportRow]:
    rows = []
    for result in reporting_polls(store, excluded_districts):
        winner = poll_winner(result)
        if winner is not None:
            rows.append(_row(result, winner))
    return rows


def runner_up_rows(store: ResultStore, excluded_districts: Iterable[int] = DELAYED_DISTRICTS) -> list[ReportRow]:
    rows = []
    for result in reporting_polls(store, excluded_districts):
        runner_up = poll_runner_up(result)
        if runner_up is not None:
            rows.append(_row(result, runner_up))
    return rows


def green_rows(
    store: ResultStore,
    excluded_districts: Iterable[int] = DELAYED_DISTRICTS,
    party: str = THRESHOLD_PARTY,
) -> list[ReportRow]:
    return [
        _row(result, party)
        for result in reporting_polls(store, excluded_districts)
        if green_first_or_second(result, party)
    ]


REPORTS = {
    "winners": (WINNERS_CSV, winner_rows),
    "runner-ups": (RUNNER_UPS_CSV, runner_up_rows),
    "green": (GREEN_CSV, green_rows),
}


def write_csv(rows: list[ReportRow], output_path: Path) -> Path:
    """Write report rows under the distpoll,winner header."""
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_HEADER, lineterminator='\n')
        writer.writeheader()
        writer.writerows(rows)

    return output_path


def write_json_dump(store: ResultStore, output_path: Path) -> Path:
    """Write the full store as {district: {poll: {party: votes}}}."""
    return store.save_json(output_path)


def write_all_reports(store: ResultStore, output_dir: str) -> dict[str, Path]:
    """
    Write the JSON dump and the three CSV reports, one file at a time.

    Returns:
        Output path per report name ("results" for the JSON dump)
    """
    directory = Path(output_dir)
    written = {"results": write_json_dump(store, directory / RESULTS_JSON)}

    for name, (filename, build_rows) in REPORTS.items():
        written[name] = write_csv(build_rows(store), directory / filename)

    return written


def print_summary(store: ResultStore) -> None:
    """Print a per-party tally of poll wins to the console."""
    wins: dict[str, int] = {}
    for row in winner_rows(store):
        wins[row["winner"]] = wins.get(row["winner"], 0) + 1

    reporting = sum(1 for _ in reporting_polls(store))

    print("=" * 60)
    print("POLL WINS BY PARTY")
    print("=" * 60)
    print(f"Districts: {len(store.districts())}  Polls: {len(store)}  Reporting: {reporting}")
    print("-" * 60)
    for party, count in sorted(wins.items(), key=lambda item: item[1], reverse=True):
        print(f"  {party:<20} {count:>5}")
    print(f"  {'(tied)':<20} {reporting - sum(wins.values()):>5}")
    print("=" * 60)
