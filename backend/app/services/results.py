"""Result store service backed by the extractor's JSON dump."""

from pathlib import Path
from typing import List, Optional

from scripts.extractors.parties import get_display_name
from scripts.extractors.registry import get_district, list_districts
from scripts.extractors.reports import REPORTS, poll_runner_up, poll_winner
from scripts.extractors.results import PollResult, ResultStore

from ..config import RESULTS_JSON
from ..models.schemas import DistrictSummary, PartyVotes, PollData, ReportRow


# Loaded store (initialized by app lifespan)
_store: Optional[ResultStore] = None


def init_store(path: Optional[str] = None):
    """Load the result store from the JSON dump."""
    global _store
    if _store is None:
        _store = ResultStore.load_json(Path(path or RESULTS_JSON))


def close_store():
    """Release the loaded store."""
    global _store
    _store = None


def get_store() -> ResultStore:
    """Get the loaded store."""
    if _store is None:
        raise RuntimeError("Result store not loaded. Call init_store() first.")
    return _store


def to_poll_data(result: PollResult) -> PollData:
    """Convert a poll record to its API shape."""
    reporting = result.total > 0
    return PollData(
        district=result.district,
        poll=result.poll,
        distpoll=result.distpoll,
        total_votes=result.total,
        reporting=reporting,
        winner=poll_winner(result) if reporting else None,
        runner_up=poll_runner_up(result) if reporting else None,
        results=[
            PartyVotes(party=party, display_name=get_display_name(party), votes=votes)
            for party, votes in result.votes.items()
        ],
    )


def get_districts() -> List[DistrictSummary]:
    """Summarize every district in the store."""
    store = get_store()
    summaries = []

    for district in list_districts():
        if district not in store:
            continue
        config = get_district(district)
        polls = store.polls(district)
        summaries.append(DistrictSummary(
            id=district,
            name=config["name"],
            reporting=config["reporting"],
            polls=len(polls),
            pollsReporting=sum(1 for result in polls if result.total > 0),
            parties=store.parties(district),
            totalVotes=sum(result.total for result in polls),
        ))

    return summaries


def get_district_polls(district: int) -> Optional[List[PollData]]:
    """Poll results for one district, or None if it is not in the store."""
    store = get_store()
    if district not in store:
        return None
    return [to_poll_data(result) for result in store.polls(district)]


def get_report(name: str) -> Optional[List[ReportRow]]:
    """Rows of a named CSV report, or None for an unknown report."""
    if name not in REPORTS:
        return None
    _, build_rows = REPORTS[name]
    return [ReportRow(**row) for row in build_rows(get_store())]
