"""
Poll result records and the result store.

Each poll result is one record keyed by (district, poll). The nested
{district: {poll: {party: votes}}} shape only exists as the JSON encoding.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Union

from .errors import DuplicatePollError

PollId = Union[int, str]


def parse_poll_id(text: str) -> PollId:
    """Polls are zero-padded numbers ("007" -> 7) or a literal token such as "A"."""
    text = text.strip()
    return int(text) if text.isdigit() else text


@dataclass(frozen=True)
class PollResult:
    """Vote counts for one poll, keyed by party label in column order."""

    district: int
    poll: PollId
    votes: dict[str, int] = field(default_factory=dict)

    @property
    def key(self) -> tuple[int, PollId]:
        return (self.district, self.poll)

    @property
    def distpoll(self) -> str:
        return f"{self.district}-{self.poll}"

    @property
    def total(self) -> int:
        return sum(self.votes.values())

    @property
    def parties(self) -> list[str]:
        return list(self.votes)

    def ranked(self) -> list[tuple[str, int]]:
        """Parties by descending vote count; equal counts keep column order."""
        return sorted(self.votes.items(), key=lambda item: item[1], reverse=True)


class ResultStore:
    """Insertion-ordered poll results for every processed district."""

    def __init__(self):
        self._districts: dict[int, list[PollId]] = {}
        self._records: dict[tuple[int, PollId], PollResult] = {}

    def add_district(self, district: int, polls: list[PollResult]) -> None:
        """Add one fully decoded district.

        The district is registered even when it has no polls. Nothing is
        added if any poll key collides with one already stored.
        """
        seen = set()
        for result in polls:
            if result.district != district:
                raise ValueError(
                    f"Poll {result.distpoll} does not belong to district {district}"
                )
            if result.key in self._records or result.key in seen:
                raise DuplicatePollError(f"poll {result.poll} reported twice", district)
            seen.add(result.key)

        poll_ids = self._districts.setdefault(district, [])
        for result in polls:
            self._records[result.key] = result
            poll_ids.append(result.poll)

    def districts(self) -> list[int]:
        return list(self._districts)

    def polls(self, district: int) -> list[PollResult]:
        """Poll results of one district in document row order."""
        return [self._records[(district, poll)] for poll in self._districts[district]]

    def get(self, district: int, poll: PollId) -> PollResult:
        return self._records[(district, poll)]

    def parties(self, district: int) -> list[str]:
        """Party labels seen in a district, in column order."""
        parties: list[str] = []
        for result in self.polls(district):
            for party in result.votes:
                if party not in parties:
                    parties.append(party)
        return parties

    def __contains__(self, district: object) -> bool:
        return district in self._districts

    def __iter__(self) -> Iterator[PollResult]:
        for district in self._districts:
            yield from self.polls(district)

    def __len__(self) -> int:
        return len(self._records)

    def to_nested(self) -> dict[str, dict[str, dict[str, int]]]:
        """Encode as {district: {poll: {party: votes}}} with string keys."""
        return {
            str(district): {
                str(result.poll): dict(result.votes)
                for result in self.polls(district)
            }
            for district in self._districts
        }

    @classmethod
    def from_nested(cls, data: dict[str, Any]) -> "ResultStore":
        """Rebuild a store from its JSON encoding."""
        store = cls()
        for district_key, polls in data.items():
            district = int(district_key)
            store.add_district(district, [
                PollResult(
                    district=district,
                    poll=parse_poll_id(poll_key),
                    votes={party: int(votes) for party, votes in counts.items()},
                )
                for poll_key, counts in polls.items()
            ])
        return store

    def save_json(self, path: Union[str, Path]) -> Path:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(self.to_nested(), f, indent=2)
        return output_path

    @classmethod
    def load_json(cls, path: Union[str, Path]) -> "ResultStore":
        with open(path) as f:
            return cls.from_nested(json.load(f))
