"""Pydantic models for request/response validation."""

from typing import List, Optional, Union
from pydantic import BaseModel


class PartyVotes(BaseModel):
    """Votes for one party in one poll."""
    party: str
    display_name: str
    votes: int


class PollData(BaseModel):
    """Decoded results for one poll."""
    district: int
    poll: Union[int, str]
    distpoll: str
    total_votes: int
    reporting: bool
    winner: Optional[str] = None
    runner_up: Optional[str] = None
    results: List[PartyVotes]


class DistrictSummary(BaseModel):
    """Summary of one district's results."""
    id: int
    name: str
    reporting: bool
    polls: int
    pollsReporting: int
    parties: List[str]
    totalVotes: int


class ReportRow(BaseModel):
    """One row of a poll-level CSV report."""
    distpoll: str
    winner: str


class UploadResponse(BaseModel):
    """District page upload processing response."""
    success: bool
    message: str
    district: int
    pollsProcessed: Optional[int] = None
    polls: Optional[List[PollData]] = None
    errors: Optional[List[str]] = None
