"""
Parser for Elections PEI district results pages.

Each district page holds one results table. Candidate columns are ordered by
candidate surname, so the party behind each column differs from district to
district and has to be read from the header row first:

    <tr class="summaryheader">
      <td class="districtheadertext">0 of 10<br>polls reporting</td>
      <td>
        <span>(Green)<br /></span>
        <span>KARLA<br /></span>
        <b>BERNARD</b>
      </td>
      ...
    </tr>

Every poll then gets an unlabeled row whose cells follow the header order:

    <tr class="districtresults">
      <td class="districtheadertext">A</td>
      <td><span>365</span></td>
      ...
    </tr>
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import requests
from bs4 import BeautifulSoup, Tag

from .config import (
    FETCH_TIMEOUT,
    HEADER_ROW_SELECTOR,
    LABEL_CELL_CLASS,
    RESULT_ROW_SELECTOR,
    USER_AGENT,
)
from .errors import (
    ColumnMappingError,
    ColumnMismatchError,
    DuplicatePollError,
    ExtractionError,
    FetchError,
    HeaderNotFoundError,
)
from .parties import is_known_party, parse_party_label
from .registry import DistrictConfig
from .results import PollResult, parse_poll_id

logger = logging.getLogger(__name__)


@dataclass
class ColumnMapping:
    """Party label for each candidate column of one district's table."""

    width: int
    parties: dict[int, str] = field(default_factory=dict)

    @property
    def unmapped(self) -> list[int]:
        return [index for index in range(self.width) if index not in self.parties]

    def labels(self) -> list[str]:
        return [self.parties[index] for index in sorted(self.parties)]


def fetch_html(url: str, timeout: float = FETCH_TIMEOUT) -> str:
    """Fetch a results page. Any network or HTTP error raises FetchError."""
    logger.info("Fetching %s", url)
    try:
        response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"could not fetch {url}: {e}") from e
    return response.text


def read_html(path: str) -> str:
    """Read a saved results page."""
    html_path = Path(path)
    if not html_path.exists():
        raise FetchError(f"saved page not found: {html_path}")
    return html_path.read_text(encoding="utf-8", errors="replace")


def _is_label_cell(cell: Tag) -> bool:
    return LABEL_CELL_CLASS in (cell.get("class") or [])


def _cells(row: Tag) -> list[Tag]:
    return row.find_all("td", recursive=False)


def map_columns(soup: BeautifulSoup, district: Optional[int] = None) -> ColumnMapping:
    """
    Build the column mapping from the candidate header row.

    The party label is the first span of each candidate cell; the name
    spans that follow it are ignored. Cells without a parenthesized label
    are left unmapped.

    Raises:
        HeaderNotFoundError: If the page lacks exactly one header row
        ColumnMappingError: If two columns carry the same party label
    """
    header_rows = soup.select(HEADER_ROW_SELECTOR)
    if len(header_rows) != 1:
        raise HeaderNotFoundError(
            f"expected one {HEADER_ROW_SELECTOR!r} row, found {len(header_rows)}", district
        )

    candidate_cells = [cell for cell in _cells(header_rows[0]) if not _is_label_cell(cell)]
    mapping = ColumnMapping(width=len(candidate_cells))

    for index, cell in enumerate(candidate_cells):
        label_span = cell.find("span", recursive=False)
        party = parse_party_label(label_span.get_text(strip=True)) if label_span else None

        if party is None:
            logger.warning(
                "District %s: header column %d has no party label, leaving it unmapped",
                district, index,
            )
            continue

        if party in mapping.parties.values():
            raise ColumnMappingError(f"party {party!r} appears in more than one column", district)

        if not is_known_party(party):
            logger.debug("District %s: unrecognized party label %r", district, party)

        mapping.parties[index] = party

    return mapping


def parse_vote_count(text: str) -> int:
    """Parse a zero-padded vote count ("0042" -> 42)."""
    cleaned = text.strip().replace(',', '')
    if not cleaned.isdigit():
        raise ValueError(f"not a vote count: {text!r}")
    return int(cleaned)


def decode_rows(soup: BeautifulSoup, mapping: ColumnMapping, district: int) -> list[PollResult]:
    """
    Decode every poll row through the column mapping.

    Returns:
        One PollResult per row, in document order

    Raises:
        ColumnMismatchError: If a row's width differs from the header's
        DuplicatePollError: If a poll appears twice
        ExtractionError: If a row lacks a poll cell or holds a non-numeric count
    """
    polls: list[PollResult] = []
    seen = set()

    for row in soup.select(RESULT_ROW_SELECTOR):
        cells = _cells(row)
        label_cells = [cell for cell in cells if _is_label_cell(cell)]
        if not label_cells:
            raise ExtractionError("result row without a poll cell", district)

        poll = parse_poll_id(label_cells[0].get_text(strip=True))
        if poll in seen:
            raise DuplicatePollError(f"poll {poll} reported twice", district)
        seen.add(poll)

        result_cells = [cell for cell in cells if not _is_label_cell(cell)]
        if len(result_cells) != mapping.width:
            raise ColumnMismatchError(
                f"poll {poll} has {len(result_cells)} result columns, header has {mapping.width}",
                district,
            )

        votes: dict[str, int] = {}
        for index, cell in enumerate(result_cells):
            try:
                count = parse_vote_count(cell.get_text(strip=True))
            except ValueError as e:
                raise ExtractionError(f"poll {poll}, column {index}: {e}", district) from e

            party = mapping.parties.get(index)
            if party is None:
                logger.warning(
                    "District %s: dropping %d votes in unmapped column %d of poll %s",
                    district, count, index, poll,
                )
                continue
            votes[party] = count

        polls.append(PollResult(district=district, poll=poll, votes=votes))

    return polls


class DistrictPageParser:
    """
    For Elections PEI district results pages.

    Format characteristics:
    - One 'summaryheader' row with a party label span per candidate cell
    - One 'districtresults' row per poll, cells in header order
    - Poll numbers zero-padded; the advance poll labelled 'A'
    """

    def can_parse(self, source: str) -> bool:
        """Check if source is a URL or a saved HTML page."""
        return source.startswith(('http://', 'https://')) or source.lower().endswith(('.html', '.htm'))

    def source_for(self, district_config: DistrictConfig) -> str:
        """Prefer a saved copy of the page over the live URL."""
        return district_config.get("local_html") or district_config["results_url"]

    def parse(self, source: str, district_config: DistrictConfig) -> list[PollResult]:
        """Load and decode one district page."""
        district = district_config["id"]
        if not self.can_parse(source):
            raise FetchError(f"unsupported source: {source}", district)

        try:
            if source.startswith(('http://', 'https://')):
                html_content = fetch_html(source)
            else:
                html_content = read_html(source)
        except FetchError as e:
            raise FetchError(str(e), district) from e

        return self.parse_html(html_content, district)

    def parse_html(self, html_content: str, district: int) -> list[PollResult]:
        """Decode one district page's HTML."""
        soup = BeautifulSoup(html_content, 'html.parser')
        mapping = map_columns(soup, district)
        logger.debug("District %s columns: %s", district, mapping.parties)
        return decode_rows(soup, mapping, district)
