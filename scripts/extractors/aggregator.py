"""
Collect poll results for every district into one result store.

Districts are processed one at a time in ascending order. Any failure
stops the run so a partial store never reaches the reports.
"""

import logging
from typing import Callable, Iterable, Optional

from .config import DISTRICT_IDS
from .parsers import DistrictPageParser
from .registry import DistrictConfig, get_district
from .results import PollResult, ResultStore

logger = logging.getLogger(__name__)

DistrictCallback = Callable[[DistrictConfig, list[PollResult]], None]


def collect_results(
    district_ids: Optional[Iterable[int]] = None,
    parser: Optional[DistrictPageParser] = None,
    source_dir: Optional[str] = None,
    on_district: Optional[DistrictCallback] = None,
) -> ResultStore:
    """
    Extract every requested district into a new ResultStore.

    Args:
        district_ids: Districts to process (default: all 27)
        parser: Page parser (default: DistrictPageParser)
        source_dir: Directory of saved district{N}.html pages to read
            instead of fetching the live pages
        on_district: Called after each district is decoded

    Returns:
        The populated store

    Raises:
        ExtractionError: On the first district that cannot be fetched or decoded
        KeyError: If a district ID is not registered
    """
    parser = parser or DistrictPageParser()
    store = ResultStore()

    for district in sorted(district_ids if district_ids is not None else DISTRICT_IDS):
        district_config = get_district(district, source_dir=source_dir)
        source = parser.source_for(district_config)

        logger.info("District %d (%s): %s", district, district_config["name"], source)
        polls = parser.parse(source, district_config)
        store.add_district(district, polls)
        logger.info("District %d: %d polls", district, len(polls))

        if on_district:
            on_district(district_config, polls)

    return store
