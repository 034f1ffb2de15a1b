"""
District registry for the 2019 PEI provincial general election.

Centralizes configuration for all 27 electoral districts, including the
results page URL, an optional saved copy of the page, and whether the
district reported results on election night.
"""

from pathlib import Path
from typing import Optional, TypedDict

from .config import DELAYED_DISTRICTS, DISTRICT_IDS, LOCAL_HTML_TEMPLATE, RESULTS_URL_TEMPLATE


class DistrictConfig(TypedDict):
    """Configuration for a single district's results page."""
    id: int
    name: str
    results_url: str
    local_html: Optional[str]
    reporting: bool


DISTRICT_NAMES: dict[int, str] = {
    1: "Souris-Elmira",
    2: "Georgetown-Pownal",
    3: "Montague-Kilmuir",
    4: "Belfast-Murray River",
    5: "Mermaid-Stratford",
    6: "Stratford-Keppoch",
    7: "Morell-Donagh",
    8: "Stanhope-Marshfield",
    9: "Charlottetown-Hillsborough Park",
    10: "Charlottetown-Winsloe",
    11: "Charlottetown-Belvedere",
    12: "Charlottetown-Victoria Park",
    13: "Charlottetown-Brighton",
    14: "Charlottetown-West Royalty",
    15: "Brackley-Hunter River",
    16: "Cornwall-Meadowbank",
    17: "New Haven-Rocky Point",
    18: "Rustico-Emerald",
    19: "Borden-Kinkora",
    20: "Kensington-Malpeque",
    21: "Summerside-Wilmot",
    22: "Summerside-South Drive",
    23: "Tyne Valley-Sherbrooke",
    24: "Evangeline-Miscouche",
    25: "O'Leary-Inverness",
    26: "Alberton-Bloomfield",
    27: "Tignish-Palmer Road",
}


PEI_DISTRICTS: dict[int, DistrictConfig] = {
    district: {
        "id": district,
        "name": DISTRICT_NAMES[district],
        "results_url": RESULTS_URL_TEMPLATE.format(district=district),
        "local_html": None,
        "reporting": district not in DELAYED_DISTRICTS,
    }
    for district in DISTRICT_IDS
}


def get_district(district: int, source_dir: Optional[str] = None) -> DistrictConfig:
    """
    Get district config by ID.

    Args:
        district: District number (1-27)
        source_dir: Directory of saved district pages; when given, the
            returned config points local_html at district{N}.html inside it

    Returns:
        DistrictConfig for the specified district

    Raises:
        KeyError: If district is not registered
    """
    config = dict(PEI_DISTRICTS[district])
    if source_dir:
        config["local_html"] = str(Path(source_dir) / LOCAL_HTML_TEMPLATE.format(district=district))
    return config


def list_districts() -> list[int]:
    """
    List all registered district IDs.

    Returns:
        District IDs in ascending order
    """
    return sorted(PEI_DISTRICTS.keys())
