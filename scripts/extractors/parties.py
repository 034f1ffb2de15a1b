"""
Party label handling for PEI results pages.

Header cells carry the party as a parenthesized label, e.g. "(Green)".
Labels are kept verbatim in the extracted data; display names are only
used for presentation.
"""

import re
from typing import Optional

PARTY_LABEL_PATTERN = re.compile(r'^\(\s*(?P<party>[^()]+?)\s*\)$')

# Map canonical party labels to their known aliases
PARTY_ALIASES: dict[str, list[str]] = {
    "green": ["grn", "gpp", "green party"],
    "liberal": ["lib", "liberals", "liberal party"],
    "pc": ["pcs", "progressive conservative", "conservative"],
    "ndp": ["new democratic", "new democratic party"],
    "independent": ["ind", "ind."],
}

# Map canonical labels to display names
CANONICAL_PARTIES: dict[str, str] = {
    "green": "Green",
    "liberal": "Liberal",
    "pc": "Progressive Conservative",
    "ndp": "New Democratic",
    "independent": "Independent",
}


def parse_party_label(text: str) -> Optional[str]:
    """
    Extract the bare party label from a header span's text.

    Args:
        text: Span text, e.g. "(Green)"

    Returns:
        "Green", or None if the text is not a parenthesized label
    """
    match = PARTY_LABEL_PATTERN.match(text.strip())
    return match.group('party') if match else None


def normalize_party(raw: str) -> str:
    """
    Convert any party variant to canonical name.

    Args:
        raw: Party label from a results page

    Returns:
        Lowercase canonical form, or original if unknown
    """
    normalized = raw.strip().lower()

    if normalized in CANONICAL_PARTIES:
        return normalized

    for canonical, aliases in PARTY_ALIASES.items():
        if normalized in aliases:
            return canonical

    return normalized


def get_display_name(party: str) -> str:
    """Get the display name for a party label ("PC" -> "Progressive Conservative")."""
    return CANONICAL_PARTIES.get(normalize_party(party), party.strip())


def is_known_party(party: str) -> bool:
    """Check if a party label is recognized."""
    return normalize_party(party) in CANONICAL_PARTIES
