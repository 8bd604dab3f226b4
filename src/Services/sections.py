# src/Services/sections.py

"""
Section Classification

Devices carry a free-text section typed by admins ("PRISM", "HiSecOS",
"manual", "Regression ", ...). The dashboard groups devices into a small set
of canonical buckets; this module is the single place that decides which.

Matching rule: lower-case the raw value and drop every whitespace character,
then compare exactly against the canonical keys. Anything else, including an
empty section, lands in SectionGroup.OTHER.

    classify_section("HiSecOS")      -> SectionGroup.HISECOS
    classify_section(" hi sec os ")  -> SectionGroup.HISECOS
    classify_section("Manual")       -> SectionGroup.MANUAL
    classify_section("sandbox")      -> SectionGroup.OTHER
"""

from enum import Enum
from typing import Optional


class SectionGroup(str, Enum):
    PRISM = "PRISM"
    HISECOS = "HiSecOS"
    MANUAL = "Manual"
    REGRESSION = "Regression"
    OTHER = "Other"


_CANONICAL_KEYS = {
    "prism": SectionGroup.PRISM,
    "hisecos": SectionGroup.HISECOS,
    "manual": SectionGroup.MANUAL,
    "regression": SectionGroup.REGRESSION,
}


def normalize_section(raw: Optional[str]) -> str:
    """Lower-cased section with all whitespace removed."""
    if not raw:
        return ""
    return "".join(raw.split()).lower()


def classify_section(raw: Optional[str]) -> SectionGroup:
    """Map a free-text section name to its canonical bucket."""
    return _CANONICAL_KEYS.get(normalize_section(raw), SectionGroup.OTHER)
