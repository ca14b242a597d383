# -*- coding: utf-8 -*-
"""
Justel ELI URLs

Year index:  {base}/eli/{loi|wet}/{year}
Law text:    {base}/eli/{loi|wet}/{year}/{month}/{day}/{numac}/justel

'loi' selects the French text, 'wet' the Dutch one. A numac plus the
promulgation date is enough to rebuild the URL in either language.
"""
# Standard library
import re
import sys
from pathlib import Path
from typing import NamedTuple, Optional

# Project root (src/ingestion/justel_urls.py → 3 parents)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Local
from configs.config import SCRAPER_CONFIG
from src.utils.dataclasses import Language

BASE_URL = SCRAPER_CONFIG["base_url"]

JUSTEL_URL_PATTERN = re.compile(
    r'/eli/(loi|wet)/(\d{4})/(\d{2})/(\d{2})/(\d+)/justel',
    re.IGNORECASE,
)


class JustelUrlParts(NamedTuple):
    language: Language
    year: int
    month: str
    day: str
    numac: str


def build_index_url(year: int, language: Language = Language.FR, base_url: str = BASE_URL) -> str:
    return f"{base_url}/eli/{language.path_segment}/{year}"


def build_justel_url(
    year: int,
    month: str,
    day: str,
    numac: str,
    language: Language = Language.FR,
    base_url: str = BASE_URL,
) -> str:
    """Canonical consolidated-text URL of a law."""
    return f"{base_url}/eli/{language.path_segment}/{year}/{month}/{day}/{numac}/justel"


def parse_justel_url(url: str) -> Optional[JustelUrlParts]:
    """
    Decompose a law URL (absolute or relative) into its parts.

    Returns:
        JustelUrlParts, or None if the URL is not a law text URL
    """
    match = JUSTEL_URL_PATTERN.search(url or '')
    if not match:
        return None
    segment, year, month, day, numac = match.groups()
    return JustelUrlParts(
        language=Language.from_path_segment(segment),
        year=int(year),
        month=month,
        day=day,
        numac=numac,
    )


def absolute_url(href: str, base_url: str = BASE_URL) -> str:
    """Make an index link absolute; Justel mixes absolute and root-relative hrefs."""
    href = href.strip()
    if href.lower().startswith('http'):
        return href
    if not href.startswith('/'):
        href = '/' + href
    return f"{base_url}{href}"
