# -*- coding: utf-8 -*-
"""
Justel year index parser

Turns a yearly listing page (/eli/loi/YYYY) into one IndexEntry per law.
The page is a legacy table layout, one row per law:

    <tr><A name=N> </A>
      <td>N</td>
      <td>13 JANVIER 2023. - Loi portant ...<br><br>Publié le 30-01-2023<br>Source : Justice</td>
      <td><A href=/eli/loi/2023/01/13/2023040123/justel>Justel</A></td>
    </tr>

Entries are located through their Justel links; the date and NUMAC come from
the link itself, the rest from the description cell of the same row. A
malformed row is logged and skipped, it never aborts the page.
"""
# Standard library
import re
import sys
from dataclasses import replace
from pathlib import Path
from typing import Iterator, List, Optional

# Project root (src/ingestion/index_parser.py → 3 parents)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Third-party
from bs4 import BeautifulSoup, Tag

# Local
from configs.config import SCRAPER_CONFIG
from configs.extraction_config import INDEX_CONFIG
from src.ingestion.justel_urls import JustelUrlParts, absolute_url, parse_justel_url
from src.utils.dataclasses import IndexEntry, Language
from src.utils.logger import get_logger

logger = get_logger(__name__)

TITLE_FOOTNOTE = re.compile(INDEX_CONFIG['title_footnote_pattern'])
PUBLICATION_DATE = re.compile(INDEX_CONFIG['publication_date_pattern'])
WHITESPACE = re.compile(r'\s+')


def parse_year_index(
    html: str,
    language: Language = Language.FR,
    base_url: str = SCRAPER_CONFIG["base_url"],
) -> List[IndexEntry]:
    """
    Parse a Justel year index page.

    Args:
        html: Decoded page markup
        language: Language of the index (selects link pattern and markers)
        base_url: Used to make relative links absolute

    Returns:
        Entries in page order, numbered 1..N
    """
    soup = BeautifulSoup(html, 'lxml')

    entries = []
    for candidate in _iter_candidates(soup, language, base_url):
        if candidate is None:
            continue
        entries.append(replace(candidate, index=len(entries) + 1))

    return entries


def _iter_candidates(
    soup: BeautifulSoup,
    language: Language,
    base_url: str,
) -> Iterator[Optional[IndexEntry]]:
    """Yield one entry (or None for a skipped anchor) per law link on the page."""
    for link in soup.find_all('a', href=True):
        href = link.get('href', '')
        parts = parse_justel_url(href)
        if parts is None or parts.language is not language:
            continue

        try:
            yield _parse_entry(link, href, parts, language, base_url)
        except Exception as e:
            logger.warning(f"Failed to parse index entry {href}: {e}")
            yield None


def _parse_entry(
    link: Tag,
    href: str,
    parts: JustelUrlParts,
    language: Language,
    base_url: str,
) -> Optional[IndexEntry]:
    row = link.find_parent('tr')
    if row is None:
        logger.warning(f"No table row around {href}, skipping")
        return None

    cells = row.find_all('td', recursive=False) or row.find_all('td')
    cell_text = ''
    if len(cells) > INDEX_CONFIG['description_cell']:
        cell_text = cells[INDEX_CONFIG['description_cell']].get_text('\n').replace('\xa0', ' ')

    if _is_german_translation(cell_text):
        logger.debug(f"Skipping German translation notice {parts.numac}")
        return None

    return IndexEntry(
        index=0,
        title=extract_title(cell_text, language),
        date=f"{parts.year}-{parts.month}-{parts.day}",
        year=parts.year,
        month=parts.month,
        day=parts.day,
        numac=parts.numac,
        justel_url=absolute_url(href, base_url),
        source=extract_source(cell_text, language),
        publication_date=extract_publication_date(cell_text),
    )


def extract_title(cell_text: str, language: Language) -> str:
    """Text before the 'published on' marker, whitespace-normalized, footnote stripped."""
    marker = INDEX_CONFIG['published_markers'][language.value]
    marker_index = cell_text.find(marker)
    title = cell_text[:marker_index] if marker_index > 0 else cell_text

    title = WHITESPACE.sub(' ', title).strip()
    return TITLE_FOOTNOTE.sub('', title).strip()


def extract_source(cell_text: str, language: Language) -> str:
    """Ministry after the 'Source :' marker, up to end of line."""
    marker = INDEX_CONFIG['source_markers'][language.value]
    marker_index = cell_text.find(marker)
    if marker_index < 0:
        return ''

    after = cell_text[marker_index + len(marker):].lstrip()
    return after.split('\n', 1)[0].strip()


def extract_publication_date(cell_text: str) -> str:
    match = PUBLICATION_DATE.search(cell_text)
    return match.group(1) if match else ''


def _is_german_translation(cell_text: str) -> bool:
    text = WHITESPACE.sub(' ', cell_text)
    return any(marker in text for marker in INDEX_CONFIG['german_translation_markers'])
