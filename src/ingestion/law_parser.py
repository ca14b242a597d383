# -*- coding: utf-8 -*-
"""
Module: law_parser.py
Package: src.ingestion
Purpose: Extract title, entry into force, source and articles from a Justel law page

Page layout (varies across decades of legacy markup):
    .list-item--title       Law title
    .plain-text             "Entrée en vigueur : ..." / "Source : ..." lines
    #list-title-3           Consolidated text, articles delimited by <A NAME='Art.N'>

Article splitting strategies:
    1. ANCHORS      Split the raw markup at each Art.N anchor, tracking chapter
                    headings ("CHAPITRE II. - ...") in document order
    2. PLAIN_TEXT   Used only when the page has no anchors at all: clean the
                    markup first, then split where "Article N" / "Art. N" starts
                    a line, or where a capitalized "Article N" / "Art. N" follows
                    sentence punctuation, a closing guillemet or a number.
                    No chapter tracking

Cleaning (shared by both strategies):
    1. Strip anchor tags, keep their text
    2. <BR> and block tags (<p>, <div>, <tr>, <li>, ...) → newline
    3. Strip heading tags, then every remaining tag
    4. Decode named entities (configs/extraction_config.py) and numeric references
    5. Collapse horizontal whitespace and blank lines, trim lines
"""
# Standard library
import re
import sys
from enum import Enum
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple

# Project root (src/ingestion/law_parser.py → 3 parents)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Third-party
from bs4 import BeautifulSoup

# Local
from configs.extraction_config import HTML_ENTITIES, LAW_PAGE_CONFIG
from src.utils.dataclasses import ParsedLaw, Provision
from src.utils.logger import get_logger

logger = get_logger(__name__)


# ============================================================================
# PATTERNS
# ============================================================================

ARTICLE_ANCHOR = re.compile(LAW_PAGE_CONFIG['article_anchor_pattern'], re.IGNORECASE)
ARTICLE_LABEL = re.compile(LAW_PAGE_CONFIG['article_label_pattern'], re.IGNORECASE)
CHAPTER_HEADING = re.compile(LAW_PAGE_CONFIG['chapter_pattern'], re.IGNORECASE)
FALLBACK_BOUNDARY = re.compile(
    LAW_PAGE_CONFIG['fallback_boundary_pattern'], re.IGNORECASE | re.MULTILINE
)
FALLBACK_NUMBER = re.compile(LAW_PAGE_CONFIG['fallback_number_pattern'], re.IGNORECASE)
ENTRY_INTO_FORCE = [re.compile(p, re.IGNORECASE) for p in LAW_PAGE_CONFIG['entry_into_force_patterns']]
SOURCE_LABEL = [re.compile(p, re.IGNORECASE) for p in LAW_PAGE_CONFIG['source_patterns']]

ANCHOR_OPEN = re.compile(r'<a\b[^>]*>', re.IGNORECASE)
ANCHOR_CLOSE = re.compile(r'</a\s*>', re.IGNORECASE)
LINE_BREAK = re.compile(r'<br\s*/?>', re.IGNORECASE)
BLOCK_TAG = re.compile(r'</?(?:p|div|tr|td|li|ul|ol|table|tbody|blockquote)\b[^>]*>', re.IGNORECASE)
HEADING_TAG = re.compile(r'</?h[1-6]\b[^>]*>', re.IGNORECASE)
ANY_TAG = re.compile(r'<[/!]?[a-zA-Z][^>]*>|<!--.*?-->', re.DOTALL)
ENTITY = re.compile(r'&(#\d+|#[xX][0-9a-fA-F]+|[a-zA-Z][a-zA-Z0-9]*);')
HORIZONTAL_SPACE = re.compile(r'[ \t\f\v\xa0]+')
BLANK_LINES = re.compile(r'\n\s*\n')
WHITESPACE = re.compile(r'\s+')


class ArticleSplitStrategy(Enum):
    ANCHORS = "anchors"
    PLAIN_TEXT = "plain_text"


class ArticleMarker(NamedTuple):
    ref: str        # token after "Art.", e.g. '1er', '2bis'
    start: int      # offset of the anchor tag
    end: int        # offset just past the anchor tag


# ============================================================================
# PAGE PARSING
# ============================================================================

def parse_law_content(html: str, numac: str) -> ParsedLaw:
    """
    Parse an individual Justel law page.

    A page without a text section is a recoverable failure: the result has
    no provisions and a warning is logged.

    Args:
        html: Decoded page markup
        numac: Law identifier (diagnostics only)

    Returns:
        ParsedLaw
    """
    soup = BeautifulSoup(html, 'lxml')

    title_el = soup.select_one(LAW_PAGE_CONFIG['title_selector'])
    title = WHITESPACE.sub(' ', title_el.get_text(' ')).strip() if title_el else ''

    plain_texts = [
        el.get_text('\n').replace('\xa0', ' ')
        for el in soup.select(LAW_PAGE_CONFIG['plain_text_selector'])
    ]
    entry_into_force = _first_label_match(plain_texts, ENTRY_INTO_FORCE)
    source = _first_label_match(plain_texts, SOURCE_LABEL)

    text_section = soup.select_one(LAW_PAGE_CONFIG['text_section_selector'])
    if text_section is None:
        logger.warning(f"No text section found for {numac}")
        return ParsedLaw(title=title, numac=numac, entry_into_force=entry_into_force,
                         source=source, provisions=[])

    provisions = split_articles(text_section.decode_contents())
    logger.debug(f"{numac}: {len(provisions)} articles")

    return ParsedLaw(
        title=title,
        numac=numac,
        entry_into_force=entry_into_force,
        source=source,
        provisions=provisions,
    )


def _first_label_match(texts: List[str], patterns: List[re.Pattern]) -> Optional[str]:
    """First 'Label : value' match over all elements, trying each language's label."""
    for text in texts:
        for pattern in patterns:
            match = pattern.search(text)
            if match and match.group(1).strip():
                return match.group(1).strip()
    return None


# ============================================================================
# ARTICLE SPLITTING
# ============================================================================

def find_article_markers(html: str) -> List[ArticleMarker]:
    return [
        ArticleMarker(ref=m.group(1), start=m.start(), end=m.end())
        for m in ARTICLE_ANCHOR.finditer(html)
    ]


def choose_strategy(markers: List[ArticleMarker]) -> ArticleSplitStrategy:
    return ArticleSplitStrategy.ANCHORS if markers else ArticleSplitStrategy.PLAIN_TEXT


def split_articles(html: str) -> List[Provision]:
    """
    Split the text section markup into articles.

    Args:
        html: Inner markup of the text section

    Returns:
        Provisions in document order
    """
    markers = find_article_markers(html)
    strategy = choose_strategy(markers)

    if strategy is ArticleSplitStrategy.ANCHORS:
        return split_by_anchors(html, markers)

    logger.debug("No article anchors, falling back to plain-text boundaries")
    return split_by_plain_text(html)


def split_by_anchors(html: str, markers: List[ArticleMarker]) -> List[Provision]:
    """
    One article per anchor: its span runs to the next anchor (or the end).

    The current chapter is an accumulator threaded through the loop. A heading
    inside a span applies to that article only when it precedes the article's
    own label ("Art. 2."); after the label it belongs to the articles that follow.
    """
    provisions = []
    chapter = scan_chapter(html[:markers[0].start], None) if markers else None

    for i, marker in enumerate(markers):
        next_start = markers[i + 1].start if i + 1 < len(markers) else len(html)
        span = html[marker.start:next_start]

        lead, body = _split_at_label(span[marker.end - marker.start:])
        chapter = scan_chapter(lead, chapter)
        article_chapter = chapter
        chapter = scan_chapter(body, chapter)

        provision = build_anchor_provision(marker.ref, clean_article_html(span), article_chapter)
        if provision is not None:
            provisions.append(provision)

    return provisions


def _split_at_label(fragment: str) -> Tuple[str, str]:
    """
    Split an article span (anchor removed) into markup before and from its label.

    Labels inside a chapter heading ("CHAPITRE II. - Modification de l'article 5")
    are not the article's own label and are skipped.
    """
    headings = [m.span() for m in CHAPTER_HEADING.finditer(fragment)]
    for label in ARTICLE_LABEL.finditer(fragment):
        if any(start <= label.start() < end for start, end in headings):
            continue
        return fragment[:label.start()], fragment[label.start():]
    return '', fragment


def scan_chapter(fragment: str, current: Optional[str]) -> Optional[str]:
    """
    Return the last chapter heading in `fragment`, or `current` if there is none.

    Headings read "CHAPITRE II. - Title" / "HOOFDSTUK 1. - Titel" and become
    "II. Title" / "1. Titel".
    """
    chapter = current
    for match in CHAPTER_HEADING.finditer(fragment):
        number = match.group(1)
        title = WHITESPACE.sub(' ', decode_entities(match.group(2))).strip()
        chapter = f"{number}. {title}" if title else f"{number}."
    return chapter


def build_anchor_provision(ref: str, text: str, chapter: Optional[str]) -> Optional[Provision]:
    """Provision for an Art.<ref> anchor; None when the span cleans to nothing."""
    if not text.strip():
        return None

    normalized = ref.lower().replace('.', '')
    if ref in ('1er', '1ER'):
        title = 'Article 1er'
    else:
        title = f"Article {ref}"

    return Provision(
        provision_ref=f"art{normalized}",
        section=re.sub(r'er$', '', ref, flags=re.IGNORECASE),
        title=title,
        content=text.strip(),
        chapter=chapter,
    )


def split_by_plain_text(html: str) -> List[Provision]:
    """Split cleaned text at lines starting with 'Article N' or 'Art. N'."""
    provisions = []
    text = clean_article_html(html)

    for part in FALLBACK_BOUNDARY.split(text):
        match = FALLBACK_NUMBER.match(part)
        if not match:
            continue

        number = match.group(1)
        content = part.strip()
        if not content:
            continue

        provisions.append(Provision(
            provision_ref=f"art{number.lower()}",
            section=re.sub(r'er$', '', number, flags=re.IGNORECASE),
            title=f"Article {number}",
            content=content,
        ))

    return provisions


# ============================================================================
# CLEANING
# ============================================================================

def clean_article_html(html: str) -> str:
    """
    Turn an article's markup into readable text.

    Idempotent on its own output and never reorders content.
    """
    text = ANCHOR_OPEN.sub('', html)
    text = ANCHOR_CLOSE.sub('', text)
    text = LINE_BREAK.sub('\n', text)
    text = BLOCK_TAG.sub('\n', text)
    text = HEADING_TAG.sub('', text)
    text = ANY_TAG.sub('', text)

    text = decode_entities(text)
    text = text.replace('\r\n', '\n').replace('\r', '\n')

    text = HORIZONTAL_SPACE.sub(' ', text)
    text = BLANK_LINES.sub('\n', text)

    lines = (line.strip() for line in text.split('\n'))
    return '\n'.join(line for line in lines if line)


def decode_entities(text: str) -> str:
    """Decode named entities from the Justel table and numeric references in one pass."""
    return ENTITY.sub(_decode_entity, text)


def _decode_entity(match: re.Match) -> str:
    body = match.group(1)
    if body.startswith('#'):
        try:
            if body[1:2] in ('x', 'X'):
                code = int(body[2:], 16)
            else:
                code = int(body[1:])
            # Lone surrogates cannot be written as UTF-8
            if 0xD800 <= code <= 0xDFFF:
                return match.group(0)
            return chr(code)
        except (ValueError, OverflowError):
            return match.group(0)
    return HTML_ENTITIES.get(match.group(0), match.group(0))
