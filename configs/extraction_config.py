# -*- coding: utf-8 -*-
"""
Module: extraction_config.py
Package: configs
Purpose: Markers, selectors and patterns used to extract laws from Justel pages

The Justel markup has no stable schema across years. Everything below was
tuned against observed index and law pages and is kept as data so it can be
adjusted without touching the parsers.

References:
    - src/ingestion/index_parser.py (year index pages)
    - src/ingestion/law_parser.py (individual law pages)
"""

# ============================================================================
# YEAR INDEX PAGES
# ============================================================================

INDEX_CONFIG = {
    # Text preceding this marker in the description cell is the title
    'published_markers': {
        'fr': 'Publié le',
        'nl': 'Gepubliceerd op',
    },
    'source_markers': {
        'fr': 'Source :',
        'nl': 'Bron :',
    },
    # German translation notices are administrative duplicates of a law
    'german_translation_markers': [
        'Traduction allemande',
        'Duitse vertaling',
    ],
    # Trailing footnote marker on titles, e.g. "... du 13 janvier 2023 (1)"
    'title_footnote_pattern': r'\(\d+\)\s*$',
    'publication_date_pattern': r'(\d{2}-\d{2}-\d{4})',
    # Column holding the "DATE. - Title / Publié le / Source" text
    'description_cell': 1,
}


# ============================================================================
# LAW PAGES
# ============================================================================

LAW_PAGE_CONFIG = {
    'title_selector': '.list-item--title',
    'plain_text_selector': '.plain-text',
    'text_section_selector': '#list-title-3',

    'entry_into_force_patterns': [
        r'Entr[eé]e en vigueur\s*:\s*(.+?)(?:\n|$)',
        r'Inwerkingtreding\s*:\s*(.+?)(?:\n|$)',
    ],
    'source_patterns': [
        r'Source\s*:\s*(.+?)(?:\n|$)',
        r'Bron\s*:\s*(.+?)(?:\n|$)',
    ],

    # <A NAME='Art.1er'> (legacy) or <a name="Art.1er"> (after re-serialization)
    'article_anchor_pattern': r'<a\s+name\s*=\s*["\']?Art\.([^"\'\s>]+)["\']?[^>]*>',
    # "CHAPITRE II. - Dispositions generales" / "HOOFDSTUK 1. - Algemene bepalingen"
    'chapter_pattern': r'(?:CHAPITRE|HOOFDSTUK)\s+([IVXLCDM\d]+(?:er)?)\.\s*-\s*([^<\n]+)',
    # Visible label of an article inside its own span, e.g. "Art. 2." or "Article 1er"
    'article_label_pattern': r'\b(?:Article|Artikel|Art\.)\s*\d',
    # Any case at a line start; mid-line only capitalized and after ". ; : »" or a
    # digit, so inline references ("l'article 74", "les articles 3 et 4") do not split
    'fallback_boundary_pattern': (
        r'(?:^(?=(?:Article|Art\.)\s+\d)'
        r'|(?:(?<=[.;:»\d])|(?<=[.;:»\d]\s))(?=(?-i:Article|Art\.)\s+\d))'
    ),
    'fallback_number_pattern': r'^(?:Article|Art\.)\s+(\d+(?:er)?)',
}


# ============================================================================
# HTML ENTITIES
# ============================================================================

# Named entities found in legacy Justel markup. Numeric references
# (&#233; / &#xE9;) are decoded generically.
HTML_ENTITIES = {
    '&nbsp;': ' ',
    '&amp;': '&',
    '&lt;': '<',
    '&gt;': '>',
    '&quot;': '"',
    '&apos;': "'",
    '&eacute;': 'é',
    '&Eacute;': 'É',
    '&egrave;': 'è',
    '&Egrave;': 'È',
    '&ecirc;': 'ê',
    '&Ecirc;': 'Ê',
    '&euml;': 'ë',
    '&agrave;': 'à',
    '&Agrave;': 'À',
    '&acirc;': 'â',
    '&Acirc;': 'Â',
    '&icirc;': 'î',
    '&iuml;': 'ï',
    '&ocirc;': 'ô',
    '&Ocirc;': 'Ô',
    '&ouml;': 'ö',
    '&ucirc;': 'û',
    '&ugrave;': 'ù',
    '&uuml;': 'ü',
    '&ccedil;': 'ç',
    '&Ccedil;': 'Ç',
    '&laquo;': '«',
    '&raquo;': '»',
    '&deg;': '°',
    '&sect;': '§',
}
