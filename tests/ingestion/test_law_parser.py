# -*- coding: utf-8 -*-
"""
Law page parser tests

Covers page metadata (title, entry into force, source), the anchor-based
article splitter with chapter tracking, the plain-text fallback, and the
markup cleaning shared by both.

Run: pytest tests/ingestion/test_law_parser.py -v
"""
# Standard library
import sys
from pathlib import Path

# Project root (tests/ingestion/test_law_parser.py → 3 parents)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Third-party
import pytest

# Local
from src.ingestion.law_parser import (
    ArticleSplitStrategy,
    choose_strategy,
    clean_article_html,
    decode_entities,
    find_article_markers,
    parse_law_content,
    scan_chapter,
    split_articles,
)
from src.utils.io import load_json, save_json


# ============================================================================
# SAMPLE DATA (legacy Justel markup)
# ============================================================================

ANCHORED_BODY = (
    "<h2>Texte</h2>"
    "<A NAME='Art.1er'>Art. 1er</A>. La pr&eacute;sente loi r&egrave;gle une mati&egrave;re "
    "vis&eacute;e &agrave; l'article 74 de la Constitution.<BR>"
    "CHAPITRE II. - Dispositions relatives &agrave; la proc&eacute;dure<BR>"
    "<A NAME='Art.2'>Art. 2</A>. Le Roi fixe les modalit&eacute;s.<BR>"
    "&nbsp;&nbsp;&nbsp;&nbsp;<BR>"
    "<A NAME='Art.3'>Art. 3</A>. La pr&eacute;sente loi entre en vigueur le jour de sa "
    "publication au <I>Moniteur belge</I>.<BR>"
)

PLAIN_BODY = (
    "LOI DU 10 MAI 2007<BR>"
    "Article 1. La pr&eacute;sente loi r&egrave;gle une mati&egrave;re vis&eacute;e "
    "&agrave; l'article 74 de la Constitution.<BR>"
    "Article 2. Pour l'application de la pr&eacute;sente loi, on entend par :<BR>"
    "1&deg; discrimination directe ...<BR>"
)

LAW_PAGE = (
    "<html><body>"
    "<div class='list-item--title'>  10 MAI 2007. -   Loi tendant &agrave; lutter "
    "contre certaines formes de discrimination </div>"
    "<div class='plain-text'>Publication : 30-05-2007<br>Entr&eacute;e en vigueur : 09-06-2007"
    "<br>Source : Justice</div>"
    "<div id='list-title-3'>" + ANCHORED_BODY + "</div>"
    "</body></html>"
)


# ============================================================================
# PAGE PARSING
# ============================================================================

class TestParseLawContent:
    """Tests for parse_law_content."""

    @pytest.fixture
    def parsed(self):
        return parse_law_content(LAW_PAGE, "2007002099")

    def test_title_normalized(self, parsed):
        assert parsed.title == (
            "10 MAI 2007. - Loi tendant à lutter contre certaines formes de discrimination"
        )

    def test_entry_into_force_and_source(self, parsed):
        assert parsed.entry_into_force == "09-06-2007"
        assert parsed.source == "Justice"
        assert parsed.numac == "2007002099"

    def test_articles_extracted(self, parsed):
        assert [p.provision_ref for p in parsed.provisions] == ["art1er", "art2", "art3"]
        assert parsed.provisions[2].content.endswith("au Moniteur belge.")

    def test_chapter_carried_forward(self, parsed):
        chapters = [p.chapter for p in parsed.provisions]
        expected = "II. Dispositions relatives à la procédure"

        assert chapters == [None, expected, expected]

    def test_dutch_labels(self):
        html = (
            "<html><body><div class='list-item--title'>Wet</div>"
            "<div class='plain-text'>Inwerkingtreding : 01-01-2024<br>Bron : Financi&euml;n</div>"
            "<div id='list-title-3'><a name='Art.1'>Art. 1</a>. Tekst.</div>"
            "</body></html>"
        )
        parsed = parse_law_content(html, "2023000001")

        assert parsed.entry_into_force == "01-01-2024"
        assert parsed.source == "Financiën"

    def test_missing_text_section(self):
        html = "<html><body><div class='list-item--title'>Loi</div></body></html>"
        parsed = parse_law_content(html, "2023000002")

        assert parsed.title == "Loi"
        assert parsed.provisions == []
        assert parsed.entry_into_force is None
        assert parsed.source is None

    def test_missing_title(self):
        html = "<html><body><div id='list-title-3'>Article 1. Texte.</div></body></html>"
        parsed = parse_law_content(html, "2023000003")

        assert parsed.title == ""
        assert len(parsed.provisions) == 1


# ============================================================================
# ANCHOR STRATEGY
# ============================================================================

class TestAnchorSplitting:
    """Tests for the anchor-based article splitter."""

    def test_strategy_choice(self):
        assert choose_strategy(find_article_markers(ANCHORED_BODY)) is ArticleSplitStrategy.ANCHORS
        assert choose_strategy(find_article_markers(PLAIN_BODY)) is ArticleSplitStrategy.PLAIN_TEXT

    def test_markers_in_document_order(self):
        markers = find_article_markers(ANCHORED_BODY)

        assert [m.ref for m in markers] == ["1er", "2", "3"]
        assert markers[0].start < markers[1].start < markers[2].start

    def test_reference_title_and_section(self):
        provisions = split_articles(ANCHORED_BODY)
        first, second = provisions[0], provisions[1]

        assert first.provision_ref == "art1er"
        assert first.title == "Article 1er"
        assert first.section == "1"
        assert second.provision_ref == "art2"
        assert second.title == "Article 2"
        assert second.section == "2"

    def test_uppercase_1er(self):
        provisions = split_articles("<a name='Art.1ER'>ART. 1ER</a>. Texte.")

        assert provisions[0].title == "Article 1er"
        assert provisions[0].provision_ref == "art1er"
        assert provisions[0].section == "1"

    def test_periods_removed_from_reference(self):
        provisions = split_articles("<a name='Art.2.1'>Art. 2.1</a>. Texte.")

        assert provisions[0].provision_ref == "art21"
        assert provisions[0].title == "Article 2.1"

    def test_chapter_between_first_and_second_article(self):
        chapters = [p.chapter for p in split_articles(ANCHORED_BODY)]

        assert chapters[0] is None
        assert chapters[1] == chapters[2] == "II. Dispositions relatives à la procédure"

    def test_chapter_before_label_applies_to_current_article(self):
        html = (
            "<a name='Art.1'>Art. 1</a>. Premier.<br>"
            "<a name='Art.2'></a>HOOFDSTUK 2. - Slotbepalingen<br>Art. 2. Tweede."
        )
        provisions = split_articles(html)

        assert provisions[0].chapter is None
        assert provisions[1].chapter == "2. Slotbepalingen"

    def test_chapter_before_first_anchor(self):
        html = (
            "CHAPITRE Ier. - Disposition générale<br>"
            "<a name='Art.1er'>Art. 1er</a>. Texte.<br>"
            "CHAPITRE II. - Exécution<br>"
            "<a name='Art.2'>Art. 2</a>. Texte.<br>"
        )
        chapters = [p.chapter for p in split_articles(html)]

        assert chapters == ["Ier. Disposition générale", "II. Exécution"]

    def test_empty_span_skipped(self):
        html = "<a name='Art.1'></a><a name='Art.2'>Art. 2</a>. Texte."
        provisions = split_articles(html)

        assert [p.provision_ref for p in provisions] == ["art2"]

    def test_heading_mentioning_an_article_kept_whole(self):
        html = (
            "<a name='Art.1'>Art. 1</a>. Premier.<br>"
            "<a name='Art.2'></a>CHAPITRE II. - Modification de l'article 5 du Code<br>"
            "Art. 2. Deuxième.<br>"
            "<a name='Art.3'>Art. 3</a>. Troisième.<br>"
        )
        chapters = [p.chapter for p in split_articles(html)]
        expected = "II. Modification de l'article 5 du Code"

        assert chapters == [None, expected, expected]

    def test_heading_mentioning_an_article_after_label(self):
        html = (
            "<a name='Art.1'>Art. 1</a>. Premier.<br>"
            "HOOFDSTUK 2. - Wijziging van artikel 7 van de wet<br>"
            "<a name='Art.2'>Art. 2</a>. Tweede.<br>"
        )
        chapters = [p.chapter for p in split_articles(html)]

        assert chapters == [None, "2. Wijziging van artikel 7 van de wet"]

    def test_content_cleaned(self):
        provisions = split_articles(ANCHORED_BODY)

        assert provisions[1].content == "Art. 2. Le Roi fixe les modalités."
        assert "<" not in provisions[0].content


class TestScanChapter:
    """Tests for the chapter accumulator."""

    def test_keeps_current_without_heading(self):
        assert scan_chapter("Art. 5. Texte.", "I. Titre") == "I. Titre"

    def test_last_heading_wins(self):
        fragment = "CHAPITRE I. - Un<br>CHAPITRE II. - Deux<br>"
        assert scan_chapter(fragment, None) == "II. Deux"


# ============================================================================
# PLAIN-TEXT FALLBACK
# ============================================================================

class TestPlainTextFallback:
    """Tests for pages without article anchors."""

    def test_two_articles_without_chapters(self):
        provisions = split_articles(PLAIN_BODY)

        assert [p.provision_ref for p in provisions] == ["art1", "art2"]
        assert [p.title for p in provisions] == ["Article 1", "Article 2"]
        assert all(p.chapter is None for p in provisions)

    def test_inline_reference_does_not_split(self):
        provisions = split_articles(PLAIN_BODY)

        assert "l'article 74 de la Constitution" in provisions[0].content

    def test_article_content_keeps_following_lines(self):
        provisions = split_articles(PLAIN_BODY)

        assert provisions[1].content == (
            "Article 2. Pour l'application de la présente loi, on entend par :\n"
            "1° discrimination directe ..."
        )

    def test_preamble_dropped(self):
        provisions = split_articles(PLAIN_BODY)
        assert all("LOI DU 10 MAI 2007" not in p.content for p in provisions)

    def test_art_abbreviation_and_1er(self):
        provisions = split_articles("Art. 1er. Premier.<br>Art. 2. Second.")

        assert [p.provision_ref for p in provisions] == ["art1er", "art2"]
        assert provisions[0].section == "1"
        assert provisions[0].title == "Article 1er"

    def test_paragraph_boundaries(self):
        html = (
            "<p>Article 1</p><p>Le Roi fixe les modalites</p>"
            "<p>Article 2</p><p>Entree en vigueur</p>"
        )
        provisions = split_articles(html)

        assert [p.provision_ref for p in provisions] == ["art1", "art2"]
        assert provisions[0].content == "Article 1\nLe Roi fixe les modalites"
        assert provisions[1].content == "Article 2\nEntree en vigueur"

    def test_div_and_list_boundaries(self):
        html = "<div>Art. 1er Premier</div><ul><li>Art. 2 Second</li><li>Art. 3 Troisième</li></ul>"
        provisions = split_articles(html)

        assert [p.provision_ref for p in provisions] == ["art1er", "art2", "art3"]

    def test_boundary_after_guillemet_or_number(self):
        html = (
            "Art. 1er. Dans la loi, le mot « 2006 » est remplacé par « 2007 » "
            "Art. 2. La présente loi entre en vigueur le 1er janvier 2008 "
            "Art. 3. Le ministre est chargé de l'exécution."
        )
        provisions = split_articles(html)

        assert [p.provision_ref for p in provisions] == ["art1er", "art2", "art3"]
        assert provisions[0].content.endswith("par « 2007 »")
        assert provisions[1].content.endswith("le 1er janvier 2008")

    def test_lowercase_reference_after_number_does_not_split(self):
        html = (
            "Article 1. Voir le tableau 2 article 7 ci-dessous.<br>"
            "Article 2. Les articles 3 et 4 sont abrogés."
        )
        provisions = split_articles(html)

        assert [p.provision_ref for p in provisions] == ["art1", "art2"]
        assert "tableau 2 article 7" in provisions[0].content

    def test_no_articles(self):
        assert split_articles("<p>Texte sans articles.</p>") == []


# ============================================================================
# CLEANING
# ============================================================================

class TestCleanArticleHtml:
    """Tests for markup cleaning."""

    def test_tags_and_breaks(self):
        html = "<A NAME='Art.1'>Art. 1</A>.<BR><h3>Titre</h3><b>Texte</b> final<br/>"
        assert clean_article_html(html) == "Art. 1.\nTitreTexte final"

    def test_entities(self):
        html = "Loi r&eacute;glant l&#233;galement &laquo;x&raquo; &amp; co&nbsp;&nbsp;ici &#xE0;"
        assert clean_article_html(html) == "Loi réglant légalement «x» & co ici à"

    def test_whitespace_collapsed(self):
        html = "  Ligne   un \t <BR><BR>   <BR>Ligne deux  "
        assert clean_article_html(html) == "Ligne un\nLigne deux"

    def test_idempotent(self):
        once = clean_article_html(ANCHORED_BODY)
        assert clean_article_html(once) == once

    def test_idempotent_on_plain_body(self):
        once = clean_article_html(PLAIN_BODY)
        assert clean_article_html(once) == once

    def test_order_preserved(self):
        text = clean_article_html("<p>un</p><br><p>deux</p><br><p>trois</p>")
        assert text.split("\n") == ["un", "deux", "trois"]

    def test_block_tags_become_lines(self):
        html = "<div>un</div><p class='x'>deux</p><table><tr><td>trois</td></tr></table>"
        assert clean_article_html(html) == "un\ndeux\ntrois"

    def test_surrogate_reference_left_alone(self):
        assert decode_entities("&#55357;&#xDE00; &#128512;") == "&#55357;&#xDE00; \U0001F600"

    def test_surrogate_reference_written_as_json(self, tmp_path):
        provisions = split_articles("<a name='Art.1'>Art. 1</a>. Symbole &#55357;.")
        path = tmp_path / "law.json"

        save_json([p.to_dict() for p in provisions], path)

        assert load_json(path)[0]["content"] == "Art. 1. Symbole &#55357;."

    def test_unknown_entity_left_alone(self):
        assert decode_entities("&foo; &#65;") == "&foo; A"
