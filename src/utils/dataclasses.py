# -*- coding: utf-8 -*-
"""
Core data structures for the Belgian Law ingestion pipeline

Single source of truth for the records passed between the fetcher, the parsers,
the consolidator and the pipeline. Import from this module rather than
individual modules for consistency.

Examples:
# Build a law document from a parsed page
    from src.utils.dataclasses import Language, LawDocument, Provision

    doc = LawDocument(
        id="loi-2023-01-13-2023040123-fr",
        title="Loi portant dispositions diverses",
        issued_date="2023-01-13",
        url="http://www.ejustice.just.fgov.be/eli/loi/2023/01/13/2023040123/justel",
        language=Language.FR,
        numac="2023040123",
        provisions=[Provision("art1er", "1", "Article 1er", "Art. 1er. ...")],
    )
    doc.to_dict()

"""
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# ============================================================================
# ENUMS
# ============================================================================

class Language(Enum):
    """Official languages Justel publishes federal legislation in."""
    FR = "fr"    # primary
    NL = "nl"    # secondary

    @property
    def path_segment(self) -> str:
        """ELI path segment selecting the language: /eli/loi/... or /eli/wet/..."""
        return "loi" if self is Language.FR else "wet"

    @property
    def id_prefix(self) -> str:
        return self.path_segment

    @classmethod
    def from_path_segment(cls, segment: str) -> "Language":
        return cls.FR if segment.lower() == "loi" else cls.NL


class Stage(Enum):
    """Pipeline stages selectable from the CLI."""
    ALL = "all"
    DISCOVERY = "discovery"
    CONTENT = "content"


class OutcomeStatus(Enum):
    """Result of processing one law in a content stage."""
    PROCESSED = "processed"
    FAILED = "failed"
    SKIPPED = "skipped"


# ============================================================================
# DISCOVERY
# ============================================================================

@dataclass(frozen=True)
class IndexEntry:
    """
    One law listed on a Justel year index page.

    Date parts come from the canonical URL, never from the free-text title,
    so (numac, year, month, day) is enough to rebuild the URL in either language.
    """
    index: int                              # 1-based position on the page
    title: str
    date: str                               # YYYY-MM-DD promulgation date
    year: int
    month: str                              # zero-padded, e.g. '01'
    day: str                                # zero-padded, e.g. '12'
    numac: str
    justel_url: str
    source: str = ""                        # ministry, may be empty
    publication_date: str = ""              # DD-MM-YYYY, may be empty

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IndexEntry":
        return cls(
            index=int(data['index']),
            title=data.get('title', ''),
            date=data['date'],
            year=int(data['year']),
            month=data['month'],
            day=data['day'],
            numac=str(data['numac']),
            justel_url=data['justel_url'],
            source=data.get('source', ''),
            publication_date=data.get('publication_date', ''),
        )


# ============================================================================
# CONTENT
# ============================================================================

@dataclass
class Provision:
    """
    One article of a law.

    provision_ref is normalized (lowercase, no periods), e.g. 'art1er', 'art2bis'.
    """
    provision_ref: str
    section: str                            # display number, e.g. '1', '2bis'
    title: str                              # display title, e.g. 'Article 1er'
    content: str
    chapter: Optional[str] = None           # nearest preceding chapter heading

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'provision_ref': self.provision_ref,
            'section': self.section,
            'title': self.title,
            'content': self.content,
        }
        if self.chapter:
            data['chapter'] = self.chapter
        return data


@dataclass
class ParsedLaw:
    """Everything extracted from one law page."""
    title: str
    numac: str
    entry_into_force: Optional[str] = None
    source: Optional[str] = None
    provisions: List[Provision] = field(default_factory=list)


@dataclass
class LawDocument:
    """
    Assembled record for one law in one language (seed artifact).

    The FR and NL documents of the same law share the same numac; pairing is
    by identifier only.
    """
    id: str                                 # e.g. loi-2023-01-13-2023040123-fr
    title: str
    issued_date: str
    url: str
    language: Language
    numac: str
    provisions: List[Provision] = field(default_factory=list)
    type: str = "statute"
    status: str = "in_force"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type,
            'title': self.title,
            'status': self.status,
            'issued_date': self.issued_date,
            'url': self.url,
            'language': self.language.value,
            'numac': self.numac,
            'provisions': [p.to_dict() for p in self.provisions],
        }


# ============================================================================
# PIPELINE RESULTS
# ============================================================================

@dataclass
class ContentOutcome:
    """Result-or-skip outcome for one index entry in a content stage."""
    entry: IndexEntry
    status: OutcomeStatus
    document: Optional[LawDocument] = None
    reason: str = ""


@dataclass
class StageStats:
    """Aggregate counts reported at the end of a stage."""
    name: str
    processed: int = 0
    failed: int = 0
    skipped: int = 0

    def record(self, outcome: ContentOutcome) -> None:
        if outcome.status is OutcomeStatus.PROCESSED:
            self.processed += 1
        elif outcome.status is OutcomeStatus.FAILED:
            self.failed += 1
        else:
            self.skipped += 1

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
