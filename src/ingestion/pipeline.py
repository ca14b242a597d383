# -*- coding: utf-8 -*-
"""
Belgian Law ingestion pipeline

Three stages, each runnable on its own:
    1. Discovery     Fetch French year indices, extract law metadata,
                     save data/source/law-index.json
    2. Content (FR)  Fetch and parse each law's French text, save one seed
                     document per law in data/seed/
    3. Content (NL)  Same for the Dutch text. A 404 means no Dutch version
                     exists: counted as skipped, not failed

A bad year or a bad law never aborts the run; every stage ends with
processed / failed / skipped counts. The only fatal condition is a
content-only run without an index to resume from.

Example:
    pipeline = IngestionPipeline()
    entries = pipeline.run_discovery(2023, 2024, limit=5)
    stats = pipeline.run_content(entries, Language.FR)

"""
# Standard library
import sys
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

# Project root (src/ingestion/pipeline.py → 3 parents)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Third-party
from tqdm import tqdm

# Local
from configs.config import PIPELINE_CONFIG, SEED_PATH, SOURCE_PATH
from src.ingestion.consolidator import consolidate_provisions
from src.ingestion.index_parser import parse_year_index
from src.ingestion.justel_fetcher import FetchError, JustelFetcher
from src.ingestion.justel_urls import build_justel_url
from src.ingestion.law_parser import parse_law_content
from src.utils.dataclasses import (
    ContentOutcome,
    IndexEntry,
    Language,
    LawDocument,
    OutcomeStatus,
    ParsedLaw,
    Stage,
    StageStats,
)
from src.utils.io import load_json, save_json
from src.utils.logger import get_logger

logger = get_logger(__name__)

PRIMARY_LANGUAGE = Language.FR
SECONDARY_LANGUAGE = Language.NL

LANGUAGE_CHOICES = {
    'fr': [Language.FR],
    'nl': [Language.NL],
    'both': [Language.FR, Language.NL],
}


class IndexArtifactError(Exception):
    """The law index needed by a content-only run cannot be used."""


class IndexArtifactMissingError(IndexArtifactError, FileNotFoundError):
    """Content-only run without a law index from a previous discovery."""


class IndexArtifactCorruptError(IndexArtifactError, ValueError):
    """The law index exists but is not valid JSON or lacks entry fields."""


@dataclass
class IngestionOptions:
    """Run options (see src/main.py for the CLI)."""
    year_start: int = PIPELINE_CONFIG['default_year_start']
    year_end: int = PIPELINE_CONFIG['default_year_end']
    limit: int = 0                          # 0 = no cap
    lang: str = 'both'                      # fr | nl | both
    stage: Stage = Stage.ALL
    skip_existing: bool = False

    @property
    def languages(self) -> List[Language]:
        return LANGUAGE_CHOICES[self.lang]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['stage'] = self.stage.value
        return data


@dataclass
class RunSummary:
    options: Dict[str, Any]
    start_time: str
    end_time: str = ""
    index_entries: int = 0
    stages: Dict[str, Dict[str, Any]] = field(default_factory=dict)


def law_document_id(entry: IndexEntry, language: Language) -> str:
    """e.g. loi-2023-01-13-2023040123-fr / wet-2023-01-13-2023040123-nl"""
    return f"{language.id_prefix}-{entry.date}-{entry.numac}-{language.value}"


# ============================================================================
# PIPELINE
# ============================================================================

class IngestionPipeline:
    """
    Drives discovery and content stages against Justel.

    All requests go through one JustelFetcher (and therefore one rate
    limiter); stages and laws are processed sequentially.
    """

    def __init__(
        self,
        fetcher: Optional[JustelFetcher] = None,
        source_dir: Path = SOURCE_PATH,
        seed_dir: Path = SEED_PATH,
        show_progress: bool = True,
    ):
        """
        Initialize pipeline.

        Args:
            fetcher: HTTP client (default: JustelFetcher with SCRAPER_CONFIG)
            source_dir: Directory for the law index and run summary
            seed_dir: Directory for per-law seed documents
            show_progress: Show tqdm progress bars during content stages
        """
        self.fetcher = fetcher or JustelFetcher()
        self.source_dir = Path(source_dir)
        self.seed_dir = Path(seed_dir)
        self.show_progress = show_progress
        self.discovery_stats: Optional[StageStats] = None

    @property
    def index_path(self) -> Path:
        return self.source_dir / PIPELINE_CONFIG['index_filename']

    @property
    def summary_path(self) -> Path:
        return self.source_dir / PIPELINE_CONFIG['summary_filename']

    def document_path(self, document_id: str) -> Path:
        return self.seed_dir / f"{document_id}.json"

    # ------------------------------------------------------------------------
    # Stage 1: discovery
    # ------------------------------------------------------------------------

    def run_discovery(self, year_start: int, year_end: int, limit: int = 0) -> List[IndexEntry]:
        """
        Collect index entries for every year in [year_start, year_end].

        Args:
            year_start: First year (inclusive)
            year_end: Last year (inclusive)
            limit: Keep only the first `limit` entries (0 = all)

        Returns:
            Entries saved to the index artifact
        """
        logger.info("=" * 60)
        logger.info(f"DISCOVERY: {PRIMARY_LANGUAGE.value.upper()} indices {year_start}-{year_end}")
        logger.info("=" * 60)

        all_entries: List[IndexEntry] = []
        failed_years = []
        processed_years = 0

        for year in range(year_start, year_end + 1):
            try:
                html = self.fetcher.fetch_year_index(year, PRIMARY_LANGUAGE)
                entries = parse_year_index(html, PRIMARY_LANGUAGE, base_url=self.fetcher.base_url)
            except Exception as e:
                failed_years.append(year)
                logger.error(f"{year}: FAILED - {e}")
                continue

            logger.info(f"{year}: {len(entries)} laws found")
            processed_years += 1
            all_entries.extend(entries)

        limited = all_entries[:limit] if limit > 0 else all_entries

        save_json([entry.to_dict() for entry in limited], self.index_path)
        logger.info(f"Saved {len(limited)} entries to {self.index_path}")
        if failed_years:
            logger.warning(f"Discovery failed for {len(failed_years)} years: {failed_years}")

        self.discovery_stats = StageStats(
            name='discovery',
            processed=processed_years,
            failed=len(failed_years),
        )
        return limited

    def load_index(self, limit: int = 0) -> List[IndexEntry]:
        """
        Read the index artifact written by a previous discovery.

        Raises:
            IndexArtifactMissingError: if no index exists
            IndexArtifactCorruptError: if the index cannot be decoded
        """
        if not self.index_path.exists():
            raise IndexArtifactMissingError(
                f"No {self.index_path.name} found in {self.source_dir}. Run discovery first."
            )

        try:
            entries = [IndexEntry.from_dict(item) for item in load_json(self.index_path)]
        except (ValueError, KeyError, TypeError) as e:
            raise IndexArtifactCorruptError(
                f"Cannot read {self.index_path}: {e}. Run discovery again."
            ) from e
        if limit > 0:
            entries = entries[:limit]

        logger.info(f"Loaded {len(entries)} entries from existing index")
        return entries

    # ------------------------------------------------------------------------
    # Stages 2-3: content
    # ------------------------------------------------------------------------

    def run_content(
        self,
        entries: List[IndexEntry],
        language: Language,
        skip_existing: bool = False,
    ) -> StageStats:
        """
        Fetch, parse and save every law in `entries` in one language.

        Returns:
            processed / failed / skipped counts
        """
        label = "French" if language is Language.FR else "Dutch"
        logger.info("=" * 60)
        logger.info(f"CONTENT ({label}): {len(entries)} laws")
        logger.info("=" * 60)

        stats = StageStats(name=f"content_{language.value}")
        for outcome in self.iter_content(entries, language, skip_existing):
            stats.record(outcome)

        logger.info(
            f"{label}: {stats.processed} processed, {stats.failed} failed, "
            f"{stats.skipped} skipped"
        )
        return stats

    def iter_content(
        self,
        entries: List[IndexEntry],
        language: Language,
        skip_existing: bool = False,
    ) -> Iterator[ContentOutcome]:
        """Yield one outcome per entry; a failing law never stops the iteration."""
        progress = tqdm(
            entries,
            desc=f"{language.value.upper()} content",
            disable=not self.show_progress,
        )
        processed = 0
        for entry in progress:
            outcome = self.process_entry(entry, language, skip_existing)
            if outcome.status is OutcomeStatus.PROCESSED:
                processed += 1
                logger.info(
                    f"[{processed}/{len(entries)}] {language.value.upper()} {entry.numac}: "
                    f"{len(outcome.document.provisions)} articles - {entry.title[:50]}"
                )
            yield outcome

    def process_entry(
        self,
        entry: IndexEntry,
        language: Language,
        skip_existing: bool = False,
    ) -> ContentOutcome:
        """
        Fetch, parse, consolidate and save one law.

        Returns:
            ContentOutcome (never raises for a per-law problem)
        """
        document_id = law_document_id(entry, language)
        if skip_existing and self.document_path(document_id).exists():
            logger.debug(f"{document_id} already exists, skipping")
            return ContentOutcome(entry, OutcomeStatus.SKIPPED, reason="exists")

        try:
            html = self.fetcher.fetch_law_content(
                entry.year, entry.month, entry.day, entry.numac, language
            )
        except FetchError as e:
            if language is SECONDARY_LANGUAGE and e.is_not_found:
                logger.debug(f"No {language.value.upper()} version of {entry.numac}")
                return ContentOutcome(entry, OutcomeStatus.SKIPPED, reason="no translation")
            logger.error(f"FAILED {language.value.upper()} {entry.numac}: {e}")
            return ContentOutcome(entry, OutcomeStatus.FAILED, reason=str(e))

        try:
            parsed = parse_law_content(html, entry.numac)
            if not parsed.provisions:
                logger.info(
                    f"Skipping {language.value.upper()} {entry.numac} "
                    f"(no articles found): {entry.title[:60]}"
                )
                return ContentOutcome(entry, OutcomeStatus.SKIPPED, reason="no articles")

            document = self.build_document(entry, parsed, language)
            self.save_document(document)
        except Exception as e:
            logger.error(f"FAILED {language.value.upper()} {entry.numac}: {e}")
            return ContentOutcome(entry, OutcomeStatus.FAILED, reason=str(e))

        return ContentOutcome(entry, OutcomeStatus.PROCESSED, document=document)

    def build_document(self, entry: IndexEntry, parsed: ParsedLaw, language: Language) -> LawDocument:
        return LawDocument(
            id=law_document_id(entry, language),
            title=parsed.title or entry.title,
            issued_date=entry.date,
            url=build_justel_url(
                entry.year, entry.month, entry.day, entry.numac, language,
                base_url=self.fetcher.base_url,
            ),
            language=language,
            numac=entry.numac,
            provisions=consolidate_provisions(parsed.provisions),
            type=PIPELINE_CONFIG['document_type'],
            status=PIPELINE_CONFIG['document_status'],
        )

    def save_document(self, document: LawDocument) -> Path:
        path = self.document_path(document.id)
        save_json(document.to_dict(), path)
        return path

    # ------------------------------------------------------------------------
    # Full run
    # ------------------------------------------------------------------------

    def run(self, options: IngestionOptions) -> RunSummary:
        """
        Run the selected stages and write the run summary.

        Raises:
            IndexArtifactError: content-only run without a readable index
        """
        summary = RunSummary(options=options.to_dict(), start_time=datetime.now().isoformat())

        if options.stage in (Stage.ALL, Stage.DISCOVERY):
            entries = self.run_discovery(options.year_start, options.year_end, options.limit)
            summary.stages["discovery"] = self.discovery_stats.to_dict()
        else:
            entries = self.load_index(options.limit)
        summary.index_entries = len(entries)

        if options.stage in (Stage.ALL, Stage.CONTENT):
            for language in options.languages:
                stats = self.run_content(entries, language, options.skip_existing)
                summary.stages[stats.name] = stats.to_dict()

        summary.end_time = datetime.now().isoformat()
        save_json(asdict(summary), self.summary_path)
        logger.info(f"Summary saved to: {self.summary_path}")
        return summary
