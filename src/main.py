# -*- coding: utf-8 -*-
"""
Belgian Law ingestion CLI

Runs the Justel ingestion pipeline: discovery of year indices, then French
and Dutch law content, producing seed documents for the database builder.

Modes:
    --phase          all | discovery | content (default: all)
    --lang           fr | nl | both (default: both)
    --year-start     First index year (default: 1994)
    --year-end       Last index year (default: current year)
    --limit          Cap the number of laws past discovery (default: no cap)
    --skip-existing  Do not refetch laws whose seed document exists

Examples:
    # Full run
    python -m src.main

    # Small incremental run
    python -m src.main --limit 5 --year-start 2023 --year-end 2024

    # Discovery only, then content from the saved index
    python -m src.main --phase discovery
    python -m src.main --phase content --lang nl

Exit status is 1 only for setup failures (e.g. no index for a content-only
run); per-law failures are reported in the summary.
"""
# Standard library
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Project root (src/main.py → 2 parents)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Local
from configs.config import PIPELINE_CONFIG
from src.ingestion.pipeline import (
    LANGUAGE_CHOICES,
    IndexArtifactError,
    IngestionOptions,
    IngestionPipeline,
)
from src.utils.dataclasses import Stage
from src.utils.logger import default_log_file, get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Ingest Belgian federal legislation from Justel",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--year-start', type=int, default=PIPELINE_CONFIG['default_year_start'],
        help='First year to discover (inclusive)'
    )
    parser.add_argument(
        '--year-end', type=int, default=PIPELINE_CONFIG['default_year_end'],
        help='Last year to discover (inclusive)'
    )
    parser.add_argument(
        '--limit', type=int, default=0,
        help='Maximum number of laws processed past discovery (0 = no cap)'
    )
    parser.add_argument(
        '--lang', choices=sorted(LANGUAGE_CHOICES), default='both',
        help='Content language(s) to fetch'
    )
    parser.add_argument(
        '--phase', choices=[s.value for s in Stage], default=Stage.ALL.value,
        help='Stage(s) to run'
    )
    parser.add_argument(
        '--skip-existing', action='store_true',
        help='Skip laws whose seed document already exists'
    )
    parser.add_argument(
        '--no-progress', action='store_true',
        help='Disable progress bars'
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Debug logging'
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=default_log_file(),
    )

    options = IngestionOptions(
        year_start=args.year_start,
        year_end=args.year_end,
        limit=args.limit,
        lang=args.lang,
        stage=Stage(args.phase),
        skip_existing=args.skip_existing,
    )

    logger.info("Belgian Law Ingestion Pipeline")
    logger.info(f"Years: {options.year_start}-{options.year_end}")
    logger.info(f"Limit: {options.limit or 'none'}")
    logger.info(f"Language: {options.lang}")
    logger.info(f"Phase: {options.stage.value}")

    pipeline = IngestionPipeline(show_progress=not args.no_progress)
    try:
        summary = pipeline.run(options)
    except IndexArtifactError as e:
        logger.error(str(e))
        return 1
    finally:
        pipeline.fetcher.close()

    for name, stats in summary.stages.items():
        logger.info(
            f"{name}: {stats['processed']} processed, {stats['failed']} failed, "
            f"{stats['skipped']} skipped"
        )
    logger.info("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
