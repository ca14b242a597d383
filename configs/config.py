"""
Configuration for the Belgian Law ingestion pipeline
Loads deployment-specific values from .env, defines application logic here
"""
from datetime import datetime
from pathlib import Path
import os
from dotenv import load_dotenv

# Load .env file
load_dotenv()

# ============================================================================
# BASE PATHS (from .env)
# ============================================================================
BASE_DIR = Path(__file__).parent.parent  # Project root
DATA_PATH = Path(os.getenv('DATA_PATH', 'data/'))

# Create absolute paths
if not DATA_PATH.is_absolute():
    DATA_PATH = BASE_DIR / DATA_PATH

# ============================================================================
# DERIVED PATHS (calculated from base)
# ============================================================================
# Discovery output (law index) and run summaries
SOURCE_PATH = DATA_PATH / "source"

# One JSON document per law per language, consumed by the database builder
SEED_PATH = DATA_PATH / "seed"

# Logs
LOGS_PATH = DATA_PATH / "logs"
INGESTION_LOGS_PATH = LOGS_PATH / "ingestion"

# ============================================================================
# SCRAPER CONFIGURATION (Application logic - NOT in .env)
# ============================================================================
SCRAPER_CONFIG = {
    "base_url": os.getenv('JUSTEL_BASE_URL', 'http://www.ejustice.just.fgov.be'),
    "min_interval": 0.5,  # seconds between request starts - be respectful!
    "timeout": 30,  # seconds
    "retry_attempts": 3,
    "backoff_seconds": 1.0,  # attempt n waits n * backoff_seconds
    # Justel labels its pages iso-8859-1; browsers read that label as windows-1252
    "encoding": "cp1252",
    "headers": {
        "User-Agent": os.getenv(
            'JUSTEL_USER_AGENT',
            'BelgianLawIngest/1.0 (legal-research)'
        ),
        "Accept": "text/html,application/xhtml+xml",
        "Accept-Language": "fr-BE,fr;q=0.9,nl-BE;q=0.8,nl;q=0.7",
    }
}

# ============================================================================
# PIPELINE CONFIGURATION
# ============================================================================
PIPELINE_CONFIG = {
    "default_year_start": 1994,  # first year of consolidated Justel coverage
    "default_year_end": datetime.now().year,
    "index_filename": "law-index.json",
    "summary_filename": "ingestion_summary.json",
    "document_type": "statute",
    "document_status": "in_force",
}
