# -*- coding: utf-8 -*-
"""
Justel ingestion runner

Thin wrapper so the pipeline can be started from the scripts directory,
same options as src/main.py.

Examples:
    python scripts/run_ingestion.py --limit 5 --year-start 2023 --year-end 2023
    python scripts/run_ingestion.py --phase content --lang fr --skip-existing
"""

import sys
from pathlib import Path

# Project root (scripts/run_ingestion.py → 2 parents)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.main import main

if __name__ == "__main__":
    sys.exit(main())
