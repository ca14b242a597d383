# -*- coding: utf-8 -*-
"""
Belgian Law ingestion source package.

Top-level package for the Justel ingestion pipeline: HTTP fetching, year index
and law page extraction, provision consolidation, and the stage orchestrator
that writes seed documents for the database builder.
"""
