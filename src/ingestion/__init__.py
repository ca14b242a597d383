# -*- coding: utf-8 -*-
"""
Ingestion package for Belgian federal legislation from Justel.

Contains justel_fetcher (rate-limited, retrying HTTP client), justel_urls (ELI
URL building and decomposition), index_parser (year index pages), law_parser
(law pages and article splitting), consolidator (duplicate provisions) and
pipeline (discovery and content stages).
"""
