# -*- coding: utf-8 -*-
"""
Provision consolidation

Malformed pages can yield the same article twice (e.g. a repeated anchor or a
fallback split on an inline "Article 5"). Consolidation keeps one provision per
reference: the one with the longer whitespace-normalized content. Distinct
references keep their first-seen order; nothing is dropped except duplicates.

Example:
    provisions = consolidate_provisions(parsed.provisions)
"""
import re
from dataclasses import replace
from typing import Dict, List

from src.utils.dataclasses import Provision
from src.utils.logger import get_logger

logger = get_logger(__name__)

WHITESPACE = re.compile(r'\s+')


def normalize_whitespace(text: str) -> str:
    return WHITESPACE.sub(' ', text).strip()


def consolidate_provisions(provisions: List[Provision]) -> List[Provision]:
    """
    De-duplicate provisions sharing a provision_ref.

    Args:
        provisions: Provisions of one law in one language, document order

    Returns:
        One provision per reference, first-seen order
    """
    by_ref: Dict[str, Provision] = {}
    duplicates = 0

    for provision in provisions:
        ref = provision.provision_ref.strip()
        existing = by_ref.get(ref)

        if existing is None:
            by_ref[ref] = replace(provision, provision_ref=ref)
            continue

        duplicates += 1
        existing_len = len(normalize_whitespace(existing.content))
        incoming_len = len(normalize_whitespace(provision.content))
        if incoming_len > existing_len:
            # Dict keeps the key's original insertion position
            by_ref[ref] = replace(
                provision,
                provision_ref=ref,
                title=provision.title or existing.title,
            )
        elif not existing.title and provision.title:
            by_ref[ref] = replace(existing, title=provision.title)

    if duplicates:
        logger.debug(f"Merged {duplicates} duplicate provisions")

    return list(by_ref.values())
