"""Record collection helpers: loading (with bootstrap seeding), bulk deletion, reset.

These feed the table engine; the engine itself never touches storage.
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List
from dataclasses import asdict
import json
import logging
import os

from services import persistence
from domain.models import record_id
from demo import sample_data
from utils.paths import resolve_data_file
from utils.log import log_context

logger = logging.getLogger(__name__)


def _check_key(key: str):
    if key not in persistence.FILES:
        raise ValueError(f"Unknown collection: {key}")


def _load_seed_file(key: str) -> List[Dict[str, Any]]:
    path = resolve_data_file(f'seed_{key}.json', preferred_dir=persistence.DATA_DIR)
    if not path or not os.path.exists(path):
        return []
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("records.seed_file.unreadable", extra=log_context(collection=key, error=str(e)))
        return []
    return data if isinstance(data, list) else []


def generate_sample(key: str) -> List[Dict[str, Any]]:
    """Build a sample collection, reusing stored clients/cases for cross references."""
    _check_key(key)
    if key == 'clients':
        return [asdict(c) for c in sample_data.make_clients(12)]
    client_names = [c['name'] for c in persistence.load_list('clients') if c.get('name')]
    if key == 'cases':
        return [asdict(c) for c in sample_data.make_cases(25, client_names=client_names)]
    case_titles = [c['title'] for c in persistence.load_list('cases') if c.get('title')]
    return [asdict(i) for i in sample_data.make_invoices(
        20, client_names=client_names, case_titles=case_titles)]


def load_records(key: str) -> List[Dict[str, Any]]:
    """Return a stored collection, bootstrapping it when empty.

    Steps:
    1. Read data/<key>.json.
    2. If empty, try data/seed_<key>.json, else generate sample records.
    3. Persist the bootstrapped collection.
    """
    _check_key(key)
    records = persistence.load_list(key)
    if records:
        return records
    records = _load_seed_file(key) or generate_sample(key)
    persistence.replace_all(key, records)
    logger.info("records.bootstrap", extra=log_context(collection=key, count=len(records)))
    return records


def delete_records(key: str, ids: Iterable[Any]) -> List[Dict[str, Any]]:
    """Delete the given ids and return the remaining collection."""
    _check_key(key)
    doomed = set(ids)
    records = persistence.load_list(key)
    remaining = [r for r in records if record_id(r) not in doomed]
    if len(remaining) == len(records):
        raise ValueError("Records not found for deletion")
    persistence.replace_all(key, remaining)
    logger.info("records.delete.success",
                extra=log_context(collection=key, deleted=len(records) - len(remaining)))
    return remaining


def reset_collection(key: str):
    _check_key(key)
    persistence.replace_all(key, [])
    logger.info("records.reset", extra=log_context(collection=key))


def seed_all() -> Dict[str, int]:
    """Regenerate every collection from sample data (clients first, they are referenced)."""
    counts = {}
    for key in ('clients', 'cases', 'invoices'):
        persistence.replace_all(key, [])
        records = generate_sample(key)
        persistence.replace_all(key, records)
        counts[key] = len(records)
    logger.info("records.seed_all", extra=log_context(**counts))
    return counts
