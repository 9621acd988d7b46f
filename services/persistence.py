import json
import logging
import os
import tempfile
import shutil
from typing import List, Dict, Any

from utils.log import log_context

logger = logging.getLogger(__name__)

DATA_DIR = os.getenv('LEGAL_TABLES_DATA_DIR') or os.path.join(os.path.dirname(
    os.path.abspath(__file__)), '..', 'data')
DATA_DIR = os.path.normpath(DATA_DIR)

FILES = {
    'cases': 'cases.json',
    'clients': 'clients.json',
    'invoices': 'invoices.json',
}


def _path(key: str) -> str:
    return os.path.join(DATA_DIR, FILES[key])


def load_list(key: str) -> List[Dict[str, Any]]:
    file_path = _path(key)
    if not os.path.exists(file_path):
        return []
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("persistence.load.failed",
                       extra=log_context(collection=key, error=str(e)))
        return []
    if not isinstance(data, list):
        logger.warning("persistence.load.not_a_list", extra=log_context(collection=key))
        return []
    return data


def atomic_write(key: str, data: List[Dict[str, Any]]):
    file_path = _path(key)
    os.makedirs(os.path.dirname(file_path), exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(prefix='tmp_', suffix='.json')
    with os.fdopen(tmp_fd, 'w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    shutil.move(tmp_path, file_path)


def replace_all(key: str, items: List[Dict[str, Any]]):
    atomic_write(key, items)
    logger.debug("persistence.replace_all", extra=log_context(collection=key, count=len(items)))
