"""
This module contains centralized constants used throughout the application,
ensuring a single source of truth for table defaults, locales and the status
vocabularies of the legal collections.

Table defaults can be overridden from the environment:
LEGAL_TABLES_PAGE_SIZE, LEGAL_TABLES_LOCALE and LEGAL_TABLES_LOG_LEVEL.
"""
import os


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


# Pagination
DEFAULT_PAGE_SIZE = _env_int('LEGAL_TABLES_PAGE_SIZE', 10)
PAGE_SIZE_OPTIONS = sorted({5, 10, 25, 50, DEFAULT_PAGE_SIZE})

# Locales supported by the table chrome
LOCALES = ['en', 'ar']
DEFAULT_LOCALE = os.getenv('LEGAL_TABLES_LOCALE', 'en')
if DEFAULT_LOCALE not in LOCALES:
    DEFAULT_LOCALE = 'en'

LOG_LEVEL = os.getenv('LEGAL_TABLES_LOG_LEVEL', 'INFO').upper()

# Stored collections
COLLECTIONS = ['cases', 'clients', 'invoices']

# Status vocabularies
CASE_STATUSES = ['active', 'pending', 'completed']
CASE_PRIORITIES = ['high', 'medium', 'low']
CASE_TYPES = ['commercial', 'labor', 'family', 'realEstate', 'criminal', 'administrative']
INVOICE_STATUSES = ['paid', 'pending', 'overdue', 'draft']
CLIENT_TYPES = ['individual', 'company']

# Saudi VAT
VAT_RATE = 0.15
CURRENCY = 'SAR'
