from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple
import datetime as _dt

from domain.constants import DEFAULT_PAGE_SIZE


def _today_iso():
    return _dt.date.today().isoformat()


@dataclass
class Client:
    id: str
    name: str
    type: str  # individual | company
    email: str
    phone: str
    city: str
    name_ar: Optional[str] = None
    active_cases: int = 0
    created_at: str = field(default_factory=_today_iso)


@dataclass
class Case:
    id: str
    case_number: str
    title: str
    client: str
    case_type: str
    priority: str = 'medium'  # high | medium | low
    status: str = 'pending'  # active | pending | completed
    title_ar: Optional[str] = None
    assigned_to: Dict[str, str] = field(default_factory=dict)  # {'name': ...}
    fees: float = 0.0
    description: str = ''
    date: str = field(default_factory=_today_iso)


@dataclass
class Invoice:
    # Mongo-style documents carry `_id` instead of `id`.
    _id: str
    invoice_number: str
    client: Dict[str, str]  # {'name': ...}
    case: Dict[str, str]  # {'title': ...}
    items: List[Dict[str, Any]] = field(default_factory=list)
    subtotal: float = 0.0
    vat_amount: float = 0.0
    total_amount: float = 0.0
    status: str = 'draft'  # paid | pending | overdue | draft
    due_date: str = field(default_factory=_today_iso)
    created_at: str = field(default_factory=_today_iso)

Record = Dict[str, Any]
RecordPredicate = Callable[[Record], bool]
# Formatters receive the raw cell value and the whole row.
CellFormatter = Callable[[Any, Optional[Record]], Any]


class SortDirection(str, Enum):
    ASC = 'asc'
    DESC = 'desc'

    def flipped(self) -> 'SortDirection':
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class SelectAllState(str, Enum):
    """Header checkbox look for the current filtered rows."""
    NONE = 'none'
    SOME = 'some'  # indeterminate
    ALL = 'all'


def record_id(record: Record) -> Any:
    """Row identifier: `id`, falling back to `_id` (Mongo-style documents)."""
    rid = record.get('id')
    if rid is None:
        rid = record.get('_id')
    return rid


def get_field(record: Record, path: str) -> Any:
    """Resolve a dotted path (e.g. ``client.name``) inside a record."""
    if path in record:
        return record[path]
    value: Any = record
    for part in path.split('.'):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


@dataclass(frozen=True)
class ColumnDescriptor:
    key: str
    label: str
    label_ar: Optional[str] = None
    numeric: bool = False
    sortable: bool = True
    format: Optional[CellFormatter] = None

    @property
    def align(self) -> str:
        return 'right' if self.numeric else 'left'

    def label_for(self, locale: str) -> str:
        if locale == 'ar' and self.label_ar:
            return self.label_ar
        return self.label

    def value_of(self, record: Record) -> Any:
        return get_field(record, self.key)

    def display_value(self, record: Record) -> Any:
        value = self.value_of(record)
        if self.format is not None:
            return self.format(value, record)
        return '' if value is None else value


@dataclass(frozen=True)
class ViewState:
    sort_key: Optional[str] = None
    direction: SortDirection = SortDirection.ASC
    search_text: str = ''
    page_index: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    selected_ids: FrozenSet[Any] = field(default_factory=frozenset)
    predicate: Optional[RecordPredicate] = None


@dataclass(frozen=True)
class VisiblePage:
    rows: Tuple[Record, ...]
    total_count: int
    page_index: int
    page_size: int
    total_pages: int

    @property
    def start(self) -> int:
        """1-based offset of the first row shown (0 when empty)."""
        if not self.rows:
            return 0
        return self.page_index * self.page_size + 1

    @property
    def end(self) -> int:
        if not self.rows:
            return 0
        return self.page_index * self.page_size + len(self.rows)
