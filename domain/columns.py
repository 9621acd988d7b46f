"""Column descriptor sets for the legal tables, plus their pure formatters."""
import datetime as dt
from typing import Any, Optional

from domain.constants import CURRENCY
from domain.models import ColumnDescriptor


def format_currency(value: Any, row: Optional[dict] = None) -> str:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return ''
    except OverflowError:
        return f"{CURRENCY} {value:,}.00"
    return f"{CURRENCY} {amount:,.2f}"


def format_date(value: Any, row: Optional[dict] = None) -> str:
    """ISO date/datetime string -> DD/MM/YYYY. Unparseable input is returned as-is."""
    if not value:
        return ''
    text = str(value)
    try:
        parsed = dt.date.fromisoformat(text[:10])
    except ValueError:
        return text
    return parsed.strftime('%d/%m/%Y')


def name_of(value: Any, row: Optional[dict] = None) -> str:
    if isinstance(value, dict):
        return value.get('name') or 'N/A'
    return value or 'N/A'


def title_of(value: Any, row: Optional[dict] = None) -> str:
    if isinstance(value, dict):
        return value.get('title') or 'N/A'
    return value or 'N/A'


def status_label(value: Any, row: Optional[dict] = None) -> str:
    return str(value or '').capitalize()


def due_date_label(value: Any, row: Optional[dict] = None) -> str:
    """Due date, flagged when the invoice it belongs to is overdue."""
    text = format_date(value)
    if text and row and row.get('status') == 'overdue':
        return f"{text} (overdue)"
    return text


CASE_COLUMNS = [
    ColumnDescriptor('case_number', 'Case No.', 'رقم القضية'),
    ColumnDescriptor('title', 'Title', 'العنوان'),
    ColumnDescriptor('client', 'Client', 'العميل'),
    ColumnDescriptor('case_type', 'Type', 'النوع'),
    ColumnDescriptor('priority', 'Priority', 'الأولوية', format=status_label),
    ColumnDescriptor('status', 'Status', 'الحالة', format=status_label),
    ColumnDescriptor('assigned_to', 'Assigned To', 'المحامي المسؤول', format=name_of),
    ColumnDescriptor('fees', 'Fees', 'الأتعاب', numeric=True, format=format_currency),
    ColumnDescriptor('date', 'Opened', 'تاريخ الفتح', format=format_date),
    ColumnDescriptor('description', 'Description', 'الوصف', sortable=False),
]

CLIENT_COLUMNS = [
    ColumnDescriptor('name', 'Name', 'الاسم'),
    ColumnDescriptor('type', 'Type', 'النوع', format=status_label),
    ColumnDescriptor('email', 'Email', 'البريد الإلكتروني'),
    ColumnDescriptor('phone', 'Phone', 'الهاتف', sortable=False),
    ColumnDescriptor('city', 'City', 'المدينة'),
    ColumnDescriptor('active_cases', 'Active Cases', 'القضايا النشطة', numeric=True),
    ColumnDescriptor('created_at', 'Since', 'منذ', format=format_date),
]

INVOICE_COLUMNS = [
    ColumnDescriptor('invoice_number', 'Invoice No.', 'رقم الفاتورة'),
    ColumnDescriptor('client', 'Client', 'العميل', format=name_of),
    ColumnDescriptor('case', 'Case', 'القضية', format=title_of),
    ColumnDescriptor('subtotal', 'Subtotal', 'المبلغ قبل الضريبة', numeric=True, format=format_currency),
    ColumnDescriptor('vat_amount', 'VAT', 'ضريبة القيمة المضافة', numeric=True, format=format_currency),
    ColumnDescriptor('total_amount', 'Total', 'الإجمالي', numeric=True, format=format_currency),
    ColumnDescriptor('status', 'Status', 'الحالة', format=status_label),
    ColumnDescriptor('due_date', 'Due Date', 'تاريخ الاستحقاق', format=due_date_label),
]

COLUMNS_BY_COLLECTION = {
    'cases': CASE_COLUMNS,
    'clients': CLIENT_COLUMNS,
    'invoices': INVOICE_COLUMNS,
}
