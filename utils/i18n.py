"""Table chrome labels in English and Arabic."""
from typing import Dict

from domain.models import VisiblePage

LABELS: Dict[str, Dict[str, str]] = {
    'en': {
        'search': 'Search...',
        'rows_per_page': 'Rows per page:',
        'sort_by': 'Sort by',
        'descending': 'Descending',
        'selected': 'selected',
        'select_all': 'Select all matches',
        'clear_selection': 'Clear selection',
        'no_data': 'No data available',
        'previous': 'Previous',
        'next': 'Next',
        'export_view': 'Export view (CSV)',
        'export_selection': 'Export selection (CSV)',
        'delete': 'Delete',
        'deleted': 'Deleted',
        'of': 'of',
        'page': 'Page',
    },
    'ar': {
        'search': 'بحث...',
        'rows_per_page': 'الصفوف لكل صفحة:',
        'sort_by': 'ترتيب حسب',
        'descending': 'تنازلي',
        'selected': 'محدد',
        'select_all': 'تحديد كل النتائج',
        'clear_selection': 'إلغاء التحديد',
        'no_data': 'لا توجد بيانات',
        'previous': 'السابق',
        'next': 'التالي',
        'export_view': 'تصدير العرض (CSV)',
        'export_selection': 'تصدير المحدد (CSV)',
        'delete': 'حذف',
        'deleted': 'تم الحذف',
        'of': 'من',
        'page': 'صفحة',
    },
}


def t(key: str, locale: str = 'en') -> str:
    table = LABELS.get(locale, LABELS['en'])
    return table.get(key, LABELS['en'].get(key, key))


def displayed_rows_label(page: VisiblePage, locale: str = 'en') -> str:
    """`1-10 of 25` / `1-10 من 25`."""
    return f"{page.start}-{page.end} {t('of', locale)} {page.total_count}"


def selected_count_label(count: int, locale: str = 'en') -> str:
    return f"{count} {t('selected', locale)}"
