"""CSV export of table rows as they are displayed."""
import csv
import io
from typing import Any, Dict, Iterable, Sequence

from domain.models import ColumnDescriptor


def rows_to_csv(rows: Iterable[Dict[str, Any]], columns: Sequence[ColumnDescriptor],
                locale: str = 'en') -> str:
    """Header is the localized column labels; cells are the formatted values."""
    rows = list(rows)
    if not rows:
        return ""

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow([c.label_for(locale) for c in columns])
    for row in rows:
        writer.writerow([c.display_value(row) for c in columns])
    return output.getvalue()
