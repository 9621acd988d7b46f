"""
This package provides the reusable UI components for the Streamlit application.

- `base`: CSS injection and status badges.
- `data_table`: the searchable/sortable/paginated/selectable table bound to a
  `TabularViewEngine`.

By importing the components here, we provide a single, consistent access point
for the rest of the application (`from ui.components import render_data_table`).
"""

from .base import (
    inject_base_css,
    status_badge,
)

from .data_table import (
    get_engine,
    render_data_table,
)
