from .table import (
    render_config_table,
    render_config_table_html,
    render_summary,
)

__all__ = [
    "render_config_table",
    "render_config_table_html",
    "render_summary",
]
