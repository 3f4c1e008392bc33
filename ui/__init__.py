"""UI components for the Audio Evaluation Results Viewer."""

from .layout import (
    create_page_layout,
    create_import_section,
    create_filter_bar,
    get_global_css
)
from .event_handlers import (
    generate_status_html,
    render_view,
    handle_results_upload,
    handle_auto_load,
    handle_query_change,
    handle_only_wrong_change,
    handle_page_size_change,
    handle_navigation,
    handle_url_settings_change,
    handle_export
)

__all__ = [
    "create_page_layout",
    "create_import_section",
    "create_filter_bar",
    "get_global_css",
    "generate_status_html",
    "render_view",
    "handle_results_upload",
    "handle_auto_load",
    "handle_query_change",
    "handle_only_wrong_change",
    "handle_page_size_change",
    "handle_navigation",
    "handle_url_settings_change",
    "handle_export"
]
