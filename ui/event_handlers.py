"""
Event handlers for UI components.

Each handler takes the session's ApplicationState plus the changed input and
returns the updated state together with freshly rendered views. Derived views
are always recomputed from the canonical sample list.
"""

from typing import Any, Dict, Optional, Tuple
import logging
import os

import gradio as gr
import requests

import config
from models import ApplicationState
from services import (
    DataManager,
    ExportManager,
    FilterEngine,
    PathResolver,
    RenderEngine,
    ResultsParseError,
    compute_stats
)
from services.filter_engine import clamp_page
from utils.performance import measure_time
from utils.validation import validate_page_size, validate_url_mode

logger = logging.getLogger(__name__)


def generate_status_html(status_text: str, state: Optional[ApplicationState] = None) -> str:
    """
    Build the load status panel (two lines).

    Args:
        status_text: First line; when empty a summary of the loaded file is shown
        state: Current application state

    Returns:
        HTML for the status panel
    """
    if not status_text and state is not None and state.has_samples():
        line1 = f"📊 共 {state.get_total_loaded()} 笔样本"
    else:
        line1 = status_text or "📁 等待上传 JSON / JSONL 结果档"

    if state is not None and state.source_name:
        line2 = f"来源: {state.source_name}"
    else:
        line2 = "来源: -"

    return f'<div class="load-status">{line1}<br>{line2}</div>'


def render_view(app_state: ApplicationState) -> Tuple[str, str, str, Dict[str, Any], Dict[str, Any]]:
    """
    Render summary, page indicator and results list for the current state.

    Returns:
        Tuple of (summary_html, page_indicator_html, results_html,
                  prev_button_update, next_button_update)
    """
    render_engine = RenderEngine()
    view = app_state.view

    summary_html = render_engine.render_summary(compute_stats(app_state.samples), app_state.metrics)
    page_view = FilterEngine().build_view(app_state.samples, view)
    indicator_html = render_engine.render_page_indicator(
        page_view.page, page_view.total_pages, page_view.filtered_count
    )

    if app_state.load_error:
        results_html = render_engine.render_error(app_state.load_error)
    else:
        resolver = PathResolver.from_view(view)
        results_html = render_engine.render_sample_list(page_view.rows, resolver)

    return (
        summary_html,
        indicator_html,
        results_html,
        gr.update(interactive=page_view.page > 1),
        gr.update(interactive=page_view.page < page_view.total_pages)
    )


def _apply_loaded(app_state: ApplicationState, data_manager: DataManager) -> ApplicationState:
    app_state.samples = data_manager.samples
    app_state.metrics = data_manager.metrics
    app_state.source_name = data_manager.source_name
    app_state.load_error = None
    app_state.view.reset_filters()
    return app_state


def handle_results_upload(file_path: Optional[str], app_state: ApplicationState) -> Tuple[ApplicationState, str]:
    """
    Load an uploaded JSON / JSONL results file.

    A file that cannot be parsed leaves the previously loaded results untouched.

    Args:
        file_path: Path of the uploaded file
        app_state: Current application state

    Returns:
        Tuple of (app_state, status_html)
    """
    if not file_path:
        return app_state, generate_status_html("⚠️ 请先选择结果档", app_state)

    source_name = os.path.basename(file_path)
    try:
        data_manager = DataManager.from_file(file_path, source_name=source_name)
    except ResultsParseError as e:
        logger.warning(f"Rejected upload '{source_name}': {e}")
        gr.Warning("档案内容不是合法的 JSON / JSONL", duration=3.0)
        return app_state, generate_status_html(f"❌ 解析失败: {e}", app_state)
    except FileNotFoundError as e:
        logger.warning(f"Upload not found: {e}")
        return app_state, generate_status_html(f"❌ 文件未找到: {e}", app_state)

    app_state = _apply_loaded(app_state, data_manager)
    return app_state, generate_status_html(
        f"✅ 成功载入 {len(data_manager.samples)} 笔样本", app_state
    )


def _decode_results(content: bytes, source: str) -> str:
    try:
        return content.decode('utf-8-sig')
    except UnicodeDecodeError as e:
        raise ResultsParseError(f"文件编码不是UTF-8 ({source}): {e}") from e


def fetch_results_text(source: str, timeout: float = config.RESULTS_FETCH_TIMEOUT) -> str:
    """
    Fetch results text from an HTTP(S) URL or read it from a local path.

    The content is always decoded as UTF-8 regardless of the charset the
    server announces.

    Raises:
        requests.RequestException: On network errors or non-success status
        OSError: If a local path is missing or cannot be read
        ResultsParseError: If the content is not valid UTF-8
    """
    if source.startswith(("http://", "https://")):
        with measure_time("fetch_results"):
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        return _decode_results(response.content, source)

    with open(source, 'rb') as f:
        return _decode_results(f.read(), source)


def handle_auto_load(source: str, app_state: ApplicationState) -> Tuple[ApplicationState, str]:
    """
    Load results from a well-known source when the page opens.

    Unlike an upload, a failure here is recorded on the state so the results
    list shows the error instead of stale or empty content.

    Args:
        source: URL or local path of the results file
        app_state: Current application state

    Returns:
        Tuple of (app_state, status_html)
    """
    if not source:
        return app_state, generate_status_html("", app_state)

    try:
        text = fetch_results_text(source)
        data_manager = DataManager.from_text(text, source_name=source)
    except requests.RequestException as e:
        logger.warning(f"Fetching '{source}' failed: {e}")
        app_state.load_error = f"无法取得结果档: {e}"
    except FileNotFoundError as e:
        logger.warning(f"Results source not found: {source}")
        app_state.load_error = f"结果档不存在: {e}"
    except OSError as e:
        logger.warning(f"Reading '{source}' failed: {e}")
        app_state.load_error = f"无法读取结果档: {e}"
    except ResultsParseError as e:
        logger.warning(f"Results source '{source}' is not JSON / JSONL: {e}")
        app_state.load_error = f"载入失败: {e}"
    else:
        app_state = _apply_loaded(app_state, data_manager)
        return app_state, generate_status_html(
            f"✅ 自动载入 {len(data_manager.samples)} 笔样本", app_state
        )

    app_state.source_name = source
    return app_state, generate_status_html("❌ 自动载入失败", app_state)


def handle_query_change(query: str, app_state: ApplicationState) -> ApplicationState:
    """Update the search query and go back to the first page."""
    app_state.view.query = query or ""
    app_state.view.page = 1
    return app_state


def handle_only_wrong_change(only_wrong: bool, app_state: ApplicationState) -> ApplicationState:
    """Toggle the only-wrong filter and go back to the first page."""
    app_state.view.only_wrong = bool(only_wrong)
    app_state.view.page = 1
    return app_state


def handle_page_size_change(page_size, app_state: ApplicationState) -> ApplicationState:
    """Change the page size and go back to the first page."""
    is_valid, error_msg = validate_page_size(page_size)
    if not is_valid:
        gr.Warning(error_msg, duration=2.0)
        return app_state

    app_state.view.page_size = int(page_size)
    app_state.view.page = 1
    return app_state


def handle_navigation(direction: str, app_state: ApplicationState) -> ApplicationState:
    """
    Move to the previous or next page, staying within the available pages.

    Args:
        direction: "prev" or "next"
        app_state: Current application state
    """
    if direction not in ("prev", "next"):
        gr.Warning(f"无效的翻页方向: {direction}", duration=1.0)
        return app_state

    view = app_state.view
    pages = FilterEngine().build_view(app_state.samples, view).total_pages
    step = -1 if direction == "prev" else 1
    view.page = clamp_page(view.page + step, pages)
    return app_state


def handle_url_settings_change(
    url_mode: str,
    base_url: str,
    replace_from: str,
    replace_to: str,
    app_state: ApplicationState
) -> ApplicationState:
    """
    Update the audio URL resolution settings.

    Args:
        url_mode: "basename" or "replace"
        base_url: Base URL for basename mode
        replace_from: Substring to replace in replace mode
        replace_to: Replacement in replace mode
    """
    is_valid, error_msg = validate_url_mode(url_mode)
    if not is_valid:
        gr.Warning(error_msg, duration=2.0)
        return app_state

    view = app_state.view
    view.url_mode = url_mode
    view.base_url = base_url or ""
    view.replace_from = replace_from or ""
    view.replace_to = replace_to or ""
    return app_state


def handle_export(app_state: ApplicationState, output_dir: Optional[str] = None) -> Tuple[Optional[str], str]:
    """
    Export the incorrect samples to ``wrong_samples.csv``.

    Args:
        app_state: Current application state
        output_dir: Directory for the file (defaults to a temporary directory)

    Returns:
        Tuple of (file_path, status_html); file_path is None on failure
    """
    if not app_state.has_samples():
        gr.Warning("尚未载入资料", duration=2.0)
        return None, generate_status_html("⚠️ 尚未载入资料，无法导出", app_state)

    export_manager = ExportManager()
    try:
        file_path = export_manager.export_wrong_samples(app_state.samples, output_dir)
    except (ValueError, OSError) as e:
        logger.error(f"Export failed: {e}")
        gr.Warning(f"导出失败: {e}", duration=2.0)
        return None, generate_status_html(f"❌ 导出失败: {e}", app_state)

    wrong_count = app_state.get_wrong_count()
    gr.Info(f"已导出 {wrong_count} 笔错误样本", duration=2.0)
    return file_path, generate_status_html(f"✅ 已导出 {wrong_count} 笔错误样本", app_state)
