"""
UI layout components for the Audio Evaluation Results Viewer.

Defines the single-page Gradio layout: data import and audio URL settings,
summary, filter bar, results list and deployment notes.
"""

import gradio as gr
from typing import Dict, Any

import config


# 全局样式 - 卡片、徽章、内容框
GLOBAL_CSS = """
<style>
.load-status {
    padding: 10px 15px !important;
    border-radius: 6px !important;
    font-size: 15px !important;
    font-weight: bold !important;
    background: #fafafa !important;
    border: 2px solid #90caf9 !important;
}

.summary-panel { font-size: 14px; line-height: 1.8; }
.summary-panel .chips { display: inline-flex; flex-wrap: wrap; gap: 6px; margin-left: 4px; }
.chip {
    padding: 1px 8px;
    border-radius: 4px;
    background: #f5f5f5;
    border: 1px solid #ddd;
    font-size: 12px;
}
.muted { color: #888; }

.page-indicator { font-size: 14px; padding-top: 8px; }

.sample-list { display: flex; flex-direction: column; gap: 16px; }
.sample-card {
    background: #fff;
    border-radius: 16px;
    padding: 16px 20px;
    box-shadow: 0 1px 3px rgba(0, 0, 0, 0.08);
}
.sample-card.correct { border: 1px solid #a5d6a7; }
.sample-card.wrong { border: 1px solid #ef9a9a; }
.card-header { display: flex; align-items: center; gap: 8px; font-size: 13px; }
.badge { padding: 1px 10px; border-radius: 999px; border: 1px solid; }
.badge.correct { background: #e8f5e9; border-color: #81c784; color: #2e7d32; }
.badge.wrong { background: #ffebee; border-color: #e57373; color: #c62828; }
.card-body { display: grid; grid-template-columns: 260px 1fr; gap: 16px; margin-top: 12px; }
.card-audio audio { width: 100%; }
.audio-path, .audio-url { font-size: 12px; color: #777; word-break: break-all; }
.field-title { font-size: 14px; font-weight: 600; margin: 6px 0 4px; }
.prediction-label { display: grid; grid-template-columns: 1fr 1fr; gap: 12px; }

.content-box {
    border: 1px solid #e0e0e0;
    border-radius: 12px;
    background: #fafafa;
    padding: 10px 12px;
    font-size: 14px;
}
.content-box.mono { font-family: ui-monospace, monospace; font-size: 12.5px; line-height: 1.5; }
.content-box pre { white-space: pre-wrap; word-break: break-word; margin: 0; font-family: inherit; }

.empty-state { text-align: center; color: #888; padding: 64px 0; }
.error-state {
    text-align: center;
    color: #c62828;
    padding: 48px 0;
    border: 1px solid #ef9a9a;
    border-radius: 12px;
    background: #ffebee;
}
</style>
"""


def get_global_css() -> str:
    """返回全局CSS样式"""
    return GLOBAL_CSS


def create_header() -> None:
    """创建标题行"""
    with gr.Row():
        with gr.Column(scale=3):
            gr.Markdown("# 🎧 音讯推理成果展示")
        with gr.Column(scale=2):
            gr.Markdown("所有资料只在本次会话中解析，不会被保存。")


def create_import_section(components: Dict[str, Any]) -> None:
    """创建资料汇入、音档 URL 设定与摘要区块"""
    gr.Markdown("## 1) 汇入资料")

    with gr.Row():
        with gr.Column(scale=2):
            components['results_upload'] = gr.File(
                label="📁 上传结果档 (.json / .jsonl)",
                file_types=[".json", ".jsonl"],
                type="filepath",
                height=100
            )
        with gr.Column(scale=1):
            components['upload_status'] = gr.HTML(
                '<div class="load-status">📁 等待上传 JSON / JSONL 结果档<br>来源: -</div>'
            )
            components['export_btn'] = gr.Button(
                "💾 导出错误样本 CSV",
                size="lg",
                interactive=False
            )
            components['export_file'] = gr.File(
                label="📥 导出文件下载",
                interactive=False,
                visible=False
            )

    with gr.Row():
        with gr.Column(scale=1):
            base_url = config.infer_base_url()
            components['url_mode_radio'] = gr.Radio(
                choices=[
                    ("取档名 + Base URL", "basename"),
                    ("前缀取代", "replace")
                ],
                value=config.DEFAULT_URL_MODE,
                label="音档 URL 生成模式"
            )
            components['base_url_input'] = gr.Textbox(
                label="Base URL",
                value=base_url,
                placeholder="/audio/ 或 https://cdn/.../",
                visible=config.DEFAULT_URL_MODE == "basename"
            )
            components['replace_from_input'] = gr.Textbox(
                label="从",
                value=config.DEFAULT_REPLACE_FROM,
                visible=config.DEFAULT_URL_MODE == "replace"
            )
            components['replace_to_input'] = gr.Textbox(
                label="改为",
                value=base_url,
                visible=config.DEFAULT_URL_MODE == "replace"
            )
            gr.Markdown(
                "小技巧：若所有 .wav 都放在网站的 `audio/` 目录，选「取档名 + Base URL」最直觉。"
            )
        with gr.Column(scale=1):
            gr.Markdown("**摘要**")
            components['summary_display'] = gr.HTML(
                '<div class="summary-panel">样本数：<b>0</b>，正确：<b>0</b>，整体 Accuracy：<b>0.00%</b></div>'
            )


def create_filter_bar(components: Dict[str, Any]) -> None:
    """创建搜寻、只看错误、每页笔数与翻页按钮"""
    with gr.Row():
        with gr.Column(scale=3):
            components['query_input'] = gr.Textbox(
                label="全文搜寻",
                placeholder="全文搜寻（prompt / prediction / label）"
            )
        with gr.Column(scale=1):
            components['only_wrong_checkbox'] = gr.Checkbox(
                label="只看错误",
                value=False
            )
        with gr.Column(scale=1):
            components['page_size_dropdown'] = gr.Dropdown(
                choices=list(config.PAGE_SIZE_CHOICES),
                value=config.DEFAULT_PAGE_SIZE,
                label="每页笔数"
            )
        with gr.Column(scale=2):
            components['page_indicator'] = gr.HTML(
                '<div class="page-indicator">第 <b>1</b> / 1 页</div>'
            )
            with gr.Row():
                components['prev_btn'] = gr.Button("⬅️ 上一页", size="sm", interactive=False)
                components['next_btn'] = gr.Button("下一页 ➡️", size="sm", interactive=False)


def create_results_section(components: Dict[str, Any]) -> None:
    """创建结果清单区块"""
    components['results_display'] = gr.HTML(
        '<div class="empty-state">尚未载入资料或无符合条件的结果。</div>'
    )


def create_deployment_notes() -> None:
    """创建部署说明"""
    with gr.Accordion("📖 部署说明（展开）", open=False):
        gr.Markdown("""
1. 把所有 .wav 放到 `AUDIO_DIR` 目录（预设为工作目录下的 `audio/`），服务启动时会把它挂载在 `/audio/`，用上方「URL 生成模式」映射档案路径。
2. 设定 `PUBLIC_URL` 环境变数为静态资源的根路径，Base URL 会自动推论为 `PUBLIC_URL/audio/`，本机音档目录也挂载在同一路径。
3. 设定 `RESULTS_SOURCE`（URL 或本机路径）可在开启页面时自动载入结果档。
4. 执行 `python app.py` 启动服务。
        """)


def create_page_layout() -> Dict[str, Any]:
    """
    创建完整的单页布局

    Returns:
        包含所有UI组件的字典
    """
    components = {}

    gr.HTML(get_global_css())

    create_header()
    create_import_section(components)

    gr.HTML('<hr style="border: 1px solid #e0e0e0; margin: 10px 0;">')
    create_filter_bar(components)
    create_results_section(components)
    create_deployment_notes()

    return components
