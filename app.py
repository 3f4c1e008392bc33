"""
Audio Evaluation Results Viewer
音讯推理成果展示

Main entry point for the Gradio application.
"""

import logging
import os

import gradio as gr
import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

import config
from models import ApplicationState
from ui.layout import create_page_layout
from ui.event_handlers import (
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
from utils.performance import get_monitor

logger = logging.getLogger(__name__)


def main():
    """Main application entry point."""
    with gr.Blocks(title="音讯推理成果展示", theme=gr.themes.Soft()) as app:

        # Application State
        app_state = gr.State(ApplicationState())

        components = create_page_layout()

        # 所有会改变结果显示的事件共用同一组输出
        view_outputs = [
            app_state,
            components['summary_display'],
            components['page_indicator'],
            components['results_display'],
            components['prev_btn'],
            components['next_btn']
        ]

        def with_view(state):
            return (state, *render_view(state))

        # ========== Event Handlers ==========

        # Results Upload Handler
        def on_upload(file_path, state):
            state, status_html = handle_results_upload(file_path, state)
            return (
                *with_view(state),
                status_html,
                gr.update(value=""),
                gr.update(value=False),
                gr.update(interactive=state.has_samples())
            )

        components['results_upload'].upload(
            fn=on_upload,
            inputs=[components['results_upload'], app_state],
            outputs=[
                *view_outputs,
                components['upload_status'],
                components['query_input'],
                components['only_wrong_checkbox'],
                components['export_btn']
            ]
        )

        # Filter Handlers
        components['query_input'].input(
            fn=lambda query, state: with_view(handle_query_change(query, state)),
            inputs=[components['query_input'], app_state],
            outputs=view_outputs
        )

        components['only_wrong_checkbox'].input(
            fn=lambda flag, state: with_view(handle_only_wrong_change(flag, state)),
            inputs=[components['only_wrong_checkbox'], app_state],
            outputs=view_outputs
        )

        components['page_size_dropdown'].input(
            fn=lambda size, state: with_view(handle_page_size_change(size, state)),
            inputs=[components['page_size_dropdown'], app_state],
            outputs=view_outputs
        )

        # Navigation Handlers
        components['prev_btn'].click(
            fn=lambda state: with_view(handle_navigation("prev", state)),
            inputs=[app_state],
            outputs=view_outputs
        )

        components['next_btn'].click(
            fn=lambda state: with_view(handle_navigation("next", state)),
            inputs=[app_state],
            outputs=view_outputs
        )

        # Audio URL Settings Handlers
        url_inputs = [
            components['url_mode_radio'],
            components['base_url_input'],
            components['replace_from_input'],
            components['replace_to_input'],
            app_state
        ]

        def on_url_settings(url_mode, base_url, replace_from, replace_to, state):
            state = handle_url_settings_change(url_mode, base_url, replace_from, replace_to, state)
            is_basename = state.view.url_mode == "basename"
            return (
                *with_view(state),
                gr.update(visible=is_basename),
                gr.update(visible=not is_basename),
                gr.update(visible=not is_basename)
            )

        url_outputs = [
            *view_outputs,
            components['base_url_input'],
            components['replace_from_input'],
            components['replace_to_input']
        ]

        components['url_mode_radio'].change(fn=on_url_settings, inputs=url_inputs, outputs=url_outputs)
        for textbox in ('base_url_input', 'replace_from_input', 'replace_to_input'):
            components[textbox].submit(fn=on_url_settings, inputs=url_inputs, outputs=url_outputs)
            components[textbox].blur(fn=on_url_settings, inputs=url_inputs, outputs=url_outputs)

        # Export Handler
        def on_export(state):
            file_path, status_html = handle_export(state)
            if file_path:
                return gr.update(value=file_path, visible=True), status_html
            return gr.update(value=None, visible=False), status_html

        components['export_btn'].click(
            fn=on_export,
            inputs=[app_state],
            outputs=[components['export_file'], components['upload_status']]
        )

        # Auto-load Handler
        if config.RESULTS_SOURCE:
            def on_page_load(state):
                state, status_html = handle_auto_load(config.RESULTS_SOURCE, state)
                return (
                    *with_view(state),
                    status_html,
                    gr.update(interactive=state.has_samples())
                )

            app.load(
                fn=on_page_load,
                inputs=[app_state],
                outputs=[*view_outputs, components['upload_status'], components['export_btn']]
            )

    return app


def create_server(blocks=None, audio_dir: str = None) -> FastAPI:
    """
    Build the ASGI app: the audio folder as static files plus the Gradio UI.

    Args:
        blocks: Gradio app to mount at "/" (defaults to ``main()``)
        audio_dir: Folder holding the .wav files (defaults to AUDIO_DIR)

    Returns:
        FastAPI application ready for uvicorn
    """
    audio_dir = audio_dir or config.AUDIO_DIR
    mount_path = config.audio_mount_path()
    server = FastAPI()

    if os.path.isdir(audio_dir):
        server.mount(mount_path, StaticFiles(directory=audio_dir), name="audio")
        logger.info(f"Serving '{os.path.abspath(audio_dir)}' at {mount_path}/")
    else:
        logger.warning(f"Audio directory '{audio_dir}' not found, {mount_path}/ is not served")

    return gr.mount_gradio_app(server, blocks if blocks is not None else main(), path="/")


if __name__ == "__main__":
    server = create_server()
    try:
        uvicorn.run(server, host=config.SERVER_NAME, port=config.SERVER_PORT)
    finally:
        get_monitor().log_stats()
