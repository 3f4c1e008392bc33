"""
RenderEngine for results display.

Turns the derived views (summary statistics, page of samples) into the HTML
shown by the Gradio layout. All user-supplied text is escaped.
"""

import html
import json
from typing import Optional, Sequence

from models import MetricsSummary, Sample
from utils.text_cleaning import strip_thinking
from .aggregator import SummaryStats, format_accuracy
from .path_resolver import PathResolver


class RenderEngine:
    """
    Rendering engine for the summary panel and sample cards.

    Provides methods to:
    - Render the accuracy summary and file-reported metrics
    - Render one card per sample with an audio player
    - Render empty and error states
    """

    EMPTY_TEXT = "(空)"
    NO_AUDIO_TEXT = "(无音档)"
    EMPTY_LIST_TEXT = "尚未载入资料或无符合条件的结果。"

    def render_content_box(self, text: str, mono: bool = True) -> str:
        """
        Render one text block, preserving line breaks.

        Args:
            text: Already sanitized text
            mono: Use the monospace style (prediction/label) or the prose style (prompt)
        """
        css_class = "content-box mono" if mono else "content-box"
        if not text:
            return f'<div class="{css_class}"><span class="muted">{self.EMPTY_TEXT}</span></div>'
        return f'<div class="{css_class}"><pre>{html.escape(text)}</pre></div>'

    def render_summary(self, stats: SummaryStats, metrics: Optional[MetricsSummary] = None) -> str:
        """
        Render overall statistics and any metrics the file reported.

        Args:
            stats: Statistics computed over all samples
            metrics: File-reported metrics summary

        Returns:
            HTML string for the summary panel
        """
        parts = [
            '<div class="summary-panel">',
            f'<div>样本数：<b>{stats.count}</b>，正确：<b>{stats.correct_count}</b>，'
            f'整体 Accuracy：<b>{format_accuracy(stats.accuracy)}</b></div>'
        ]

        metrics = metrics or MetricsSummary()
        if metrics.metric:
            parts.append(f'<div>metric：<b>{html.escape(str(metrics.metric))}</b></div>')
        if metrics.accuracy_by_sample is not None:
            parts.append(
                f'<div>档内 accuracy_by_sample：<b>{html.escape(str(metrics.accuracy_by_sample))}</b></div>'
            )
        if metrics.avg_accuracy_by_category is not None:
            parts.append(
                f'<div>avg_accuracy_by_category：<b>{html.escape(str(metrics.avg_accuracy_by_category))}</b></div>'
            )
        if isinstance(metrics.categories_accuracy, dict) and metrics.categories_accuracy:
            chips = "".join(
                f'<span class="chip">{html.escape(str(k))}: {html.escape(str(v))}</span>'
                for k, v in metrics.categories_accuracy.items()
            )
            parts.append(f'<div>categories_accuracy：<span class="chips">{chips}</span></div>')

        model = metrics.get_model_name()
        if model:
            model_text = json.dumps(model, ensure_ascii=False)
            parts.append(f'<div class="muted">Model：{html.escape(model_text)}</div>')

        parts.append("</div>")
        return "".join(parts)

    def render_audio(self, path: str, resolver: PathResolver) -> str:
        """Render the audio player with the recorded path and the URL it resolved to."""
        url = resolver.resolve(path)
        shown_path = html.escape(path) if path else self.NO_AUDIO_TEXT
        return (
            '<div class="audio-block">'
            f'<audio controls preload="none" src="{html.escape(url, quote=True)}"></audio>'
            f'<div class="audio-path">{shown_path}</div>'
            f'<div class="audio-url">→ 使用 URL：{html.escape(url)}</div>'
            '</div>'
        )

    def render_sample_card(self, sample: Sample, resolver: PathResolver) -> str:
        """
        Render one sample as a result card.

        Args:
            sample: Sample to render
            resolver: Resolver turning the first audio path into a URL

        Returns:
            HTML string for the card
        """
        status_class = "correct" if sample.correct else "wrong"
        badge = "✔ 正确" if sample.correct else "✘ 错误"
        length_html = (
            f'<span class="muted">len: {html.escape(str(sample.length))}</span>'
            if sample.length is not None else ""
        )

        return f'''
        <article class="sample-card {status_class}" data-position="{sample.position}">
            <div class="card-header">
                <span class="badge {status_class}">{badge}</span>
                <span class="muted"># {html.escape(str(sample.index))}</span>
                {length_html}
            </div>
            <div class="card-body">
                <div class="card-audio">{self.render_audio(sample.first_audio_path, resolver)}</div>
                <div class="card-text">
                    <div class="field-title">Prompt / 问题</div>
                    {self.render_content_box(strip_thinking(sample.prompt), mono=False)}
                    <div class="prediction-label">
                        <div>
                            <div class="field-title">Prediction</div>
                            {self.render_content_box(strip_thinking(sample.prediction))}
                        </div>
                        <div>
                            <div class="field-title">Label</div>
                            {self.render_content_box(strip_thinking(sample.label))}
                        </div>
                    </div>
                </div>
            </div>
        </article>
        '''

    def render_sample_list(self, rows: Sequence[Sample], resolver: PathResolver) -> str:
        """Render a page of samples, or the empty-state message."""
        if not rows:
            return f'<div class="empty-state">{self.EMPTY_LIST_TEXT}</div>'
        cards = "".join(self.render_sample_card(s, resolver) for s in rows)
        return f'<section class="sample-list">{cards}</section>'

    def render_error(self, message: str) -> str:
        """Render the load error panel shown instead of the results list."""
        return f'<div class="error-state">❌ {html.escape(message)}</div>'

    def render_page_indicator(self, page: int, pages: int, filtered_count: int) -> str:
        """Render 'page X / Y' together with the number of matching samples."""
        return (
            f'<div class="page-indicator">第 <b>{page}</b> / {pages} 页'
            f'（符合条件 {filtered_count} 笔）</div>'
        )
