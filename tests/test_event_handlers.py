"""
Integration tests for the event handlers.

Tests the full workflow: Load → Filter → Paginate → Export, without launching
the Gradio server.
"""

import json
import os
import tempfile
from unittest import mock

import pytest
import requests

from models import ApplicationState, MetricsSummary
from ui.event_handlers import (
    handle_auto_load,
    handle_export,
    handle_navigation,
    handle_only_wrong_change,
    handle_page_size_change,
    handle_query_change,
    handle_results_upload,
    handle_url_settings_change,
    render_view
)


def create_results_file(num_rows=25, wrapped=True, suffix='.json'):
    """Helper to create a results file; every third sample is correct."""
    records = [
        {
            "index": i,
            "audios": [{"audio_filepath": f"/work/voidful2nlp/data/sample{i:03d}.wav"}],
            "messages": [{"content": f"Question {i}"}],
            "prediction": f"<think>reasoning {i}</think>answer {i}",
            "label": f"answer {i}" if i % 3 == 0 else f"other {i}",
            "correct": i % 3 == 0
        }
        for i in range(num_rows)
    ]
    with tempfile.NamedTemporaryFile(mode='w', suffix=suffix, delete=False, encoding='utf-8') as f:
        if suffix == '.jsonl':
            f.write("\n".join(json.dumps(r) for r in records))
        elif wrapped:
            json.dump({"results": records, "accuracy_by_sample": 0.36}, f)
        else:
            json.dump(records, f)
        return f.name


@pytest.fixture
def loaded_state():
    path = create_results_file()
    try:
        state, _ = handle_results_upload(path, ApplicationState())
        yield state
    finally:
        os.unlink(path)


class TestUpload:
    """Test loading an uploaded results file."""
    
    def test_upload_json(self, loaded_state):
        assert loaded_state.get_total_loaded() == 25
        assert loaded_state.metrics.accuracy_by_sample == 0.36
        assert loaded_state.source_name.endswith('.json')
    
    def test_upload_jsonl(self):
        path = create_results_file(4, suffix='.jsonl')
        try:
            state, msg = handle_results_upload(path, ApplicationState())
            assert state.get_total_loaded() == 4
            assert "成功载入 4" in msg
            assert state.metrics == MetricsSummary()
        finally:
            os.unlink(path)
    
    def test_upload_without_file(self):
        state, msg = handle_results_upload(None, ApplicationState())
        assert not state.has_samples()
        assert "请先选择" in msg
    
    def test_invalid_upload_keeps_previous_state(self, loaded_state):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False, encoding='utf-8') as f:
            f.write("{broken\nnot json")
            bad_path = f.name
        
        try:
            with pytest.warns(UserWarning):
                state, msg = handle_results_upload(bad_path, loaded_state)
            assert "解析失败" in msg
            assert state.get_total_loaded() == 25
        finally:
            os.unlink(bad_path)
    
    def test_new_upload_resets_filters(self, loaded_state):
        handle_query_change("answer", loaded_state)
        handle_only_wrong_change(True, loaded_state)
        loaded_state.view.page = 2
        
        path = create_results_file(3, wrapped=False)
        try:
            state, _ = handle_results_upload(path, loaded_state)
        finally:
            os.unlink(path)
        
        assert state.get_total_loaded() == 3
        assert state.view.query == ""
        assert state.view.only_wrong is False
        assert state.view.page == 1


class TestViewChanges:
    """Test filter, page size and navigation handlers."""
    
    def test_filters_reset_page(self, loaded_state):
        loaded_state.view.page = 3
        handle_only_wrong_change(True, loaded_state)
        assert loaded_state.view.page == 1
        
        loaded_state.view.page = 2
        handle_query_change("question 1", loaded_state)
        assert loaded_state.view.page == 1
        
        loaded_state.view.page = 2
        handle_page_size_change(20, loaded_state)
        assert loaded_state.view.page == 1
        assert loaded_state.view.page_size == 20
    
    def test_invalid_page_size_is_ignored(self, loaded_state):
        with pytest.warns(UserWarning):
            handle_page_size_change(7, loaded_state)
        assert loaded_state.view.page_size == 10
    
    def test_navigation_stays_in_bounds(self, loaded_state):
        handle_navigation("prev", loaded_state)
        assert loaded_state.view.page == 1
        
        for _ in range(5):
            handle_navigation("next", loaded_state)
        assert loaded_state.view.page == 3
    
    def test_render_view_last_page(self, loaded_state):
        loaded_state.view.page = 3
        summary, indicator, results, prev_btn, next_btn = render_view(loaded_state)
        
        assert "<b>3</b> / 3" in indicator
        assert results.count("<article") == 5
        assert prev_btn["interactive"] is True
        assert next_btn["interactive"] is False
        assert "0.36" in summary
    
    def test_render_view_only_wrong(self, loaded_state):
        handle_only_wrong_change(True, loaded_state)
        _, indicator, results, _, _ = render_view(loaded_state)
        
        assert "符合条件 16 笔" in indicator
        assert "✔" not in results
    
    def test_search_uses_sanitized_prediction(self, loaded_state):
        handle_query_change("reasoning 4", loaded_state)
        _, indicator, _, _, _ = render_view(loaded_state)
        assert "符合条件 0 笔" in indicator
    
    def test_url_settings(self, loaded_state):
        handle_url_settings_change(
            "replace", "/audio/", "/work/voidful2nlp/data/", "https://cdn.example.com/audio/", loaded_state
        )
        _, _, results, _, _ = render_view(loaded_state)
        assert 'src="https://cdn.example.com/audio/sample000.wav"' in results
    
    def test_invalid_url_mode_is_ignored(self, loaded_state):
        with pytest.warns(UserWarning):
            handle_url_settings_change("guess", "", "", "", loaded_state)
        assert loaded_state.view.url_mode == "basename"


class TestAutoLoad:
    """Test loading from a well-known source."""
    
    def test_auto_load_local_path(self):
        path = create_results_file(5)
        try:
            state, msg = handle_auto_load(path, ApplicationState())
            assert state.get_total_loaded() == 5
            assert state.load_error is None
            assert "自动载入 5" in msg
        finally:
            os.unlink(path)
    
    def test_auto_load_http(self):
        response = mock.Mock()
        response.content = json.dumps([{"correct": True}, {"correct": False}]).encode('utf-8')
        response.raise_for_status.return_value = None
        
        with mock.patch("ui.event_handlers.requests.get", return_value=response) as get:
            state, _ = handle_auto_load("https://example.com/results.json", ApplicationState())
        
        get.assert_called_once()
        assert state.get_total_loaded() == 2
    
    def test_auto_load_http_decodes_utf8_without_charset(self):
        """A text/plain response without charset is still read as UTF-8."""
        payload = json.dumps([{"prediction": "台北", "label": "台北", "correct": True}], ensure_ascii=False)
        response = requests.Response()
        response.status_code = 200
        response.headers["Content-Type"] = "text/plain"
        response._content = payload.encode('utf-8')
        
        with mock.patch("ui.event_handlers.requests.get", return_value=response):
            state, _ = handle_auto_load("https://example.com/results.json", ApplicationState())
        
        assert state.load_error is None
        assert state.samples[0].prediction == "台北"
    
    def test_auto_load_http_invalid_utf8(self):
        response = mock.Mock()
        response.content = b'[{"prediction": "\xff\xfe"}]'
        response.raise_for_status.return_value = None
        
        with mock.patch("ui.event_handlers.requests.get", return_value=response):
            state, msg = handle_auto_load("https://example.com/results.json", ApplicationState())
        
        assert "自动载入失败" in msg
        assert "UTF-8" in state.load_error
    
    def test_auto_load_http_error_blocks_results(self):
        response = mock.Mock()
        response.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        
        with mock.patch("ui.event_handlers.requests.get", return_value=response):
            state, msg = handle_auto_load("https://example.com/missing.json", ApplicationState())
        
        assert "自动载入失败" in msg
        assert "404" in state.load_error
        _, _, results, _, _ = render_view(state)
        assert "error-state" in results
    
    def test_auto_load_missing_file(self):
        state, _ = handle_auto_load("/nonexistent/results.json", ApplicationState())
        assert state.load_error is not None
    
    def test_auto_load_invalid_utf8_file(self):
        with tempfile.NamedTemporaryFile(mode='wb', suffix='.json', delete=False) as f:
            f.write(b"\xff\xfe")
            path = f.name
        
        try:
            state, msg = handle_auto_load(path, ApplicationState())
        finally:
            os.unlink(path)
        
        assert "自动载入失败" in msg
        assert "UTF-8" in state.load_error
        assert not state.has_samples()
    
    def test_auto_load_directory(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            state, msg = handle_auto_load(tmp_dir, ApplicationState())
        
        assert "自动载入失败" in msg
        assert state.load_error is not None
        _, _, results, _, _ = render_view(state)
        assert "error-state" in results
    
    def test_auto_load_without_source(self):
        state, _ = handle_auto_load("", ApplicationState())
        assert state.load_error is None
        assert not state.has_samples()


class TestExport:
    """Test exporting wrong samples."""
    
    def test_export(self, loaded_state):
        with tempfile.TemporaryDirectory() as tmp_dir:
            file_path, msg = handle_export(loaded_state, tmp_dir)
            
            assert file_path is not None
            assert "16" in msg
            with open(file_path, 'r', encoding='utf-8') as f:
                lines = f.read().split("\n")
        
        assert lines[0] == "index,audio,prompt,prediction,label"
        assert len(lines) == 17
        assert lines[1] == '"1","/work/voidful2nlp/data/sample001.wav","Question 1","answer 1","other 1"'
    
    def test_export_ignores_active_filters(self, loaded_state):
        handle_query_change("question 2", loaded_state)
        with tempfile.TemporaryDirectory() as tmp_dir:
            file_path, _ = handle_export(loaded_state, tmp_dir)
            with open(file_path, 'r', encoding='utf-8') as f:
                assert len(f.read().split("\n")) == 17
    
    def test_export_without_data(self):
        with pytest.warns(UserWarning):
            file_path, msg = handle_export(ApplicationState())
        assert file_path is None
        assert "尚未载入资料" in msg
