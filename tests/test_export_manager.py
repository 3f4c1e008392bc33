"""
Unit tests for ExportManager.

Tests CSV content, quoting and file generation.
"""

import os
import tempfile
import pytest
from services import ExportManager
from models import Sample


def make_sample(index, correct=False, **kwargs):
    """Helper to build a sample."""
    return Sample(index=index, correct=correct, position=index, **kwargs)


class TestCsvContent:
    """Test the generated CSV text."""
    
    def test_header_only_when_no_wrong_samples(self):
        manager = ExportManager()
        csv_text = manager.build_wrong_samples_csv([make_sample(0, correct=True)])
        assert csv_text == "index,audio,prompt,prediction,label"
    
    def test_rows_for_wrong_samples_only(self):
        manager = ExportManager()
        samples = [
            make_sample(0, correct=True, prediction="ok"),
            make_sample(1, audio_paths=["/d/a.wav", "/d/b.wav"], prompt="Q1", prediction="P1", label="L1"),
            make_sample(2, prompt="Q2", prediction="P2", label="L2"),
        ]
        lines = manager.build_wrong_samples_csv(samples).split("\n")
        
        assert lines == [
            "index,audio,prompt,prediction,label",
            '"1","/d/a.wav","Q1","P1","L1"',
            '"2","","Q2","P2","L2"',
        ]
    
    def test_quotes_doubled_and_newlines_escaped(self):
        manager = ExportManager()
        sample = make_sample(0, prediction='He said "hi"\nthen left', label="a\r\nb")
        lines = manager.build_wrong_samples_csv([sample]).split("\n")
        
        assert len(lines) == 2
        assert lines[1] == '"0","","","He said ""hi""\\nthen left","a\\nb"'
    
    def test_reasoning_is_stripped(self):
        manager = ExportManager()
        sample = make_sample(3, prompt="<think>p</think>Q", prediction="<think>long\nreasoning</think> A ", label="L")
        lines = manager.build_wrong_samples_csv([sample]).split("\n")
        
        assert lines[1] == '"3","","Q","A","L"'
    
    def test_row_count_matches_wrong_count(self):
        manager = ExportManager()
        samples = [make_sample(i, correct=(i % 3 == 0), prediction=f"p{i}\nx") for i in range(10)]
        lines = manager.build_wrong_samples_csv(samples).split("\n")
        
        assert len(lines) - 1 == sum(1 for s in samples if not s.correct)
    
    def test_rows_follow_original_order(self):
        manager = ExportManager()
        samples = [make_sample(i, prediction=str(i)) for i in (5, 2, 9)]
        lines = manager.build_wrong_samples_csv(samples).split("\n")[1:]
        
        assert [line.split(",")[0] for line in lines] == ['"5"', '"2"', '"9"']
    
    def test_non_string_index(self):
        manager = ExportManager()
        lines = manager.build_wrong_samples_csv([make_sample("a-7")]).split("\n")
        assert lines[1].startswith('"a-7",')


class TestFileExport:
    """Test writing wrong_samples.csv."""
    
    def test_export_writes_file(self):
        manager = ExportManager()
        samples = [make_sample(0, prediction="x"), make_sample(1, correct=True)]
        
        with tempfile.TemporaryDirectory() as tmp_dir:
            output_file = manager.export_wrong_samples(samples, tmp_dir)
            
            assert os.path.basename(output_file) == "wrong_samples.csv"
            with open(output_file, 'r', encoding='utf-8', newline='') as f:
                content = f.read()
            assert content == manager.build_wrong_samples_csv(samples)
    
    def test_export_default_directory(self):
        manager = ExportManager()
        output_file = manager.export_wrong_samples([make_sample(0)])
        
        try:
            assert os.path.exists(output_file)
            assert output_file.endswith("wrong_samples.csv")
        finally:
            os.remove(output_file)
            os.rmdir(os.path.dirname(output_file))
    
    def test_export_without_samples(self):
        manager = ExportManager()
        with pytest.raises(ValueError, match="没有样本可导出"):
            manager.export_wrong_samples([])
