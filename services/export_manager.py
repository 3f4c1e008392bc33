"""
ExportManager for CSV export of incorrect samples.

Builds the ``wrong_samples.csv`` payload and writes it where Gradio can offer
it as a download.
"""

import csv
import logging
import os
import tempfile
from typing import Dict, List, Optional, Sequence

import pandas as pd

import config
from models import Sample
from utils.performance import monitor_performance
from utils.text_cleaning import strip_thinking

logger = logging.getLogger(__name__)


class ExportManager:
    """
    Exports the samples graded incorrect.

    Every field is quoted, embedded quotes are doubled, and embedded newlines
    are written as the two characters ``\\n`` so each sample stays on one line.
    """

    COLUMNS = ["index", "audio", "prompt", "prediction", "label"]

    def __init__(self, filename: str = config.EXPORT_FILENAME):
        """
        Initialize ExportManager.

        Args:
            filename: Name of the generated CSV file
        """
        self.filename = filename

    @staticmethod
    def escape_newlines(value) -> str:
        """Render a value as text with line breaks replaced by a literal ``\\n``."""
        if value is None:
            return ""
        return str(value).replace("\r\n", "\\n").replace("\n", "\\n")

    def format_row(self, sample: Sample) -> Dict[str, str]:
        """
        Convert a sample to its CSV row.

        Args:
            sample: Sample to convert

        Returns:
            Dictionary keyed by COLUMNS
        """
        return {
            "index": self.escape_newlines(sample.index),
            "audio": self.escape_newlines(sample.first_audio_path),
            "prompt": self.escape_newlines(strip_thinking(sample.prompt)),
            "prediction": self.escape_newlines(strip_thinking(sample.prediction)),
            "label": self.escape_newlines(strip_thinking(sample.label)),
        }

    @staticmethod
    def select_wrong(samples: Sequence[Sample]) -> List[Sample]:
        """Samples graded incorrect, in their original order."""
        return [s for s in samples if not s.correct]

    @monitor_performance("build_wrong_samples_csv")
    def build_wrong_samples_csv(self, samples: Sequence[Sample]) -> str:
        """
        Build the CSV document for the incorrect samples.

        Args:
            samples: Canonical (unfiltered) samples

        Returns:
            CSV text: an unquoted header line, then one fully quoted row per
            incorrect sample, joined by newlines
        """
        rows = [self.format_row(s) for s in self.select_wrong(samples)]
        header = ",".join(self.COLUMNS)
        if not rows:
            return header

        df = pd.DataFrame(rows, columns=self.COLUMNS, dtype=str)
        body = df.to_csv(
            index=False,
            header=False,
            quoting=csv.QUOTE_ALL,
            lineterminator="\n"
        )
        return header + "\n" + body[:-1]

    def export_wrong_samples(self, samples: Sequence[Sample], output_dir: Optional[str] = None) -> str:
        """
        Write the incorrect-samples CSV file.

        Args:
            samples: Canonical (unfiltered) samples
            output_dir: Target directory (defaults to a new temporary directory)

        Returns:
            Path to the generated CSV file

        Raises:
            ValueError: If no samples are loaded
            PermissionError: If the file cannot be written
        """
        if not samples:
            raise ValueError("尚未载入资料，没有样本可导出")

        content = self.build_wrong_samples_csv(samples)
        target_dir = output_dir or tempfile.mkdtemp(prefix="wrong_samples_")
        output_path = os.path.join(target_dir, self.filename)

        try:
            with open(output_path, 'w', encoding='utf-8', newline='') as f:
                f.write(content)
        except PermissionError:
            raise PermissionError(f"无法写入文件: {output_path}")

        logger.info(
            f"Exported {len(self.select_wrong(samples))} wrong samples to {output_path}"
        )
        return output_path
