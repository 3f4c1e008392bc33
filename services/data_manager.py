"""
DataManager for results loading and normalization.

Parses a results file (JSON, falling back to JSON Lines) and converts the
loosely structured records into canonical Sample objects plus the file-level
metrics summary.
"""

import json
import logging
import math
import re
from typing import Any, Dict, List, Optional, Tuple

from models import MetricsSummary, Sample
from utils.performance import monitor_performance

logger = logging.getLogger(__name__)

# Candidate source fields per canonical attribute, first present wins.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "prediction": ("prediction", "response"),
    "label": ("label", "target"),
}

# Sibling keys of ``results`` copied into the metrics summary.
METRIC_FIELDS = (
    "metric",
    "accuracy_by_sample",
    "avg_accuracy_by_category",
    "categories_accuracy",
    "config",
)

_LINE_SPLIT = re.compile(r"\r?\n")


class ResultsParseError(ValueError):
    """Raised when input is neither valid JSON nor valid JSON Lines."""


def parse_results_text(text: str) -> Any:
    """
    Parse results text as JSON, or as JSON Lines if that fails.

    Args:
        text: Raw file content

    Returns:
        The parsed JSON value, or a list with one value per non-blank line

    Raises:
        ResultsParseError: If the text is neither JSON nor JSON Lines
    """
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        pass

    lines = [line.strip() for line in _LINE_SPLIT.split(text or "")]
    parsed = []
    for line_no, line in enumerate(lines, start=1):
        if not line:
            continue
        try:
            parsed.append(json.loads(line))
        except ValueError as e:
            raise ResultsParseError(
                f"文件内容不是合法的 JSON / JSONL (第 {line_no} 行: {e})"
            ) from e
    return parsed


def _first_present(record: Dict[str, Any], candidates: Tuple[str, ...], default: Any = "") -> Any:
    """Return the value of the first candidate key that is present and not None."""
    for key in candidates:
        value = record.get(key)
        if value is not None:
            return value
    return default


def _extract_audio_paths(audios: Any) -> List[str]:
    if not isinstance(audios, list):
        return []
    paths = []
    for audio in audios:
        if isinstance(audio, dict):
            path = audio.get("audio_filepath")
            if path:
                paths.append(path)
    return paths


def _extract_prompt(messages: Any) -> Any:
    if isinstance(messages, list) and messages and isinstance(messages[0], dict):
        content = messages[0].get("content")
        if content is not None:
            return content
    return ""


def _is_truthy(value: Any) -> bool:
    """Loose truthiness for the ``correct`` flag: empty lists and objects count as true, NaN as false."""
    if isinstance(value, (list, dict)):
        return True
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def normalize_one(record: Any, position: int) -> Sample:
    """
    Normalize one raw result record into a Sample.

    Missing or malformed fields fall back to their defaults; this never raises.

    Args:
        record: Raw record (normally a dict)
        position: Zero-based position of the record in its input sequence

    Returns:
        Sample built from the record
    """
    if not isinstance(record, dict):
        return Sample(index=position, position=position)

    index = record.get("index")
    return Sample(
        index=position if index is None else index,
        audio_paths=_extract_audio_paths(record.get("audios")),
        prompt=_extract_prompt(record.get("messages")),
        prediction=_first_present(record, FIELD_ALIASES["prediction"]),
        label=_first_present(record, FIELD_ALIASES["label"]),
        correct=_is_truthy(record.get("correct")),
        length=record.get("length"),
        position=position,
    )


def _metrics_from_wrapper(parsed: Dict[str, Any]) -> MetricsSummary:
    values = {key: parsed.get(key) for key in METRIC_FIELDS}
    if values["metric"] is None:
        values["metric"] = ""
    return MetricsSummary(**values)


@monitor_performance("normalize_results")
def normalize_results(parsed: Any) -> Tuple[List[Sample], MetricsSummary]:
    """
    Convert parsed input of unknown shape into samples and a metrics summary.

    Recognized shapes, in priority order:
    - an object: its ``results`` list holds the records and its sibling
      fields populate the metrics summary
    - a list: every element is a record, the metrics summary is empty
    - anything else: no samples, empty metrics summary

    Args:
        parsed: Parsed JSON value

    Returns:
        Tuple of (samples, metrics_summary)
    """
    if isinstance(parsed, dict):
        results = parsed.get("results")
        records = results if isinstance(results, list) else []
        metrics = _metrics_from_wrapper(parsed)
    elif isinstance(parsed, list):
        records = parsed
        metrics = MetricsSummary()
    else:
        return [], MetricsSummary()

    samples = [normalize_one(record, i) for i, record in enumerate(records)]
    return samples, metrics


class DataManager:
    """
    A loaded results source.

    Attributes:
        source_name: File name or URL the results came from
        samples: Canonical samples, in file order
        metrics: Metrics summary reported by the file
    """

    def __init__(self, parsed: Any, source_name: str = ""):
        """
        Initialize DataManager from already parsed input.

        Args:
            parsed: Parsed JSON value (object, list, or anything else)
            source_name: Name shown in status messages
        """
        self.source_name = source_name
        self.samples, self.metrics = normalize_results(parsed)

        logger.info(
            f"Loaded {len(self.samples)} samples from '{source_name or '<text>'}'"
        )

    @classmethod
    def from_text(cls, text: str, source_name: str = "") -> "DataManager":
        """
        Parse and normalize results text.

        Raises:
            ResultsParseError: If the text is neither JSON nor JSON Lines
        """
        return cls(parse_results_text(text), source_name)

    @classmethod
    @monitor_performance("load_results_file")
    def from_file(cls, path: str, source_name: Optional[str] = None) -> "DataManager":
        """
        Read, parse and normalize a results file.

        Args:
            path: Path to a .json or .jsonl file
            source_name: Display name (defaults to the path)

        Raises:
            FileNotFoundError: If the file doesn't exist
            ResultsParseError: If the content is neither JSON nor JSON Lines
        """
        try:
            with open(path, 'r', encoding='utf-8-sig') as f:
                text = f.read()
        except FileNotFoundError:
            raise FileNotFoundError(f"结果文件未找到: {path}")
        except UnicodeDecodeError as e:
            raise ResultsParseError(f"文件编码不是UTF-8: {e}") from e

        return cls.from_text(text, source_name or path)
