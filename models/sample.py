"""
Sample data model for the Audio Evaluation Results Viewer.

Represents one normalized evaluation record: the audio clip(s) the model
listened to, the prompt it was given, its prediction and the reference label.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class Sample:
    """
    Canonical representation of a single evaluation result.
    
    Attributes:
        index: Identifier shown to the user (record's own index, or its position)
        audio_paths: Non-empty audio file paths, in record order
        prompt: Content of the first message (may be empty)
        prediction: Model output (prediction/response)
        label: Reference answer (label/target)
        correct: Whether the record was graded correct
        length: Reported length, or None when the record has none
        position: Zero-based position of the record in the loaded file
    """
    
    index: Any
    audio_paths: List[str] = field(default_factory=list)
    prompt: str = ""
    prediction: Any = ""
    label: Any = ""
    correct: bool = False
    length: Optional[Any] = None
    position: int = 0
    
    @property
    def first_audio_path(self) -> str:
        """First audio path, or an empty string when the record has none."""
        return self.audio_paths[0] if self.audio_paths else ""
