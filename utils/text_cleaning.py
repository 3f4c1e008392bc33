"""
Text cleaning utilities.

Removes model reasoning spans so that display, search and export all see the
same final-answer text.
"""

import re

THINK_CLOSE_TAG = "</think>"
THINK_SPAN_PATTERN = re.compile(r"<think>.*?</think>", re.DOTALL)


def _strip_once(text: str) -> str:
    end_idx = text.find(THINK_CLOSE_TAG)
    if end_idx >= 0:
        text = text[end_idx + len(THINK_CLOSE_TAG):]
    return THINK_SPAN_PATTERN.sub("", text).strip()


def strip_thinking(value) -> str:
    """
    Strip the reasoning span from generated text.
    
    Everything up to and including the first ``</think>`` is dropped (an
    unclosed or mismatched ``<think>`` before it goes with it), then any
    complete ``<think>...</think>`` spans left over are removed and the result
    is trimmed. The pass repeats until nothing changes, so a stray second
    ``</think>`` never survives and cleaning is idempotent.
    
    Args:
        value: Text to clean; non-strings are treated as empty
    
    Returns:
        Cleaned text with surrounding whitespace trimmed
    
    Example:
        >>> strip_thinking("foo<think>bar</think>baz")
        'baz'
    """
    if not value or not isinstance(value, str):
        return ""
    
    text = value
    while True:
        cleaned = _strip_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned
