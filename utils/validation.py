"""
Validation utilities for view settings.

Each validator returns an ``(is_valid, error_message)`` tuple so handlers can
surface the message without raising.
"""

from typing import Tuple

import config


def validate_page_size(page_size) -> Tuple[bool, str]:
    """
    Validate the page size selection.
    
    Args:
        page_size: Requested page size
    
    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        size = int(page_size)
    except (TypeError, ValueError):
        return False, f"每页笔数无效: {page_size}"
    
    if size < 1:
        return False, "每页笔数必须大于0"
    
    if size not in config.PAGE_SIZE_CHOICES:
        return False, f"每页笔数必须是 {list(config.PAGE_SIZE_CHOICES)} 之一"
    
    return True, ""


def validate_url_mode(mode: str) -> Tuple[bool, str]:
    """
    Validate the audio URL mode.
    
    Args:
        mode: "basename" or "replace"
    
    Returns:
        Tuple of (is_valid, error_message)
    """
    if mode not in config.URL_MODES:
        return False, f"未知的音档 URL 模式: {mode}"
    
    return True, ""
