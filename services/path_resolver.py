"""
PathResolver for audio URL generation.

Rewrites the file paths recorded by the evaluation run (e.g.
``/work/voidful2nlp/data/sample001.wav``) into URLs the browser can play.
"""

from typing import Optional

import config


def join_url(base: str, path: str) -> str:
    """
    Join a base URL and a relative path with exactly one separator.

    Args:
        base: Base URL (may or may not end with "/")
        path: Relative path or file name

    Returns:
        Joined URL; the path alone when base is empty
    """
    if not base:
        return path or ""
    if not base.endswith("/"):
        base += "/"
    return base + (path or "")


class PathResolver:
    """
    Converts recorded audio paths into playable URLs.

    Two strategies are supported:
    - basename: file name appended to ``base_url``
    - replace: first occurrence of ``replace_from`` swapped for ``replace_to``
    """

    def __init__(
        self,
        mode: str = config.DEFAULT_URL_MODE,
        base_url: Optional[str] = None,
        replace_from: str = config.DEFAULT_REPLACE_FROM,
        replace_to: Optional[str] = None
    ):
        """
        Initialize PathResolver.

        Args:
            mode: "basename" or "replace"
            base_url: Base URL for basename mode (defaults to the inferred one)
            replace_from: Substring to replace in replace mode
            replace_to: Replacement in replace mode (defaults to the inferred base URL)

        Raises:
            ValueError: If mode is not supported
        """
        if mode not in config.URL_MODES:
            raise ValueError(
                f"Invalid mode: {mode}. Must be one of {list(config.URL_MODES)}"
            )

        self.mode = mode
        self.base_url = config.infer_base_url() if base_url is None else base_url
        self.replace_from = replace_from or ""
        self.replace_to = config.infer_base_url() if replace_to is None else replace_to

    @classmethod
    def from_view(cls, view) -> "PathResolver":
        """Build a resolver from a ViewState's URL settings."""
        return cls(
            mode=view.url_mode,
            base_url=view.base_url,
            replace_from=view.replace_from,
            replace_to=view.replace_to
        )

    def resolve(self, path: Optional[str]) -> str:
        """
        Resolve a recorded path to a URL.

        Args:
            path: Recorded audio file path

        Returns:
            Playable URL, or an empty string for an empty path
        """
        if not path:
            return ""

        if self.mode == "basename":
            filename = path.rsplit("/", 1)[-1]
            return join_url(self.base_url, filename)

        return path.replace(self.replace_from, self.replace_to, 1)
