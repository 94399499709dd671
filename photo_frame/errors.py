# photo_frame/errors.py
from __future__ import annotations

"""
Exceptions raised at configuration time.
"""

from typing import Iterable, List, Union


class ConfigError(ValueError):
    """Invalid configuration. Carries every problem found, not just the first."""

    def __init__(self, problems: Union[str, Iterable[str]]) -> None:
        self.problems: List[str] = (
            [problems] if isinstance(problems, str) else list(problems)
        )
        super().__init__("; ".join(self.problems))


__all__ = ["ConfigError"]
