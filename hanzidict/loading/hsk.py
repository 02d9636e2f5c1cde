"""
HSK level lists.

One word per line, ``simplified<TAB>level``; blank lines and lines
starting with ``#`` are ignored. A word listed at several levels keeps
the lowest one.
"""

import logging
from pathlib import Path
from typing import Dict, Union

logger = logging.getLogger(__name__)


def load_hsk_levels(path: Union[str, Path]) -> Dict[str, int]:
    """Read an HSK list into a simplified spelling -> level mapping."""
    levels: Dict[str, int] = {}
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split("\t")
            if len(parts) < 2 or not parts[1].strip().isdigit():
                logger.warning(f"{path}:{line_no}: skipping malformed HSK line {line!r}")
                continue
            word, level = parts[0].strip(), int(parts[1].strip())
            if word not in levels or level < levels[word]:
                levels[word] = level
    return levels
