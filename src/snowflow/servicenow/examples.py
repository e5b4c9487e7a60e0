"""Static example documents shipped with the ServiceNow components."""

from __future__ import annotations

import copy
import json
from functools import lru_cache
from pathlib import Path
from typing import Any

EXAMPLES_DIR = Path(__file__).parent


@lru_cache
def _load(filename: str) -> dict[str, Any]:
    with open(EXAMPLES_DIR / filename, encoding="utf-8") as f:
        return json.load(f)


def example_output(filename: str) -> dict[str, Any]:
    """Return a copy of an embedded example; the file is read once."""
    return copy.deepcopy(_load(filename))
