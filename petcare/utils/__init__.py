# File: utils/__init__.py
"""Pure Python utilities for petcare.

Submodules:
    - dt_utils: Date parsing, "today" resolution, interval arithmetic

Usage:
    from . import dt_utils
    from .dt_utils import dt_parse_date
"""

from . import dt_utils

__all__ = ["dt_utils"]
