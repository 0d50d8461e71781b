"""daylane: day-timeline layout for booked jobs.

Public API:
  - import from `daylane.api` (preferred) or `import daylane` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)
