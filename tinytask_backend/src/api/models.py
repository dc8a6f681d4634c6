from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# PUBLIC_INTERFACE
@dataclass
class Task:
    """
    The single domain entity managed by the service.

    Fields:
    - id: Unique integer identifier, assigned by the repository on first save
    - title: Short title (at least 3 characters once trimmed, checked by the service)
    - done: Completion flag, only changed through toggle
    """

    id: Optional[int] = None
    title: Optional[str] = None
    done: bool = False
