from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UserRef:
    """Acting user, as placed in the session by the external auth layer."""

    user_id: Optional[int]
    display_name: Optional[str] = None
