from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: the slice of a user account the attendance engine reads.

    ``geofence_enabled`` is tri-state: ``False`` opts the user out of geofence
    enforcement, ``None``/``True`` follow the global toggle.
    """

    user_id: int
    full_name: str
    email: str
    role: Role
    shift_id: Optional[int]
    geofence_enabled: Optional[bool] = True
    is_active: bool = True
