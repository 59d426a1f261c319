"""User entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Registered user with exactly one global role and one plan."""

    id: str
    full_name: str
    email: str
    role_id: str
    plan_id: str
    created_at: datetime
    updated_at: datetime
    credential_ref: str | None = None
