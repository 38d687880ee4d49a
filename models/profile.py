"""
Profile data model.

Profiles are created at sign-up outside this application. This application
reads them and updates name/email only; role is never written.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


CLIENT_ROLE = "client"


@dataclass(frozen=True)
class Profile:
    """A row of the profiles table."""

    id: str
    name: str = ""
    email: str = ""
    role: str = ""

    @property
    def is_client(self) -> bool:
        return self.role == CLIENT_ROLE

    @classmethod
    def from_row(cls, row: Optional[Dict[str, Any]]) -> Optional["Profile"]:
        """Create from a profiles row; None stays None."""
        if not row:
            return None
        return cls(
            id=str(row.get("id", "")),
            name=row.get("name") or "",
            email=row.get("email") or "",
            role=row.get("role") or "",
        )
