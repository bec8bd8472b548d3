"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class AccountRole(str, Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


STAFF_ROLES = {AccountRole.ADMIN.value, AccountRole.SUPER_ADMIN.value}


@dataclass(slots=True)
class Account:
    id: str
    username: str
    role: str
    is_active: bool
    password_hash: str = field(repr=False)
    name: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    def is_admin(self) -> bool:
        return self.role in STAFF_ROLES

    def is_super_admin(self) -> bool:
        return self.role == AccountRole.SUPER_ADMIN.value


@dataclass(slots=True)
class AccountCreateInput:
    username: str
    password: str
    role: str = AccountRole.CUSTOMER.value
    name: Optional[str] = None
    email: Optional[str] = None
    is_active: bool = True
