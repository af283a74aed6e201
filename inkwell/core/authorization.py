"""Role and ownership checks applied before every mutation."""

from __future__ import annotations

import logging
from typing import Optional

from inkwell.core.errors import ForbiddenError
from inkwell.core.security import Identity

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


def can_mutate(actor_id: str, actor_role: str, resource_owner_id: Optional[str]) -> bool:
    """Admins may mutate anything; everybody else only what they own."""
    if actor_role == ADMIN_ROLE:
        return True
    return resource_owner_id is not None and str(actor_id) == str(resource_owner_id)


def require_admin(actor_role: str) -> bool:
    return actor_role == ADMIN_ROLE


def ensure_can_mutate(identity: Identity, resource_owner_id: Optional[str], message: str) -> None:
    if not can_mutate(identity.account_id, identity.role, resource_owner_id):
        logger.warning("Denied account %s: %s", identity.account_id, message)
        raise ForbiddenError(message)


def ensure_admin(identity: Identity, message: str = "Access denied! Admins only.") -> None:
    if not require_admin(identity.role):
        logger.warning("Denied non-admin account %s: %s", identity.account_id, message)
        raise ForbiddenError(message)


__all__ = ["ADMIN_ROLE", "can_mutate", "require_admin", "ensure_can_mutate", "ensure_admin"]
