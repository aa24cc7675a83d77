"""
Access Control for PrivacyWatch
Owner/admin resource access decisions
"""

import logging
from dataclasses import dataclass
from enum import Enum

from .models.enums import AccessLevel

logger = logging.getLogger(__name__)


class UserRole(str, Enum):
    """User roles in the system"""

    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class AccessDecision:
    has_access: bool
    access_level: AccessLevel


class AccessControlEvaluator:
    """Pure owner/admin access evaluation. Holds no state."""

    @staticmethod
    def evaluate(requestor_id: str, resource_owner_id: str, requestor_role: str = UserRole.USER.value) -> AccessDecision:
        """
        Decide whether a requestor may act on a resource.

        Admins always have access; their level is owner when they own the
        resource, admin otherwise. Everyone else needs to be the owner.

        Args:
            requestor_id: Acting user id
            resource_owner_id: Owner of the resource
            requestor_role: Role of the acting user ("user" or "admin")

        Returns:
            AccessDecision
        """
        is_owner = requestor_id is not None and requestor_id == resource_owner_id

        if requestor_role == UserRole.ADMIN.value:
            return AccessDecision(True, AccessLevel.OWNER if is_owner else AccessLevel.ADMIN)

        return AccessDecision(is_owner, AccessLevel.OWNER if is_owner else AccessLevel.DENIED)

    @staticmethod
    def is_admin(requestor_role: str) -> bool:
        return requestor_role == UserRole.ADMIN.value


def evaluate(requestor_id: str, resource_owner_id: str, requestor_role: str = UserRole.USER.value) -> AccessDecision:
    """Module-level shortcut for AccessControlEvaluator.evaluate()"""
    return AccessControlEvaluator.evaluate(requestor_id, resource_owner_id, requestor_role)
