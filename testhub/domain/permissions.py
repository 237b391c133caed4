"""
Role allow-sets for role-gated operations.

Roles are compared by set membership only. Adding a role to UserRole grants
it nothing until it is listed here.
"""

from .entities.enums import UserRole

INVITE_MEMBER_ROLES = frozenset({UserRole.OWNER, UserRole.ADMIN, UserRole.MANAGER})
MANAGE_INVITATION_ROLES = frozenset({UserRole.OWNER, UserRole.ADMIN, UserRole.MANAGER})
RESOLVE_SEAT_LIMIT_ROLES = frozenset({UserRole.ADMIN, UserRole.MANAGER})
UPDATE_SEATS_ROLES = frozenset({UserRole.OWNER, UserRole.ADMIN})
VIEW_AUDIT_ROLES = frozenset({UserRole.OWNER, UserRole.ADMIN})

# Assignable through an invitation; OWNER belongs to the subscription purchaser.
INVITABLE_ROLES = frozenset(
    {UserRole.ADMIN, UserRole.MANAGER, UserRole.TESTER, UserRole.VIEWER, UserRole.MEMBER}
)
