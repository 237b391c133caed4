"""
Resource access predicate.

A principal may act on a resource if it created the resource, or if the
resource belongs to a team and the principal is currently in that same team.
Creator access does not depend on team membership.
"""

from typing import Any


def has_access(resource: Any, principal: Any) -> bool:
    """
    Decide whether ``principal`` may act on ``resource``.

    Only ``resource.created_by``, ``resource.team_id``, ``principal.id`` and
    ``principal.team_id`` are read, so stale or cached principal objects are
    fine. Missing inputs mean no access; this never raises.
    """
    if resource is None or principal is None:
        return False

    principal_id = getattr(principal, "id", None)
    created_by = getattr(resource, "created_by", None)
    if principal_id is not None and created_by == principal_id:
        return True

    resource_team_id = getattr(resource, "team_id", None)
    if resource_team_id is None:
        return False
    return getattr(principal, "team_id", None) == resource_team_id


def has_project_access(project: Any, user: Any) -> bool:
    """Projects are the team-owned resource; runs, cases and results go through them."""
    return has_access(project, user)
