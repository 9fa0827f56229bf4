"""Ownership and role checks shared by the billing services."""

from planwise.api.context import ApiContext
from planwise.core.exceptions import PermissionException
from planwise.models.team import Team


def validate_team_access(ctx: ApiContext, team: Team, *, allow_admin: bool = False) -> None:
    """Ensure the caller owns the team a billing resource belongs to.

    Args:
    ----
        ctx (ApiContext): The API context.
        team (Team): The team that owns the subscription being accessed.
        allow_admin (bool): Whether admins may act on teams they do not own.

    Raises:
    ------
        PermissionException: If the caller is neither the owner nor an allowed admin.
    """
    if ctx.owns(team.user_id):
        return
    if allow_admin and ctx.is_admin:
        return
    ctx.logger.with_context(team_id=str(team.id)).warning("Denied access to team resource")
    raise PermissionException("Unauthorized access")


def validate_admin(ctx: ApiContext) -> None:
    """Ensure the caller is an admin.

    Raises:
    ------
        PermissionException: If the caller is not an admin.
    """
    if not ctx.is_admin:
        ctx.logger.warning("Denied admin-only operation")
        raise PermissionException("Unauthorized access")
