"""CRUD operations for the team model."""

from planwise.core.exceptions import TeamNotFoundException
from planwise.crud._base import CRUDBase
from planwise.models.team import Team
from planwise.schemas.team import TeamCreate


class CRUDTeam(CRUDBase[Team, TeamCreate, TeamCreate]):
    """CRUD operations for the team model."""


team = CRUDTeam(Team, TeamNotFoundException)
