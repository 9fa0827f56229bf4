"""CRUD operations for the plan model."""

from planwise.core.exceptions import PlanNotFoundException
from planwise.crud._base import CRUDBase
from planwise.models.plan import Plan
from planwise.schemas.plan import PlanCreate, PlanUpdate


class CRUDPlan(CRUDBase[Plan, PlanCreate, PlanUpdate]):
    """CRUD operations for the plan model."""


plan = CRUDPlan(Plan, PlanNotFoundException)
