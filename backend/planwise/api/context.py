"""Unified application context for API requests.

This module provides a context object that combines the caller's identity,
logging, and request metadata into a single injectable dependency. Services
receive it explicitly instead of reading a global "current user".
"""

from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from planwise import schemas
from planwise.core.logging import ContextualLogger


class ApiContext(BaseModel):
    """Unified context for API requests."""

    model_config = ConfigDict(arbitrary_types_allowed=True)  # For ContextualLogger

    # Request metadata
    request_id: str

    # Authentication context
    user: schemas.User
    auth_method: str  # "system", "header"
    auth_metadata: Optional[Dict[str, Any]] = None

    # Contextual logger with all dimensions pre-configured
    logger: ContextualLogger

    @property
    def user_id(self) -> UUID:
        """ID of the calling user."""
        return self.user.id

    @property
    def is_admin(self) -> bool:
        """Whether the caller may administer the plan catalog."""
        return self.user.is_admin

    @property
    def is_system(self) -> bool:
        """Whether the request runs as the bootstrap identity (auth disabled, cron jobs)."""
        return self.auth_method == "system"

    def owns(self, owner_id: UUID) -> bool:
        """Whether the caller is the given owner."""
        return self.user.id == owner_id

    def __str__(self) -> str:
        """String representation for logging."""
        return (
            f"ApiContext(request_id={self.request_id[:8]}..., "
            f"method={self.auth_method}, user={self.user.email})"
        )

    def to_serializable_dict(self) -> Dict[str, Any]:
        """Convert to a serializable dictionary."""
        return {
            "request_id": self.request_id,
            "user": self.user.model_dump(mode="json"),
            "auth_method": self.auth_method,
            "auth_metadata": self.auth_metadata,
        }
