"""Dependencies that are used in the API endpoints."""

import uuid
from typing import Optional, Tuple

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from planwise import crud, schemas
from planwise.api.context import ApiContext
from planwise.core.config import settings
from planwise.core.exceptions import NotFoundException
from planwise.core.logging import logger
from planwise.db.session import get_db


async def _authenticate_system_user(db: AsyncSession) -> Tuple[Optional[schemas.User], str, dict]:
    """Authenticate system user when auth is disabled."""
    try:
        user = await crud.user.get_by_email(db, email=settings.FIRST_SUPERUSER)
    except NotFoundException:
        logger.error(f"Bootstrap user {settings.FIRST_SUPERUSER} not found in database")
        return None, "", {}
    user_context = schemas.User.model_validate(user)
    return user_context, "system", {"disabled_auth": True}


async def _authenticate_header_user(
    db: AsyncSession, x_user_id: str
) -> Tuple[Optional[schemas.User], str, dict]:
    """Authenticate the user the upstream gateway forwarded in X-User-ID."""
    try:
        user_id = uuid.UUID(x_user_id)
    except ValueError:
        logger.error(f"Malformed X-User-ID header: {x_user_id}")
        return None, "", {}

    try:
        user = await crud.user.get(db, id=user_id)
    except NotFoundException:
        logger.error(f"User {user_id} not found in database")
        return None, "", {}
    user_context = schemas.User.model_validate(user)
    return user_context, "header", {"x_user_id": x_user_id}


async def get_context(
    request: Request,
    db: AsyncSession = Depends(get_db),
    x_user_id: Optional[str] = Header(None, alias="X-User-ID"),
) -> ApiContext:
    """Create unified API context for the request.

    This is the primary dependency for all API endpoints, providing:
    - Request tracking (request_id)
    - The caller's identity and auth method
    - Pre-configured contextual logger with all dimensions

    Args:
    ----
        request (Request): The FastAPI request object.
        db (AsyncSession): Database session.
        x_user_id (Optional[str]): Caller ID forwarded by the gateway.

    Returns:
    -------
        ApiContext: Unified API context with auth and logging.

    Raises:
    ------
        HTTPException: If the caller can't be identified.
    """
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))

    user_context = None
    auth_method = ""
    auth_metadata = {}

    if not settings.AUTH_ENABLED:
        user_context, auth_method, auth_metadata = await _authenticate_system_user(db)
    elif x_user_id:
        user_context, auth_method, auth_metadata = await _authenticate_header_user(db, x_user_id)

    if not auth_method or user_context is None:
        raise HTTPException(status_code=401, detail="No valid authentication provided")

    base_logger = logger.with_context(
        request_id=request_id,
        user_id=str(user_context.id),
        auth_method=auth_method,
        context_base="api",
    )

    return ApiContext(
        request_id=request_id,
        user=user_context,
        auth_method=auth_method,
        auth_metadata=auth_metadata,
        logger=base_logger,
    )
