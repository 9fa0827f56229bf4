"""Custom router implementation that simply disables slash redirects."""

from typing import Any, Callable

from fastapi import APIRouter
from fastapi.types import DecoratedCallable


class TrailingSlashRouter(APIRouter):
    """Registers endpoints for both a non-trailing-slash and a trailing slash.

    Only the non-trailing-slash path is exported in the OpenAPI schema, so
    `GET /plans` and `GET /plans/` reach the same handler without a redirect.

    Examples:
        @router.get("") - included as the router prefix, responds to both the naked
            url (no slash) and /

        @router.get("/{plan_id}/") - included in the OpenAPI schema as /{plan_id},
            responds to both /{plan_id} and /{plan_id}/
    """

    def api_route(
        self, path: str, *, include_in_schema: bool = True, **kwargs: Any
    ) -> Callable[[DecoratedCallable], DecoratedCallable]:
        """Register the route under both its slash and non-slash paths.

        Args:
            path (str): The path for the endpoint
            include_in_schema (bool): Whether to include the route in the OpenAPI schema
            **kwargs: Additional arguments to pass to the parent api_route method

        Returns:
            Callable[[DecoratedCallable], DecoratedCallable]: A decorator that registers both
                versions.
        """
        if path.endswith("/"):
            path = path[:-1]

        add_path = super().api_route(path, include_in_schema=include_in_schema, **kwargs)
        add_alternate_path = super().api_route(path + "/", include_in_schema=False, **kwargs)

        def decorator(func: DecoratedCallable) -> DecoratedCallable:
            add_alternate_path(func)
            return add_path(func)

        return decorator
