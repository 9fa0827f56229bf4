"""Schemas shared by several endpoints."""

from pydantic import BaseModel


class MutationResult(BaseModel):
    """Result of a mutation endpoint.

    Failures are raised as typed exceptions, so a returned result is always a success.
    """

    success: bool = True
