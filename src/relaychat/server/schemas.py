"""Pydantic request/response models for the relay API."""

from typing import Any

from pydantic import BaseModel


class AskRequest(BaseModel):
    """Body for the ask endpoint.

    The prompt is loosely typed here; the route decides what counts as a
    usable prompt so that every bad body gets the same 400 payload.
    """

    prompt: Any = None


class AskResponse(BaseModel):
    """Successful reply from the ask endpoint."""

    reply: str


class ErrorResponse(BaseModel):
    """Error payload for 4xx/5xx responses."""

    error: str


class HealthResponse(BaseModel):
    """Liveness probe response."""

    status: str
