"""API route definitions."""

import logging

from fastapi import APIRouter, Depends, Request

from ..config import ASK_PATH
from ..errors import ProviderError, ValidationError
from ..llm import CompletionProvider, EmptyReply
from .schemas import AskRequest, AskResponse, ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _provider_dependency(request: Request) -> CompletionProvider:
    return request.app.state.provider


@router.post(
    ASK_PATH,
    response_model=AskResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ask(
    body: AskRequest,
    provider: CompletionProvider = Depends(_provider_dependency),
):
    """Forward a prompt to the completion provider and return its text.

    Responds 400 when the prompt is missing or blank and 500 when the
    provider call fails. A response with no readable text still answers
    200 with a placeholder reply.
    """
    prompt = body.prompt
    if not isinstance(prompt, str) or not prompt.strip():
        raise ValidationError()

    try:
        reply = await provider.complete(prompt)
    except ProviderError:
        raise
    except Exception as e:
        raise ProviderError(f"{provider.model} request failed: {e}") from e

    if isinstance(reply, EmptyReply):
        logger.error("No text in provider response. Full raw response:\n%s", reply.raw)
    else:
        logger.info("Provider reply (%s, %d chars)", reply.kind, len(reply.text))

    return AskResponse(reply=reply.text)


@router.get("/health", response_model=HealthResponse)
async def health():
    """Liveness probe."""
    return HealthResponse(status="ok")
