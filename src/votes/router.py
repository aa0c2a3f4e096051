"""FastAPI route receiving vote webhooks."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Request, status

from src.core.config import get_settings
from src.schemas.votes import VoteWebhookResponse
from src.votes.handler import VoteHandler, dispatch_vote
from src.votes.webhook import STATUS_MALFORMED, STATUS_UNAUTHORIZED, receive_vote


def _resolve_password() -> Optional[str]:
    settings = get_settings()
    if not settings.vote_webhook_require_auth:
        return None

    password = settings.vote_webhook_password
    if not password.strip():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Vote webhook password is not configured",
        )
    return password


def create_vote_router(handler: VoteHandler, *, path: Optional[str] = None) -> APIRouter:
    """Build a router that decodes, authenticates and dispatches votes to ``handler``."""

    router = APIRouter(tags=["votes"])
    route_path = path or get_settings().vote_webhook_path

    @router.post(route_path, response_model=VoteWebhookResponse)
    async def vote_webhook(request: Request) -> VoteWebhookResponse:
        password = _resolve_password()
        body = await request.body()
        authorization = request.headers.get(get_settings().vote_webhook_auth_header)

        outcome = receive_vote(body=body, authorization=authorization, password=password)
        if outcome.status == STATUS_MALFORMED:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=outcome.reason)
        if outcome.status == STATUS_UNAUTHORIZED:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=outcome.reason)

        vote = outcome.vote
        if vote is None:  # pragma: no cover
            raise RuntimeError("Accepted vote outcome without a vote")

        handled = await dispatch_vote(handler, vote)
        return VoteWebhookResponse(
            accepted=True,
            receiver_id=str(vote.receiver_id),
            voter_id=str(vote.voter_id),
            is_test=vote.is_test,
            handled=handled,
        )

    return router
