"""Pydantic schemas for the vote webhook endpoint."""

from __future__ import annotations

from pydantic import BaseModel


class VoteWebhookResponse(BaseModel):
    accepted: bool
    receiver_id: str
    voter_id: str
    is_test: bool
    handled: bool
