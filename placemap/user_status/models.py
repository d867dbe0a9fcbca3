from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class PlaceStatus(str, Enum):
    want = "want"
    visited = "visited"
    like = "like"
    dislike = "dislike"


StatusMap = dict[str, PlaceStatus]


class StatusUpdate(BaseModel):
    status: PlaceStatus


class LegacyLists(BaseModel):
    """Per-status id lists kept by older clients."""

    visited: list[str] = Field(default_factory=list)
    favorites: list[str] = Field(default_factory=list)
    disliked: list[str] = Field(default_factory=list)
