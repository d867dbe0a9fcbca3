from __future__ import annotations

import logging
import os

from fastapi import FastAPI, HTTPException, Request
from starlette.middleware.sessions import SessionMiddleware

from .data_ingestion.quality import places_frame, quality_report
from .places.models import Place
from .recommendations.data_store import get_places
from .recommendations.models import RecommendationRequest, RecommendationResponse
from .recommendations.profile import build_profile
from .recommendations.ranking import candidate_places, recommend
from .user_status.models import LegacyLists, StatusUpdate
from .user_status.session_store import get_status_map, new_session_id, replace_status_map
from .user_status.store import (
    get_status,
    load_status_map,
    migrate_legacy,
    reset_statuses,
    set_status,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Place Catalog API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "placemap-secret-change-in-production"),
)


def _session_id(request: Request) -> str:
    """Return the session id, assigning one on first use.

    Only the id lives in the cookie; status maps are kept server side.
    """
    session_id = request.session.get("sid")
    if not session_id:
        session_id = new_session_id()
        request.session["sid"] = session_id
    return session_id


def _session_statuses(request: Request) -> dict[str, str]:
    return get_status_map(_session_id(request))


def _find_place(place_id: str) -> Place:
    for place in get_places():
        if place.place_id == place_id:
            return place
    raise HTTPException(status_code=404, detail=f"Unknown place: {place_id}")


# ── Catalog endpoints ────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    df = places_frame(get_places())
    sources: set[str] = set()
    for place in get_places():
        sources.update(place.source_titles())
    return {
        "total": len(df),
        "categories": sorted(c for c in df["category"].dropna().unique() if c),
        "cities": sorted(c for c in df["city"].dropna().unique() if c),
        "sources": sorted(sources),
        "quality": quality_report(get_places()),
    }


@app.get("/places", response_model=list[Place])
def list_places(category: str | None = None, city: str | None = None) -> list[Place]:
    places = get_places()
    if category:
        places = [p for p in places if p.category == category]
    if city:
        places = [p for p in places if p.city == city]
    return places


@app.get("/places/{place_id}", response_model=Place)
def get_place(place_id: str) -> Place:
    return _find_place(place_id)


# ── Status endpoints ─────────────────────────────────────────────────────


@app.get("/status")
def list_statuses(request: Request) -> dict[str, str]:
    return dict(_session_statuses(request))


@app.put("/status/{place_id}")
def put_status(place_id: str, body: StatusUpdate, request: Request) -> dict:
    _find_place(place_id)
    statuses = _session_statuses(request)
    set_status(statuses, place_id, body.status)
    return {"place_id": place_id, "status": get_status(statuses, place_id)}


@app.delete("/status/{place_id}")
def delete_status(place_id: str, request: Request) -> dict:
    statuses = _session_statuses(request)
    set_status(statuses, place_id, None)
    return {"place_id": place_id, "status": None}


@app.delete("/status")
def reset_status(request: Request) -> dict:
    statuses = _session_statuses(request)
    reset_statuses(statuses)
    return {"status": "reset"}


@app.post("/status/migrate")
def migrate_status(body: LegacyLists, request: Request) -> dict[str, str]:
    migrated = migrate_legacy(body.visited, body.favorites, body.disliked)
    statuses = replace_status_map(
        _session_id(request),
        {place_id: status.value for place_id, status in migrated.items()},
    )
    logger.info("Migrated %d legacy statuses", len(statuses))
    return statuses


# ── Recommendation endpoint ──────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest, request: Request) -> RecommendationResponse:
    places = get_places()
    statuses = load_status_map(_session_statuses(request))
    profile = build_profile(places, statuses)
    ranked = recommend(places, statuses, profile, limit=body.limit)
    return RecommendationResponse(
        recommendations=ranked,
        total_candidates=len(candidate_places(places, statuses)),
        cold_start=not profile.has_history,
    )
