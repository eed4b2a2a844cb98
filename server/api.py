"""FastAPI server exposing the wardrobe workflows."""

from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from logic.errors import AuthenticationFailed, UsernameTaken, WorkflowStateError
from logic.outcomes import FAILED, Outcome
from models.taxonomy import (
    ALL_CATEGORIES,
    LOCATIONS,
    OCCASION_PRESETS,
    WEATHER_PRESETS,
    category_labels,
    season_labels,
)
from wardrobe_app.app import SmartWardrobeApp
from wardrobe_app.session import WardrobeSession


class CredentialsRequest(BaseModel):
    """Username/password pair for register and login."""

    username: str = Field(..., description="Account name selecting the inventory namespace")
    password: str


class ImageRequest(BaseModel):
    """Image for a new item as a data URL, bare base64 or http(s) URL."""

    image_url: str = Field(..., min_length=1, alias="imageUrl")


class DraftUpdateRequest(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    season: Optional[str] = None
    color: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


class StylistRequest(BaseModel):
    occasion: str
    weather: str


def _raise_for_outcome(outcome: Outcome) -> None:
    if outcome.ok:
        return
    status_code = 502 if outcome.status == FAILED else 400
    raise HTTPException(status_code=status_code, detail=outcome.notification())


def _draft_payload(session: WardrobeSession) -> Dict[str, Any]:
    creation = session.creation
    return {
        "state": creation.state.value,
        "imageUrl": creation.image_url,
        "draft": creation.draft.to_dict(),
    }


def create_app(wardrobe: SmartWardrobeApp | None = None) -> FastAPI:
    """Build the HTTP surface around one wardrobe app instance."""

    wardrobe_app = wardrobe or SmartWardrobeApp()
    app = FastAPI(title="Smart Wardrobe", version="0.1.0")

    def current_session() -> WardrobeSession:
        session = wardrobe_app.current_session()
        if session is None:
            raise HTTPException(status_code=401, detail="请先登录")
        return session

    @app.exception_handler(WorkflowStateError)
    async def _workflow_state_error(_, exc: WorkflowStateError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": {"reason": exc.reason, "message": str(exc)}})

    @app.get("/healthz")
    async def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "smart-wardrobe",
            "environment": wardrobe_app.config.environment or "local",
            "model": wardrobe_app.config.text_model,
        }

    @app.get("/presets")
    async def presets() -> dict:
        return {
            "categories": [ALL_CATEGORIES, *category_labels()],
            "seasons": season_labels(),
            "locations": LOCATIONS,
            "weather": WEATHER_PRESETS,
            "occasions": OCCASION_PRESETS,
        }

    @app.post("/auth/register")
    async def register(request: CredentialsRequest) -> dict:
        try:
            session = wardrobe_app.register(request.username, request.password)
        except UsernameTaken as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except AuthenticationFailed as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"username": session.username}

    @app.post("/auth/login")
    async def login(request: CredentialsRequest) -> dict:
        try:
            session = wardrobe_app.login(request.username, request.password)
        except AuthenticationFailed as exc:
            raise HTTPException(status_code=401, detail=str(exc)) from exc
        return {"username": session.username, "itemCount": len(session.store)}

    @app.post("/auth/logout")
    async def logout() -> dict:
        wardrobe_app.logout()
        return {"status": "ok"}

    @app.get("/items")
    async def list_items(category: str = ALL_CATEGORIES, q: str = "") -> dict:
        session = current_session()
        items = session.browse(category, q)
        return {"total": len(session.store), "items": [item.to_record() for item in items]}

    @app.delete("/items/{item_id}")
    async def delete_item(item_id: str, confirm: bool = Query(False)) -> dict:
        session = current_session()
        if not confirm:
            raise HTTPException(status_code=400, detail="删除前需要确认 (confirm=true)")
        return {"removed": session.delete_item(item_id, confirmed=True)}

    @app.post("/drafts/image")
    async def supply_image(request: ImageRequest) -> dict:
        session = current_session()
        outcome = await session.creation.supply_image(request.image_url)
        return {"status": outcome.status, "notification": outcome.notification(), **_draft_payload(session)}

    @app.patch("/drafts")
    async def update_draft(request: DraftUpdateRequest) -> dict:
        session = current_session()
        changes = request.model_dump(exclude_unset=True)
        try:
            session.creation.update_draft(**changes)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _draft_payload(session)

    @app.delete("/drafts/image")
    async def discard_image() -> dict:
        session = current_session()
        session.creation.discard_image()
        return _draft_payload(session)

    @app.post("/drafts/submit")
    async def submit_draft() -> dict:
        session = current_session()
        outcome = session.creation.submit()
        _raise_for_outcome(outcome)
        return {"item": outcome.value.to_record()}

    @app.post("/stylist/recommendations")
    async def recommend(request: StylistRequest) -> dict:
        session = current_session()
        outcome = await session.stylist.request_outfit(request.occasion, request.weather)
        _raise_for_outcome(outcome)
        suggestion = outcome.value
        return {
            "outfitName": suggestion.outfit_name,
            "reasoning": suggestion.reasoning,
            "items": [item.to_record() for item in session.stylist.selected_items()],
        }

    @app.post("/stylist/visualization")
    async def visualize() -> dict:
        session = current_session()
        outcome = await session.stylist.visualize()
        _raise_for_outcome(outcome)
        return {"imageUrl": outcome.value}

    return app


def get_app() -> FastAPI:
    """ASGI factory used by ``uvicorn --factory``."""

    return create_app()
