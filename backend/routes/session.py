import uuid
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Body, HTTPException
from pydantic import BaseModel

import store
from gemini.config import LOGGED_MODEL_LIMIT
from gemini.fallback import discover, generation_models, log_available_models
from models.session import ChatSession

router = APIRouter(tags=["session"])


# ---------- Request / Response schemas ----------

class StartSessionRequest(BaseModel):
    api_key: Optional[str] = None


class StartSessionResponse(BaseModel):
    session_id: str
    has_key: bool


class SaveKeyRequest(BaseModel):
    api_key: str


class ModelsResponse(BaseModel):
    models: list[str]


# ---------- Helpers ----------

def get_session(session_id: str) -> ChatSession:
    session = store.sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


# ---------- Endpoints ----------

@router.post("/session/start", response_model=StartSessionResponse)
async def start_session(
    background_tasks: BackgroundTasks,
    body: Optional[StartSessionRequest] = Body(default=None),
):
    """
    Creates a new chat session, optionally with an API key already attached.
    Returns a unique session_id that the frontend uses for all subsequent calls.
    """
    session_id = f"chat_{uuid.uuid4().hex[:8]}"
    session = ChatSession(session_id=session_id)

    key = (body.api_key or "").strip() if body else ""
    if key:
        session.set_key(key)
        background_tasks.add_task(log_available_models, key)

    store.sessions[session_id] = session
    return StartSessionResponse(session_id=session_id, has_key=bool(session.api_key))


@router.put("/session/{session_id}/key", status_code=200)
async def save_key(session_id: str, body: SaveKeyRequest, background_tasks: BackgroundTasks):
    """
    Saves the API key on the session and kicks off a silent model discovery.
    Discovery results are only logged — failures never reach the user.
    """
    session = get_session(session_id)

    key = body.api_key.strip()
    if not key:
        raise HTTPException(status_code=400, detail="API key must not be empty")

    session.set_key(key)
    background_tasks.add_task(log_available_models, key)
    return {"detail": "API key saved successfully!"}


@router.delete("/session/{session_id}/key", status_code=200)
async def clear_key(session_id: str):
    get_session(session_id).clear_key()
    return {}


@router.get("/session/{session_id}/models", response_model=ModelsResponse)
async def list_session_models(session_id: str):
    """Generation-capable models visible to the session's key (first few only)."""
    session = get_session(session_id)
    if not session.api_key:
        raise HTTPException(status_code=400, detail="Please enter your Gemini API key first!")

    models = await discover(session.api_key)
    return ModelsResponse(models=generation_models(models)[:LOGGED_MODEL_LIMIT])
