from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from gemini.fallback import try_send
from models.result import Resolution
from routes.session import get_session

router = APIRouter(tags=["chat"])


# ---------- Request schema ----------

class ChatRequest(BaseModel):
    session_id: str
    message: str


# ---------- Endpoint ----------

@router.post("/chat", response_model=Resolution)
async def send_message(body: ChatRequest):
    """
    Relays one message through the model fallback chain.

    Always answers 200 with either {kind: "success", text} or
    {kind: "error", message} once a resolution has run. Only one send may be
    outstanding per session; a second concurrent send gets 409.
    """
    session = get_session(body.session_id)

    if session.sending:
        raise HTTPException(status_code=409, detail="A message is already being sent")

    session.sending = True
    try:
        return await try_send(body.message, session.api_key)
    finally:
        session.sending = False
