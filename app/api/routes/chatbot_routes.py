# app/api/routes/chatbot_routes.py

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from app.api.deps import require_role
from app.models.schemas import ChatRequest
from app.services import record_store
from app.services.logger import get_logger

router = APIRouter(prefix="/chatbot", tags=["chatbot"])
logger = get_logger(__name__)


class ChatResponse(BaseModel):
    reply: str
    in_scope: bool


@router.post("/chat", response_model=ChatResponse)
def chat(req: ChatRequest, request: Request, user=Depends(require_role(["patient"]))):
    svc = request.app.state.chatbot_service

    try:
        reply, in_scope = svc.chat(user["uid"], req.message)
    except Exception as e:
        # only storage failures get here; model failures become a reply
        logger.error("Chat failed for %s: %s", user["uid"], e)
        raise HTTPException(status_code=500, detail=str(e))

    return ChatResponse(reply=reply, in_scope=in_scope)


@router.get("/history")
def history(user=Depends(require_role(["patient"]))):
    """The caller's conversation, oldest first."""
    messages = record_store.fetch_chat_messages(user["uid"])
    return {"messages": [m.model_dump(mode="json", by_alias=True) for m in messages]}
