from typing import Optional

from fastapi import APIRouter, Body, Request
from pydantic import BaseModel

from chat_agent import ChatAgent

router = APIRouter()


class ChatIn(BaseModel):
    message: Optional[str] = None


class ChatOut(BaseModel):
    reply: str


def _chat_agent(request: Request) -> ChatAgent:
    agent = getattr(request.app.state, "chat_agent", None)
    if agent is None:
        raise RuntimeError("Chat agent not available as app.state.chat_agent")
    return agent


@router.post("/api/chat", response_model=ChatOut)
def chat(request: Request, body: ChatIn = Body(...)):
    reply = _chat_agent(request).handle(body.message)
    return ChatOut(reply=reply)
