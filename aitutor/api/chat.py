from typing import List, Literal, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from pydantic import BaseModel, Field

from aitutor.core.auth import get_current_user_id
from aitutor.core.logging import log_event
from aitutor.features.chat.service import (
    ChatClient,
    complete_chat,
    get_chat_client,
    last_user_message,
    record_exchange,
)
from aitutor.features.progress.store import get_chat_history
from aitutor.features.progress.topics import safe_detect_topics_in_message

router = APIRouter(prefix="/api/chat", tags=["chat"])


class ChatMessageIn(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatMessageIn] = Field(..., min_length=1)
    subject: str = ""
    userId: Optional[str] = None


@router.post("")
async def chat(
    body: ChatRequest,
    background_tasks: BackgroundTasks,
    client: ChatClient = Depends(get_chat_client),
):
    """Tutor reply for the conversation; progress tracking runs after the response is sent."""
    reply = await complete_chat(client, body.messages, body.subject)
    log_event(
        "info",
        "[chat] reply sent",
        user_id=body.userId,
        subject_id=body.subject or None,
        event_type="chat.reply",
        extra={"question": last_user_message(body.messages)},
    )

    if body.userId and body.subject:
        background_tasks.add_task(
            record_exchange, body.userId, body.subject, last_user_message(body.messages), reply
        )
        background_tasks.add_task(safe_detect_topics_in_message, reply, body.subject, body.userId)

    return {"message": reply}


@router.get("/history")
def chat_history(
    subject: str = Query(..., min_length=1),
    user_id: str = Depends(get_current_user_id),
):
    messages = get_chat_history(user_id, subject)
    return {
        "success": True,
        "data": [
            {
                "id": message.id,
                "role": message.role,
                "content": message.content,
                "timestamp": message.timestamp.isoformat() if message.timestamp else None,
            }
            for message in messages
        ],
    }
