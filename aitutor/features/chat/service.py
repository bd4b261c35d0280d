"""
Tutoring chat over Groq.

The request is abandoned after CHAT_TIMEOUT_SECONDS; the provider is not told
to cancel, so a late completion is simply discarded.
"""

import asyncio
import logging
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Sequence

from groq import AsyncGroq

from aitutor.core.config import settings
from aitutor.core.errors import AppError, UpstreamError, UpstreamTimeoutError, ValidationError
from aitutor.features.catalog.prompts import default_system_prompt
from aitutor.features.progress.store import save_chat_message

logger = logging.getLogger("aitutor")

CHAT_ROLES = ("system", "user", "assistant")


class ChatClient:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client: Any = None):
        self.model = model or settings.GROQ_MODEL
        self._api_key = api_key
        self._client = client

    def _groq(self) -> Any:
        if self._client is None:
            api_key = self._api_key or settings.GROQ_API_KEY
            if not api_key:
                raise UpstreamError("Chat completion is not configured")
            self._client = AsyncGroq(api_key=api_key)
        return self._client

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        response = await self._groq().chat.completions.create(
            messages=messages,
            model=self.model,
            temperature=settings.CHAT_TEMPERATURE,
            max_tokens=settings.CHAT_MAX_TOKENS,
            top_p=settings.CHAT_TOP_P,
        )
        return response.choices[0].message.content or ""


@lru_cache(maxsize=1)
def _default_client() -> ChatClient:
    return ChatClient()


def get_chat_client() -> ChatClient:
    """FastAPI dependency; tests swap it via app.dependency_overrides."""
    return _default_client()


def _field(message: Any, name: str) -> Any:
    if isinstance(message, Mapping):
        return message.get(name)
    return getattr(message, name, None)


def build_chat_messages(messages: Sequence[Any], subject: Optional[str]) -> List[Dict[str, str]]:
    """
    Provider payload: one system message first (the client's, or the default
    prompt for the subject), then the conversation in order.
    """
    if not messages:
        raise ValidationError("Invalid messages format")

    system_prompt = ""
    conversation: List[Dict[str, str]] = []
    for message in messages:
        role = _field(message, "role")
        content = _field(message, "content")
        if role not in CHAT_ROLES or not isinstance(content, str):
            raise ValidationError("Invalid messages format")
        if role == "system":
            system_prompt = content
        else:
            conversation.append({"role": role, "content": content})

    if not system_prompt:
        system_prompt = default_system_prompt(subject or "")

    return [{"role": "system", "content": system_prompt}] + conversation


def last_user_message(messages: Sequence[Any]) -> Optional[str]:
    for message in reversed(messages):
        if _field(message, "role") == "user":
            return _field(message, "content")
    return None


async def complete_chat(
    client: ChatClient,
    messages: Sequence[Any],
    subject: Optional[str],
    timeout: Optional[float] = None,
) -> str:
    payload = build_chat_messages(messages, subject)
    limit = timeout if timeout is not None else settings.CHAT_TIMEOUT_SECONDS
    try:
        return await asyncio.wait_for(client.complete(payload), timeout=limit)
    except asyncio.TimeoutError:
        logger.warning(f"[chat] completion timed out after {limit}s", extra={"subject_id": subject})
        raise UpstreamTimeoutError("Request timed out")
    except AppError:
        raise
    except Exception as e:
        logger.error(f"[chat] completion failed: {e}", extra={"subject_id": subject}, exc_info=True)
        raise UpstreamError(str(e) or "Failed to get response from AI")


def record_exchange(user_id: str, subject_id: str, question: Optional[str], reply: str) -> None:
    """Best-effort chat log; counts toward the subject's message total."""
    if question:
        save_chat_message(user_id, subject_id, "user", question)
    save_chat_message(user_id, subject_id, "assistant", reply)
