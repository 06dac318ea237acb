# chat_agent.py — one chat turn: fresh site cache -> topic -> prompt -> completion
import os
from typing import Any, Dict, List, Optional

import openai
from openai import OpenAI

from context_store import ContextStore
from errors import UpstreamError, ValidationError
from log_helper import log
from prompt_helper import build_system_prompt
from site_cache import SiteCache
from topic_router import classify

LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")
LLM_TEMPERATURE = 0.3
_timeout_env = os.getenv("OPENAI_TIMEOUT_SEC")
OPENAI_TIMEOUT_SEC: Optional[float] = float(_timeout_env) if _timeout_env else None

NO_ANSWER = "Nu am un răspuns."


class OpenAICompletions:
    """Thin adapter over the chat-completions endpoint. No retries."""

    def __init__(self, client: Optional[OpenAI] = None, model: str = LLM_MODEL,
                 timeout: Optional[float] = OPENAI_TIMEOUT_SEC):
        self._client = client
        self.model = model
        self.timeout = timeout

    def _openai_client(self) -> OpenAI:
        if self._client is None:
            api_key = os.getenv("OPENAI_API_KEY")
            if not api_key:
                raise UpstreamError("AI error", details="OPENAI_API_KEY is not set")
            self._client = OpenAI(api_key=api_key, max_retries=0)
        return self._client

    def complete(self, messages: List[Dict[str, str]], temperature: float) -> Any:
        client = self._openai_client()
        kwargs: Dict[str, Any] = {"model": self.model, "temperature": temperature, "messages": messages}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        try:
            return client.chat.completions.create(**kwargs)
        except openai.APIStatusError as e:
            body = e.response.text if e.response is not None else e.message
            log("error", "upstream_error", status=e.status_code, error=str(body)[:300])
            raise UpstreamError("AI error", details=body) from e
        except openai.APIConnectionError as e:
            log("error", "upstream_error", error=str(e)[:300])
            raise UpstreamError("Server error", details=str(e)) from e


def first_choice_content(resp: Any) -> Optional[str]:
    if isinstance(resp, dict):
        choices = resp.get("choices") or []
        msg = (choices[0] or {}).get("message") if choices else None
        return (msg or {}).get("content")
    choices = getattr(resp, "choices", None) or []
    if not choices:
        return None
    msg = getattr(choices[0], "message", None)
    return getattr(msg, "content", None)


class ChatAgent:
    def __init__(self, site_cache: SiteCache, context: ContextStore, completions: Any = None):
        self.site_cache = site_cache
        self.context = context
        self.completions = completions or OpenAICompletions()

    def build_messages(self, message: str) -> List[Dict[str, str]]:
        self.site_cache.ensure_fresh()
        topic = classify(message)
        selection = self.site_cache.select(topic)
        log("info", "chat_topic", topic=topic, has_text=bool(selection and selection.text))
        system = build_system_prompt(self.context.text, selection)
        return [{"role": "system", "content": system},
                {"role": "user", "content": message}]

    def handle(self, message: Optional[str]) -> str:
        if not isinstance(message, str) or not message.strip():
            raise ValidationError("Message missing")
        messages = self.build_messages(message)
        resp = self.completions.complete(messages, temperature=LLM_TEMPERATURE)
        return first_choice_content(resp) or NO_ANSWER
