"""
Chat-completions client for the insights generator.

Talks to any OpenAI-compatible endpoint: the hosted OpenAI API, or a local
server (LM Studio, Ollama's OpenAI bridge) that needs no key.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional

import httpx
from pydantic import BaseModel, Field

from nexus_seo.config import settings


class LLMProvider(str, Enum):
    LOCAL = "local"
    OPENAI = "openai"


class Message(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class CompletionChoice(BaseModel):
    message: Message
    finish_reason: Optional[str] = None


class ChatCompletion(BaseModel):
    """The subset of a chat-completions response the insights layer reads."""

    model: str = ""
    choices: list[CompletionChoice] = Field(default_factory=list)
    usage: Optional[dict[str, int]] = None

    @property
    def content(self) -> str:
        if not self.choices:
            raise ValueError("LLM returned no choices")
        return self.choices[0].message.content


@dataclass
class LLMConfig:
    provider: LLMProvider
    base_url: str
    api_key: str
    model: str
    temperature: float = 0.4
    max_tokens: int = 2048
    timeout: float = 60.0

    @classmethod
    def from_settings(cls) -> "LLMConfig":
        return cls(
            provider=LLMProvider(settings.LLM_PROVIDER),
            base_url=settings.LLM_BASE_URL,
            api_key=settings.LLM_API_KEY,
            model=settings.LLM_MODEL,
            timeout=settings.LLM_TIMEOUT_SECONDS,
        )

    @property
    def configured(self) -> bool:
        """A hosted provider needs a key; a local server does not."""
        return self.provider == LLMProvider.LOCAL or bool(self.api_key)

    @property
    def completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"


class LLMClient:
    """Lazily connected chat-completions client; close() when done."""

    def __init__(
        self,
        config: Optional[LLMConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or LLMConfig.from_settings()
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "LLMClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    def _http_client(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            headers = {}
            if self.config.api_key:
                headers["Authorization"] = f"Bearer {self.config.api_key}"
            self._http = httpx.AsyncClient(
                timeout=self.config.timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._http

    async def chat(
        self,
        messages: list[Message],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> ChatCompletion:
        """POST one chat completion; raises httpx.HTTPStatusError on non-2xx."""
        body = {
            "model": self.config.model,
            "messages": [m.model_dump() for m in messages],
            "temperature": self.config.temperature if temperature is None else temperature,
            "max_tokens": max_tokens or self.config.max_tokens,
        }
        if json_mode:
            body["response_format"] = {"type": "json_object"}

        response = await self._http_client().post(self.config.completions_url, json=body)
        response.raise_for_status()
        return ChatCompletion.model_validate(response.json())

    async def close(self):
        if self._http is not None and not self._http.is_closed:
            await self._http.aclose()
        self._http = None
