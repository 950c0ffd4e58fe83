import openai
from openai import AsyncOpenAI
from .base import LLMClient
from pathwise.errors import TransportError

class GroqOpenAIClient(LLMClient):
    def __init__(self, *, api_key: str, base_url: str, model: str, timeout: float = 120):
        self.client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout)
        self.model = model

    async def generate_text(self, *, system: str, user: str,
    temperature: float = 0.2, max_tokens: int | None = None) -> str:
        kwargs = {}
        if max_tokens is not None:
            kwargs["max_tokens"] = max_tokens
        try:
            resp = await self.client.chat.completions.create(
                model=self.model,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                **kwargs,
            )
        except openai.OpenAIError as e:
            raise TransportError(f"Groq request failed: {e}") from e
        return (resp.choices[0].message.content or "").strip()
