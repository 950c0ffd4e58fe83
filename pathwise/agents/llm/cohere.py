## Cohere /v1/generate client (plain prompt completion)
import httpx
from pathwise.agents.llm.base import LLMClient
from pathwise.errors import TransportError

class CohereGenerateClient(LLMClient):
    def __init__(self, *, api_key: str, base_url: str, model: str,
    timeout: float = 120, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.transport = transport

    async def generate_text(self, *, system: str, user: str,
    temperature: float = 0.2, max_tokens: int | None = None) -> str:
        # /v1/generate has no roles, so the system text leads the prompt
        payload = {
            "model": self.model,
            "prompt": f"{system.strip()}\n\n{user.strip()}",
            "max_tokens": max_tokens or 300,
            "temperature": temperature,
            "top_p": 1.0,
            "num_generations": 1,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(f"{self.base_url}/v1/generate", json=payload, headers=headers)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPError as e:
            raise TransportError(f"Cohere request failed: {e}") from e

        generations = data.get("generations") or []
        if not generations:
            raise TransportError("Cohere returned no generations")
        return (generations[0].get("text") or "").strip()
