## Base LLM Client Interface
from abc import ABC, abstractmethod

class LLMClient(ABC):
    @abstractmethod
    async def generate_text(self, *, system: str, user: str,
    temperature: float = 0.2, max_tokens: int | None = None) -> str:
        """Return the completion text. Raises TransportError on any call failure."""
        raise NotImplementedError
