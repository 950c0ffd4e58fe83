from pathwise.settings import settings
from pathwise.agents.llm.base import LLMClient
from pathwise.agents.llm.ollama import OllamaOpenAIClient
from pathwise.agents.llm.groq import GroqOpenAIClient
from pathwise.agents.llm.cohere import CohereGenerateClient

def get_llm_client() -> LLMClient:
    if settings.LLM_PROVIDER == "groq":
        return GroqOpenAIClient(
            api_key=settings.GROQ_API_KEY,
            base_url=settings.GROQ_BASE_URL,
            model=settings.GROQ_MODEL,
            timeout=settings.llm_timeout_seconds,
        )

    if settings.LLM_PROVIDER == "cohere":
        return CohereGenerateClient(
            api_key=settings.COHERE_API_KEY,
            base_url=settings.COHERE_BASE_URL,
            model=settings.COHERE_MODEL,
            timeout=settings.llm_timeout_seconds,
        )

    return OllamaOpenAIClient(
        base_url = settings.ollama_base_url,
        model = settings.ollama_model,
        timeout = settings.llm_timeout_seconds,
    )
