## Application settings configuration

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "INFO"

    # Blob storage: "redis" | "sql" | "memory"
    blob_backend: str = "memory"
    redis_url: str = "redis://localhost:6379/0"
    database_url: str = "sqlite:///./pathwise.db"

    # Ollama settings
    ollama_base_url: str = "http://localhost:11434/v1"
    ollama_model: str = "llama3.1"

    # Production settings
    LLM_PROVIDER: str = "ollama"
    GROQ_API_KEY: str = ""
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    GROQ_MODEL: str = "llama-3.1-8b-instant"

    COHERE_API_KEY: str = ""
    COHERE_BASE_URL: str = "https://api.cohere.ai"
    COHERE_MODEL: str = "command-r-plus"

    llm_timeout_seconds: float = 120

    # Roadmap pipeline
    enrichment_batch_size: int = 8
    sub_roadmap_min_children: int = 2
    generation_timeout_seconds: float = 300
    session_store_max: int = 50


settings = Settings()
