## Shared FastAPI dependencies
from functools import lru_cache

from fastapi import Depends

from pathwise.agents.llm.base import LLMClient
from pathwise.agents.llm.client import get_llm_client
from pathwise.chat.service import ChatService
from pathwise.jobs.runs import RunRegistry
from pathwise.roadmaps.service import RoadmapService
from pathwise.roadmaps.sessions import SessionRegistry
from pathwise.settings import settings
from pathwise.storage.blobs import BlobStore, get_blob_store


@lru_cache
def get_store() -> BlobStore:
    return get_blob_store()


@lru_cache
def get_llm() -> LLMClient:
    return get_llm_client()


@lru_cache
def get_sessions() -> SessionRegistry:
    return SessionRegistry(max_sessions=settings.session_store_max)


@lru_cache
def get_runs() -> RunRegistry:
    return RunRegistry(timeout_seconds=settings.generation_timeout_seconds)


def get_roadmap_service(llm: LLMClient = Depends(get_llm),
store: BlobStore = Depends(get_store)) -> RoadmapService:
    return RoadmapService(
        llm,
        store,
        batch_size=settings.enrichment_batch_size,
        sub_roadmap_min_children=settings.sub_roadmap_min_children,
    )


def get_chat_service(llm: LLMClient = Depends(get_llm),
store: BlobStore = Depends(get_store)) -> ChatService:
    return ChatService(llm, store)
