## Routes for the application
from fastapi import APIRouter, Depends

from pathwise.deps import get_roadmap_service, get_sessions, get_store
from pathwise.profile.routes import load_profile
from pathwise.roadmaps.resources import ResourceKind
from pathwise.roadmaps.service import RoadmapService
from pathwise.roadmaps.sessions import SessionRegistry
from pathwise.roadmaps.tree import count_nodes
from pathwise.storage.blobs import BlobStore

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/sessions/{session_id}/dashboard")
def dashboard(
    session_id: str,
    service: RoadmapService = Depends(get_roadmap_service),
    sessions: SessionRegistry = Depends(get_sessions),
    store: BlobStore = Depends(get_store),
):
    tree = service.load_roadmap(session_id)
    resources = sessions.get(session_id).resources
    return {
        "current_topic": service.current_topic(session_id),
        "roadmap_nodes": count_nodes(tree) if tree else 0,
        "videos": len(resources.by_kind(ResourceKind.VIDEO)),
        "documents": len(resources.by_kind(ResourceKind.DOCUMENT)),
        "profile": load_profile(store, session_id).model_dump(mode="json"),
    }
