# Roadmap and resource endpoints
from fastapi import APIRouter, Depends, Response

from pathwise.deps import get_roadmap_service, get_sessions
from pathwise.roadmaps.resources import ResourceEntry, ResourceKind
from pathwise.roadmaps.service import RoadmapService
from pathwise.roadmaps.sessions import SessionRegistry
from pathwise.roadmaps.tree import RoadmapNode, find_node

router = APIRouter(prefix="/sessions/{session_id}")


@router.get("/roadmap", response_model=RoadmapNode)
def get_roadmap(session_id: str, service: RoadmapService = Depends(get_roadmap_service)):
    return service.require_roadmap(session_id)


@router.delete("/roadmap", status_code=204)
def clear_roadmap(session_id: str, service: RoadmapService = Depends(get_roadmap_service)):
    service.clear_roadmap(session_id)
    return Response(status_code=204)


@router.post("/roadmap/nodes/{node_id}/resources", response_model=list[ResourceEntry])
async def add_node_resources(
    session_id: str,
    node_id: str,
    service: RoadmapService = Depends(get_roadmap_service),
    sessions: SessionRegistry = Depends(get_sessions),
):
    node = find_node(service.require_roadmap(session_id), node_id)
    return await service.add_node_resources(sessions.get(session_id), node.name)


@router.get("/resources", response_model=list[ResourceEntry])
def list_resources(
    session_id: str,
    kind: ResourceKind | None = None,
    sessions: SessionRegistry = Depends(get_sessions),
):
    resources = sessions.get(session_id).resources
    return resources.by_kind(kind) if kind else resources.items()
