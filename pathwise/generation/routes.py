# pathwise/generation/routes.py
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from pathwise.deps import get_roadmap_service, get_runs, get_sessions
from pathwise.jobs.runs import GenerationRun, RunRegistry
from pathwise.roadmaps.service import RoadmapService
from pathwise.roadmaps.sessions import SessionRegistry
from pathwise.roadmaps.tree import find_node

router = APIRouter()


class GenerateRequest(BaseModel):
    topic: str
    time_value: str
    time_unit: str = "hours"


def _run_payload(run: GenerationRun) -> dict:
    payload = run.model_dump(mode="json")
    if run.status != "succeeded":
        payload["result"] = None
    return payload


@router.post("/sessions/{session_id}/roadmap/generate", status_code=202)
async def start_generation(
    session_id: str,
    body: GenerateRequest,
    wait: bool = False,
    service: RoadmapService = Depends(get_roadmap_service),
    sessions: SessionRegistry = Depends(get_sessions),
    runs: RunRegistry = Depends(get_runs),
):
    topic, time_value = service.check_request(body.topic, body.time_value, body.time_unit)
    session = sessions.get(session_id)

    run = runs.submit(
        session_id=session_id,
        kind="roadmap",
        subject=topic,
        job=lambda report: service.generate_roadmap(session, topic, time_value,
        body.time_unit, on_progress=report),
    )
    if wait:
        run = await runs.wait(run.id)
    return _run_payload(run)


@router.post("/sessions/{session_id}/roadmap/nodes/{node_id}/expand", status_code=202)
async def start_sub_roadmap(
    session_id: str,
    node_id: str,
    wait: bool = False,
    service: RoadmapService = Depends(get_roadmap_service),
    sessions: SessionRegistry = Depends(get_sessions),
    runs: RunRegistry = Depends(get_runs),
):
    node = find_node(service.require_roadmap(session_id), node_id)
    session = sessions.get(session_id)

    run = runs.submit(
        session_id=session_id,
        kind=f"expand:{node_id}",
        subject=node.name,
        job=lambda report: service.generate_sub_roadmap(session, node.name, on_progress=report),
    )
    if wait:
        run = await runs.wait(run.id)
    return _run_payload(run)


@router.get("/runs/{run_id}")
def get_run_status(run_id: str, runs: RunRegistry = Depends(get_runs)):
    return _run_payload(runs.get(run_id))


@router.delete("/runs/{run_id}")
def cancel_run(run_id: str, runs: RunRegistry = Depends(get_runs)):
    return _run_payload(runs.cancel(run_id))
