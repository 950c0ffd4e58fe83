# pathwise/roadmaps/service.py
import logging
from typing import Callable

from pathwise.agents.annotator import TopicAnnotator
from pathwise.agents.llm.base import LLMClient
from pathwise.agents.planner import fetch_roadmap_text, fetch_sub_roadmap_text
from pathwise.errors import NotFound, ValidationError
from pathwise.roadmaps.enrichment import DEFAULT_BATCH_SIZE, enrich, fetch_topics
from pathwise.roadmaps.resources import ResourceCollection, ResourceEntry
from pathwise.roadmaps.sessions import RoadmapSession
from pathwise.roadmaps.tree import RoadmapNode, find_node, parse_roadmap
from pathwise.storage.blobs import CURRENT_TOPIC_KEY, ROADMAP_KEY, BlobStore, session_key

log = logging.getLogger(__name__)

TIME_UNITS = ("minutes", "hours", "days", "months", "years")

# (percent 0-100, message)
ProgressFn = Callable[[int, str], None]


def _report(on_progress: ProgressFn | None, percent: int, message: str) -> None:
    if on_progress is not None:
        on_progress(percent, message)


def _enrichment_progress(on_progress: ProgressFn | None, start: int, end: int):
    if on_progress is None:
        return None

    def report(done: int, total: int) -> None:
        on_progress(int(start + done * ((end - start) / max(total, 1))),
        f"Annotated {done}/{total} topics")

    return report


class RoadmapService:
    def __init__(self, llm: LLMClient, store: BlobStore, *,
    annotator: TopicAnnotator | None = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    sub_roadmap_min_children: int = 2):
        self.llm = llm
        self.store = store
        self.annotator = annotator or TopicAnnotator(llm)
        self.batch_size = batch_size
        self.sub_roadmap_min_children = sub_roadmap_min_children

    async def _enrich(self, tree: RoadmapNode, session: RoadmapSession,
    on_progress: ProgressFn | None) -> RoadmapNode:
        return await enrich(
            tree,
            generate=self.annotator.generate,
            lookup_documents=self.annotator.lookup_documents,
            cache=session.cache,
            resources=session.resources,
            batch_size=self.batch_size,
            on_progress=_enrichment_progress(on_progress, 30, 80),
        )

    @staticmethod
    def check_request(topic: str, time_value: str, time_unit: str) -> tuple[str, str]:
        topic = topic.strip()
        time_value = str(time_value).strip()
        if not topic or not time_value:
            raise ValidationError("Please enter both topic and time.")
        if time_unit not in TIME_UNITS:
            raise ValidationError(f"Time unit must be one of: {', '.join(TIME_UNITS)}.")
        return topic, time_value

    async def generate_roadmap(self, session: RoadmapSession, topic: str,
    time_value: str, time_unit: str = "hours",
    on_progress: ProgressFn | None = None) -> RoadmapNode:
        topic, time_value = self.check_request(topic, time_value, time_unit)

        _report(on_progress, 10, "Generating roadmap")
        text = await fetch_roadmap_text(self.llm, topic, time_value, time_unit)

        _report(on_progress, 30, "Parsing roadmap")
        tree = parse_roadmap(text, topic)
        if not tree.children:
            raise ValidationError("Invalid roadmap structure. Please try again.")

        await self._enrich(tree, session, on_progress)

        self.store.set(session_key(session.session_id, ROADMAP_KEY), tree.model_dump_json())
        self.store.set(session_key(session.session_id, CURRENT_TOPIC_KEY), topic)
        _report(on_progress, 100, "Done")
        log.info("Roadmap for %r ready (session=%s)", topic, session.session_id)
        return tree

    async def generate_sub_roadmap(self, session: RoadmapSession, node_name: str,
    on_progress: ProgressFn | None = None) -> RoadmapNode:
        """Detailed roadmap rooted at node_name. The stored parent tree is left as is."""
        _report(on_progress, 10, f"Generating detailed roadmap for {node_name}")
        text = await fetch_sub_roadmap_text(self.llm, node_name)

        _report(on_progress, 30, "Parsing roadmap")
        tree = parse_roadmap(text, node_name)
        if not tree.children:
            raise ValidationError("Generated roadmap has no valid content.")
        if len(tree.children) < self.sub_roadmap_min_children:
            raise ValidationError("Generated roadmap is too small.")

        await self._enrich(tree, session, on_progress)
        _report(on_progress, 100, "Done")
        return tree

    async def expand_node(self, session: RoadmapSession, node_id: str,
    on_progress: ProgressFn | None = None) -> RoadmapNode:
        node = find_node(self.require_roadmap(session.session_id), node_id)
        return await self.generate_sub_roadmap(session, node.name, on_progress)

    async def add_node_resources(self, session: RoadmapSession, node_name: str) -> list[ResourceEntry]:
        found = ResourceCollection()
        await fetch_topics([node_name], generate=self.annotator.generate,
        lookup_documents=self.annotator.lookup_documents,
        cache=session.cache, resources=found)
        session.resources.extend(found.items())
        return found.items()

    def load_roadmap(self, session_id: str) -> RoadmapNode | None:
        raw = self.store.get(session_key(session_id, ROADMAP_KEY))
        if raw is None:
            return None
        return RoadmapNode.model_validate_json(raw)

    def require_roadmap(self, session_id: str) -> RoadmapNode:
        tree = self.load_roadmap(session_id)
        if tree is None:
            raise NotFound("No roadmap generated yet.")
        return tree

    def current_topic(self, session_id: str) -> str | None:
        return self.store.get(session_key(session_id, CURRENT_TOPIC_KEY))

    def clear_roadmap(self, session_id: str) -> None:
        self.store.delete(session_key(session_id, ROADMAP_KEY))
