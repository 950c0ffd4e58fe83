# pathwise/roadmaps/enrichment.py
"""
Annotate a parsed roadmap with descriptions, reference links and resources.

Pipeline:
- flatten the tree pre-order
- drop topic names already in the session cache
- chunk the rest into fixed-size batches
- per batch, run the topic call and one document lookup per topic
  concurrently; each call fails on its own without stopping the run
- cache what came back, collect resources, then copy cached data onto nodes

Batches run one after another so the external service sees at most one
batch of requests at a time.
"""
import asyncio
import logging
from typing import Awaitable, Callable, Mapping, Sequence, TypeVar

from pathwise.agents.schemas import DocumentHit, TopicInfo
from pathwise.roadmaps.resources import ResourceCollection, document_entries, video_entries
from pathwise.roadmaps.tree import RoadmapNode, iter_nodes

log = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 8

T = TypeVar("T")

GenerateFn = Callable[[list[str]], Awaitable[dict[str, TopicInfo]]]
LookupDocumentsFn = Callable[[str], Awaitable[list[DocumentHit]]]
ProgressFn = Callable[[int, int], None]


class EnrichmentCache:
    """Topic name -> TopicInfo memo for one generation session. Never evicts."""

    def __init__(self, entries: Mapping[str, TopicInfo] | None = None):
        self._entries: dict[str, TopicInfo] = dict(entries or {})

    def get(self, topic: str) -> TopicInfo | None:
        return self._entries.get(topic)

    def set(self, topic: str, info: TopicInfo) -> None:
        self._entries[topic] = info

    def merge(self, entries: Mapping[str, TopicInfo]) -> None:
        self._entries.update(entries)

    def __contains__(self, topic: object) -> bool:
        return topic in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def chunked(items: Sequence[T], size: int) -> list[list[T]]:
    if size < 1:
        raise ValueError(f"batch size must be positive, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def pending_topics(root: RoadmapNode, cache: EnrichmentCache) -> list[str]:
    """Uncached topic names in pre-order, each listed once."""
    return list(dict.fromkeys(n.name for n in iter_nodes(root) if n.name not in cache))


def _result_or_default(result, default, what: str):
    if isinstance(result, Exception):
        log.warning("%s failed, continuing without it: %s: %s", what, type(result).__name__, result)
        return default
    if isinstance(result, BaseException):
        raise result
    return result


async def fetch_topics(
    topics: list[str],
    *,
    generate: GenerateFn,
    lookup_documents: LookupDocumentsFn,
    cache: EnrichmentCache,
    resources: ResourceCollection,
) -> dict[str, TopicInfo]:
    """Run one batch: topic call and document lookups together, join all."""
    results = await asyncio.gather(
        generate(topics),
        *(lookup_documents(topic) for topic in topics),
        return_exceptions=True,
    )
    topic_info = _result_or_default(results[0], {}, f"Topic batch {topics!r}")
    hits: list[DocumentHit] = []
    for topic, result in zip(topics, results[1:]):
        hits.extend(_result_or_default(result, [], f"Document lookup for {topic!r}"))

    cache.merge(topic_info)
    resources.extend(video_entries(topic_info))
    resources.extend(document_entries(hits))
    return topic_info


def apply_cache(root: RoadmapNode, cache: EnrichmentCache) -> RoadmapNode:
    for node in iter_nodes(root):
        info = cache.get(node.name)
        if info is not None:
            node.description = info.description
            node.reference_link = info.reference_link
    return root


async def enrich(
    root: RoadmapNode,
    *,
    generate: GenerateFn,
    lookup_documents: LookupDocumentsFn,
    cache: EnrichmentCache,
    resources: ResourceCollection,
    batch_size: int = DEFAULT_BATCH_SIZE,
    on_progress: ProgressFn | None = None,
) -> RoadmapNode:
    topics = pending_topics(root, cache)
    batches = chunked(topics, batch_size)
    log.info("Enriching %r: %d new topics in %d batches", root.name, len(topics), len(batches))

    done = 0
    for batch in batches:
        await fetch_topics(batch, generate=generate, lookup_documents=lookup_documents,
        cache=cache, resources=resources)
        done += len(batch)
        if on_progress is not None:
            on_progress(done, len(topics))

    return apply_cache(root, cache)
