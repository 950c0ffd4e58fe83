## Aggregated learning resources (videos and documents)
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from pathwise.agents.schemas import DocumentHit, TopicInfo


class ResourceKind(str, Enum):
    VIDEO = "Video"
    DOCUMENT = "Document"


class ResourceEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ResourceKind
    title: str
    summary: str
    url: str


def video_entries(topic_info: dict[str, TopicInfo]) -> list[ResourceEntry]:
    return [
        ResourceEntry(kind=ResourceKind.VIDEO, title=topic,
        summary=info.description, url=info.reference_link)
        for topic, info in topic_info.items()
    ]


def document_entries(hits: Iterable[DocumentHit]) -> list[ResourceEntry]:
    return [
        ResourceEntry(kind=ResourceKind.DOCUMENT, title=hit.title,
        summary=hit.summary, url=hit.url)
        for hit in hits
    ]


class ResourceCollection:
    """
    Insertion-ordered resources, one per url.

    Adding an entry whose url is already present replaces the stored entry
    but keeps its original position.
    """

    def __init__(self, entries: Iterable[ResourceEntry] = ()):
        self._by_url: dict[str, ResourceEntry] = {}
        self.extend(entries)

    def add(self, entry: ResourceEntry) -> None:
        self._by_url[entry.url] = entry

    def extend(self, entries: Iterable[ResourceEntry]) -> None:
        for entry in entries:
            self.add(entry)

    def items(self) -> list[ResourceEntry]:
        return list(self._by_url.values())

    def by_kind(self, kind: ResourceKind) -> list[ResourceEntry]:
        return [e for e in self._by_url.values() if e.kind == kind]

    def __len__(self) -> int:
        return len(self._by_url)

    def __contains__(self, url: object) -> bool:
        return url in self._by_url
