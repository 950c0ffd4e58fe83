# pathwise/agents/annotator.py
"""
Topic annotation through the text generation service.

Both prompts ask for one record per line with fields joined by ``|||``:

- topics:    ``name|||description|||videoId``
- documents: ``title|||description|||link``

Lines missing a field are dropped.
"""
import logging

from pathwise.agents.llm.base import LLMClient
from pathwise.agents.schemas import DocumentHit, TopicInfo

log = logging.getLogger(__name__)

FIELD_SEPARATOR = "|||"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v="

SYSTEM_ANNOTATOR = """You are a learning resource curator.
Return only the requested records, one per line. No numbering, no markdown, no commentary.
"""


def build_topics_prompt(topics: list[str]) -> str:
    topics_text = "\n".join(topics)
    return f"""
For each topic, provide a one-line description and YouTube video ID.
Format: topic|||description|||videoId

Topics:
{topics_text}

Response format example:
JavaScript|||Learn the basics of web programming|||dQw4w9WgXcQ
""".strip()


def build_documents_prompt(topic: str) -> str:
    return f"""
Find 3 free, high-quality document resources (PDFs, articles, or documentation) for learning "{topic}".
Format each resource as: title|||description|||link

Guidelines:
- Choose reputable sources (GitHub, official docs, academic papers)
- Focus on free, publicly available resources
- Include a mix of beginner and intermediate content
- Prefer recent or well-maintained resources

Example format:
JavaScript Documentation|||Official MDN Web Docs for JavaScript|||https://developer.mozilla.org/en-US/docs/Web/JavaScript
""".strip()


def _split_record(line: str) -> list[str] | None:
    parts = [p.strip() for p in line.split(FIELD_SEPARATOR)]
    if len(parts) < 3 or not all(parts[:3]):
        return None
    return parts[:3]


def video_url(video_id: str) -> str:
    if video_id.startswith(("http://", "https://")):
        return video_id
    return f"{YOUTUBE_WATCH_URL}{video_id}"


def parse_topic_records(text: str) -> dict[str, TopicInfo]:
    records: dict[str, TopicInfo] = {}
    for line in text.strip().splitlines():
        parts = _split_record(line)
        if parts is None:
            continue
        name, description, video_id = parts
        records[name] = TopicInfo(description=description, reference_link=video_url(video_id))
    return records


def parse_document_records(text: str) -> list[DocumentHit]:
    hits = []
    for line in text.strip().splitlines():
        parts = _split_record(line)
        if parts is None:
            continue
        title, summary, url = parts
        hits.append(DocumentHit(title=title, summary=summary, url=url))
    return hits


class TopicAnnotator:
    """Batched topic descriptions plus per-topic document lookup."""

    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def generate(self, topics: list[str]) -> dict[str, TopicInfo]:
        if not topics:
            return {}
        text = await self.llm.generate_text(system=SYSTEM_ANNOTATOR,
        user=build_topics_prompt(topics), temperature=0.7, max_tokens=300)
        records = parse_topic_records(text)
        log.debug("Annotated %d/%d topics", len(records), len(topics))
        return records

    async def lookup_documents(self, topic: str) -> list[DocumentHit]:
        text = await self.llm.generate_text(system=SYSTEM_ANNOTATOR,
        user=build_documents_prompt(topic), temperature=0.7, max_tokens=300)
        return parse_document_records(text)
