# pathwise/agents/planner.py
import logging

from pathwise.agents.llm.base import LLMClient
from pathwise.errors import FormatError
from pathwise.roadmaps.tree import DEPTH_MARKER

log = logging.getLogger(__name__)

SYSTEM_PLANNER = """You are a curriculum planner.

You must return ONLY the roadmap tree (no markdown, no code fences, no commentary).
Every line is one topic, prefixed with | characters for its depth.
"""


def build_roadmap_prompt(topic: str, time_value: str, time_unit: str) -> str:
    return f"""
Create a learning roadmap for "{topic}" ({time_value} {time_unit}). Format as a tree with | for depth.
Keep it simple and focused on core concepts.

Example format:
| Basics
|| Core Concept 1
||| Detail 1
|| Core Concept 2
| Advanced
|| Topic 1

Rules:
- 2-4 main topics (level 1)
- 1-2 subtopics each (level 2)
- 1-1 details each (level 3)
- Keep names short and clear
- Focus on core concepts
- Order by learning sequence

Roadmap:
""".strip()


def build_sub_roadmap_prompt(name: str) -> str:
    return f"""
Create a detailed learning roadmap for "{name}". Format as a tree with | for depth.
Break down the topic into specific concepts and implementation details.

Example format:
| Fundamentals
|| Basic Concept 1
||| Key Point 1
||| Key Point 2
|| Basic Concept 2
| Advanced Topics
|| Advanced Concept 1
||| Implementation Detail 1
||| Implementation Detail 2

Rules:
- Start with fundamentals
- Include 2-3 main categories
- Each category should have 2-3 key concepts
- Each concept should have 2-3 specific points
- Use clear, concise names
- Focus on practical, actionable items
- Order from basic to advanced
- Keep it focused on "{name}" specifically

Roadmap:
""".strip()


def _check_tree_text(text: str) -> str:
    text = text.strip()
    if not text:
        raise FormatError("No response received from the text generation service. Please try again.")
    if DEPTH_MARKER not in text:
        raise FormatError("Invalid roadmap format: missing tree structure. Please try again.")
    return text


async def fetch_roadmap_text(llm: LLMClient, topic: str, time_value: str, time_unit: str) -> str:
    prompt = build_roadmap_prompt(topic, time_value, time_unit)
    raw_text = await llm.generate_text(system=SYSTEM_PLANNER, user=prompt,
    temperature=0.7, max_tokens=300)
    log.info("Roadmap text received for %r (%d chars)", topic, len(raw_text))
    return _check_tree_text(raw_text)


async def fetch_sub_roadmap_text(llm: LLMClient, name: str) -> str:
    prompt = build_sub_roadmap_prompt(name)
    raw_text = await llm.generate_text(system=SYSTEM_PLANNER, user=prompt,
    temperature=0.8, max_tokens=500)
    log.info("Sub-roadmap text received for %r (%d chars)", name, len(raw_text))
    return _check_tree_text(raw_text)
