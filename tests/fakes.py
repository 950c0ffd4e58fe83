"""Scripted LLM used across tests."""
import re

from pathwise.agents.llm.base import LLMClient
from pathwise.agents.planner import SYSTEM_PLANNER
from pathwise.agents.tutor import SYSTEM_TUTOR


class ScriptedLLM(LLMClient):
    """
    Answers by prompt kind: roadmap prompts get tree_text (or sub_tree_text
    for "detailed" prompts), topic prompts get one record per topic, document
    prompts get one document per topic.
    """

    def __init__(self, tree_text="| A\n|| B\n| C", sub_tree_text="| Part 1\n|| Point\n| Part 2",
    tutor_text="Recursion is a function calling itself."):
        self.tree_text = tree_text
        self.sub_tree_text = sub_tree_text
        self.tutor_text = tutor_text
        self.calls = []

    def topic_calls(self):
        return [c for c in self.calls if c.startswith("For each topic")]

    async def generate_text(self, *, system, user, temperature=0.2, max_tokens=None):
        self.calls.append(user)
        if system == SYSTEM_PLANNER:
            return self.sub_tree_text if "detailed learning roadmap" in user else self.tree_text
        if system == SYSTEM_TUTOR:
            return self.tutor_text
        if user.startswith("For each topic"):
            block = user.split("Topics:\n", 1)[1].split("\n\nResponse format", 1)[0]
            return "\n".join(f"{t}|||About {t}|||vid-{t.replace(' ', '_')}" for t in block.splitlines())
        topic = re.search(r'learning "(.+?)"', user).group(1)
        return f"{topic} guide|||A guide|||https://docs.example/{topic.replace(' ', '_')}"
