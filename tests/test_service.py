import unittest

from fakes import ScriptedLLM
from pathwise.errors import FormatError, NotFound, ValidationError
from pathwise.roadmaps.resources import ResourceKind
from pathwise.roadmaps.service import RoadmapService
from pathwise.roadmaps.sessions import RoadmapSession, SessionRegistry
from pathwise.roadmaps.tree import flatten
from pathwise.storage.blobs import MemoryBlobStore


class TestRoadmapService(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.llm = ScriptedLLM()
        self.store = MemoryBlobStore()
        self.service = RoadmapService(self.llm, self.store)
        self.session = RoadmapSession("s1")

    async def test_generate_roadmap_enriches_and_persists(self):
        progress = []
        tree = await self.service.generate_roadmap(self.session, " Python ", "3", "days",
        on_progress=lambda percent, message: progress.append(percent))

        self.assertEqual(tree.name, "Python")
        self.assertEqual([c.name for c in tree.children], ["A", "C"])
        for node in flatten(tree):
            self.assertEqual(node.description, f"About {node.name}")
        self.assertEqual(self.service.load_roadmap("s1"), tree)
        self.assertEqual(self.service.current_topic("s1"), "Python")
        self.assertEqual(len(self.session.resources.by_kind(ResourceKind.VIDEO)), 4)
        self.assertEqual(progress[0], 10)
        self.assertEqual(progress[-1], 100)
        self.assertEqual(progress, sorted(progress))

    async def test_missing_input_is_rejected_before_any_call(self):
        with self.assertRaises(ValidationError):
            await self.service.generate_roadmap(self.session, "  ", "3", "days")
        with self.assertRaises(ValidationError):
            await self.service.generate_roadmap(self.session, "Python", "3", "weeks")
        self.assertEqual(self.llm.calls, [])

    async def test_text_without_markers_is_format_error(self):
        self.llm.tree_text = "I can't do that."
        with self.assertRaises(FormatError):
            await self.service.generate_roadmap(self.session, "Python", "3", "days")
        self.assertIsNone(self.service.load_roadmap("s1"))

    async def test_empty_tree_aborts_before_enrichment(self):
        self.llm.tree_text = "||| Orphan only"
        with self.assertRaises(ValidationError):
            await self.service.generate_roadmap(self.session, "Python", "3", "days")
        self.assertEqual(self.llm.topic_calls(), [])

    async def test_second_roadmap_reuses_cached_topics(self):
        await self.service.generate_roadmap(self.session, "Python", "3", "days")
        self.llm.tree_text = "| A\n| D"
        await self.service.generate_roadmap(self.session, "Python", "1", "months")

        topic_calls = self.llm.topic_calls()
        self.assertEqual(len(topic_calls), 2)
        self.assertIn("Topics:\nD\n", topic_calls[1])
        self.assertNotIn("\nA\n", topic_calls[1])

    async def test_sub_roadmap_is_enriched_and_parent_untouched(self):
        parent = await self.service.generate_roadmap(self.session, "Python", "3", "days")
        stored_before = self.store.get("s1:roadmapData")

        sub = await self.service.expand_node(self.session, parent.children[0].node_id)

        self.assertEqual(sub.name, "A")
        self.assertEqual([c.name for c in sub.children], ["Part 1", "Part 2"])
        self.assertEqual(sub.children[0].description, "About Part 1")
        self.assertEqual(self.store.get("s1:roadmapData"), stored_before)

    async def test_small_sub_roadmap_fails_and_leaves_parent(self):
        parent = await self.service.generate_roadmap(self.session, "Python", "3", "days")
        stored_before = self.store.get("s1:roadmapData")
        self.llm.sub_tree_text = "| Only one\n|| Detail"

        with self.assertRaises(ValidationError):
            await self.service.generate_sub_roadmap(self.session, "Loops")

        self.assertEqual(self.store.get("s1:roadmapData"), stored_before)
        self.assertEqual(self.service.load_roadmap("s1"), parent)

    async def test_expand_unknown_node(self):
        await self.service.generate_roadmap(self.session, "Python", "3", "days")
        with self.assertRaises(NotFound):
            await self.service.expand_node(self.session, "n99")

    async def test_expand_without_roadmap(self):
        with self.assertRaises(NotFound):
            await self.service.expand_node(self.session, "n0")

    async def test_add_node_resources_returns_new_entries(self):
        entries = await self.service.add_node_resources(self.session, "Recursion")

        self.assertEqual({e.kind for e in entries}, {ResourceKind.VIDEO, ResourceKind.DOCUMENT})
        self.assertEqual(len(self.session.resources), 2)
        self.assertIn("Recursion", self.session.cache)

    def test_clear_roadmap(self):
        self.store.set("s1:roadmapData", "{}")
        self.service.clear_roadmap("s1")
        self.assertIsNone(self.service.load_roadmap("s1"))


class TestSessionRegistry(unittest.TestCase):
    def test_lru_eviction(self):
        sessions = SessionRegistry(max_sessions=2)
        a = sessions.get("a")
        b = sessions.get("b")
        self.assertIs(sessions.get("a"), a)
        sessions.get("c")
        self.assertEqual(len(sessions), 2)
        self.assertIs(sessions.get("a"), a)
        # "b" was least recently used and got evicted
        self.assertIsNot(sessions.get("b"), b)


if __name__ == "__main__":
    unittest.main()
