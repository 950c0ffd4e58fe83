## Chat tutor conversations, persisted per session
import json
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, Field, TypeAdapter

from pathwise.agents.llm.base import LLMClient
from pathwise.agents.tutor import GREETING, tutor_reply
from pathwise.errors import NotFound, ValidationError
from pathwise.storage.blobs import CONVERSATIONS_KEY, BlobStore, session_key

TITLE_CHARS = 30


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    text: str
    is_user: bool
    timestamp: datetime = Field(default_factory=_now)


class Conversation(BaseModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    title: str = "New Question"
    messages: list[ChatMessage] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=_now)
    topic: str | None = None


_conversations = TypeAdapter(list[Conversation])


class ChatService:
    def __init__(self, llm: LLMClient, store: BlobStore):
        self.llm = llm
        self.store = store

    def conversations(self, session_id: str) -> list[Conversation]:
        raw = self.store.get(session_key(session_id, CONVERSATIONS_KEY))
        if not raw:
            return []
        return _conversations.validate_json(raw)

    def _save(self, session_id: str, conversations: list[Conversation]) -> None:
        self.store.set(session_key(session_id, CONVERSATIONS_KEY),
        json.dumps(_conversations.dump_python(conversations, mode="json")))

    def get(self, session_id: str, conversation_id: str) -> Conversation:
        for conv in self.conversations(session_id):
            if conv.id == conversation_id:
                return conv
        raise NotFound(f"Conversation {conversation_id} not found.")

    def create(self, session_id: str, topic: str | None = None) -> Conversation:
        conv = Conversation(topic=topic, messages=[ChatMessage(text=GREETING, is_user=False)])
        self._save(session_id, [conv, *self.conversations(session_id)])
        return conv

    def delete(self, session_id: str, conversation_id: str) -> None:
        conversations = self.conversations(session_id)
        remaining = [c for c in conversations if c.id != conversation_id]
        if len(remaining) == len(conversations):
            raise NotFound(f"Conversation {conversation_id} not found.")
        self._save(session_id, remaining)

    async def send(self, session_id: str, conversation_id: str, text: str) -> Conversation:
        text = text.strip()
        if not text:
            raise ValidationError("Message is empty.")

        conv = self.get(session_id, conversation_id)
        history = [(m.is_user, m.text) for m in conv.messages]
        first_question = not any(m.is_user for m in conv.messages)

        conv.messages.append(ChatMessage(text=text, is_user=True))
        conv.last_updated = _now()
        self._replace(session_id, conv)

        reply = await tutor_reply(self.llm, history, text)

        # Re-read so concurrent edits to other conversations survive
        conv = self.get(session_id, conversation_id)
        conv.messages.append(ChatMessage(text=reply, is_user=False))
        conv.last_updated = _now()
        if first_question:
            conv.title = text[:TITLE_CHARS] + "..."
        self._replace(session_id, conv)
        return conv

    def _replace(self, session_id: str, conv: Conversation) -> None:
        conversations = [conv if c.id == conv.id else c for c in self.conversations(session_id)]
        self._save(session_id, conversations)
