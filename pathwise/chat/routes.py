# Chat tutor endpoints
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from pathwise.chat.service import ChatService, Conversation
from pathwise.deps import get_chat_service

router = APIRouter(prefix="/sessions/{session_id}/conversations")


class NewConversation(BaseModel):
    topic: str | None = None


class NewMessage(BaseModel):
    text: str


@router.get("", response_model=list[Conversation])
def list_conversations(session_id: str, chat: ChatService = Depends(get_chat_service)):
    return chat.conversations(session_id)


@router.post("", response_model=Conversation, status_code=201)
def create_conversation(session_id: str, body: NewConversation | None = None,
chat: ChatService = Depends(get_chat_service)):
    return chat.create(session_id, topic=body.topic if body else None)


@router.post("/{conversation_id}/messages", response_model=Conversation)
async def send_message(session_id: str, conversation_id: str, body: NewMessage,
chat: ChatService = Depends(get_chat_service)):
    return await chat.send(session_id, conversation_id, body.text)


@router.delete("/{conversation_id}", status_code=204)
def delete_conversation(session_id: str, conversation_id: str,
chat: ChatService = Depends(get_chat_service)):
    chat.delete(session_id, conversation_id)
