# Learner profile endpoints
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from pathwise.deps import get_store
from pathwise.storage.blobs import PROFILE_KEY, BlobStore, session_key

router = APIRouter(prefix="/sessions/{session_id}/profile")


class NotificationPreferences(BaseModel):
    enabled: bool = False
    time: str | None = None
    message: str | None = None


class UserProfile(BaseModel):
    name: str = ""
    email: str = ""
    phone_number: str | None = None
    current_topic: str | None = None
    streak: int = 0
    total_study_time: int = 0
    notification_preferences: NotificationPreferences = NotificationPreferences()


def load_profile(store: BlobStore, session_id: str) -> UserProfile:
    raw = store.get(session_key(session_id, PROFILE_KEY))
    return UserProfile.model_validate_json(raw) if raw else UserProfile()


def save_profile(store: BlobStore, session_id: str, profile: UserProfile) -> None:
    store.set(session_key(session_id, PROFILE_KEY), profile.model_dump_json())


@router.get("", response_model=UserProfile)
def get_profile(session_id: str, store: BlobStore = Depends(get_store)):
    return load_profile(store, session_id)


@router.put("", response_model=UserProfile)
def update_profile(session_id: str, body: UserProfile, store: BlobStore = Depends(get_store)):
    save_profile(store, session_id, body)
    return body
