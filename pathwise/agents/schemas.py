## Pydantic schemas for LLM output records
from pydantic import BaseModel, Field


class TopicInfo(BaseModel):
    description: str = Field(min_length=1)
    reference_link: str = Field(min_length=1)


class DocumentHit(BaseModel):
    title: str = Field(min_length=1)
    summary: str = Field(min_length=1)
    url: str = Field(min_length=1)
