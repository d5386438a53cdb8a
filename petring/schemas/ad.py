from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AdSubmission(BaseModel):
    discord_id: int = Field(ge=0)
    image_url: str = Field(min_length=1)


class AdEdit(BaseModel):
    discord_id: int
    image_url: Optional[str] = None


class AdOut(BaseModel):
    username: str
    discord_id: int
    image_url: str
    ad_url: str
    verified: bool
    created_at: str
    edited_at: str
    verified_at: str

    model_config = ConfigDict(from_attributes=True)


class PublicAdOut(BaseModel):
    username: str
    image_url: str
    ad_url: str

    model_config = ConfigDict(from_attributes=True)


class BulkAdDeleteOut(BaseModel):
    message: str
    discord_ids: list[int]
    usernames: list[str]
