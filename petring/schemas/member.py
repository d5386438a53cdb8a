from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MemberSubmission(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    discord_id: int = Field(ge=0)
    url: str = Field(min_length=1)


class MemberEdit(BaseModel):
    discord_id: int
    username: Optional[str] = Field(default=None, min_length=1, max_length=64)
    url: Optional[str] = None


class MemberOut(BaseModel):
    username: str
    url: str
    discord_id: int
    verified: bool
    created_at: str
    edited_at: str
    verified_at: str

    model_config = ConfigDict(from_attributes=True)


class MemberEditOut(BaseModel):
    old: MemberOut
    new: MemberOut


class PublicMemberOut(BaseModel):
    username: str
    url: str

    model_config = ConfigDict(from_attributes=True)


class MembersOut(BaseModel):
    users: list[PublicMemberOut]


class BulkDeleteRequest(BaseModel):
    discord_ids: Optional[list[int]] = None
    usernames: Optional[list[str]] = None


class BulkMemberDeleteOut(BaseModel):
    message: str
    discord_ids: list[int]
    usernames: list[str]
