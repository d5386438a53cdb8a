import logging
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.orm import Session

from petring.core.errors import AlreadyExists, NotFound, NotModified
from petring.core.time import now_rfc3339
from petring.models.ad import Ad
from petring.models.member import Member
from petring.schemas.member import MemberEdit, MemberOut, MemberSubmission
from petring.services.store import RecordStore
from petring.services.url_policy import check_member_url


logger = logging.getLogger(__name__)


def members(db: Session) -> RecordStore[Member]:
    return RecordStore(db, Member)


def sanitize_username(username: str) -> str:
    return username.replace(" ", "_").replace(".", "_")


def get_member(db: Session, username: str) -> Member:
    member = members(db).find_by_username(username)
    if not member:
        raise NotFound()
    return member


def get_member_by_discord_id(db: Session, discord_id: int, verified_only: bool = True) -> Member:
    member = members(db).find_by_discord_id(discord_id)
    if not member:
        raise NotFound()
    if verified_only and not member.verified:
        raise NotFound("User not verified")
    return member


def submit_member(db: Session, submission: MemberSubmission) -> Member:
    store = members(db)
    username = sanitize_username(submission.username)

    if store.find_by_username(username) or store.find_by_discord_id(submission.discord_id):
        raise AlreadyExists()

    member = Member(
        username=username,
        discord_id=submission.discord_id,
        url=check_member_url(submission.url),
        verified=False,
        created_at=now_rfc3339(),
        edited_at="",
        verified_at="",
    )
    member = store.insert(member)
    logger.info("Submitted member %s (%s)", member.username, member.discord_id)
    return member


def verify_member(db: Session, discord_id: int) -> Member:
    store = members(db)
    member = store.find_by_discord_id(discord_id)
    if not member:
        raise NotFound()

    member.verified = True
    member.verified_at = now_rfc3339()
    member = store.update(member)
    logger.info("Verified member %s", member.username)
    return member


def edit_member(db: Session, edit: MemberEdit) -> tuple[MemberOut, Member]:
    """
    Apply a username and/or url change to the member owning `edit.discord_id`.
    Returns the member as it was before the change and the updated record.
    """
    store = members(db)
    member = store.find_by_discord_id(edit.discord_id)
    if not member:
        raise NotFound()

    new_username: Optional[str] = None
    if edit.username is not None:
        candidate = sanitize_username(edit.username)
        if candidate != member.username:
            new_username = candidate
    new_url: Optional[str] = None
    if edit.url is not None and edit.url.strip() != member.url:
        new_url = check_member_url(edit.url)

    if new_username is None and new_url is None:
        raise NotModified()

    old = MemberOut.model_validate(member)
    ad = RecordStore(db, Ad).find_by_discord_id(member.discord_id)

    if new_username is not None:
        member.username = new_username
        if ad:
            ad.username = new_username
    if new_url is not None:
        member.url = new_url
        if ad:
            ad.ad_url = new_url
    member.edited_at = now_rfc3339()

    member = store.update(member, conflict_message="Username or url already taken")
    logger.info("Updated member %s", member.username)
    return old, member


def _drop_ads(db: Session, discord_ids: list[int]) -> None:
    # committed together with the member delete that follows
    if discord_ids:
        db.execute(delete(Ad).where(Ad.discord_id.in_(discord_ids)))


def delete_member_by_username(db: Session, username: str) -> MemberOut:
    member = get_member(db, username)
    deleted = MemberOut.model_validate(member)
    _drop_ads(db, [member.discord_id])
    members(db).delete(member.id)
    logger.info("Deleted member %s", deleted.username)
    return deleted


def delete_member_by_discord_id(db: Session, discord_id: int) -> MemberOut:
    member = get_member_by_discord_id(db, discord_id, verified_only=False)
    deleted = MemberOut.model_validate(member)
    _drop_ads(db, [member.discord_id])
    members(db).delete(member.id)
    logger.info("Deleted member %s", deleted.username)
    return deleted


def bulk_delete_members(
    db: Session,
    discord_ids: Optional[list[int]],
    usernames: Optional[list[str]],
) -> tuple[list[int], list[str]]:
    store = members(db)
    targets = store.resolve_many(discord_ids, usernames)
    deleted_ids = [int(m.discord_id) for m in targets]
    deleted_names = [m.username for m in targets]
    _drop_ads(db, deleted_ids)
    store.delete_many(m.id for m in targets)
    logger.info("Bulk deleted %d members", len(targets))
    return deleted_ids, deleted_names
