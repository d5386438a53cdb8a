import logging
from typing import Optional

from sqlalchemy.orm import Session

from petring.core.errors import AlreadyExists, NotFound, NotModified
from petring.core.time import now_rfc3339
from petring.models.ad import Ad
from petring.models.member import Member
from petring.schemas.ad import AdEdit, AdOut, AdSubmission
from petring.services.ring import RandomMode, is_verified, select_random
from petring.services.store import RecordStore
from petring.services.url_policy import check_ad_image_url


logger = logging.getLogger(__name__)


def ads(db: Session) -> RecordStore[Ad]:
    return RecordStore(db, Ad)


def submit_ad(db: Session, submission: AdSubmission) -> Ad:
    owner = RecordStore(db, Member).find_by_discord_id(submission.discord_id)
    if not owner:
        raise NotFound()
    if not owner.verified:
        raise NotFound("User not verified")

    store = ads(db)
    if store.find_by_discord_id(submission.discord_id) or store.find_by_username(owner.username):
        raise AlreadyExists("Ad already exists")

    ad = Ad(
        username=owner.username,
        discord_id=owner.discord_id,
        image_url=check_ad_image_url(submission.image_url),
        ad_url=owner.url,
        verified=False,
        created_at=now_rfc3339(),
        edited_at="",
        verified_at="",
    )
    ad = store.insert(ad, conflict_message="Ad already exists")
    logger.info("Submitted ad for %s", ad.username)
    return ad


def verify_ad(db: Session, discord_id: int) -> Ad:
    store = ads(db)
    ad = store.find_by_discord_id(discord_id)
    if not ad:
        raise NotFound("Ad not found")

    ad.verified = True
    ad.verified_at = now_rfc3339()
    ad = store.update(ad)
    logger.info("Verified ad for %s", ad.username)
    return ad


def edit_ad(db: Session, edit: AdEdit) -> Ad:
    store = ads(db)
    ad = store.find_by_discord_id(edit.discord_id)
    if not ad or not ad.verified:
        raise NotFound("Ad not found, are you sure it's verified?")

    if edit.image_url is None or edit.image_url.strip() == ad.image_url:
        raise NotModified()

    ad.image_url = check_ad_image_url(edit.image_url)
    ad.edited_at = now_rfc3339()
    ad = store.update(ad, conflict_message="Image url already in use")
    logger.info("Updated ad for %s", ad.username)
    return ad


def delete_ad_by_username(db: Session, username: str) -> AdOut:
    store = ads(db)
    ad = store.find_by_username(username)
    if not ad:
        raise NotFound("Ad not found")
    deleted = AdOut.model_validate(ad)
    store.delete(ad.id)
    logger.info("Deleted ad for %s", deleted.username)
    return deleted


def delete_ad_by_discord_id(db: Session, discord_id: int) -> AdOut:
    store = ads(db)
    ad = store.find_by_discord_id(discord_id)
    if not ad:
        raise NotFound("Ad not found")
    deleted = AdOut.model_validate(ad)
    store.delete(ad.id)
    logger.info("Deleted ad for %s", deleted.username)
    return deleted


def bulk_delete_ads(
    db: Session,
    discord_ids: Optional[list[int]],
    usernames: Optional[list[str]],
) -> tuple[list[int], list[str]]:
    store = ads(db)
    targets = store.resolve_many(discord_ids, usernames)
    deleted_ids = [int(ad.discord_id) for ad in targets]
    deleted_names = [ad.username for ad in targets]
    store.delete_many(ad.id for ad in targets)
    logger.info("Bulk deleted %d ads", len(targets))
    return deleted_ids, deleted_names


def random_ad(db: Session) -> Ad:
    try:
        return select_random(ads(db).list_all(verified=True), is_verified, RandomMode.UNIFORM)
    except NotFound:
        raise NotFound("Couldn't pick a random ad")
