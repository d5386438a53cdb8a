from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from petring.api.deps import require_bot
from petring.db.session import get_db
from petring.schemas.ad import AdEdit, AdOut, AdSubmission, BulkAdDeleteOut
from petring.schemas.member import BulkDeleteRequest
from petring.services.ads import (
    bulk_delete_ads,
    delete_ad_by_discord_id,
    delete_ad_by_username,
    edit_ad,
    submit_ad,
    verify_ad,
)

router = APIRouter(prefix="/api", tags=["ads"], dependencies=[Depends(require_bot)])


@router.post("/post/ad/submit", response_model=AdOut)
def post_ad(payload: AdSubmission, db: Session = Depends(get_db)):
    return submit_ad(db, payload)


@router.patch("/patch/ad/verify/{discord_id}", response_model=AdOut)
def patch_ad_verify(discord_id: int, db: Session = Depends(get_db)):
    return verify_ad(db, discord_id)


@router.patch("/patch/ad/edit", response_model=AdOut)
def patch_ad_edit(payload: AdEdit, db: Session = Depends(get_db)):
    return edit_ad(db, payload)


@router.delete("/delete/ad/by-discord/{discord_id}", response_model=AdOut)
def delete_ad_discord(discord_id: int, db: Session = Depends(get_db)):
    return delete_ad_by_discord_id(db, discord_id)


@router.delete("/delete/ad/{username}", response_model=AdOut)
def delete_ad_username(username: str, db: Session = Depends(get_db)):
    return delete_ad_by_username(db, username)


@router.delete("/delete/ads", response_model=BulkAdDeleteOut)
def delete_ads(payload: BulkDeleteRequest, db: Session = Depends(get_db)):
    discord_ids, usernames = bulk_delete_ads(db, payload.discord_ids, payload.usernames)
    return BulkAdDeleteOut(
        message="Ads deleted",
        discord_ids=discord_ids,
        usernames=usernames,
    )
