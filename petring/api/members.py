from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from petring.api.deps import require_bot
from petring.db.session import get_db
from petring.schemas.member import (
    BulkDeleteRequest,
    BulkMemberDeleteOut,
    MemberEdit,
    MemberEditOut,
    MemberOut,
    MemberSubmission,
)
from petring.services.members import (
    bulk_delete_members,
    delete_member_by_discord_id,
    delete_member_by_username,
    edit_member,
    get_member_by_discord_id,
    submit_member,
    verify_member,
)

router = APIRouter(prefix="/api", tags=["members"], dependencies=[Depends(require_bot)])


@router.get("/get/user/by-discord/{discord_id}", response_model=MemberOut)
def get_user_by_discord_id(discord_id: int, db: Session = Depends(get_db)):
    return get_member_by_discord_id(db, discord_id, verified_only=True)


@router.get("/get/user/by-discord/{discord_id}/unverified", response_model=MemberOut)
def get_user_by_discord_id_unverified(discord_id: int, db: Session = Depends(get_db)):
    return get_member_by_discord_id(db, discord_id, verified_only=False)


@router.delete("/delete/user/by-discord/{discord_id}", response_model=MemberOut)
def delete_user_by_discord_id(discord_id: int, db: Session = Depends(get_db)):
    return delete_member_by_discord_id(db, discord_id)


@router.delete("/delete/user/{username}", response_model=MemberOut)
def delete_user_by_username(username: str, db: Session = Depends(get_db)):
    return delete_member_by_username(db, username)


@router.delete("/delete/users", response_model=BulkMemberDeleteOut)
def delete_users(payload: BulkDeleteRequest, db: Session = Depends(get_db)):
    discord_ids, usernames = bulk_delete_members(db, payload.discord_ids, payload.usernames)
    return BulkMemberDeleteOut(
        message="Users deleted",
        discord_ids=discord_ids,
        usernames=usernames,
    )


@router.patch("/patch/user/edit", response_model=MemberEditOut)
def edit_user(payload: MemberEdit, db: Session = Depends(get_db)):
    old, updated = edit_member(db, payload)
    return MemberEditOut(old=old, new=MemberOut.model_validate(updated))


@router.patch("/patch/user/verify/{discord_id}", response_model=MemberOut)
def verify_user(discord_id: int, db: Session = Depends(get_db)):
    return verify_member(db, discord_id)


@router.post("/post/user/submit", response_model=MemberOut)
def submit_user(payload: MemberSubmission, db: Session = Depends(get_db)):
    return submit_member(db, payload)
