from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from petring.core.config import APP_VERSION
from petring.db.session import get_db
from petring.models.member import Member
from petring.schemas.ad import PublicAdOut
from petring.schemas.info import ServerInfoOut, UptimeOut
from petring.schemas.member import MembersOut, PublicMemberOut
from petring.services.ads import random_ad
from petring.services.members import get_member
from petring.services.ring import (
    Direction,
    RandomMode,
    any_member,
    is_verified,
    locate_neighbor,
    select_random,
)
from petring.services.store import RecordStore
from petring.services.uptime import app_uptime, format_duration, system_uptime

router = APIRouter(tags=["public"])

PUBLIC_ENDPOINTS = (
    "/get/server-info",
    "/get/uptime",
    "/get/users",
    "/get/users/random",
    "/get/random-ad",
)


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=307)


def _ring(db: Session, verified_only: bool) -> list[Member]:
    return RecordStore(db, Member).list_all(verified=True if verified_only else None)


@router.get("/api", response_class=HTMLResponse)
def api_index():
    links = "\n".join(
        f'<li><a href="/api{endpoint}">/api{endpoint}</a></li>'
        for endpoint in PUBLIC_ENDPOINTS
    )
    return (
        "<h1>petring public api reference</h1>"
        "<p>None of these endpoints need authentication.</p>"
        f"<ul>\n{links}\n</ul>"
    )


@router.get("/api/get/server-info", response_model=ServerInfoOut)
def server_info():
    return ServerInfoOut(
        name="petring",
        version=APP_VERSION,
        description="A webring for the Jess Museum Discord server",
        authors=["h4rl", "doloro"],
        license="Undecided",
        source="https://github.com/h4rldev/petring",
        server_uptime=format_duration(app_uptime()),
        system_uptime=format_duration(system_uptime()),
    )


@router.get("/api/get/uptime", response_model=UptimeOut)
def uptime():
    return UptimeOut(
        app_uptime=format_duration(app_uptime()),
        system_uptime=format_duration(system_uptime()),
    )


@router.get("/api/get/users", response_model=MembersOut)
def list_users(db: Session = Depends(get_db)):
    return MembersOut(
        users=[PublicMemberOut.model_validate(m) for m in _ring(db, verified_only=True)]
    )


@router.get("/api/get/users/random")
def random_user(db: Session = Depends(get_db)):
    member = select_random(_ring(db, verified_only=True), is_verified, RandomMode.UNIFORM)
    return _redirect(member.url)


@router.get("/api/get/random-ad", response_model=PublicAdOut)
def get_random_ad(db: Session = Depends(get_db)):
    return PublicAdOut.model_validate(random_ad(db))


@router.get("/user/{username}")
def user_site(username: str, db: Session = Depends(get_db)):
    return _redirect(get_member(db, username).url)


@router.get("/user/{username}/next")
def user_next(username: str, db: Session = Depends(get_db)):
    # unverified members take part in "next"
    member = locate_neighbor(_ring(db, verified_only=False), any_member, username, Direction.NEXT)
    return _redirect(member.url)


@router.get("/user/{username}/prev")
def user_prev(username: str, db: Session = Depends(get_db)):
    member = locate_neighbor(_ring(db, verified_only=True), is_verified, username, Direction.PREV)
    return _redirect(member.url)


@router.get("/user/{username}/random")
def user_random(username: str, db: Session = Depends(get_db)):
    ring = _ring(db, verified_only=True)
    current = next((m for m in ring if m.username == username), None)
    seed_basis = current.id if current else None
    member = select_random(ring, is_verified, RandomMode.SEEDED, seed_basis=seed_basis)
    return _redirect(member.url)
