import os
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Force test config before importing app modules.
TEST_DB_PATH = Path(tempfile.gettempdir()) / "petring_integration_test.db"
if TEST_DB_PATH.exists():
    TEST_DB_PATH.unlink()

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["BOT_TOKEN"] = "test-bot-token"
os.environ["ACCESS_TOKEN_SECRET"] = "test-access-secret"
os.environ["REFRESH_TOKEN_SECRET"] = "test-refresh-secret"
os.environ["LOG_LEVEL"] = "WARNING"

from petring.main import app
from petring.core.config import settings
from petring.core.security import TokenAuthority
from petring.core.time import now_rfc3339
from petring.db.session import Base, SessionLocal, engine
from petring.models.member import Member


BOT_TOKEN = "test-bot-token"


@pytest.fixture()
def client():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    app.state.token_authority = TokenAuthority.from_settings(settings)

    with TestClient(app) as tc:
        yield tc


@pytest.fixture()
def bot_tokens(client):
    resp = client.post("/bot/setup", json={"bot_token": BOT_TOKEN})
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture()
def bot_headers(bot_tokens):
    return {"Authorization": f"Bearer {bot_tokens['access_token']}"}


@pytest.fixture()
def seed_members(client):
    """
    Insert members directly, in order, so ids are 1..n.
    Each entry is (username, verified).
    """

    def _seed(entries):
        db = SessionLocal()
        try:
            rows = []
            for username, verified in entries:
                row = Member(
                    username=username,
                    discord_id=1000 + len(rows),
                    url=f"https://{username}.example/",
                    verified=verified,
                    created_at=now_rfc3339(),
                    edited_at="",
                    verified_at=now_rfc3339() if verified else "",
                )
                db.add(row)
                db.commit()
                db.refresh(row)
                rows.append((row.id, row.username, row.discord_id))
            return rows
        finally:
            db.close()

    return _seed
