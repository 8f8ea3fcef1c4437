from pathlib import Path
import os
import sys

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Safety defaults for the module-level engine and settings created at import.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from httpx import ASGITransport, AsyncClient

from app.database import Base, build_engine, get_db, make_session_factory
from app.main import app as fastapi_app
from app.models import Form, Theme, User, Vote
from app.services.security import hash_password
from app.services.themes import ThemeRepository
from app.utils.cache import TimedCache
from app.utils.common import new_id

OWNER_PASSWORD = "correct horse battery staple"


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
async def engine(tmp_path: Path):
    db_file = tmp_path / "test.sqlite3"
    engine = build_engine(f"sqlite+aiosqlite:///{db_file}", echo=False)
    if engine.url.get_backend_name() != "sqlite":
        raise RuntimeError("Test database must be SQLite. Refusing to run destructive test setup.")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def theme_repository(clock):
    return ThemeRepository(TimedCache(ttl=5.0, clock=clock))


@pytest.fixture()
async def client(session_factory, theme_repository):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    previous_repository = fastapi_app.state.theme_repository
    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.state.theme_repository = theme_repository

    transport = ASGITransport(app=fastapi_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    fastapi_app.dependency_overrides.clear()
    fastapi_app.state.theme_repository = previous_repository


@pytest.fixture()
async def owner(db_session):
    user = User(email="owner@example.com", password_hash=hash_password(OWNER_PASSWORD))
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture()
async def auth_client(client, owner):
    resp = await client.post(
        "/auth/signin", json={"email": owner.email, "password": OWNER_PASSWORD}
    )
    assert resp.status_code == 200
    return client


@pytest.fixture()
def make_theme(db_session):
    """Insert a theme that already holds ``votes`` votes from distinct voters."""

    async def _make_theme(name="Italian", max_votes=100, votes=0, form=None, theme_id=None):
        theme = Theme(
            id=theme_id or new_id(),
            name=name,
            max_votes=max_votes,
            vote_count=votes,
            form_id=form.id if form else None,
        )
        db_session.add(theme)
        await db_session.flush()
        db_session.add_all(
            [
                Vote(
                    id=f"vote-seed-{theme.id}-{i}",
                    theme_id=theme.id,
                    voter_name=f"Seed Voter {i}",
                    voter_key=f"seed voter {theme.id} {i}",
                )
                for i in range(votes)
            ]
        )
        await db_session.commit()
        return theme

    return _make_theme


@pytest.fixture()
async def owner_form(db_session, owner):
    form = Form(title="Team lunch", creator_id=owner.id, themes=[])
    db_session.add(form)
    await db_session.commit()
    return form
