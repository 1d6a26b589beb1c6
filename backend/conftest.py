"""Global pytest fixtures for testing."""

import contextlib
import json
from collections.abc import AsyncGenerator
from typing import Any

import dotenv
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from tourcms_api.main import app
from tourcms_core.config import TranslationConfig
from tourcms_core.services.translation_providers import TranslationProvider
from tourcms_database import Base
from tourcms_database.models import Blog, SectionContent, TourPackage
from tourcms_database.session import get_session

with contextlib.suppress(OSError):
    dotenv.load_dotenv()

# In-memory SQLite shared by every connection of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class MockArqRedis:
    """Mock ArqRedis for testing."""

    def __init__(self):
        self.enqueued_jobs: list[tuple[str, tuple[Any, ...]]] = []
        self.fail_enqueue = False

    async def enqueue_job(self, func_name: str, *args: Any, **kwargs: Any) -> None:
        """Mock enqueue_job that records calls without actually queuing."""
        if self.fail_enqueue:
            raise ConnectionError("Redis connection refused")
        self.enqueued_jobs.append((func_name, args))

    def reset(self) -> None:
        """Reset recorded jobs and failure mode."""
        self.enqueued_jobs.clear()
        self.fail_enqueue = False


class FakeTranslationProvider(TranslationProvider):
    """
    Deterministic provider that prefixes text with the target language.

    ``failures`` maps a source text to a list of exceptions raised, in
    order, on the calls for that text before it succeeds.
    """

    name = "fake"

    def __init__(self):
        self.calls: list[tuple[str, str, str]] = []
        self.failures: dict[str, list[Exception]] = {}

    async def translate(self, text: str, source: str, target: str) -> str:
        self.calls.append((text, source, target))
        pending = self.failures.get(text)
        if pending:
            raise pending.pop(0)
        return f"[{target}] {text}"

    def calls_for(self, target: str) -> list[str]:
        return [text for text, _, tgt in self.calls if tgt == target]


# Global mock redis instance for testing
mock_redis = MockArqRedis()


@pytest.fixture
def translation_config() -> TranslationConfig:
    """Translation config with pacing disabled."""
    return TranslationConfig(
        provider="google",
        deepl_api_key="",
        source_language="id",
        target_languages=["en", "de", "nl", "zh"],
        inter_language_delay_seconds=0,
        rate_limit_backoff_seconds=0,
        request_delay_seconds=0,
    )


@pytest.fixture
def fake_provider() -> FakeTranslationProvider:
    """Provide a fresh fake translation provider."""
    return FakeTranslationProvider()


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database for one test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    fake_provider: FakeTranslationProvider,
    translation_config: TranslationConfig,
) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with database, redis and translator overrides."""
    from tourcms_api.dependencies import (
        get_redis_pool,
        get_translation_config,
        get_translation_provider,
    )

    async def override_get_session():
        yield db_session

    async def override_get_redis_pool():
        return mock_redis

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_redis_pool] = override_get_redis_pool
    app.dependency_overrides[get_translation_provider] = lambda: fake_provider
    app.dependency_overrides[get_translation_config] = lambda: translation_config

    # Reset mock redis state before each test
    mock_redis.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def test_mock_redis() -> MockArqRedis:
    """Provide access to the mock redis instance for testing."""
    return mock_redis


@pytest_asyncio.fixture
async def bromo_blog(db_session: AsyncSession) -> Blog:
    """Create a published blog post."""
    blog = Blog(
        slug="panduan-bromo",
        title="Panduan Bromo",
        excerpt="Ringkasan perjalanan ke Bromo",
        content="<p>Matahari terbit di Bromo sangat indah.</p>",
        author="Tim TourCMS",
        category="Petualangan",
        tags=json.dumps(["bromo", "jawa timur"]),
        status="published",
    )
    db_session.add(blog)
    await db_session.commit()
    await db_session.refresh(blog)
    return blog


@pytest_asyncio.fixture
async def ijen_package(db_session: AsyncSession) -> TourPackage:
    """Create a published tour package with structured fields."""
    package = TourPackage(
        title="Kawah Ijen",
        description="Api biru di malam hari",
        price=1500000,
        duration="2 hari",
        difficulty="Sedang",
        includes=json.dumps(["Transportasi", "Pemandu"]),
        itinerary=json.dumps(
            [
                {"day": 1, "title": "Berangkat", "description": "Jemput di hotel"},
                {"day": 2, "title": "Pendakian", "description": "Mendaki ke kawah"},
            ]
        ),
        faqs="not valid json",
        status="published",
    )
    db_session.add(package)
    await db_session.commit()
    await db_session.refresh(package)
    return package


@pytest_asyncio.fixture
async def hero_section(db_session: AsyncSession) -> SectionContent:
    """Create the hero section."""
    section = SectionContent(
        section_id="hero",
        title="Jelajahi Indonesia",
        subtitle="Petualangan menanti",
        button_text="Pesan sekarang",
        stats=json.dumps([{"value": "500+", "label": "Wisatawan"}]),
    )
    db_session.add(section)
    await db_session.commit()
    await db_session.refresh(section)
    return section
