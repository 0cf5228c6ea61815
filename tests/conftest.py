import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest
from sqlalchemy import create_engine

_TEST_DIR = Path(tempfile.mkdtemp(prefix="careers-tests-"))
_TEST_DB = _TEST_DIR / "careers-test.db"

TEST_ENV = {
    "ENVIRONMENT": "development",
    "DATA_DIR": str(_TEST_DIR),
    "DATABASE_URL": f"sqlite+aiosqlite:///{_TEST_DB}",
    "LOG_FILE": str(_TEST_DIR / "logs" / "careers-test.log"),
    "LOG_LEVEL": "DEBUG",
    "LOG_JSON": "false",
    "TZ": "UTC",
    "CORS_ORIGINS": "",
    "CANDIDATE_API_URL": "http://candidate-api.test",
    "CANDIDATE_API_TIMEOUT": "5",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value

from careers.domain.base import Base
import careers.domain.models as models  # noqa: E402

# Schema setup and wipes go through the stdlib sqlite3 driver so they never
# touch the event loop a test runs in.
_sync_engine = create_engine(f"sqlite:///{_TEST_DB}")


@pytest.fixture(scope="session", autouse=True)
def _set_test_env():
    """Force deterministic env for tests and reset cached settings."""
    for key, value in TEST_ENV.items():
        os.environ[key] = value

    from careers.core import settings as settings_module

    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()


@pytest.fixture(scope="session", autouse=True)
def _prepare_test_db(_set_test_env):
    Base.metadata.create_all(_sync_engine)
    yield
    _sync_engine.dispose()


def _wipe_db() -> None:
    with _sync_engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture(autouse=True)
def _clean_database_between_tests(request):
    """Wipe all tables before each test to avoid cross-test pollution."""
    if "no_db_cleanup" not in request.keywords:
        _wipe_db()
    yield


@pytest.fixture
def seeded():
    """A job with custom stages, one application and two interviews.

    Returns the ids as a dict: ``job``, ``application``, ``interview``,
    ``other_interview``, ``orphan_application`` (no job) and
    ``foreign_interview`` (belongs to the orphan application).
    """
    from sqlalchemy.orm import Session

    with Session(_sync_engine) as session:
        job = models.Job(title="Backend Engineer")
        job.stages = [
            models.PipelineStage(key="stage-screen", title="Phone Screen", position=0, duration_minutes=30),
            models.PipelineStage(key="stage-tech", title="Technical Interview", position=1, duration_minutes=90),
            models.PipelineStage(key="stage-final", title="Final Round", position=2),
        ]
        session.add(job)
        session.flush()

        application = models.JobApplication(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            job_id=job.id,
            status="stage-tech",
            updated_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )
        orphan = models.JobApplication(
            first_name="Grace",
            last_name="Hopper",
            email="grace@example.com",
            job_id=None,
            status="interviewing",
        )
        session.add_all([application, orphan])
        session.flush()

        interview = models.ApplicationInterview(
            application_id=application.id,
            title="Technical deep dive",
            description="Systems design with the platform team",
            scheduled_at=datetime(2025, 3, 12, 14, 0, tzinfo=timezone.utc),
            location="Video call",
            stage="Technical Interview",
        )
        other_interview = models.ApplicationInterview(
            application_id=application.id,
            title="Meet the team",
            stage="Team Chat",
        )
        foreign_interview = models.ApplicationInterview(
            application_id=orphan.id,
            title="Intro call",
        )
        session.add_all([interview, other_interview, foreign_interview])
        session.commit()

        return {
            "job": job.id,
            "application": application.id,
            "interview": interview.id,
            "other_interview": other_interview.id,
            "orphan_application": orphan.id,
            "foreign_interview": foreign_interview.id,
        }
