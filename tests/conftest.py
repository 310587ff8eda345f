import asyncio
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="lead-intake-tests-")

os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/leads.db"
os.environ["LOG_FORMAT"] = "console"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from intake_api.db.base import Base  # noqa: E402
from intake_api.db.session import create_database_engine, dispose_engine  # noqa: E402
from intake_api.main import app  # noqa: E402


async def _reset_database() -> None:
    engine = create_database_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await dispose_engine()


@pytest.fixture
def client():
    asyncio.run(_reset_database())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def full_lead():
    return {
        "name": "Maria Lopez",
        "email": "maria.lopez@example.com",
        "phone": "+15125550123",
        "debtCategory": "unsecured",
        "debtTypes": ["Medical Bills", "Credit Cards"],
        "totalDebtAmount": 18250.5,
        "numberOfCreditors": 4,
        "monthlyDebtPayment": 640,
        "creditScoreRange": "550-649",
        "address": "12 Elm Street",
        "city": "Austin",
        "state": "TX",
        "zipcode": "78701",
    }
