"""
CaseDesk Backend: Data Store Gateway Tests
==========================================

What:  Runs the real DataStore against a temporary SQLite file.

What we test:
    ✅ create_all builds both tables
    ✅ INSERT reports the generated key, SELECT returns dict rows
    ✅ UPDATE/DELETE report the affected-row count (0 for a missing id)
    ✅ Driver failures surface as DatabaseError with detail in the context
    ✅ ping() reports reachability instead of raising
"""

from datetime import datetime

import pytest
import pytest_asyncio
from sqlalchemy import text

from casedesk.database import DataStore, build_engine
from casedesk.exceptions import DatabaseError
from casedesk.services.case_service import DELETE_CASE, INSERT_CASE, SELECT_CASES
from casedesk.services.note_service import INSERT_NOTE, SELECT_NOTES, UPDATE_NOTE_CONTENT


@pytest_asyncio.fixture
async def store(settings):
    data_store = DataStore.from_settings(settings)
    await data_store.create_all()
    yield data_store
    await data_store.dispose()


def case_row(case_id: str, created_at: str = "2024-06-10 08:00:00") -> dict:
    return {
        "id": case_id,
        "title": "Printer jam",
        "category": "Hardware",
        "priority": "Low",
        "description": None,
        "resolution": None,
        "created_at": datetime.fromisoformat(created_at),
        "resolved_at": None,
    }


class TestQuery:

    @pytest.mark.asyncio
    async def test_insert_returns_generated_note_id(self, store):
        first = await store.query(INSERT_NOTE, {"category": "a", "content": "one"})
        second = await store.query(INSERT_NOTE, {"category": "b", "content": "two"})

        assert first.inserted_id == 1
        assert second.inserted_id == 2
        assert first.rowcount == 1

    @pytest.mark.asyncio
    async def test_select_returns_dict_rows(self, store):
        await store.query(INSERT_NOTE, {"category": "a", "content": "one"})

        result = await store.query(SELECT_NOTES)

        assert result.rows == [{"id": 1, "category": "a", "content": "one"}]

    @pytest.mark.asyncio
    async def test_update_reports_affected_rows(self, store):
        await store.query(INSERT_NOTE, {"category": "a", "content": "one"})

        hit = await store.query(UPDATE_NOTE_CONTENT, {"content": "changed", "note_id": 1})
        miss = await store.query(UPDATE_NOTE_CONTENT, {"content": "changed", "note_id": 99})

        assert hit.rowcount == 1
        assert miss.rowcount == 0

    @pytest.mark.asyncio
    async def test_delete_missing_case_affects_nothing(self, store):
        result = await store.query(DELETE_CASE, {"case_id": "missing"})
        assert result.rowcount == 0

    @pytest.mark.asyncio
    async def test_select_cases_newest_first(self, store):
        await store.query(INSERT_CASE, case_row("old", "2024-01-01 09:00:00"))
        await store.query(INSERT_CASE, case_row("new", "2024-03-01 09:00:00"))

        result = await store.query(SELECT_CASES)

        assert [row["id"] for row in result.rows] == ["new", "old"]

    @pytest.mark.asyncio
    async def test_duplicate_key_raises_database_error(self, store):
        await store.query(INSERT_CASE, case_row("dup"))

        with pytest.raises(DatabaseError) as info:
            await store.query(INSERT_CASE, case_row("dup"))

        assert info.value.context["error_type"] == "IntegrityError"
        assert "UNIQUE" in info.value.context["detail"]

    @pytest.mark.asyncio
    async def test_failed_statement_does_not_leave_partial_rows(self, store):
        await store.query(INSERT_CASE, case_row("dup"))
        with pytest.raises(DatabaseError):
            await store.query(INSERT_CASE, case_row("dup"))

        result = await store.query(SELECT_CASES)
        assert len(result.rows) == 1

    @pytest.mark.asyncio
    async def test_bound_values_are_not_interpreted_as_sql(self, store):
        hostile = "x'); DROP TABLE notes; --"
        await store.query(INSERT_NOTE, {"category": hostile, "content": hostile})

        result = await store.query(SELECT_NOTES)

        assert result.rows[0]["category"] == hostile


class TestPing:

    @pytest.mark.asyncio
    async def test_ping_reachable(self, store):
        assert await store.ping() is True

    @pytest.mark.asyncio
    async def test_ping_unreachable(self, settings_factory):
        bad = DataStore.from_settings(
            settings_factory(database_url="sqlite+aiosqlite:////nonexistent_dir/casedesk.db")
        )
        try:
            assert await bad.ping() is False
        finally:
            await bad.dispose()

    @pytest.mark.asyncio
    async def test_query_unreachable_raises(self, settings_factory):
        bad = DataStore.from_settings(
            settings_factory(database_url="sqlite+aiosqlite:////nonexistent_dir/casedesk.db")
        )
        try:
            with pytest.raises(DatabaseError) as info:
                await bad.query(text("SELECT 1"))
            assert info.value.context["error_type"] == "OperationalError"
        finally:
            await bad.dispose()


class TestBuildEngine:

    def test_server_engine_gets_configured_pool(self, settings_factory):
        engine = build_engine(
            settings_factory(database_url=None, db_host="db.internal", db_pool_size=4)
        )
        assert engine.url.get_backend_name() == "postgresql"
        assert engine.pool.size() == 4
        engine.sync_engine.dispose()
