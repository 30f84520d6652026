"""Unit tests for the rotating confirmation greeting."""
import pytest
from sqlalchemy import event

from dinedesk.db.models import EmailMessageCounter
from dinedesk.services.email.greeting import GREETING_MESSAGES, GreetingService


class TestGreetingRotation:
    """Test greeting counter behaviour."""

    @pytest.mark.asyncio
    async def test_indices_cycle(self, test_db):
        """Six orders give indices 0, 1, 2, 3, 4, 0."""
        service = GreetingService(test_db)

        indices = [await service.next_greeting_index("testbistro") for _ in range(6)]

        assert indices == [0, 1, 2, 3, 4, 0]

    @pytest.mark.asyncio
    async def test_tenants_rotate_independently(self, test_db):
        """Each tenant has its own counter."""
        service = GreetingService(test_db)

        await service.next_greeting_index("testbistro")
        await service.next_greeting_index("testbistro")

        assert await service.next_greeting_index("collectiononly") == 0
        assert await service.next_greeting_index("testbistro") == 2

    @pytest.mark.asyncio
    async def test_greeting_for(self, test_db):
        """Messages follow the fixed order."""
        service = GreetingService(test_db)

        first = await service.greeting_for("testbistro")
        second = await service.greeting_for("testbistro")

        assert first == "Great choice!"
        assert second == "Good choice!"
        assert GREETING_MESSAGES[4] == "Mouth-watering choice!"

    @pytest.mark.asyncio
    async def test_index_follows_stored_counter(self, test_db):
        """The index comes from the counter value the increment wrote."""
        test_db.add(EmailMessageCounter(tenant_id="testbistro", message_counter=7))
        await test_db.commit()

        assert await GreetingService(test_db).next_greeting_index("testbistro") == 2

    @pytest.mark.asyncio
    async def test_increment_and_read_in_one_statement(self, test_db, test_db_engine):
        """No separate read follows the increment, so concurrent callers get distinct values."""
        service = GreetingService(test_db)
        await service.next_greeting_index("testbistro")
        statements = []

        def _record(conn, cursor, statement, parameters, context, executemany):
            statements.append(statement.strip().upper())

        event.listen(test_db_engine.sync_engine, "before_cursor_execute", _record)
        try:
            assert await service.next_greeting_index("testbistro") == 1
        finally:
            event.remove(test_db_engine.sync_engine, "before_cursor_execute", _record)

        assert [s for s in statements if s.startswith("SELECT")] == []
        assert [s for s in statements if s.startswith("UPDATE") and "RETURNING" in s]
