"""Rotating greeting used at the top of order confirmations."""
import logging
from typing import Optional
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dinedesk.db.models import EmailMessageCounter

logger = logging.getLogger(__name__)

GREETING_MESSAGES = [
    "Great choice!",
    "Good choice!",
    "Yummy Order!",
    "Perfect Order!",
    "Mouth-watering choice!",
]


class GreetingService:
    """
    Picks the next greeting for a tenant.

    The counter lives in the database so every server instance shares the
    rotation. Each call increments the tenant's row and reads the new value
    back in the same UPDATE ... RETURNING statement, then returns
    ``(counter - 1) % len(GREETING_MESSAGES)``.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _increment(self, tenant_id: str) -> Optional[int]:
        """New counter value, or None when the tenant has no row yet."""
        result = await self.db.execute(
            update(EmailMessageCounter)
            .where(EmailMessageCounter.tenant_id == tenant_id)
            .values(message_counter=EmailMessageCounter.message_counter + 1)
            .returning(EmailMessageCounter.message_counter)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one_or_none()

    async def next_greeting_index(self, tenant_id: str) -> int:
        """Advance the tenant's counter and return the message index."""
        counter = await self._increment(tenant_id)
        if counter is None:
            self.db.add(EmailMessageCounter(tenant_id=tenant_id, message_counter=1))
            try:
                await self.db.commit()
                counter = 1
            except IntegrityError:
                # Another instance created the row first
                await self.db.rollback()
                counter = await self._increment(tenant_id)
                await self.db.commit()
        else:
            await self.db.commit()

        index = (counter - 1) % len(GREETING_MESSAGES)
        logger.debug(f"[GREETING] tenant={tenant_id} counter={counter} index={index}")
        return index

    async def greeting_for(self, tenant_id: str) -> str:
        """Next greeting message for a tenant."""
        return GREETING_MESSAGES[await self.next_greeting_index(tenant_id)]
