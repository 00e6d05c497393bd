from contextlib import nullcontext
from typing import List, Optional
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hilltop.core.clock import utcnow
from hilltop.core.dtos.contact import ContactCreate
from hilltop.database.models.contact import Contact
from hilltop.observability.metrics import CatalogMetrics

logger = logging.getLogger(__name__)


class ContactService:

    def __init__(self, session: AsyncSession, metrics: Optional[CatalogMetrics] = None):
        self.session = session
        self.metrics = metrics

    def _timed(self, operation: str):
        if self.metrics is None:
            return nullcontext()
        return self.metrics.time_query(operation, "contacts")

    async def create_contact(self, data: ContactCreate) -> Contact:
        contact = Contact(**data.model_dump(), created_at=utcnow())
        self.session.add(contact)

        with self._timed("insert"):
            await self.session.commit()

        logger.info(f"Stored contact message {contact.id} ({contact.subject})")
        return contact

    async def list_contacts(self) -> List[Contact]:
        with self._timed("select"):
            result = await self.session.scalars(
                select(Contact).order_by(Contact.created_at.desc(), Contact.id.desc())
            )
        return list(result)
