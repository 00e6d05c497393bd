from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError
from typing import Any, Dict, List
import logging

from hilltop.core.dependencies import get_contact_service, get_metrics
from hilltop.core.dtos.contact import ContactCreate, ContactCreatedResponse, ContactResponse
from hilltop.core.services.contact_service import ContactService
from hilltop.observability.metrics import CatalogMetrics

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Contacts"])


@router.post("/contact", response_model=ContactCreatedResponse, status_code=201)
async def create_contact(
    payload: Dict[str, Any] = Body(...),
    service: ContactService = Depends(get_contact_service),
    metrics: CatalogMetrics = Depends(get_metrics)
):
    # Validated here rather than by FastAPI so rejected submissions are counted.
    try:
        contact_data = ContactCreate.model_validate(payload)
        contact = await service.create_contact(contact_data)
    except ValidationError as exc:
        metrics.record_contact_submission("error")
        logger.info(f"Rejected contact submission with {exc.error_count()} invalid field(s)")
        raise
    except Exception:
        metrics.record_contact_submission("error")
        raise

    metrics.record_contact_submission("success")
    return ContactCreatedResponse(message="Contact message sent successfully", id=contact.id)


@router.get("/contacts", response_model=List[ContactResponse])
async def list_contacts(service: ContactService = Depends(get_contact_service)):
    return await service.list_contacts()
