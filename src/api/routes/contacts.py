"""Directory gateway endpoints: bulk contact list and contact search."""

import logging
import time
from collections.abc import Callable

from fastapi import APIRouter, Depends, Request

from api.dependencies import get_directory_client
from api.logging import RequestLog, log_request
from api.models.responses import (
    ContactListResponse,
    ErrorCodes,
    SearchRequest,
    SearchResponse,
)
from core.errors import UpstreamAuthError, UpstreamRequestError, ValidationError
from core.hubspot_client import HubSpotClient
from services.directory import list_contacts, search_contacts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _record_failure(request_log: RequestLog, exc: Exception, start_time: float):
    if isinstance(exc, ValidationError):
        request_log.status_code = 400
        request_log.error_code = ErrorCodes.INVALID_REQUEST
    elif isinstance(exc, UpstreamAuthError):
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.UPSTREAM_AUTH_ERROR
    elif isinstance(exc, UpstreamRequestError):
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.UPSTREAM_ERROR
    else:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
    request_log.error_message = str(exc)
    request_log.processing_time_ms = int((time.time() - start_time) * 1000)


def _write_log(request_log: RequestLog):
    # Don't fail the request if logging fails
    try:
        log_request(request_log)
    except Exception as e:
        logger.warning("Could not write request log %s: %s", request_log.request_id, e)


@router.get("", response_model=ContactListResponse)
async def list_contacts_endpoint(
    request: Request,
    client_factory: Callable[[], HubSpotClient] = Depends(get_directory_client),
):
    """Return one page of contacts with their company details merged in."""
    start_time = time.time()
    request_log = RequestLog(
        endpoint="/contacts",
        method="GET",
        client_ip=get_client_ip(request),
    )

    try:
        result = await list_contacts(client_factory())

        request_log.status_code = 200
        request_log.result_count = len(result.contacts)
        request_log.enrichment_degraded = result.enrichment_degraded
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        return ContactListResponse(contacts=result.contacts)

    except Exception as e:
        _record_failure(request_log, e, start_time)
        raise

    finally:
        _write_log(request_log)


@router.post("/search", response_model=SearchResponse)
async def search_contacts_endpoint(
    request: Request,
    body: SearchRequest | None = None,
    client_factory: Callable[[], HubSpotClient] = Depends(get_directory_client),
):
    """
    Search contacts by name, email, phone or company.

    Returns at most 50 matches in the order HubSpot yields them.
    """
    start_time = time.time()
    body = body or SearchRequest()
    request_log = RequestLog(
        endpoint="/contacts/search",
        method="POST",
        client_ip=get_client_ip(request),
        search_query=body.query,
        search_type=body.search_type,
    )

    try:
        result = await search_contacts(client_factory(), body.query, body.search_type)

        request_log.status_code = 200
        request_log.result_count = len(result.contacts)
        request_log.enrichment_degraded = result.enrichment_degraded
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        return SearchResponse(results=result.contacts, total=len(result.contacts))

    except Exception as e:
        _record_failure(request_log, e, start_time)
        raise

    finally:
        _write_log(request_log)
