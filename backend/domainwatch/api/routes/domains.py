"""Domain Management — add, list, inspect, pause and remove tracked domains.

Invariants:
    - Every route requires the trigger bearer token
    - Names are normalized and validated before insert; status starts unknown
    - No route writes `status` or `last_checked_at` (only passes do)
    - DELETE removes the domain's notification records with it

Design Decisions:
    - Repositories built per request from the shared session manager: the
      same code path the reconciliation pass writes through
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from domainwatch.api.cron_auth import require_admin_auth
from domainwatch.core.domain_types import DomainId, DomainStatus
from domainwatch.core.errors import (
    DuplicateDomainError,
    InvalidDomainError,
    ResourceNotFoundError,
)
from domainwatch.core.normalize_domain import is_valid_domain_name
from domainwatch.infrastructure.database import (
    DatabaseSessionManager,
    get_db_manager,
)
from domainwatch.schemas.domain import (
    DomainActiveUpdate,
    DomainCreate,
    DomainResponse,
    NotificationResponse,
)
from domainwatch.services.domain_repository import (
    SqlDomainRepository,
    SqlNotificationRepository,
)

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/domains", tags=["domains"],
    dependencies=[Depends(require_admin_auth)],
)


def get_domain_repository(
    manager: DatabaseSessionManager = Depends(get_db_manager),
) -> SqlDomainRepository:
    return SqlDomainRepository(manager.session)


def get_notification_repository(
    manager: DatabaseSessionManager = Depends(get_db_manager),
) -> SqlNotificationRepository:
    return SqlNotificationRepository(manager.session)


async def get_domain_or_404(
    domain_id: UUID, domains: SqlDomainRepository,
):
    domain = await domains.get(DomainId(domain_id))
    if domain is None:
        raise ResourceNotFoundError("Domain", str(domain_id))
    return domain


@router.post(
    "", response_model=DomainResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_domain(
    body: DomainCreate,
    domains: SqlDomainRepository = Depends(get_domain_repository),
):
    """Start monitoring a domain."""
    if not is_valid_domain_name(body.name):
        raise InvalidDomainError(body.name)
    if await domains.get_by_name(body.name) is not None:
        raise DuplicateDomainError(body.name)
    domain = await domains.insert(body.name)
    logger.info(f"Domain {domain.name} added", extra={"domain": domain.name})
    return domain


@router.get("", response_model=list[DomainResponse])
async def list_domains(
    status_filter: DomainStatus | None = Query(None, alias="status"),
    active: bool | None = Query(None),
    domains: SqlDomainRepository = Depends(get_domain_repository),
):
    """All tracked domains, newest first."""
    return await domains.list_all(status=status_filter, active=active)


@router.get("/{domain_id}", response_model=DomainResponse)
async def get_domain(
    domain_id: UUID,
    domains: SqlDomainRepository = Depends(get_domain_repository),
):
    return await get_domain_or_404(domain_id, domains)


@router.patch("/{domain_id}", response_model=DomainResponse)
async def update_domain(
    domain_id: UUID,
    body: DomainActiveUpdate,
    domains: SqlDomainRepository = Depends(get_domain_repository),
):
    """Pause or resume monitoring; status is left untouched."""
    domain = await domains.set_active(DomainId(domain_id), body.active)
    if domain is None:
        raise ResourceNotFoundError("Domain", str(domain_id))
    logger.info(
        f"Domain {domain.name} {'resumed' if body.active else 'paused'}",
        extra={"domain": domain.name},
    )
    return domain


@router.delete("/{domain_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_domain(
    domain_id: UUID,
    domains: SqlDomainRepository = Depends(get_domain_repository),
):
    """Stop monitoring and drop the notification history."""
    if not await domains.delete(DomainId(domain_id)):
        raise ResourceNotFoundError("Domain", str(domain_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{domain_id}/notifications", response_model=list[NotificationResponse],
)
async def list_notifications(
    domain_id: UUID,
    domains: SqlDomainRepository = Depends(get_domain_repository),
    notifications: SqlNotificationRepository = Depends(get_notification_repository),
):
    """Notification attempts for one domain, newest first."""
    await get_domain_or_404(domain_id, domains)
    return await notifications.list_for_domain(DomainId(domain_id))
