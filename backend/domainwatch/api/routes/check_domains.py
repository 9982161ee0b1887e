"""Reconciliation Trigger — the scheduler's entry point into a pass.

Invariants:
    - GET runs exactly one pass after the configuration guard and bearer check
    - Per-domain failures still answer 200 with the full summary
    - HEAD answers 200 without a body and without touching anything
    - POST/PUT/PATCH/DELETE answer 405 in the standard error envelope

Design Decisions:
    - Pass construction behind get_pass_factory: tests swap in fakes through
      dependency_overrides without patching httpx or the database
"""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from domainwatch.api.cron_auth import require_trigger_auth
from domainwatch.config import Settings
from domainwatch.infrastructure.database import (
    DatabaseSessionManager,
    get_db_manager,
)
from domainwatch.services.reconciliation_pass import (
    ReconciliationPass,
    reconciliation_pass_from_settings,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["reconciliation"])

CHECK_PATH = "/check-domains"

PassFactory = Callable[[Settings], AbstractAsyncContextManager[ReconciliationPass]]


def get_pass_factory(
    manager: DatabaseSessionManager = Depends(get_db_manager),
) -> PassFactory:
    """Build passes wired to the live oracle, email provider and database."""
    def factory(settings: Settings) -> AbstractAsyncContextManager[ReconciliationPass]:
        return reconciliation_pass_from_settings(settings, manager.session)
    return factory


@router.head(CHECK_PATH)
async def check_domains_probe():
    """Liveness probe for the trigger route."""
    return Response(status_code=status.HTTP_200_OK)


@router.api_route(CHECK_PATH, methods=["POST", "PUT", "PATCH", "DELETE"])
async def check_domains_method_not_allowed():
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={
            "success": False,
            "error": "Method not allowed",
            "message": "Use GET instead.",
        },
        headers={"Allow": "GET, HEAD"},
    )


@router.get(CHECK_PATH)
async def check_domains(
    settings: Settings = Depends(require_trigger_auth),
    pass_factory: PassFactory = Depends(get_pass_factory),
):
    """Run one reconciliation pass and return its summary."""
    logger.info("Starting domain availability check")
    async with pass_factory(settings) as reconciliation:
        summary = await reconciliation.run()
    return summary.to_response()
