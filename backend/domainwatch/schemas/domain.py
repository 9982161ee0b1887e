"""Domain Schemas — management API contracts for tracked domains.

Invariants:
    - DomainCreate.name arrives normalized (scheme, www., case, trailing slash)
    - Hostname validity is checked by the route (InvalidDomainError, 400)

Design Decisions:
    - Normalization in a field_validator: the route receives the canonical key
    - from_attributes on responses: built straight from ORM rows
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domainwatch.core.domain_types import DomainStatus, NotificationOutcome
from domainwatch.core.normalize_domain import normalize_domain


class DomainCreate(BaseModel):
    """Start tracking a domain given as a bare name or a full URL."""
    name: str = Field(min_length=1, max_length=2048)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return normalize_domain(v)


class DomainActiveUpdate(BaseModel):
    """Toggle whether a domain takes part in reconciliation passes."""
    active: bool


class DomainResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    status: DomainStatus
    active: bool
    last_checked_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    domain_id: UUID
    sent_at: datetime
    outcome: NotificationOutcome
    provider_message_id: str | None = None
    error_detail: str | None = None
