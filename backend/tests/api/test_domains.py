"""Management API — add, list, inspect, pause and delete tracked domains.

Invariants:
    - All routes require the bearer token
    - Names normalized on insert; invalid → 400, duplicate → 409
    - PATCH toggles active only; DELETE cascades notification records
"""

from uuid import uuid4

from domainwatch.api.routes.domains import get_domain_repository
from domainwatch.core.domain_types import DomainStatus, NotificationOutcome
from domainwatch.main import app
from domainwatch.services.domain_repository import (
    SqlDomainRepository,
    SqlNotificationRepository,
)
from tests.services.fakes import utc

AUTH = {"Authorization": "Bearer test-cron-secret"}


async def test_routes_require_token(client):
    res = await client.get("/api/v1/domains")
    assert res.status_code == 401
    res = await client.post("/api/v1/domains", json={"name": "example.com"})
    assert res.status_code == 401


async def test_create_normalizes_and_starts_unknown(client):
    res = await client.post(
        "/api/v1/domains", json={"name": "HTTPS://WWW.Example.COM/"}, headers=AUTH,
    )
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "example.com"
    assert body["status"] == "unknown"
    assert body["active"] is True
    assert body["last_checked_at"] is None


async def test_create_invalid_name_is_400(client):
    res = await client.post(
        "/api/v1/domains", json={"name": "not a domain"}, headers=AUTH,
    )
    assert res.status_code == 400
    assert res.json()["success"] is False
    assert res.json()["error"] == "Invalid domain"


async def test_create_missing_body_field_is_400(client):
    res = await client.post("/api/v1/domains", json={}, headers=AUTH)
    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "body.name"


async def test_create_duplicate_is_409(client):
    await client.post("/api/v1/domains", json={"name": "example.com"}, headers=AUTH)
    res = await client.post(
        "/api/v1/domains", json={"name": "www.example.com"}, headers=AUTH,
    )
    assert res.status_code == 409
    assert res.json()["error"] == "Duplicate domain"


async def test_duplicate_found_by_lookup_before_insert(client, test_db_manager):
    inserts = []

    class RecordingRepository(SqlDomainRepository):
        async def insert(self, name):
            inserts.append(name)
            return await super().insert(name)

    app.dependency_overrides[get_domain_repository] = (
        lambda: RecordingRepository(test_db_manager.session)
    )
    await client.post("/api/v1/domains", json={"name": "example.com"}, headers=AUTH)
    res = await client.post(
        "/api/v1/domains", json={"name": "https://Example.com/"}, headers=AUTH,
    )

    assert res.status_code == 409
    assert res.json()["message"] == "Domain 'example.com' is already being monitored"
    assert inserts == ["example.com"]


async def test_list_and_filter(client, domain_repo):
    a = await domain_repo.insert("a.com")
    b = await domain_repo.insert("b.com")
    await domain_repo.update_status(a.id, DomainStatus.AVAILABLE, utc(2026, 3, 1))
    await domain_repo.set_active(b.id, False)

    res = await client.get("/api/v1/domains", headers=AUTH)
    assert res.status_code == 200
    assert {d["name"] for d in res.json()} == {"a.com", "b.com"}

    res = await client.get("/api/v1/domains?status=available", headers=AUTH)
    assert [d["name"] for d in res.json()] == ["a.com"]

    res = await client.get("/api/v1/domains?active=false", headers=AUTH)
    assert [d["name"] for d in res.json()] == ["b.com"]


async def test_get_one_and_404(client, domain_repo):
    domain = await domain_repo.insert("example.com")

    res = await client.get(f"/api/v1/domains/{domain.id}", headers=AUTH)
    assert res.status_code == 200
    assert res.json()["id"] == str(domain.id)

    res = await client.get(f"/api/v1/domains/{uuid4()}", headers=AUTH)
    assert res.status_code == 404
    assert res.json()["error"] == "Not found"


async def test_patch_toggles_active_only(client, domain_repo):
    domain = await domain_repo.insert("example.com")

    res = await client.patch(
        f"/api/v1/domains/{domain.id}",
        json={"active": False, "status": "available"},
        headers=AUTH,
    )
    assert res.status_code == 200
    assert res.json()["active"] is False
    assert res.json()["status"] == "unknown"


async def test_patch_missing_domain_is_404(client):
    res = await client.patch(
        f"/api/v1/domains/{uuid4()}", json={"active": True}, headers=AUTH,
    )
    assert res.status_code == 404


async def test_delete_cascades_notifications(client, domain_repo, test_db_manager):
    domain = await domain_repo.insert("example.com")
    notifications = SqlNotificationRepository(test_db_manager.session)
    await notifications.append(domain.id, NotificationOutcome.SENT, utc(2026, 3, 1))

    res = await client.delete(f"/api/v1/domains/{domain.id}", headers=AUTH)
    assert res.status_code == 204

    assert await domain_repo.get(domain.id) is None
    assert await notifications.list_for_domain(domain.id) == []

    res = await client.delete(f"/api/v1/domains/{domain.id}", headers=AUTH)
    assert res.status_code == 404


async def test_notification_log_newest_first(client, domain_repo, test_db_manager):
    domain = await domain_repo.insert("example.com")
    notifications = SqlNotificationRepository(test_db_manager.session)
    await notifications.append(
        domain.id, NotificationOutcome.FAILED, utc(2026, 3, 1, 9), error_detail="HTTP 500",
    )
    await notifications.append(
        domain.id, NotificationOutcome.SENT, utc(2026, 3, 2, 9), provider_message_id="msg_1",
    )

    res = await client.get(f"/api/v1/domains/{domain.id}/notifications", headers=AUTH)

    assert res.status_code == 200
    body = res.json()
    assert [n["outcome"] for n in body] == ["sent", "failed"]
    assert body[0]["provider_message_id"] == "msg_1"
    assert body[1]["error_detail"] == "HTTP 500"
