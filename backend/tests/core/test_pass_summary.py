"""Pass summary — JSON shape returned to the scheduler."""

from datetime import datetime, timezone

from domainwatch.core.domain_types import DomainStatus
from domainwatch.core.pass_summary import DomainCheckResult, failed_result, summarize

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def test_empty_pass_summary():
    summary = summarize([], 3, NOW)
    assert summary.to_response() == {
        "success": True,
        "checked": 0,
        "available": 0,
        "domains": [],
        "duration": 3,
        "timestamp": NOW.isoformat(),
    }


def test_previous_status_only_when_changed():
    changed = DomainCheckResult(
        "a.com", DomainStatus.AVAILABLE, True, previous_status=DomainStatus.REGISTERED,
    )
    same = DomainCheckResult("b.com", DomainStatus.REGISTERED, False)
    assert changed.to_dict() == {
        "domain": "a.com", "status": "available", "changed": True,
        "previousStatus": "registered",
    }
    assert same.to_dict() == {"domain": "b.com", "status": "registered", "changed": False}


def test_failed_result_keeps_status_and_carries_error():
    r = failed_result("c.com", "registered", "Domain check timeout for c.com after 8s")
    assert r.to_dict() == {
        "domain": "c.com", "status": "registered", "changed": False,
        "error": "Domain check timeout for c.com after 8s",
    }
    assert not r.succeeded


def test_available_count_ignores_failed_checks():
    results = [
        DomainCheckResult("a.com", DomainStatus.AVAILABLE, True, DomainStatus.UNKNOWN),
        DomainCheckResult("b.com", DomainStatus.AVAILABLE, False),
        failed_result("c.com", DomainStatus.AVAILABLE, "boom"),
        DomainCheckResult("d.com", DomainStatus.REGISTERED, False),
    ]
    summary = summarize(results, 1200, NOW)
    assert summary.checked_count == 4
    assert summary.available_count == 2
    assert len(summary.to_response()["domains"]) == 4
