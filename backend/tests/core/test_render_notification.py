"""Tests for the availability email — subject, body content, escaping."""

from datetime import datetime, timezone

from domainwatch.core.render_notification import (
    registrar_url,
    render_html,
    render_subject,
)

CHECKED = datetime(2026, 5, 4, 9, 30, tzinfo=timezone.utc)


def test_subject_names_domain():
    assert render_subject("example.com") == "Domain available: example.com"


def test_body_names_domain_time_and_link():
    body = render_html("example.com", CHECKED, datetime(2026, 1, 2, tzinfo=timezone.utc))
    assert "example.com" in body
    assert "2026-05-04 09:30 UTC" in body
    assert "Monitored since:</strong> 2026-01-02" in body
    assert registrar_url("example.com") in body


def test_monitored_since_is_optional():
    body = render_html("example.com", CHECKED)
    assert "Monitored since" not in body


def test_naive_timestamps_are_treated_as_utc():
    body = render_html("example.com", datetime(2026, 5, 4, 9, 30))
    assert "2026-05-04 09:30 UTC" in body


def test_domain_is_escaped():
    body = render_html("<script>.com", CHECKED)
    assert "<script>.com" not in body
    assert "&lt;script&gt;.com" in body


def test_registrar_url_points_at_search():
    assert registrar_url("example.com") == (
        "https://www.namecheap.com/domains/registration/results/?domain=example.com"
    )
