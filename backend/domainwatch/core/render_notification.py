"""Notification Rendering — subject and HTML body for an availability email.

Invariants:
    - Every interpolated value is HTML-escaped
    - The body names the domain, the transition (check) time and the date
      monitoring started, and links to a registrar search for the domain

Design Decisions:
    - Inline styles only: email clients strip <style> blocks inconsistently
    - Timestamps rendered in UTC: the service has a single configured recipient
      but no timezone preference
"""

import html
from datetime import datetime, timezone
from urllib.parse import quote

REGISTRAR_SEARCH_URL = "https://www.namecheap.com/domains/registration/results/?domain={domain}"


def registrar_url(domain_name: str) -> str:
    return REGISTRAR_SEARCH_URL.format(domain=quote(domain_name, safe=".-"))


def render_subject(domain_name: str) -> str:
    return f"Domain available: {domain_name}"


def _format_utc(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def render_html(
    domain_name: str,
    checked_at: datetime,
    monitored_since: datetime | None = None,
) -> str:
    """Render the HTML body announcing that `domain_name` became available."""
    name = html.escape(domain_name)
    link = html.escape(registrar_url(domain_name), quote=True)
    checked = html.escape(_format_utc(checked_at))

    info_lines = [
        "<strong>Status:</strong> available",
        f"<strong>Checked at:</strong> {checked}",
    ]
    if monitored_since is not None:
        since = html.escape(_format_utc(monitored_since).split(" ")[0])
        info_lines.append(f"<strong>Monitored since:</strong> {since}")

    return (
        "<!DOCTYPE html>"
        "<html><head><meta charset=\"utf-8\"></head>"
        "<body style=\"font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; "
        "color: #333; line-height: 1.6;\">"
        "<div style=\"max-width: 600px; margin: 0 auto; padding: 20px;\">"
        "<div style=\"background: #4f46e5; color: #fff; padding: 24px; "
        "border-radius: 8px 8px 0 0;\">"
        "<h1 style=\"margin: 0; font-size: 22px;\">Domain available</h1></div>"
        "<div style=\"background: #fff; padding: 24px; border-radius: 0 0 8px 8px;\">"
        "<p>A domain you are monitoring can now be registered:</p>"
        f"<p style=\"font-size: 24px; font-weight: bold; color: #4f46e5;\">{name}</p>"
        f"<p>{'<br>'.join(info_lines)}</p>"
        f"<p><a href=\"{link}\" style=\"display: inline-block; background: #4f46e5; "
        "color: #fff; padding: 12px 24px; text-decoration: none; border-radius: 5px;\">"
        "Register this domain</a></p>"
        "<p style=\"font-size: 12px; color: #9ca3af;\">"
        "Sent automatically by DomainWatch.</p>"
        "</div></div></body></html>"
    )
