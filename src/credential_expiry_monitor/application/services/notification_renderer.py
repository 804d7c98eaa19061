"""Renders one notification event as an email subject and HTML document."""

from __future__ import annotations

from html import escape

from ...domain.entities import NotificationEvent
from ...domain.value_objects import NotificationLevel

SUBJECT_TEMPLATE = "{type} Expiry Alert: {name} - {days} Days Remaining"


class NotificationRenderer:
    """Builds the self-contained HTML alert for a single credential."""

    def __init__(self, product_name: str = "Credential Expiry Monitor") -> None:
        self._product_name = product_name

    def subject(self, event: NotificationEvent) -> str:
        """Subject carrying type, application and countdown for triage."""
        return SUBJECT_TEMPLATE.format(
            type=event.record.credential_type,
            name=event.record.application_name,
            days=event.days_remaining,
        )

    def html_body(self, event: NotificationEvent) -> str:
        """Format HTML email body."""
        record = event.record
        level = NotificationLevel.for_days_remaining(event.days_remaining)
        color = level.color_hex
        name = escape(record.application_name)
        cred_type = escape(str(record.credential_type))
        owners = escape(record.owner_display) or "None"
        expiry = record.expiry_date.strftime("%Y-%m-%d")

        action = ""
        if record.portal_url:
            action = (
                f'<p><a href="{escape(record.portal_url)}" target="_blank">'
                "Manage credentials in the Azure portal</a></p>"
            )

        return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
body {{ font-family: Arial, sans-serif; margin: 20px; }}
.header {{ background-color: {color}; color: white; padding: 15px; border-radius: 5px; }}
.summary {{ background-color: #f8f9fa; padding: 15px; margin: 15px 0; border-radius: 5px; }}
table {{ border-collapse: collapse; width: 100%; margin: 15px 0; }}
th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
th {{ background-color: #f2f2f2; width: 30%; }}
a {{ color: #0066cc; text-decoration: none; }}
a:hover {{ text-decoration: underline; }}
.footer {{ margin-top: 20px; font-size: 12px; color: #6c757d; }}
</style>
</head>
<body>
<div class="header"><h1>{cred_type} Expiry Alert</h1></div>
<div class="summary">
<h2>{name}: {event.days_remaining} days remaining</h2>
<p>A {cred_type.lower()} of this application expires on {expiry}. Please renew it before then.</p>
</div>
<table>
<tr><th>Application</th><td>{name}</td></tr>
<tr><th>Credential Type</th><td>{cred_type}</td></tr>
<tr><th>Expiry Date</th><td>{expiry}</td></tr>
<tr><th>Days Remaining</th><td>{event.days_remaining}</td></tr>
<tr><th>Owners</th><td>{owners}</td></tr>
</table>
{action}
<div class="footer"><p>{escape(self._product_name)}</p></div>
</body>
</html>"""
