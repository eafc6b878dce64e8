"""Email templates for registration notifications.

Each template returns ``(subject, text, html)``. Missing or empty form
fields render as a placeholder instead of failing.
"""

from __future__ import annotations

from html import escape

from fahrschule.schemas.registration import RegistrationSubmission

PLACEHOLDER = "N/A"
MESSAGE_PLACEHOLDER = "Keine Nachricht hinterlassen."

INTERNAL_ALERT_SUBJECT = "Neue Anmeldung"
INTERNAL_ALERT_TEXT = "Eine neue Anmeldung ist eingegangen."

_CELL = "padding: 8px; border: 1px solid #ddd;"
_HEADING = "border-bottom: 2px solid #eee; padding-bottom: 5px; color: #555;"


def _or_placeholder(value: str | None, placeholder: str = PLACEHOLDER) -> str:
    return value or placeholder


def _table(rows: list[tuple[str, str]]) -> str:
    lines = ['<table style="width: 100%; border-collapse: collapse;">']
    for i, (label, value) in enumerate(rows):
        shade = ' style="background-color: #f9f9f9;"' if i % 2 == 0 else ""
        width = " width: 30%;" if i == 0 else ""
        lines.append(
            f"<tr{shade}>"
            f'<td style="{_CELL}{width}"><strong>{label}:</strong></td>'
            f'<td style="{_CELL}">{escape(value)}</td>'
            "</tr>"
        )
    lines.append("</table>")
    return "\n".join(lines)


def operator_notification(submission: RegistrationSubmission) -> tuple[str, str, str]:
    """Detailed notification for the driving school with every submitted value."""
    first_name = _or_placeholder(submission.first_name)
    last_name = _or_placeholder(submission.last_name)
    email = _or_placeholder(submission.email)
    phone = _or_placeholder(submission.phone)
    birth_date = _or_placeholder(submission.birth_date)
    desired_class = _or_placeholder(submission.desired_class)
    start_date = _or_placeholder(submission.desired_start_date)
    message = _or_placeholder(submission.message, MESSAGE_PLACEHOLDER)

    subject = f"Neue Anmeldung von {first_name} {last_name}"

    text = f"""Neue Anmeldung erhalten:

Persönliche Informationen:
-------------------------
Vorname: {first_name}
Nachname: {last_name}
E-Mail: {email}
Telefon: {phone}
Geburtsdatum: {birth_date}

Kursdetails:
------------
Gewünschte Klasse: {desired_class}
Gewünschter Starttermin: {start_date}

Zusätzliche Nachricht:
----------------------
{message}
"""

    personal = _table([
        ("Vorname", first_name),
        ("Nachname", last_name),
        ("E-Mail-Adresse", email),
        ("Telefonnummer", phone),
        ("Geburtsdatum", birth_date),
    ])
    course = _table([
        ("Gewünschte Klasse", desired_class),
        ("Gewünschter Starttermin", start_date),
    ])

    html = f"""<div style="font-family: Arial, sans-serif; line-height: 1.6;">
<h2 style="color: #333;">Neue Anmeldung über Ihre Webseite</h2>
<p>Sie haben eine neue Fahrschul-Anmeldung erhalten. Hier sind die Details:</p>
<h3 style="{_HEADING}">Persönliche Informationen</h3>
{personal}
<h3 style="{_HEADING} margin-top: 20px;">Kursdetails</h3>
{course}
<h3 style="{_HEADING} margin-top: 20px;">Zusätzliche Nachricht</h3>
<div style="padding: 10px; border: 1px solid #ddd; background-color: #f9f9f9; border-radius: 5px;">
<p style="margin: 0;">{escape(message)}</p>
</div>
</div>"""

    return subject, text, html


def internal_alert() -> tuple[str, str, str]:
    """Fixed-content alert that a submission arrived. Carries no form data."""
    return INTERNAL_ALERT_SUBJECT, INTERNAL_ALERT_TEXT, f"<p>{INTERNAL_ALERT_TEXT}</p>"
