"""Tests for the registration email templates."""

from fahrschule.schemas.registration import RegistrationSubmission
from fahrschule.services.email_templates import (
    MESSAGE_PLACEHOLDER,
    PLACEHOLDER,
    internal_alert,
    operator_notification,
)


class TestOperatorNotification:
    def test_all_values_embedded(self, full_form, full_submission):
        subject, text, html = operator_notification(full_submission)

        assert subject == "Neue Anmeldung von Max Mustermann"
        for value in full_form.values():
            assert value in text
            assert value in html
        assert PLACEHOLDER not in html
        assert MESSAGE_PLACEHOLDER not in html

    def test_only_first_name(self):
        submission = RegistrationSubmission.model_validate({"vorname": "Max"})
        subject, text, html = operator_notification(submission)

        assert "Max" in html
        assert html.count(PLACEHOLDER) == 6
        assert text.count(PLACEHOLDER) == 6
        assert MESSAGE_PLACEHOLDER in html
        assert MESSAGE_PLACEHOLDER in text
        assert subject == "Neue Anmeldung von Max N/A"

    def test_placeholder_per_missing_field(self):
        submission = RegistrationSubmission.model_validate({"vorname": "Max"})
        _, text, _ = operator_notification(submission)

        for label in ("Nachname", "E-Mail", "Telefon", "Geburtsdatum"):
            assert f"{label}: N/A" in text
        assert "Gewünschte Klasse: N/A" in text
        assert "Gewünschter Starttermin: N/A" in text

    def test_empty_string_is_missing(self):
        submission = RegistrationSubmission.model_validate({"vorname": "", "nachricht": ""})
        _, text, _ = operator_notification(submission)

        assert "Vorname: N/A" in text
        assert MESSAGE_PLACEHOLDER in text

    def test_html_escapes_markup(self):
        submission = RegistrationSubmission.model_validate({"nachricht": "<b>Hallo</b> & Tschüss"})
        _, text, html = operator_notification(submission)

        assert "&lt;b&gt;Hallo&lt;/b&gt; &amp; Tschüss" in html
        assert "<b>Hallo</b> & Tschüss" in text


class TestInternalAlert:
    def test_fixed_content(self):
        subject, text, html = internal_alert()
        assert subject == "Neue Anmeldung"
        assert text == "Eine neue Anmeldung ist eingegangen."
        assert html == "<p>Eine neue Anmeldung ist eingegangen.</p>"
