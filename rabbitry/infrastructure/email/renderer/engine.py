from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, select_autoescape

from rabbitry.config.settings import Settings
from rabbitry.domain.models.reminder import Reminder
from rabbitry.infrastructure.email.models import EmailMessage
from rabbitry.utils.datetime_tz import format_day_date

FALLBACK_LOCALE = "en"
REMINDER_TEMPLATE = "reminder"
TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class EmailTemplateRenderer:
    """Renders emails from ``templates/<locale>/<key>/{subject.txt,body.txt,body.html}.j2``.

    Missing templates in the requested locale fall back to English. The HTML
    body is optional and is wrapped in ``<locale>/_layout.html.j2`` when present.
    """

    def __init__(self, env: Environment, settings: Settings) -> None:
        self.env = env
        self.settings = settings

    @classmethod
    def create_default(cls, settings: Settings) -> EmailTemplateRenderer:
        env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(["html", "xml", "html.j2"]),
        )
        env.filters["day_date"] = format_day_date
        return cls(env, settings)

    def _candidates(self, locale: str, name: str) -> list[str]:
        names = [f"{locale}/{name}"]
        if locale != FALLBACK_LOCALE:
            names.append(f"{FALLBACK_LOCALE}/{name}")
        return names

    def _template(self, locale: str, name: str) -> Template:
        return self.env.select_template(self._candidates(locale, name))

    def _optional(self, locale: str, name: str) -> Template | None:
        try:
            return self._template(locale, name)
        except TemplateNotFound:
            return None

    def render(
        self,
        template_key: str,
        context: Mapping[str, Any],
        *,
        locale: str | None = None,
    ) -> EmailMessage:
        loc = (locale or self.settings.email_default_locale or FALLBACK_LOCALE).lower()
        ctx = {
            "app": {
                "name": self.settings.email_from_name,
                "primary_color": self.settings.email_primary_color,
            },
            **context,
        }

        subject = self._template(loc, f"{template_key}/subject.txt.j2").render(ctx)
        text = self._template(loc, f"{template_key}/body.txt.j2").render(ctx)
        html = None
        body = self._optional(loc, f"{template_key}/body.html.j2")
        if body is not None:
            html = body.render(ctx)
            layout = self._optional(loc, "_layout.html.j2")
            if layout is not None:
                html = layout.render({**ctx, "content": html})

        # Subject is a single header line
        return EmailMessage(subject=" ".join(subject.split()), to=[], text=text.strip(), html=html)

    @staticmethod
    def reminder_context(reminder: Reminder) -> dict[str, Any]:
        return {
            "reminder": {
                "name": reminder.name,
                "message": reminder.message,
                "category": reminder.category.value,
                "severity": reminder.severity.value,
                "hutch_id": reminder.hutch_id,
                "due_on": max(reminder.notify_on),
            }
        }

    def render_reminder(self, reminder: Reminder, *, locale: str | None = None) -> EmailMessage:
        return self.render(REMINDER_TEMPLATE, self.reminder_context(reminder), locale=locale)
