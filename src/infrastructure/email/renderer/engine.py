from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, select_autoescape

from src.config.settings import Settings
from src.infrastructure.email.models import EmailMessage
from src.utils.datetime_tz import format_appointment

FALLBACK_LOCALE = "en"
TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass(slots=True)
class EmailTemplateRenderer:
    """Renders `<locale>/<template_key>/{subject.txt,body.txt,body.html}.j2`.

    Missing locales fall back to English. The HTML body is optional and, when
    present, is wrapped in the locale's `_layout.html.j2`.
    """

    base_path: Path
    env: Environment

    @classmethod
    def create_default(cls, base_path: Path = TEMPLATES_DIR) -> EmailTemplateRenderer:
        env = Environment(
            loader=FileSystemLoader(str(base_path)),
            autoescape=select_autoescape(["html", "xml", "html.j2"]),
            keep_trailing_newline=False,
        )
        env.globals["format_appointment"] = format_appointment
        return cls(base_path=base_path, env=env)

    def _template(self, locale: str, name: str, *, required: bool = True) -> Template | None:
        for candidate in dict.fromkeys((locale, FALLBACK_LOCALE)):
            try:
                return self.env.get_template(f"{candidate}/{name}")
            except TemplateNotFound:
                continue
        if required:
            raise TemplateNotFound(f"{locale}/{name}")
        return None

    def _html(self, locale: str, template_key: str, ctx: dict[str, Any]) -> str | None:
        body = self._template(locale, f"{template_key}/body.html.j2", required=False)
        if body is None:
            return None
        content = body.render(ctx)
        layout = self._template(locale, "_layout.html.j2", required=False)
        return layout.render(ctx, content=content) if layout is not None else content

    def render(
        self,
        *,
        template_key: str,
        settings: Settings,
        context: dict[str, Any],
        locale: str | None = None,
    ) -> EmailMessage:
        locale = (locale or settings.email_default_locale or FALLBACK_LOCALE).lower()
        ctx = {
            "app": {
                "name": settings.email_from_name,
                "primary_color": settings.email_primary_color,
            },
            **context,
        }
        subject = self._template(locale, f"{template_key}/subject.txt.j2").render(ctx)
        text = self._template(locale, f"{template_key}/body.txt.j2").render(ctx)
        return EmailMessage(
            subject=" ".join(subject.split()),
            text=text.strip(),
            html=self._html(locale, template_key, ctx),
            from_email=settings.email_from_address,
            from_name=settings.email_from_name,
            template_key=template_key,
        )
