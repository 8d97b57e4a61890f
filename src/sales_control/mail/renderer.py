"""Jinja2 rendering of the report e-mail templates."""

import datetime as dt
from decimal import Decimal
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape


def money(value: Decimal | float | int) -> str:
    """Thousands separator and exactly two decimals."""
    return f"{Decimal(str(value)):,.2f}"


class TemplateRenderer:
    def __init__(self, app_name: str = "Sales Control", environment: Environment | None = None):
        self.app_name = app_name
        self._env = environment or Environment(
            loader=PackageLoader("sales_control.mail", "templates"),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters["money"] = money

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        template = self._env.get_template(template_name)
        return template.render(
            app_name=self.app_name,
            year=dt.date.today().year,
            **context,
        )
