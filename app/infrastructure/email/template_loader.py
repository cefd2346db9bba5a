"""
Email template loader and renderer.
Handles Jinja2 templates for transactional notification emails.
"""

import logging
from typing import Dict, Any, List
from pathlib import Path
from datetime import datetime
from decimal import Decimal, InvalidOperation

from jinja2 import Environment, FileSystemLoader, TemplateError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


class EmailTemplateLoader:
    """Loads and renders email templates using Jinja2."""

    def __init__(self, templates_dir: Path = TEMPLATES_DIR, app_name: str = "Chef Pantry"):
        self.templates_dir = templates_dir
        self.app_name = app_name
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True
        )
        self._register_filters()

    def _register_filters(self):
        """Register custom Jinja2 filters for email templates."""

        def format_currency(value, symbol="£"):
            """Format an amount with two decimals, e.g. £1,250.00."""
            try:
                return f"{symbol}{Decimal(str(value)):,.2f}"
            except (InvalidOperation, ValueError):
                return str(value)

        def format_date(value, format="%d/%m/%Y"):
            if isinstance(value, str):
                try:
                    value = datetime.fromisoformat(value.replace("Z", "+00:00"))
                except ValueError:
                    return value
            if isinstance(value, datetime):
                return value.strftime(format)
            return str(value)

        def capitalize_words(value):
            return str(value).replace("_", " ").title()

        self.env.filters["currency"] = format_currency
        self.env.filters["date"] = format_date
        self.env.filters["capitalize_words"] = capitalize_words

    async def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render email template with context.

        Args:
            template_name: Name of template file (e.g., 'invoice_paid.html')
            context: Template context variables

        Returns:
            Rendered template content, or a plain fallback if rendering fails
        """
        enhanced_context = {
            **context,
            "current_year": datetime.now().year,
            "app_name": self.app_name,
        }
        try:
            template = self.env.get_template(template_name)
            rendered = template.render(**enhanced_context)
            logger.debug(f"Successfully rendered template: {template_name}")
            return rendered
        except TemplateError as e:
            logger.error(f"Failed to render template {template_name}: {str(e)}")
            return self._get_fallback_template(template_name, enhanced_context)

    def _get_fallback_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Minimal body used when the main template cannot be rendered."""
        heading = self.env.filters["e"](context.get("heading", "You have a new notification"))
        url = self.env.filters["e"](context.get("url", ""))
        link = f'<p><a href="{url}">Open {self.app_name}</a></p>' if url else ""
        return (
            '<div style="font-family:Arial,sans-serif;line-height:1.5">'
            f"<h2>{heading}</h2>{link}<p>{self.app_name}</p></div>"
        )

    def template_exists(self, template_name: str) -> bool:
        return (self.templates_dir / template_name).exists()

    def list_templates(self) -> List[str]:
        """List all available email templates."""
        return sorted(path.name for path in self.templates_dir.glob("*.html"))
