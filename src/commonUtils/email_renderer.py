"""
Page and email template renderer using Jinja2
"""
from pathlib import Path
from typing import Any, Dict, Optional
from jinja2 import Environment, FileSystemLoader, select_autoescape
from datetime import datetime, timezone

from src.commonUtils.enumUtils import OtpSolution


class TemplateRenderer:
    """Renders the signup pages and the admin notification email using Jinja2"""

    def __init__(self, template_dir: Optional[Path] = None, platform_name: str = "MOJA"):
        """
        Initialize renderer

        Args:
            template_dir: Directory containing the 'pages' and 'emails' template folders.
                Defaults to src/templates next to this package.
            platform_name: Brand name shown on every page
        """
        # Anchor to this file so rendering doesn't depend on the working directory
        self.template_dir = template_dir or Path(__file__).resolve().parent.parent / "templates"

        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(['html', 'xml'])
        )

        # Brand configuration - change once, applies everywhere
        self.brand_config = {
            'platform_name': platform_name,
            'colors': {
                'green': '#4CAF50',
                'green_hover': '#45a049',
                'red': '#EF4444',
                'light_gray': '#F9FAFB',
                'dark_text': '#111827',
                'light_text': '#4B5563',
            },
            'year': datetime.now(timezone.utc).year
        }

    def render(self, template_name: str, **context) -> str:
        """
        Render a template with context

        Args:
            template_name: Path of template file relative to the template dir (e.g., 'pages/signup_form.html')
            **context: Variables to pass to template

        Returns:
            Rendered HTML string
        """
        template = self.env.get_template(template_name)

        # Merge brand config with caller context
        full_context = {**self.brand_config, **context}

        return template.render(**full_context)

    def signup_form_page(self, controller) -> str:
        """Render the form view for the controller's current state"""
        state = controller.state
        return self.render(
            'pages/signup_form.html',
            form=state.request,
            errors=state.errors,
            submit_error=state.submit_error,
            submit_label=controller.submit_label,
            submit_disabled=controller.submit_disabled,
            is_busy=controller.is_busy,
            otp_solutions=[solution.value for solution in OtpSolution],
        )

    def confirmation_page(self) -> str:
        """Render the thank-you view"""
        return self.render('pages/confirmation.html')

    def waitlist_signup_email(self, template_params: Dict[str, Any]) -> str:
        """Render the admin notification email sent by the SMTP notifier"""
        return self.render('emails/waitlist_signup.html', **template_params)

