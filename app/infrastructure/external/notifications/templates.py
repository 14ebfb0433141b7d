"""Notification templates: template key -> subject, HTML body, and text body (Jinja)."""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, StrictUndefined, Template

# In-repo template definitions: key -> (subject, html body, text body)
_DEFAULT_TEMPLATES: dict[str, tuple[str, str, str]] = {
    "client_welcome": (
        "Welcome to EDIS Portal - Project {{ project_id }}",
        """<!DOCTYPE html>
<html>
<body style="font-family: Inter, Arial, sans-serif;">
  <h2>Welcome to the EDIS TrueView Portal</h2>
  <p>Dear {{ contact_name }},</p>
  <p>Thank you for choosing EDIS for your imaging needs. Your project has been set up
  and you now have access to the client portal.</p>
  <h3>Your login credentials</h3>
  <p><strong>Portal URL:</strong> <a href="{{ portal_url }}">{{ portal_url }}</a></p>
  <p><strong>Username:</strong> {{ username }}</p>
  <p><strong>Temporary password:</strong> {{ temporary_password }}</p>
  <p><strong>Project ID:</strong> {{ project_id }}</p>
  {% if pending %}
  <p>Your portal access will be enabled once your deposit has been received.</p>
  {% endif %}
  <p><small>Please change your password after your first login.</small></p>
  <p>Questions? Contact us at {{ support_email }}</p>
</body>
</html>
""",
        """Welcome to the EDIS TrueView Portal

Dear {{ contact_name }},

Your project has been set up and you now have access to the client portal.

Portal URL: {{ portal_url }}
Username: {{ username }}
Temporary password: {{ temporary_password }}
Project ID: {{ project_id }}
{% if pending %}
Your portal access will be enabled once your deposit has been received.
{% endif %}
Please change your password after your first login.
Questions? Contact us at {{ support_email }}
""",
    ),
    "admin_new_client": (
        "New Client: {{ company_name }} - {{ project_id }}",
        """<div style="font-family: Inter, Arial, sans-serif;">
  <h2>New client account created</h2>
  <p><strong>Company:</strong> {{ company_name }}</p>
  <p><strong>Contact:</strong> {{ contact_name }}</p>
  <p><strong>Email:</strong> {{ email }}</p>
  <p><strong>Phone:</strong> {{ phone or "N/A" }}</p>
  <p><strong>Project ID:</strong> {{ project_id }}</p>
  <p><strong>Client ID:</strong> {{ client_id }}</p>
  <p><strong>Status:</strong> {{ status }}</p>
  <h3>Next steps</h3>
  <ul>
    <li>Schedule imaging services</li>
    <li>Prepare deliverables structure</li>
  </ul>
  <p><a href="{{ admin_url }}">Open the admin dashboard</a></p>
</div>
""",
        """New client account created

Company: {{ company_name }}
Contact: {{ contact_name }}
Email: {{ email }}
Phone: {{ phone or "N/A" }}
Project ID: {{ project_id }}
Client ID: {{ client_id }}
Status: {{ status }}

Admin dashboard: {{ admin_url }}
""",
    ),
    "deliverables_ready": (
        "New files available - Project {{ project_id }}",
        """<div style="font-family: Inter, Arial, sans-serif;">
  <h2>New files are ready</h2>
  <p>Dear {{ contact_name }},</p>
  <p>{{ filename }} ({{ deliverable_type }}) has been added to your project.</p>
  <p><a href="{{ portal_url }}">View it in the client portal</a></p>
</div>
""",
        """New files are ready

Dear {{ contact_name }},

{{ filename }} ({{ deliverable_type }}) has been added to your project.
View it in the client portal: {{ portal_url }}
""",
    ),
}


class NotificationTemplateRenderer:
    """Renders subject and bodies for a template key.

    HTML bodies are autoescaped; subjects and text bodies are not.
    Missing context variables raise instead of rendering empty.
    """

    def __init__(
        self,
        templates: dict[str, tuple[str, str, str]] | None = None,
    ) -> None:
        """Initialize with optional template dict; falls back to _DEFAULT_TEMPLATES."""
        self._templates = templates or _DEFAULT_TEMPLATES
        plain_env = Environment(autoescape=False, undefined=StrictUndefined)
        html_env = Environment(autoescape=True, undefined=StrictUndefined)
        self._compiled: dict[str, tuple[Template, Template, Template]] = {}
        for key, (sub_str, html_str, text_str) in self._templates.items():
            self._compiled[key] = (
                plain_env.from_string(sub_str),
                html_env.from_string(html_str),
                plain_env.from_string(text_str),
            )

    def render(self, template_key: str, context: dict[str, Any]) -> tuple[str, str, str]:
        """Render subject, HTML body, and text body. Raises KeyError if key unknown."""
        if template_key not in self._compiled:
            raise KeyError(f"Unknown notification template: {template_key}")
        subject_tpl, html_tpl, text_tpl = self._compiled[template_key]
        subject = " ".join(subject_tpl.render(**context).split())
        return subject, html_tpl.render(**context), text_tpl.render(**context)
