"""Markup snippets rendered with kida.

Marquee injects only two small pieces of markup into the page: the
notification body and the busy indicator on the submit button. Both are
rendered from inline templates with autoescaping on, so user-facing text
is always escaped.

The environment is created once on first use and shared.
"""

from typing import Any

from kida import Environment

NOTIFICATION_ICONS: dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
}

NOTIFICATION_TEMPLATE = (
    '<span class="notification-icon" aria-hidden="true">{{ icon }}</span>'
    '<span class="notification-message">{{ message }}</span>'
)

BUSY_TEMPLATE = (
    '<span class="busy-indicator">'
    '<span class="spinner" aria-hidden="true"></span>'
    "<span>{{ label }}</span>"
    "</span>"
)

_env: Environment | None = None


def environment() -> Environment:
    """Return the shared autoescaping environment."""
    global _env
    if _env is None:
        _env = Environment(autoescape=True)
    return _env


def render(source: str, context: dict[str, Any]) -> str:
    return environment().from_string(source).render(context)


def render_notification(message: str, severity: str) -> str:
    """Icon + message markup for a notification body."""
    icon = NOTIFICATION_ICONS.get(severity, NOTIFICATION_ICONS["info"])
    return render(NOTIFICATION_TEMPLATE, {"icon": icon, "message": message})


def render_busy(label: str) -> str:
    """Spinner + label markup for a busy submit button."""
    return render(BUSY_TEMPLATE, {"label": label})
