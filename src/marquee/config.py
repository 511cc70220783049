"""Site configuration.

SiteConfig is a frozen dataclass: immutable after creation, with every
knob a typed field instead of a string-key lookup.
"""

from dataclasses import dataclass

from marquee.errors import ConfigurationError

_NON_NEGATIVE = (
    "notification_timeout",
    "notification_exit_duration",
    "counter_duration",
    "counter_reveal_delay",
    "counter_fallback_delay",
    "frame_interval",
)


@dataclass(frozen=True, slots=True)
class SiteConfig:
    """Site configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = SiteConfig(base_url="https://example.com", notification_timeout=8.0)
    """

    # Submission endpoint
    base_url: str = "http://127.0.0.1:8000"
    contact_endpoint: str = "/contact"

    # Element ids
    contact_form_id: str = "contact-form"
    success_modal_id: str = "success-modal"
    modal_close_id: str = "modal-close"
    modal_ok_id: str = "modal-ok"

    # Selectors
    submit_button_selector: str = 'button[type="submit"]'
    form_group_selector: str = ".form-group"
    counter_selector: str = ".trust-number, .stat-number"
    counter_container_selector: str = ".trust-indicators, .about-stats"

    # State classes
    error_class: str = "error"
    error_message_class: str = "error-message"
    modal_active_class: str = "active"
    notification_class: str = "notification"
    notification_visible_class: str = "visible"
    notification_leaving_class: str = "leaving"

    # Notifications
    notification_timeout: float = 5.0
    notification_exit_duration: float = 0.3

    # Counters
    counter_duration: float = 2.0
    counter_reveal_delay: float = 0.5  # After the container becomes visible
    counter_fallback_delay: float = 1.0  # When no visibility observer is available
    visibility_threshold: float = 0.5

    # Scheduling
    frame_interval: float = 1 / 60

    # User-facing copy
    busy_label: str = "Sending..."
    submission_error_message: str = (
        "Sorry, there was an error sending your message. "
        "Please try again or email us directly."
    )
    submission_success_message: str = "Thanks! Your message has been sent."

    # Analytics
    analytics_event: str = "form_submit"
    analytics_category: str = "Contact"
    analytics_label: str = "Contact Form"

    def __post_init__(self) -> None:
        for name in _NON_NEGATIVE:
            if getattr(self, name) < 0:
                msg = f"SiteConfig.{name} must be non-negative, got {getattr(self, name)!r}"
                raise ConfigurationError(msg)
        if not 0.0 <= self.visibility_threshold <= 1.0:
            msg = (
                "SiteConfig.visibility_threshold must be within [0, 1], "
                f"got {self.visibility_threshold!r}"
            )
            raise ConfigurationError(msg)
        if not self.contact_endpoint.startswith("/"):
            msg = f"SiteConfig.contact_endpoint must be a path, got {self.contact_endpoint!r}"
            raise ConfigurationError(msg)
