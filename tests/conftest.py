"""Shared fixtures: an in-memory landing page and a virtual clock."""

from collections.abc import Callable

import httpx
import pytest

from marquee.testing import FakeDocument, FakeElement, FakeVisibilityObserver, ManualScheduler

type Handler = Callable[[httpx.Request], httpx.Response]


def build_contact_form() -> FakeElement:
    return FakeElement(
        "form",
        FakeElement(
            "div",
            FakeElement("label", text="Name"),
            FakeElement("input", name="name", type="text"),
            classes=["form-group"],
        ),
        FakeElement(
            "div",
            FakeElement("label", text="Email"),
            FakeElement("input", name="email", type="email"),
            classes=["form-group"],
        ),
        FakeElement(
            "div",
            FakeElement("label", text="Message"),
            FakeElement("textarea", name="message"),
            classes=["form-group"],
        ),
        FakeElement("button", text="Send Message", type="submit"),
        id="contact-form",
    )


def build_modal() -> FakeElement:
    return FakeElement(
        "div",
        FakeElement(
            "div",
            FakeElement("h3", text="Message sent"),
            FakeElement("button", text="×", id="modal-close"),
            FakeElement("button", text="OK", id="modal-ok"),
            classes=["modal-content"],
        ),
        id="success-modal",
        classes=["modal"],
    )


def build_stats() -> FakeElement:
    return FakeElement(
        "div",
        FakeElement("span", text="98%", classes=["trust-number"]),
        FakeElement("span", text="₱50k", classes=["trust-number"]),
        FakeElement("span", text="500+", classes=["stat-number"]),
        FakeElement("span", text="Fast", classes=["stat-number"]),
        classes=["trust-indicators"],
    )


def build_page(*, form: bool = True, modal: bool = True, stats: bool = True) -> FakeDocument:
    children = []
    if stats:
        children.append(build_stats())
    if form:
        children.append(build_contact_form())
    if modal:
        children.append(build_modal())
    return FakeDocument(*children)


def fill(form: FakeElement, **values: str) -> None:
    for name, value in values.items():
        control = form.query(f'[name="{name}"]')
        assert control is not None, name
        control.value = value


def mock_client(handler: Handler, requests: list[httpx.Request] | None = None) -> httpx.AsyncClient:
    """An AsyncClient whose requests go to *handler* instead of the network."""

    def record(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)

    return httpx.AsyncClient(transport=httpx.MockTransport(record), base_url="http://testserver")


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def observer() -> FakeVisibilityObserver:
    return FakeVisibilityObserver()


@pytest.fixture
def page() -> FakeDocument:
    return build_page()
