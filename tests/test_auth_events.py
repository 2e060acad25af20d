"""
Testy sesji administratora i EventBus.
"""

import pytest

from auth import LandingRoute, create_session_service
from core.events import EventBus, EventType, create_event
from core.exceptions import InvalidCredentialsError, NotAuthenticatedError


def test_sign_in_and_landing_route(client, event_bus):
    client.auth.users["admin@rt-marketing.in"] = "secret"
    logins = []
    event_bus.subscribe(EventType.USER_LOGGED_IN, logins.append)
    session = create_session_service(client)

    assert session.landing_route() == LandingRoute.CATALOGUE

    success, user_id = session.sign_in(" admin@rt-marketing.in ", "secret")

    assert success and user_id
    assert session.is_authenticated()
    assert session.check_session().email == "admin@rt-marketing.in"
    assert session.landing_route() == LandingRoute.ADMIN
    assert logins[0].user_id == user_id


def test_wrong_password(client):
    client.auth.users["admin@rt-marketing.in"] = "secret"
    session = create_session_service(client)

    assert session.sign_in("admin@rt-marketing.in", "nope") == (False, "Invalid email or password")
    assert session.sign_in("", "") == (False, "Email and password are required")
    assert not session.is_authenticated()


def test_authenticate_raises_on_bad_credentials(client):
    client.auth.users["admin@rt-marketing.in"] = "secret"
    session = create_session_service(client)

    with pytest.raises(InvalidCredentialsError) as exc:
        session.authenticate("admin@rt-marketing.in", "nope")

    assert exc.value.message == "Invalid email or password"
    assert exc.value.details["email"] == "admin@rt-marketing.in"


def test_require_user_without_session(client):
    session = create_session_service(client)

    with pytest.raises(NotAuthenticatedError) as exc:
        session.require_user("update products")
    assert exc.value.message == "You must be logged in to update products"

    client.log_in()
    assert session.require_user() is not None


def test_sign_out_returns_to_catalogue(client):
    client.log_in()
    session = create_session_service(client)

    assert session.sign_out()
    assert session.landing_route() == LandingRoute.CATALOGUE


def test_session_check_error_means_public_view(client):
    def broken():
        raise ConnectionError("offline")

    client.auth.get_user = broken
    session = create_session_service(client)

    assert session.get_current_user() is None
    assert session.check_session().to_dict() == {"authenticated": False, "user_id": None, "email": None}


def test_handler_error_does_not_stop_other_handlers(event_bus):
    received = []

    def failing(event):
        raise RuntimeError("boom")

    event_bus.subscribe(EventType.PRODUCT_DELETED, failing)
    event_bus.subscribe(EventType.PRODUCT_DELETED, received.append)

    event_bus.publish(create_event(EventType.PRODUCT_DELETED, {"id": "p1"}))

    assert [e.data for e in received] == [{"id": "p1"}]


def test_event_bus_is_singleton_until_reset(event_bus):
    assert EventBus() is event_bus
    event_bus.subscribe(EventType.CATEGORY_CREATED, print)
    assert event_bus.get_handler_count(EventType.CATEGORY_CREATED) == 1
    assert event_bus.unsubscribe(EventType.CATEGORY_CREATED, print)
    assert event_bus.get_handler_count() == 0
