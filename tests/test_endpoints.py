"""Tests for the endpoint registry, descriptors and the session token store."""

from __future__ import annotations

import pytest

from apiservices import endpoints, services, settings
from apiservices.auth import ACCESS_TOKEN_KEY, ID_TOKEN_KEY, SessionTokens
from apiservices.structures import EndpointDescriptor


def test_registry_names_unique() -> None:
    names = [ep.name for ep in endpoints.ENDPOINTS]
    assert len(names) == len(set(names))


def test_get_endpoint() -> None:
    assert endpoints.get_endpoint("logIn") is endpoints.LOG_IN
    with pytest.raises(KeyError):
        endpoints.get_endpoint("nope")


def test_descriptor_defaults() -> None:
    ep = EndpointDescriptor(name="bare")

    assert ep.base_url == settings.AUTH_URL
    assert ep.path == ""
    assert ep.method == "POST"
    assert ep.accept_type == "json"
    assert ep.content_type == "json"
    assert ep.uses_access_token and ep.uses_id_token
    assert ep.timeout_s == settings.DEFAULT_TIMEOUT


def test_descriptor_normalizes_method() -> None:
    assert EndpointDescriptor(name="x", method="get").method == "GET"


def test_descriptor_rejects_unknown_types() -> None:
    with pytest.raises(ValueError):
        EndpointDescriptor(name="x", accept_type="xml")  # type: ignore[arg-type]


def test_services_bound_to_registry() -> None:
    assert services.get_customers.descriptor is endpoints.GET_CUSTOMERS
    assert services.reset_password.__name__ == "resetPassword"


class TestSessionTokens:
    def test_set_get_clear(self) -> None:
        store = SessionTokens()
        assert store.get(ACCESS_TOKEN_KEY) is None

        store.set(ACCESS_TOKEN_KEY, "a")
        store.set(ID_TOKEN_KEY, "i")
        assert store.get(ACCESS_TOKEN_KEY) == "a"
        assert store.get(ID_TOKEN_KEY) == "i"

        store.clear()
        assert store.get(ID_TOKEN_KEY) is None

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SERVICE_ACCESS_TOKEN", "env-access")
        monkeypatch.delenv("SERVICE_ID_TOKEN", raising=False)

        store = SessionTokens.from_env()

        assert store.get(ACCESS_TOKEN_KEY) == "env-access"
        assert store.get(ID_TOKEN_KEY) is None
