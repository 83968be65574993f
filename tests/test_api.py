"""Tests for lana.api."""

import pytest
import requests

from conftest import BASE_URL, FakeHttp, FakeResponse
from lana.api import ApiClient, create_client, error_message_from, extract_token
from lana.errors import ApiError, NetworkError, NoTokenError
from lana.session import MemoryTokenStorage, SessionStore


class BrokenStorage:
    """Storage whose reads always fail."""

    def read(self) -> str | None:
        raise OSError("disk unavailable")

    def write(self, token: str) -> None:
        raise OSError("disk unavailable")

    def delete(self) -> None:
        raise OSError("disk unavailable")


class TestRequest:
    """Tests for ApiClient.request."""

    def test_builds_url_from_base_and_path(self, client: ApiClient, http: FakeHttp) -> None:
        """Should prefix the path with the base URL."""
        http.queue(FakeResponse(200, []))

        client.request("/categories/")

        assert http.last.method == "GET"
        assert http.last.url == f"{BASE_URL}/categories/"

    def test_serializes_body_as_json(self, client: ApiClient, http: FakeHttp) -> None:
        """Should send the body as JSON with a JSON content type."""
        client.request("/transactions/", method="POST", body={"amount": 10})

        assert http.last.body == {"amount": 10}
        assert http.last.headers["Content-Type"] == "application/json"

    def test_omits_body_when_absent(self, client: ApiClient, http: FakeHttp) -> None:
        """Should not send a body for plain reads."""
        client.request("/categories/")

        assert "json" not in http.last.kwargs

    def test_no_auth_header_without_token(self, client: ApiClient, http: FakeHttp) -> None:
        """Should not send Authorization when logged out."""
        client.request("/budgets/", token_param=True)

        assert "Authorization" not in http.last.headers
        assert "token" not in http.last.params

    def test_attaches_bearer_header(self, client: ApiClient, http: FakeHttp, session: SessionStore) -> None:
        """Should always send the bearer header when a token is set."""
        session.set_token("abc")

        client.request("/categories/")

        assert http.last.headers["Authorization"] == "Bearer abc"
        assert "token" not in http.last.params

    def test_attaches_token_query_param_when_required(
        self, client: ApiClient, http: FakeHttp, session: SessionStore
    ) -> None:
        """Should send both header and ?token= for endpoints that need it."""
        session.set_token("abc")

        client.request("/budgets/", token_param=True, params={"month": 5})

        assert http.last.headers["Authorization"] == "Bearer abc"
        assert http.last.params == {"month": 5, "token": "abc"}

    def test_extra_headers_applied_last(self, client: ApiClient, http: FakeHttp) -> None:
        """Should let callers override default headers."""
        client.request("/x", headers={"Accept": "text/plain"})

        assert http.last.headers["Accept"] == "text/plain"

    def test_returns_decoded_json(self, client: ApiClient, http: FakeHttp) -> None:
        """Should return the parsed body on success."""
        http.queue(FakeResponse(200, [{"id": 1}]))

        assert client.request("/categories/") == [{"id": 1}]

    def test_204_returns_none(self, client: ApiClient, http: FakeHttp) -> None:
        """Should return None for 204 without raising."""
        http.queue(FakeResponse(204))

        assert client.request("/transactions/9", method="DELETE") is None

    def test_unparsable_success_body_returns_none(self, client: ApiClient, http: FakeHttp) -> None:
        """Should treat a non-JSON success body as no data."""
        http.queue(FakeResponse(200, text="<html>ok</html>"))

        assert client.request("/categories/") is None

    def test_error_uses_detail_message(self, client: ApiClient, http: FakeHttp) -> None:
        """Should raise ApiError carrying the server's detail verbatim."""
        http.queue(FakeResponse(401, {"detail": "Credenciales inválidas"}))

        with pytest.raises(ApiError) as exc_info:
            client.request("/validateUser", method="POST", body={})

        assert str(exc_info.value) == "Credenciales inválidas"
        assert exc_info.value.status == 401

    def test_error_uses_message_field(self, client: ApiClient, http: FakeHttp) -> None:
        """Should fall back to the message field."""
        http.queue(FakeResponse(400, {"message": "Bad month"}))

        with pytest.raises(ApiError, match="Bad month"):
            client.request("/budgets/")

    def test_error_without_body_uses_status(self, client: ApiClient, http: FakeHttp) -> None:
        """Should use 'Error <status>' when the body is not JSON."""
        http.queue(FakeResponse(500, text="Internal Server Error"))

        with pytest.raises(ApiError) as exc_info:
            client.request("/budgets/")

        assert exc_info.value.message == "Error 500"

    def test_transport_failure_raises_network_error(self, client: ApiClient, http: FakeHttp) -> None:
        """Should wrap transport exceptions in NetworkError without retrying."""
        http.queue(requests.ConnectionError("refused"))

        with pytest.raises(NetworkError):
            client.request("/categories/")

        assert len(http.calls) == 1

    def test_unreadable_token_storage_means_logged_out(self, http: FakeHttp) -> None:
        """Should send the request unauthenticated when the token can't be read."""
        client = ApiClient(BASE_URL, SessionStore(BrokenStorage()), http=http)  # type: ignore[arg-type]

        client.request("/budgets/", token_param=True)

        assert "Authorization" not in http.last.headers


class TestErrorMessageFrom:
    """Tests for error_message_from."""

    def test_prefers_detail_over_message(self) -> None:
        assert error_message_from({"detail": "a", "message": "b"}, 400) == "a"

    def test_joins_validation_error_list(self) -> None:
        """Should join FastAPI-style validation messages."""
        payload = {"detail": [{"loc": ["body", "amount"], "msg": "field required"}, {"msg": "bad month"}]}

        assert error_message_from(payload, 422) == "field required; bad month"

    def test_falls_back_to_status(self) -> None:
        assert error_message_from(None, 404) == "Error 404"
        assert error_message_from({"error": "x"}, 418) == "Error 418"
        assert error_message_from(["detail"], 400) == "Error 400"


class TestExtractToken:
    """Tests for extract_token."""

    def test_plain_string(self) -> None:
        assert extract_token("abc") == "abc"

    def test_token_key(self) -> None:
        assert extract_token({"token": "abc"}) == "abc"

    def test_access_token_key(self) -> None:
        assert extract_token({"access_token": "xyz", "token_type": "bearer"}) == "xyz"

    def test_missing(self) -> None:
        assert extract_token(None) is None
        assert extract_token({}) is None
        assert extract_token("") is None


class TestLogin:
    """Tests for ApiClient.login."""

    def test_login_stores_token_and_later_calls_use_it(
        self, client: ApiClient, http: FakeHttp, session: SessionStore
    ) -> None:
        """Should store the token and attach it to the next authenticated call."""
        http.queue(FakeResponse(200, {"token": "abc"}), FakeResponse(200, []))

        token = client.login("x", email="a@b.com")
        client.list_transactions()

        assert token == "abc"
        assert session.get_token() == "abc"
        login_call, list_call = http.calls
        assert login_call.url == f"{BASE_URL}/validateUser"
        assert login_call.body == {"password": "x", "email": "a@b.com"}
        assert list_call.headers["Authorization"] == "Bearer abc"
        assert list_call.params["token"] == "abc"

    def test_login_with_phone(self, client: ApiClient, http: FakeHttp) -> None:
        """Should send the phone instead of the email."""
        http.queue(FakeResponse(200, "tok"))

        client.login("x", phone="5512345678")

        assert http.last.body == {"password": "x", "phone": "5512345678"}

    def test_login_without_token_raises(self, client: ApiClient, http: FakeHttp, session: SessionStore) -> None:
        """Should raise NoTokenError and keep the session empty."""
        http.queue(FakeResponse(200, {"user": "someone"}))

        with pytest.raises(NoTokenError, match="No token received"):
            client.login("x", email="a@b.com")

        assert session.get_token() is None

    def test_logout_clears_session(self, client: ApiClient, session: SessionStore) -> None:
        session.set_token("abc")

        client.logout()

        assert session.get_token() is None


class TestEndpoints:
    """Per-endpoint paths and token query requirements."""

    @pytest.fixture(autouse=True)
    def logged_in(self, session: SessionStore) -> None:
        session.set_token("abc")

    @pytest.mark.parametrize(
        ("call", "method", "path", "needs_query"),
        [
            (lambda c: c.list_transactions(), "GET", "/transactions/", True),
            (lambda c: c.create_transaction({"amount": 1}), "POST", "/transactions/", True),
            (lambda c: c.update_transaction(7, {"amount": 1}), "PUT", "/transactions/7", False),
            (lambda c: c.delete_transaction(7), "DELETE", "/transactions/7", False),
            (lambda c: c.list_categories(), "GET", "/categories/", False),
            (lambda c: c.create_category("Comida"), "POST", "/categories/", True),
            (lambda c: c.update_category(3, "Comida"), "PUT", "/categories/3", True),
            (lambda c: c.delete_category(3), "DELETE", "/categories/3", True),
            (lambda c: c.list_fixed_payments(), "GET", "/scheduled-transactions/", True),
            (lambda c: c.create_fixed_payment({"amount": 1}), "POST", "/scheduled-transactions/", True),
            (lambda c: c.update_fixed_payment(4, {"amount": 1}), "PUT", "/scheduled-transactions/4", True),
            (lambda c: c.delete_fixed_payment(4), "DELETE", "/scheduled-transactions/4", True),
            (lambda c: c.list_budgets(), "GET", "/budgets/", True),
            (lambda c: c.create_budget(2, 100.0, 5), "POST", "/budgets/", True),
            (lambda c: c.update_budget(8, {"amount": 1}), "PUT", "/budgets/8", True),
            (lambda c: c.delete_budget(8), "DELETE", "/budgets/8", True),
            (lambda c: c.income_chart(), "GET", "/api/graficaIngresos", True),
            (lambda c: c.expense_chart(), "GET", "/api/graficaGastos", True),
        ],
    )
    def test_endpoint_contract(
        self, client: ApiClient, http: FakeHttp, call, method: str, path: str, needs_query: bool
    ) -> None:
        call(client)

        assert http.last.method == method
        assert http.last.url == f"{BASE_URL}{path}"
        assert http.last.headers["Authorization"] == "Bearer abc"
        assert ("token" in http.last.params) is needs_query

    def test_category_body(self, client: ApiClient, http: FakeHttp) -> None:
        client.create_category("Renta", description="Casa", schedulable=True)

        assert http.last.body == {"name": "Renta", "description": "Casa", "schedulable": True}

    def test_budget_body(self, client: ApiClient, http: FakeHttp) -> None:
        client.create_budget(2, 150.5, 6)

        assert http.last.body == {"category": 2, "amount": 150.5, "month": 6}

    def test_register_body(self, client: ApiClient, http: FakeHttp) -> None:
        client.register("Ana", "López", "ana@example.com", "5512345678", "pw")

        assert http.last.url == f"{BASE_URL}/registerUser"
        assert http.last.body == {
            "name": "Ana",
            "lastname": "López",
            "email": "ana@example.com",
            "phone": "5512345678",
            "password": "pw",
        }


class TestCreateClient:
    """Tests for create_client."""

    def test_uses_config_and_persisted_token(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should read the base URL from config and prime the token."""
        monkeypatch.delenv("LANA_API_URL", raising=False)
        config_path = tmp_path / "config.toml"
        config_path.write_text('api_url = "http://example.test/"\n')
        token_path = tmp_path / "token"
        token_path.write_text("persisted")

        client = create_client(config_path, token_path)

        assert client.base_url == "http://example.test"
        assert client.current_token() == "persisted"

    def test_missing_files_give_defaults(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LANA_API_URL", raising=False)

        client = create_client(tmp_path / "none.toml", tmp_path / "none")

        assert client.base_url == "http://localhost:8001"
        assert client.current_token() is None


def test_memory_session_is_isolated() -> None:
    """Two stores never share a token."""
    first = SessionStore(MemoryTokenStorage())
    second = SessionStore(MemoryTokenStorage())

    first.set_token("a")

    assert second.get_token() is None
