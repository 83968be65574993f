"""Lana API interactions.

Every call goes through ``ApiClient.request``. When a session token is
available it is always sent as ``Authorization: Bearer <token>``. Some
endpoints only honor the token as a ``?token=`` query parameter, so those
also get it there. The backend is not consistent about this, so the
requirement is spelled out per endpoint:

    endpoint                              ?token=
    POST   /validateUser, /registerUser   no
    GET    /transactions/                 yes
    POST   /transactions/                 yes
    PUT    /transactions/{id}             no
    DELETE /transactions/{id}             no
    GET    /categories/                   no
    POST   /categories/                   yes
    PUT    /categories/{id}               yes
    DELETE /categories/{id}               yes
    *      /scheduled-transactions/...    yes
    *      /budgets/...                   yes
    GET    /api/graficaIngresos           yes
    GET    /api/graficaGastos             yes

Nothing here retries or sets timeouts; failures surface immediately.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import requests

from lana.config import get_api_url
from lana.errors import ApiError, NetworkError, NoTokenError
from lana.session import SessionStore, TokenFile

logger = logging.getLogger(__name__)

FIXED_PAYMENTS_PATH = "/scheduled-transactions"

ERROR_MESSAGE_KEYS = ("detail", "message")


def error_message_from(payload: Any, status: int) -> str:
    """Pick a human-readable message out of an error body.

    Args:
        payload: Decoded error body (None if it was not JSON).
        status: HTTP status code.

    Returns:
        The server's message, or "Error <status>".
    """
    if isinstance(payload, Mapping):
        for key in ERROR_MESSAGE_KEYS:
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
            # FastAPI validation errors: [{"loc": [...], "msg": "...", ...}]
            if isinstance(value, list):
                messages = [str(item["msg"]) for item in value if isinstance(item, Mapping) and item.get("msg")]
                if messages:
                    return "; ".join(messages)
    return f"Error {status}"


def extract_token(payload: Any) -> str | None:
    """Read the token from a login response.

    The endpoint returns either the bare token string or an object with
    ``token`` or ``access_token``.
    """
    if isinstance(payload, str):
        return payload.strip() or None
    if isinstance(payload, Mapping):
        token = payload.get("token") or payload.get("access_token")
        if isinstance(token, str) and token:
            return token
    return None


class ApiClient:
    """Client for the remote Lana REST API."""

    def __init__(self, base_url: str, session: SessionStore, http: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session
        self.http = http if http is not None else requests.Session()

    def current_token(self) -> str | None:
        """Session token, or None when logged out or storage is unreadable."""
        try:
            return self.session.get_token()
        except OSError as e:
            logger.warning("Could not read session token: %s", e)
            return None

    def request(
        self,
        path: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
        token_param: bool = False,
    ) -> Any:
        """Perform one API call.

        Args:
            path: Path below the base URL (e.g., "/transactions/").
            method: HTTP method.
            headers: Extra headers, applied last.
            body: JSON-serializable body, sent only when not None.
            params: Query parameters.
            token_param: Also send the token as ``?token=``.

        Returns:
            Decoded JSON, or None for 204 responses and undecodable bodies.

        Raises:
            NetworkError: If the request never got a response.
            ApiError: If the response status is not 2xx.
        """
        token = self.current_token()

        request_headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if token:
            request_headers["Authorization"] = f"Bearer {token}"
        if headers:
            request_headers.update(headers)

        query = dict(params) if params else {}
        if token_param and token:
            query["token"] = token

        kwargs: dict[str, Any] = {"headers": request_headers}
        if query:
            kwargs["params"] = query
        if body is not None:
            kwargs["json"] = body

        url = f"{self.base_url}{path}"
        try:
            response = self.http.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.debug("%s %s failed: %s", method, path, e)
            raise NetworkError(f"Network error: could not reach {self.base_url}") from e

        status = response.status_code
        logger.debug("%s %s -> %s", method, path, status)

        if not 200 <= status < 300:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            raise ApiError(error_message_from(payload, status), status)

        if status == 204:
            return None

        try:
            return response.json()
        except ValueError:
            logger.debug("%s %s returned a body that is not JSON", method, path)
            return None

    # Auth

    def login(self, password: str, email: str | None = None, phone: str | None = None) -> str:
        """Log in with email or phone and store the session token.

        Raises:
            NoTokenError: If the response carries no token.
            OSError: If the token cannot be persisted.
        """
        body: dict[str, str] = {"password": password}
        if email:
            body["email"] = email
        if phone:
            body["phone"] = phone

        result = self.request("/validateUser", method="POST", body=body)
        token = extract_token(result)
        if not token:
            raise NoTokenError("No token received")

        self.session.set_token(token)
        return token

    def register(self, name: str, lastname: str, email: str, phone: str, password: str) -> Any:
        """Create an account. The caller must log in afterwards."""
        return self.request(
            "/registerUser",
            method="POST",
            body={"name": name, "lastname": lastname, "email": email, "phone": phone, "password": password},
        )

    def logout(self) -> None:
        """Forget the session token locally."""
        self.session.clear()

    # Transactions

    def list_transactions(self, params: Mapping[str, Any] | None = None) -> Any:
        return self.request("/transactions/", params=params, token_param=True)

    def create_transaction(self, payload: Mapping[str, Any]) -> Any:
        return self.request("/transactions/", method="POST", body=dict(payload), token_param=True)

    def update_transaction(self, transaction_id: Any, payload: Mapping[str, Any]) -> Any:
        return self.request(f"/transactions/{transaction_id}", method="PUT", body=dict(payload))

    def delete_transaction(self, transaction_id: Any) -> Any:
        return self.request(f"/transactions/{transaction_id}", method="DELETE")

    # Categories

    def list_categories(self) -> Any:
        return self.request("/categories/")

    def create_category(self, name: str, description: str = "", schedulable: bool = False) -> Any:
        return self.request(
            "/categories/",
            method="POST",
            body={"name": name, "description": description, "schedulable": schedulable},
            token_param=True,
        )

    def update_category(self, category_id: Any, name: str, description: str = "", schedulable: bool = False) -> Any:
        return self.request(
            f"/categories/{category_id}",
            method="PUT",
            body={"name": name, "description": description, "schedulable": schedulable},
            token_param=True,
        )

    def delete_category(self, category_id: Any) -> Any:
        return self.request(f"/categories/{category_id}", method="DELETE", token_param=True)

    # Fixed payments

    def list_fixed_payments(self) -> Any:
        return self.request(f"{FIXED_PAYMENTS_PATH}/", token_param=True)

    def create_fixed_payment(self, payload: Mapping[str, Any]) -> Any:
        return self.request(f"{FIXED_PAYMENTS_PATH}/", method="POST", body=dict(payload), token_param=True)

    def update_fixed_payment(self, payment_id: Any, payload: Mapping[str, Any]) -> Any:
        return self.request(f"{FIXED_PAYMENTS_PATH}/{payment_id}", method="PUT", body=dict(payload), token_param=True)

    def delete_fixed_payment(self, payment_id: Any) -> Any:
        return self.request(f"{FIXED_PAYMENTS_PATH}/{payment_id}", method="DELETE", token_param=True)

    # Budgets

    def list_budgets(self) -> Any:
        return self.request("/budgets/", token_param=True)

    def create_budget(self, category: Any, amount: float, month: int) -> Any:
        return self.request(
            "/budgets/",
            method="POST",
            body={"category": category, "amount": amount, "month": month},
            token_param=True,
        )

    def update_budget(self, budget_id: Any, payload: Mapping[str, Any]) -> Any:
        return self.request(f"/budgets/{budget_id}", method="PUT", body=dict(payload), token_param=True)

    def delete_budget(self, budget_id: Any) -> Any:
        return self.request(f"/budgets/{budget_id}", method="DELETE", token_param=True)

    # Charts

    def income_chart(self) -> Any:
        return self.request("/api/graficaIngresos", token_param=True)

    def expense_chart(self) -> Any:
        return self.request("/api/graficaGastos", token_param=True)


def create_client(config_path: Path | None = None, token_path: Path | None = None) -> ApiClient:
    """Build a client from configuration with the persisted session loaded.

    Args:
        config_path: Config file. If None, uses default location.
        token_path: Token file. If None, uses default location.

    Returns:
        Ready-to-use ApiClient.
    """
    store = SessionStore(TokenFile(token_path))
    try:
        store.load_token()
    except OSError as e:
        logger.warning("Could not read session token: %s", e)
    return ApiClient(get_api_url(config_path), store)
