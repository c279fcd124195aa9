import logging
from typing import Any, Dict, List, Optional

import requests
from flask import current_app, g

from ..errors import NetworkError, NotFoundError
from ..models import UserRecord


logger = logging.getLogger(__name__)


class UserApiClient:
    """Thin wrapper around the remote users API.

    One call issues exactly one HTTP request. Nothing is retried or cached;
    failures are raised as NetworkError (or NotFoundError for a missing record).
    """

    def __init__(self, base_url: str, timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, payload: Optional[Dict[str, str]] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning("Error calling %s %s: %s", method, url, e)
            raise NetworkError(str(e)) from e

        if not 200 <= response.status_code < 300:
            logger.warning("%s %s returned %s", method, url, response.status_code)
            raise NetworkError(f"HTTP error! status: {response.status_code}", status_code=response.status_code)
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(f"Invalid JSON in response: {e}") from e

    def _records(self, path: str) -> List[UserRecord]:
        data = self._json(self._request("GET", path))
        if not isinstance(data, list):
            raise NetworkError(f"Expected a list of users from {path}")
        return [UserRecord.from_json(item) for item in data]

    def create(self, form: Dict[str, str]) -> Dict[str, bool]:
        data = self._json(self._request("POST", "/api/create-user", form))
        if not isinstance(data, dict):
            raise NetworkError("Unexpected create response")
        return {"success": bool(data.get("success"))}

    def list(self) -> List[UserRecord]:
        return self._records("/api")

    def list_all(self) -> List[UserRecord]:
        """Users known to the server, used to enumerate edit pages."""
        return self._records("/api/users")

    def get_by_id(self, user_id: int) -> UserRecord:
        try:
            response = self._request("GET", f"/api/user/{user_id}")
        except NetworkError as e:
            if e.status_code == 404:
                raise NotFoundError(user_id) from e
            raise
        return UserRecord.from_json(self._json(response))

    def update(self, user_id: int, form: Dict[str, str]) -> None:
        self._request("PUT", f"/api/update/{user_id}", form)

    def delete_by_id(self, user_id: int) -> None:
        self._request("DELETE", f"/api/{user_id}")

    def close(self) -> None:
        self.session.close()


def edit_paths(client: UserApiClient) -> List[str]:
    """Edit page paths for every known user; empty when enumeration fails."""
    try:
        users = client.list_all()
    except NetworkError as e:
        logger.warning("Could not enumerate users: %s", e)
        return []
    return [f"/edit/{user.id}" for user in users]


def get_api_client():
    """Request-scoped client; closed when the app context tears down."""
    if "api_client" not in g:
        factory = current_app.config.get("API_CLIENT_FACTORY")
        if factory is not None:
            g.api_client = factory()
        else:
            g.api_client = UserApiClient(
                current_app.config["API_BASE_URL"],
                timeout=current_app.config.get("API_TIMEOUT"),
            )
    return g.api_client


def close_api_client(exc=None) -> None:
    client = g.pop("api_client", None)
    if client is not None:
        client.close()
