"""
RightApiClient - Minimal RightScale API 1.5 client over requests.

Implements only the calls RunExecutable needs:
- POST /api/session or /api/oauth2 (login)
- POST /api/tags/by_tag
- GET  <href>
- GET  /api/right_scripts
- POST <instance>/run_executable
- PUT  <inputs>/multi_update

HTTP errors are raised by response.raise_for_status() and propagate
unchanged. There are no retries.
"""

import logging
from typing import Any

import requests

from rsmule import __version__
from rsmule.config import DEFAULT_API_URL, DEFAULT_TIMEOUT
from rsmule.errors import ConfigError
from rsmule.right_api.resource import Resource


logger = logging.getLogger(__name__)

API_VERSION = "1.5"


class RightApiClient:
    """
    Authenticated session against the RightScale API.

    Logs in on construction, either with email/password or with an OAuth
    refresh token.
    """

    def __init__(
        self,
        account_id: str,
        email: str | None = None,
        password: str | None = None,
        refresh_token: str | None = None,
        api_url: str = DEFAULT_API_URL,
        timeout: int = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self.account_id = str(account_id)
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "X-API-Version": API_VERSION,
            "Accept": "application/json",
            "User-Agent": f"rs-mule/{__version__}",
        })

        if refresh_token:
            self._login_oauth(refresh_token)
        elif email and password:
            self._login_session(email, password)
        else:
            raise ConfigError("Either email and password or refresh_token is required")

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    def _login_session(self, email: str, password: str) -> None:
        """Cookie-based login. The session keeps the cookie."""
        logger.debug(f"Logging in as {email} to account {self.account_id}")
        response = self.session.post(
            self._url("/api/session"),
            data={
                "email": email,
                "password": password,
                "account_href": f"/api/accounts/{self.account_id}",
            },
            timeout=self.timeout,
        )
        response.raise_for_status()

    def _login_oauth(self, refresh_token: str) -> None:
        """Exchange a refresh token for a bearer access token."""
        logger.debug(f"Requesting OAuth access token for account {self.account_id}")
        response = self.session.post(
            self._url("/api/oauth2"),
            data={"grant_type": "refresh_token", "refresh_token": refresh_token},
            timeout=self.timeout,
        )
        response.raise_for_status()
        token = response.json()["access_token"]
        self.session.headers["Authorization"] = f"Bearer {token}"

    # -------------------------------------------------------------------------
    # HTTP
    # -------------------------------------------------------------------------

    def _url(self, href: str) -> str:
        if href.startswith("http://") or href.startswith("https://"):
            return href
        return f"{self.api_url}{href}"

    def get(self, href: str, params: Any = None) -> Any:
        response = self.session.get(self._url(href), params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def post(self, href: str, payload: dict[str, Any] | None = None) -> Any:
        logger.debug(f"POST {href}")
        response = self.session.post(self._url(href), json=payload or {}, timeout=self.timeout)
        response.raise_for_status()
        return response.json() if response.content else None

    def put(self, href: str, payload: dict[str, Any] | None = None) -> None:
        logger.debug(f"PUT {href}")
        response = self.session.put(self._url(href), json=payload or {}, timeout=self.timeout)
        response.raise_for_status()

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    def by_tag(
        self,
        resource_type: str,
        tags: list[str],
        match_all: bool = True,
    ) -> list[Resource]:
        payload = {
            "resource_type": resource_type,
            "tags": list(tags),
            "match_all": "true" if match_all else "false",
        }
        documents = self.post("/api/tags/by_tag", payload) or []
        return [Resource(self, doc) for doc in documents]

    def resource(self, href: str) -> Resource:
        return Resource(self, self.get(href), href=href)

    def right_scripts(self, filters: list[str] | None = None) -> list[Resource]:
        params = [("filter[]", f) for f in (filters or [])]
        documents = self.get("/api/right_scripts", params=params) or []
        return [Resource(self, doc) for doc in documents]
