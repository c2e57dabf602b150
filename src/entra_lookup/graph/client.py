import logging
from typing import Optional

import requests

from ..engine.models import AccessToken
from ..errors import QueryError

logger = logging.getLogger(__name__)


class GraphClient:
    """Low-level HTTP client for Microsoft Graph API. One request per call."""

    BASE_URL = "https://graph.microsoft.com/v1.0"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: str = BASE_URL,
        timeout: Optional[float] = None,
    ):
        self._session = session or requests.Session()
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def _headers(self, token: AccessToken) -> dict:
        return {
            "Authorization": token.authorization_header,
            "Accept": "application/json",
        }

    def get(self, path: str, token: AccessToken, params: dict = None) -> requests.Response:
        url = f"{self._base_url}{path}" if path.startswith("/") else path
        logger.debug(f"GET {url} params={params}")
        try:
            resp = self._session.request(
                "GET",
                url,
                headers=self._headers(token),
                params=params,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise QueryError(f"Request to {url} failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            # Error bodies are passed through verbatim, never parsed.
            raise QueryError(
                f"Graph returned HTTP {resp.status_code}: {resp.reason or ''}".rstrip(),
                status_code=resp.status_code,
                body=resp.text,
            )
        return resp
