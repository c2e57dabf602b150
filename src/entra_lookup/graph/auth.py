import logging

import msal
import requests

from ..config import AppCredentials
from ..engine.models import GRAPH_DEFAULT_SCOPE, AccessToken
from ..errors import AuthError

logger = logging.getLogger(__name__)


class GraphAuth:
    """Acquires access tokens using MSAL client credentials flow.

    The app registration in Entra ID needs:
      - User.Read.All (application permission) + admin consent
    """

    AUTHORITY_HOST = "https://login.microsoftonline.com"
    SCOPES = [GRAPH_DEFAULT_SCOPE]

    def __init__(self, credentials: AppCredentials, authority_host: str = AUTHORITY_HOST):
        self._credentials = credentials
        self._authority_host = authority_host.rstrip("/")

    @property
    def authority(self) -> str:
        return f"{self._authority_host}/{self._credentials.tenant_id}"

    def _build_app(self) -> msal.ConfidentialClientApplication:
        # msal resolves the authority's metadata here, so this already
        # talks to the network.
        return msal.ConfidentialClientApplication(
            self._credentials.client_id,
            authority=self.authority,
            client_credential=self._credentials.client_secret,
        )

    def acquire(self) -> AccessToken:
        """Acquire a Graph token for this run. One attempt, no retry."""
        self._credentials.validate()

        logger.info(f"Requesting token from {self.authority}")
        try:
            app = self._build_app()
            result = app.acquire_token_for_client(scopes=self.SCOPES)
        except ValueError as e:
            raise AuthError(f"Authority rejected configuration: {e}") from e
        except requests.RequestException as e:
            raise AuthError(f"Could not reach {self.authority}: {e}") from e

        if not result or "access_token" not in result:
            result = result or {}
            raise AuthError(
                f"Failed to acquire token: "
                f"{result.get('error_description', result.get('error'))}",
                error=result.get("error"),
                description=result.get("error_description"),
            )

        token = AccessToken(result["access_token"] or "", scope=GRAPH_DEFAULT_SCOPE)
        if not token:
            raise AuthError("Authority returned an empty access token")

        logger.debug(f"Token acquired ({len(token.value)} chars)")
        return token
