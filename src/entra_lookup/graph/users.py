import logging

from ..engine import parser
from ..engine.models import AccessToken, LookupResult
from ..errors import AuthError, ConfigError
from .client import GraphClient

logger = logging.getLogger(__name__)


class DirectoryLookup:
    """Look up directory users by mail nickname."""

    USERS_PATH = "/users"

    def __init__(self, client: GraphClient):
        self._client = client

    def find_by_mail_nickname(self, token: AccessToken, nickname: str) -> LookupResult:
        """Query /users for an exact mailNickname match.

        Raises QueryError on a non-2xx status. A 2xx body that cannot be
        interpreted comes back as a MALFORMED result, not an exception.
        Only the first page of results is consulted.
        """
        if not token:
            raise AuthError("Access token is empty")
        if not nickname:
            raise ConfigError("Nickname must not be empty")

        logger.info(f"Querying user by mail nickname: {nickname}")
        resp = self._client.get(
            self.USERS_PATH,
            token,
            params={"$filter": parser.build_nickname_filter(nickname)},
        )
        raw = resp.text
        logger.debug(f"Response received: {raw}")

        result = parser.classify_users_response(raw)
        if result.next_link:
            logger.warning("More results are available; only the first page was read")
        return result
