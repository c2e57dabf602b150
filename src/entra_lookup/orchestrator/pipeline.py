import logging

from ..config import Config
from ..engine.models import LookupResult, LookupStatus
from ..graph.auth import GraphAuth
from ..graph.client import GraphClient
from ..graph.users import DirectoryLookup

logger = logging.getLogger(__name__)


class LookupPipeline:
    """Token acquisition followed by a single directory query.

    Errors from either stage propagate to the caller; a failed token
    request means the query is never sent.
    """

    def __init__(self, auth: GraphAuth, lookup: DirectoryLookup):
        self._auth = auth
        self._lookup = lookup

    @classmethod
    def from_config(cls, config: Config) -> "LookupPipeline":
        return cls(GraphAuth(config.credentials), DirectoryLookup(GraphClient()))

    def run(self, nickname: str) -> LookupResult:
        logger.info("Acquiring access token...")
        token = self._auth.acquire()
        logger.info("Access token acquired")

        result = self._lookup.find_by_mail_nickname(token, nickname)

        if result.status == LookupStatus.FOUND:
            logger.info(f"User found. Number of users: {result.count}")
            for user in result.users:
                logger.info(
                    f"  User: {user.display_name}, "
                    f"UserPrincipalName: {user.user_principal_name}"
                )
        elif result.status == LookupStatus.NOT_FOUND:
            logger.info("User not found")
        else:
            logger.warning("Unexpected response format")
        return result
