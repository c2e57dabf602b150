import json
import logging

from .models import LookupResult, UserSummary

logger = logging.getLogger(__name__)


def build_nickname_filter(nickname: str) -> str:
    """OData filter for an exact mailNickname match.

    The nickname is substituted literally. A single quote in it ends the
    string literal early, so Graph will reject or reinterpret the filter.
    """
    if "'" in nickname:
        logger.warning(
            f"Nickname {nickname!r} contains a single quote; "
            "the filter is sent unescaped"
        )
    return f"mailNickname eq '{nickname}'"


def classify_users_response(raw: str) -> LookupResult:
    """Classify the body of a 2xx /users response."""
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        logger.warning("Response body is not valid JSON")
        return LookupResult.malformed(raw)

    if not isinstance(payload, dict) or not isinstance(payload.get("value"), list):
        logger.warning("Response JSON has no 'value' array")
        return LookupResult.malformed(raw)

    items = payload["value"]
    if not items:
        return LookupResult.not_found()

    return LookupResult.found(
        [UserSummary.from_graph(item) for item in items],
        next_link=payload.get("@odata.nextLink"),
    )
