from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

GRAPH_DEFAULT_SCOPE = "https://graph.microsoft.com/.default"


class LookupStatus(Enum):
    FOUND = "Found"
    NOT_FOUND = "NotFound"
    MALFORMED = "Malformed"


@dataclass(frozen=True)
class AccessToken:
    """Bearer token for a single run. Never persisted, never refreshed."""

    value: str = field(repr=False)
    scope: str = GRAPH_DEFAULT_SCOPE

    def __bool__(self) -> bool:
        return bool(self.value)

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.value}"


@dataclass(frozen=True)
class UserSummary:
    """The two user fields reported back from a /users query."""

    display_name: str = ""
    user_principal_name: str = ""

    @classmethod
    def from_graph(cls, item) -> "UserSummary":
        if not isinstance(item, dict):
            return cls()
        return cls(
            display_name=_as_text(item.get("displayName")),
            user_principal_name=_as_text(item.get("userPrincipalName")),
        )


@dataclass
class LookupResult:
    """Outcome of a successful (2xx) directory query.

    Only one of ``users`` / ``raw`` is meaningful, depending on ``status``.
    """

    status: LookupStatus
    users: List[UserSummary] = field(default_factory=list)
    raw: Optional[str] = None
    next_link: Optional[str] = None

    @classmethod
    def not_found(cls) -> "LookupResult":
        return cls(status=LookupStatus.NOT_FOUND)

    @classmethod
    def found(
        cls, users: List[UserSummary], next_link: Optional[str] = None
    ) -> "LookupResult":
        return cls(status=LookupStatus.FOUND, users=list(users), next_link=next_link)

    @classmethod
    def malformed(cls, raw: str) -> "LookupResult":
        return cls(status=LookupStatus.MALFORMED, raw=raw)

    @property
    def is_found(self) -> bool:
        return self.status == LookupStatus.FOUND

    @property
    def count(self) -> int:
        return len(self.users)


def _as_text(value) -> str:
    # Objects, arrays and null have no text form.
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return value if isinstance(value, str) else str(value)
