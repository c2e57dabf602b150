import io
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from .errors import ConfigError

SECRET_MASK = "[HIDDEN]"

# Keys used by properties files (clientId=..., nickname=...)
PROPERTY_KEYS = ("clientId", "tenantId", "clientSecret", "nickname")

ENV_KEYS = {
    "clientId": "AZURE_CLIENT_ID",
    "tenantId": "AZURE_TENANT_ID",
    "clientSecret": "AZURE_CLIENT_SECRET",
    "nickname": "MAIL_NICKNAME",
}

# key, then "=", ":" or whitespace, then the value
_PROPERTY_LINE = re.compile(r"^\s*([^=:\s#!]+)\s*[=:\s]\s*(.*)$")


@dataclass(frozen=True)
class AppCredentials:
    """Identity of the Entra ID app registration used for the client credentials grant."""

    client_id: str
    tenant_id: str
    client_secret: str = field(repr=False)

    def validate(self) -> None:
        empty = [
            name
            for name in ("client_id", "tenant_id", "client_secret")
            if not getattr(self, name)
        ]
        if empty:
            raise ConfigError(
                f"Credential field(s) must not be empty: {', '.join(empty)}"
            )

    def redacted(self) -> Dict[str, str]:
        return {
            "client_id": self.client_id,
            "tenant_id": self.tenant_id,
            "client_secret": SECRET_MASK if self.client_secret else "",
        }


@dataclass(frozen=True)
class Config:
    credentials: AppCredentials
    nickname: str

    @classmethod
    def from_mapping(cls, values: Mapping[str, Optional[str]]) -> "Config":
        """Build a Config from a clientId/tenantId/clientSecret/nickname mapping.

        Every missing or blank key is reported in a single ConfigError.
        """
        cleaned = {key: (values.get(key) or "").strip() for key in PROPERTY_KEYS}
        missing = [key for key, value in cleaned.items() if not value]
        if missing:
            raise ConfigError(
                f"Missing required configuration key(s): {', '.join(missing)}"
            )
        return cls(
            credentials=AppCredentials(
                client_id=cleaned["clientId"],
                tenant_id=cleaned["tenantId"],
                client_secret=cleaned["clientSecret"],
            ),
            nickname=cleaned["nickname"],
        )

    @classmethod
    def from_env(cls) -> "Config":
        return cls.from_mapping(
            {key: os.environ.get(env_key, "") for key, env_key in ENV_KEYS.items()}
        )

    @classmethod
    def from_properties(cls, path: Path) -> "Config":
        """Read a properties file, e.g. ``config.properties``.

        Accepts ``key=value``, ``key: value`` and ``key value`` lines.
        """
        if not path.is_file():
            raise ConfigError(f"Properties file not found: {path}")
        text = path.read_text(encoding="utf-8")
        return cls.from_mapping(dotenv_values(stream=io.StringIO(_to_dotenv(text))))

    def with_nickname(self, nickname: str) -> "Config":
        if not nickname.strip():
            raise ConfigError("Nickname override must not be empty")
        return Config(credentials=self.credentials, nickname=nickname.strip())


def _to_dotenv(text: str) -> str:
    """Rewrite properties-style separators as key=value lines."""
    lines = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped[0] in "#!":
            continue
        match = _PROPERTY_LINE.match(line)
        if match:
            lines.append(f"{match.group(1)}={match.group(2).strip()}")
    return "\n".join(lines)
