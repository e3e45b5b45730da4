"""Connection settings passed explicitly into every client operation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .errors import InvalidArgument

DEFAULT_API_ENDPOINT = "https://api.cloudflare.com/client/v4"
DEFAULT_ENV_PREFIX = "CLOUDFLARE_"


@dataclass(frozen=True)
class ConnectionConfig:
    """Account, token, and endpoint used to reach the Vectorize API.

    The config is immutable and never stored by the client, so one instance
    can be shared by concurrent calls. The token is left out of ``repr()``.
    """

    account_id: str
    api_token: str = field(repr=False)
    api_endpoint: str = DEFAULT_API_ENDPOINT

    def __post_init__(self) -> None:
        if not isinstance(self.account_id, str) or not self.account_id.strip():
            raise InvalidArgument("account_id is required and must be a non-empty string")
        if not isinstance(self.api_token, str) or not self.api_token.strip():
            raise InvalidArgument("api_token is required and must be a non-empty string")
        if not isinstance(self.api_endpoint, str) or not self.api_endpoint.strip():
            raise InvalidArgument("api_endpoint must be a non-empty string")
        object.__setattr__(self, "account_id", self.account_id.strip())
        object.__setattr__(self, "api_endpoint", self.api_endpoint.strip().rstrip("/"))

    @property
    def base_url(self) -> str:
        return f"{self.api_endpoint}/accounts/{self.account_id}/vectorize/v2"

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ConnectionConfig":
        """Build a config from a credential record.

        Both the camelCase credential keys (``accountId``, ``apiToken``,
        ``apiEndpoint``) and their snake_case forms are accepted. A missing or
        empty endpoint falls back to the public API endpoint.
        """

        account_id = _first_present(values, "account_id", "accountId")
        api_token = _first_present(values, "api_token", "apiToken")
        api_endpoint = _first_present(values, "api_endpoint", "apiEndpoint")
        return cls(
            account_id=account_id if account_id is not None else "",
            api_token=api_token if api_token is not None else "",
            api_endpoint=api_endpoint or DEFAULT_API_ENDPOINT,
        )

    @classmethod
    def from_env(
        cls,
        *,
        prefix: str = DEFAULT_ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ConnectionConfig":
        """Build a config from ``{prefix}ACCOUNT_ID``, ``{prefix}API_TOKEN``
        and the optional ``{prefix}API_ENDPOINT`` environment variables."""

        env = os.environ if environ is None else environ
        missing = [
            f"{prefix}{name}"
            for name in ("ACCOUNT_ID", "API_TOKEN")
            if not env.get(f"{prefix}{name}")
        ]
        if missing:
            raise InvalidArgument(
                f"Missing required environment variables: {', '.join(missing)}"
            )
        return cls(
            account_id=env[f"{prefix}ACCOUNT_ID"],
            api_token=env[f"{prefix}API_TOKEN"],
            api_endpoint=env.get(f"{prefix}API_ENDPOINT") or DEFAULT_API_ENDPOINT,
        )


def _first_present(values: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if values.get(key) is not None:
            return values[key]
    return None
