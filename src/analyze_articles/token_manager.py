"""Client-credentials token acquisition with caching."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

import requests

from analyze_articles.errors import AuthError
from common.config import AuthConfig

logger = logging.getLogger(__name__)

# Refresh this many seconds before the issuer's expiry
REFRESH_MARGIN_SECONDS = 60


@dataclass(frozen=True)
class Token:
    value: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class TokenManager:
    """Fetches a bearer token from an OAuth client-credentials endpoint and caches it.

    A cached token is returned without a network call until shortly before it
    expires. Refreshes are not serialized: concurrent callers may both fetch,
    and whichever finishes last replaces the cached token.
    """

    def __init__(
        self,
        domain: str,
        client_id: str,
        client_secret: str,
        audience: str,
        timeout: float = 10,
        session: requests.Session | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.token_url = f"https://{domain}/oauth/token"
        self._client_id = client_id
        self._client_secret = client_secret
        self._audience = audience
        self._timeout = timeout
        self._session = session or requests.Session()
        self._clock = clock
        self._token: Token | None = None

    @classmethod
    def from_config(cls, config: AuthConfig, session: requests.Session | None = None) -> TokenManager:
        missing = [
            name
            for name, value in (
                ("AUTH0_DOMAIN", config.domain),
                ("AUTH0_CLIENT_ID", config.client_id),
                ("AUTH0_CLIENT_SECRET", config.client_secret),
                ("AUTH0_AUDIENCE", config.audience),
            )
            if not value
        ]
        if missing:
            raise AuthError(f"Missing auth configuration: {', '.join(missing)}")

        return cls(
            domain=config.domain,
            client_id=config.client_id,
            client_secret=config.client_secret,
            audience=config.audience,
            timeout=config.timeout,
            session=session,
        )

    @property
    def token(self) -> Token | None:
        return self._token

    def get_token(self) -> str:
        """Return a valid access token, fetching a new one if needed.

        Raises:
            AuthError: If the identity endpoint is unreachable or refuses.
        """
        token = self._token
        if token is not None and token.is_valid(self._clock()):
            return token.value

        token = self._fetch_token()
        self._token = token
        return token.value

    def invalidate(self) -> None:
        """Drop the cached token so the next call fetches a fresh one."""
        self._token = None

    def _fetch_token(self) -> Token:
        logger.info("Requesting access token from %s", self.token_url)
        try:
            response = self._session.post(
                self.token_url,
                json={
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                    "audience": self._audience,
                    "grant_type": "client_credentials",
                },
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise AuthError(f"Failed to obtain access token: {e}") from e
        except ValueError as e:
            raise AuthError(f"Invalid token response: {e}") from e

        if not isinstance(data, dict):
            raise AuthError(f"Invalid token response: expected an object, got {type(data).__name__}")

        access_token = data.get("access_token")
        if not access_token or not isinstance(access_token, str):
            raise AuthError("Token response did not include an access_token")

        try:
            expires_in = float(data.get("expires_in", 0))
        except (TypeError, ValueError) as e:
            raise AuthError(f"Invalid expires_in in token response: {data.get('expires_in')!r}") from e
        expires_at = self._clock() + expires_in - REFRESH_MARGIN_SECONDS
        return Token(value=access_token, expires_at=expires_at)
