import os
from typing import Optional, Protocol

ACCESS_TOKEN_KEY = "accessToken"
ID_TOKEN_KEY = "idToken"


class TokenStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...


class SessionTokens:
    """In-memory session storage for the tokens sent with every request."""

    def __init__(self, access_token: Optional[str] = None, id_token: Optional[str] = None):
        self._tokens: dict[str, str] = {}
        if access_token:
            self._tokens[ACCESS_TOKEN_KEY] = access_token
        if id_token:
            self._tokens[ID_TOKEN_KEY] = id_token

    @classmethod
    def from_env(cls) -> "SessionTokens":
        return cls(os.getenv("SERVICE_ACCESS_TOKEN"), os.getenv("SERVICE_ID_TOKEN"))

    def get(self, key: str) -> Optional[str]:
        return self._tokens.get(key)

    def set(self, key: str, value: str) -> None:
        self._tokens[key] = value

    def clear(self) -> None:
        self._tokens.clear()


# process-wide default, like browser session storage
session_tokens = SessionTokens.from_env()
