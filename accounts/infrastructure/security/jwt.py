"""JWT access/refresh token creation and verification.

Access and refresh tokens are signed with separate secrets and carry a
``type`` claim, so one can never be accepted in place of the other.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Literal, cast

from jose import JWTError, jwt

from accounts.core.config import Settings

TokenType = Literal["access", "refresh"]


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims of an access or refresh token."""

    user_id: str
    email: str
    token_type: TokenType


class TokenService:
    """Issue and verify JWT pairs using the configured secrets and TTLs."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def _secret(self, token_type: TokenType) -> str:
        if token_type == "access":
            return self._settings.jwt_access_secret.get_secret_value()
        return self._settings.jwt_refresh_secret.get_secret_value()

    def _encode(
        self, user_id: str, email: str, token_type: TokenType, expires_delta: timedelta
    ) -> str:
        now = datetime.now(UTC)
        claims: dict[str, Any] = {
            "sub": user_id,
            "email": email,
            "type": token_type,
            "iss": self._settings.jwt_issuer,
            "aud": self._settings.jwt_audience,
            "iat": now,
            "exp": now + expires_delta,
        }
        encoded = jwt.encode(
            claims, self._secret(token_type), algorithm=self._settings.jwt_algorithm
        )
        return cast(str, encoded)

    def create_access_token(
        self, user_id: str, email: str, expires_delta: timedelta | None = None
    ) -> str:
        return self._encode(
            user_id,
            email,
            "access",
            expires_delta
            or timedelta(minutes=self._settings.access_token_expire_minutes),
        )

    def create_refresh_token(
        self, user_id: str, email: str, expires_delta: timedelta | None = None
    ) -> str:
        return self._encode(
            user_id,
            email,
            "refresh",
            expires_delta or timedelta(days=self._settings.refresh_token_expire_days),
        )

    def create_token_pair(self, user_id: str, email: str) -> TokenPair:
        return TokenPair(
            access_token=self.create_access_token(user_id, email),
            refresh_token=self.create_refresh_token(user_id, email),
        )

    def _verify(self, token: str, token_type: TokenType) -> TokenClaims:
        """Decode and check signature, expiry, issuer, audience and type.

        Raises:
            ValueError: If the token is invalid, expired, or of the wrong type.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret(token_type),
                algorithms=[self._settings.jwt_algorithm],
                audience=self._settings.jwt_audience,
                issuer=self._settings.jwt_issuer,
                options={"require_exp": True, "require_sub": True},
            )
        except JWTError as e:
            raise ValueError(f"Invalid token: {e!s}") from e
        if payload.get("type") != token_type:
            raise ValueError(f"Token is not a {token_type} token")
        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise ValueError("Token missing required claim: sub")
        return TokenClaims(
            user_id=subject,
            email=str(payload.get("email") or ""),
            token_type=token_type,
        )

    def verify_access_token(self, token: str) -> TokenClaims:
        return self._verify(token, "access")

    def verify_refresh_token(self, token: str) -> TokenClaims:
        return self._verify(token, "refresh")
