"""Session token issuing and verification backed by JSON Web Tokens."""

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from jose import JWTError, jwt

from podcaster.config import get_logger
from podcaster.domain.entities import TokenClaims
from podcaster.domain.exceptions import InvalidTokenError

if TYPE_CHECKING:
    from podcaster.config.settings import Settings

logger = get_logger(__name__)

SUBJECT_CLAIM = "id"


class TokenService:
    """Issues and validates stateless session tokens for a numeric subject id.

    Tokens are never stored or revoked: validity is a function of the
    signature and, when a lifetime is configured, the ``exp`` claim.
    """

    def __init__(
        self,
        private_key: str,
        algorithm: str = "HS256",
        expires_in: timedelta | None = None,
    ) -> None:
        """Initialize with the process-wide signing secret.

        Args:
            private_key: Shared secret used to sign and verify tokens
            algorithm: JWS algorithm understood by python-jose
            expires_in: Token lifetime; tokens never expire when None
        """
        if not private_key:
            raise ValueError("TokenService requires a non-empty private key")
        self._private_key = private_key
        self._algorithm = algorithm
        self._expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TokenService":
        security = settings.security
        return cls(
            private_key=security.private_key.get_secret_value(),
            algorithm=security.algorithm,
            expires_in=security.token_lifetime,
        )

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def sign(self, subject_id: int) -> str:
        """Encode the subject id into a signed token.

        Deterministic for a given key when no lifetime is configured.
        """
        claims: dict[str, Any] = {SUBJECT_CLAIM: subject_id}
        if self._expires_in is not None:
            claims["exp"] = datetime.now(UTC) + self._expires_in
        return jwt.encode(claims, self._private_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode a token and return its claims.

        Raises:
            InvalidTokenError: The token is malformed, carries a bad signature,
                has expired, or lacks an integer subject claim.
        """
        try:
            payload = jwt.decode(token, self._private_key, algorithms=[self._algorithm])
        except JWTError as e:
            logger.debug(f"Rejected session token: {e}")
            raise InvalidTokenError(str(e)) from e

        subject_id = payload.get(SUBJECT_CLAIM)
        if not isinstance(subject_id, int) or isinstance(subject_id, bool):
            raise InvalidTokenError(f"Token has no valid '{SUBJECT_CLAIM}' claim")

        return TokenClaims(subject_id=subject_id)
