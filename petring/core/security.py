import hmac
import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from jose import JWTError, jwt

from petring.core.errors import (
    AlreadyConfigured,
    Expired,
    InvalidFormat,
    InvalidSignature,
    NotConfigured,
    Revoked,
    Unauthorized,
)
from petring.core.time import unix_now


logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

ACCESS_AUDIENCE = "access"
REFRESH_AUDIENCE = "refresh"

# jose would reject our tokens on its own clock and on the `aud` claim;
# both are checked explicitly against the authority's clock instead.
_DECODE_OPTIONS = {
    "verify_exp": False,
    "verify_aud": False,
}


@dataclass(frozen=True)
class Claims:
    sub: str
    iat: int
    exp: int
    aud: str
    jti: Optional[str] = None

    def to_payload(self) -> dict:
        payload = {
            "sub": self.sub,
            "iat": self.iat,
            "exp": self.exp,
            "aud": self.aud,
        }
        if self.jti is not None:
            payload["jti"] = self.jti
        return payload

    @classmethod
    def from_payload(cls, payload: dict) -> "Claims":
        try:
            return cls(
                sub=str(payload["sub"]),
                iat=int(payload["iat"]),
                exp=int(payload["exp"]),
                aud=str(payload["aud"]),
                jti=payload.get("jti"),
            )
        except (KeyError, TypeError, ValueError):
            raise InvalidFormat("Malformed token claims")


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    access_token_expires_at: int
    refresh_token_expires_at: int


class TokenAuthority:
    """
    Owns the bot's token lifecycle for the lifetime of the process.

    The authority starts unconfigured. Exactly one successful `bootstrap`
    hands out the first access/refresh pair; afterwards only `refresh` mints
    new pairs. Revoked tokens live in memory, so a new authority (a restart)
    starts with an empty revocation set and unconfigured again.

    `_lock` covers both the configured flag and the revocation set and is
    held for the full duration of every check-then-mutate operation.
    """

    def __init__(
        self,
        bot_token: str,
        access_secret: str,
        refresh_secret: str,
        access_ttl: int = 300,
        refresh_ttl: int = 86400,
        clock: Callable[[], int] = unix_now,
    ):
        self._bot_token = bot_token
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._configured = False
        self._revoked: set[str] = set()

    @classmethod
    def from_settings(cls, settings, clock: Callable[[], int] = unix_now) -> "TokenAuthority":
        return cls(
            bot_token=settings.BOT_TOKEN,
            access_secret=settings.ACCESS_TOKEN_SECRET,
            refresh_secret=settings.REFRESH_TOKEN_SECRET,
            access_ttl=settings.ACCESS_TOKEN_TTL_SECONDS,
            refresh_ttl=settings.REFRESH_TOKEN_TTL_SECONDS,
            clock=clock,
        )

    @property
    def configured(self) -> bool:
        with self._lock:
            return self._configured

    def is_revoked(self, token: str) -> bool:
        with self._lock:
            return token in self._revoked

    def new_claims(self, subject: str, audience: str) -> Claims:
        now = int(self._clock())
        if audience == ACCESS_AUDIENCE:
            return Claims(sub=subject, iat=now, exp=now + self._access_ttl, aud=ACCESS_AUDIENCE)
        if audience == REFRESH_AUDIENCE:
            return Claims(
                sub=subject,
                iat=now,
                exp=now + self._refresh_ttl,
                aud=REFRESH_AUDIENCE,
                jti=str(uuid.uuid4()),
            )
        raise InvalidFormat(f"Unknown token audience: {audience}")

    def _secret_for(self, audience: str) -> str:
        if audience == ACCESS_AUDIENCE:
            return self._access_secret
        if audience == REFRESH_AUDIENCE:
            return self._refresh_secret
        raise InvalidFormat(f"Unknown token audience: {audience}")

    def sign(self, claims: Claims) -> str:
        # Access claims minted in the same second are identical; the header
        # nonce keeps every token string distinct for the revocation set.
        return jwt.encode(
            claims.to_payload(),
            self._secret_for(claims.aud),
            algorithm=ALGORITHM,
            headers={"nonce": uuid.uuid4().hex},
        )

    def _decode(self, token: str, secret: str) -> Claims:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options=_DECODE_OPTIONS,
            )
        except JWTError:
            raise InvalidSignature()
        return Claims.from_payload(payload)

    def _mint_pair(self, subject: str) -> TokenPair:
        access_claims = self.new_claims(subject, ACCESS_AUDIENCE)
        refresh_claims = self.new_claims(subject, REFRESH_AUDIENCE)
        return TokenPair(
            access_token=self.sign(access_claims),
            refresh_token=self.sign(refresh_claims),
            access_token_expires_at=access_claims.exp,
            refresh_token_expires_at=refresh_claims.exp,
        )

    def _check_refresh(self, token: str) -> Claims:
        # caller holds the lock
        if token in self._revoked:
            raise Revoked()
        claims = self._decode(token, self._refresh_secret)
        if claims.aud != REFRESH_AUDIENCE:
            raise InvalidFormat()
        if self._clock() > claims.exp:
            raise Expired()
        return claims

    def bootstrap(self, candidate_secret: str) -> TokenPair:
        with self._lock:
            if self._configured:
                raise AlreadyConfigured()
            if not hmac.compare_digest(candidate_secret.encode("utf-8"), self._bot_token.encode("utf-8")):
                raise Unauthorized()

            pair = self._mint_pair(candidate_secret)
            self._configured = True

        logger.info("Bot setup completed")
        return pair

    def verify(self, token: str) -> Claims:
        with self._lock:
            if token in self._revoked:
                raise Revoked()

        claims = self._decode(token, self._access_secret)
        if claims.aud != ACCESS_AUDIENCE:
            raise InvalidFormat()
        if self._clock() > claims.exp:
            raise Expired()
        return claims

    def refresh(self, refresh_token: str, superseded_access_token: str) -> TokenPair:
        """
        Mint a new pair from a valid refresh token.

        Only `superseded_access_token` is revoked. The consumed refresh token
        stays valid until its own expiry.
        """
        with self._lock:
            if not self._configured:
                raise NotConfigured()
            claims = self._check_refresh(refresh_token)
            pair = self._mint_pair(claims.sub)
            self._revoked.add(superseded_access_token)

        logger.info("Bot tokens refreshed")
        return pair
