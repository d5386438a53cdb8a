import logging

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from petring.core.errors import PetringError
from petring.core.security import Claims, TokenAuthority


logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/bot/setup")


def get_token_authority(request: Request) -> TokenAuthority:
    return request.app.state.token_authority


def require_bot(
    token: str = Depends(oauth2_scheme),
    authority: TokenAuthority = Depends(get_token_authority),
) -> Claims:
    """
    Validates the bearer access token of the bot.
    Usage:
        claims: Claims = Depends(require_bot)
    """
    try:
        return authority.verify(token)
    except PetringError as exc:
        logger.info("Rejected bot request: %s", exc.message)
        raise
