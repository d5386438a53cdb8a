from fastapi import APIRouter, Depends

from petring.api.deps import get_token_authority
from petring.core.security import TokenAuthority, TokenPair
from petring.schemas.bot import BotRefreshRequest, BotSetupRequest, TokenPairOut

router = APIRouter(prefix="/bot", tags=["bot"])


def _pair_out(pair: TokenPair) -> TokenPairOut:
    return TokenPairOut(
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
        access_token_expires_at=pair.access_token_expires_at,
        refresh_token_expires_at=pair.refresh_token_expires_at,
    )


@router.post("/setup", response_model=TokenPairOut)
def bot_setup(
    payload: BotSetupRequest,
    authority: TokenAuthority = Depends(get_token_authority),
):
    return _pair_out(authority.bootstrap(payload.bot_token))


@router.post("/refresh", response_model=TokenPairOut)
def bot_refresh(
    payload: BotRefreshRequest,
    authority: TokenAuthority = Depends(get_token_authority),
):
    return _pair_out(authority.refresh(payload.refresh_token, payload.access_token))
