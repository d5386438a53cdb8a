from pydantic import BaseModel


class BotSetupRequest(BaseModel):
    bot_token: str


class BotRefreshRequest(BaseModel):
    refresh_token: str
    access_token: str


class TokenPairOut(BaseModel):
    access_token: str
    refresh_token: str
    access_token_expires_at: int
    refresh_token_expires_at: int
    token_type: str = "bearer"
