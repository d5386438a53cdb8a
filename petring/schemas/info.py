from pydantic import BaseModel


class ServerInfoOut(BaseModel):
    name: str
    version: str
    description: str
    authors: list[str]
    license: str
    source: str
    server_uptime: str
    system_uptime: str


class UptimeOut(BaseModel):
    app_uptime: str
    system_uptime: str
