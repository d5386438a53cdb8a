import logging

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

import petring.models.member
import petring.models.ad

from petring.api.ads import router as ads_router
from petring.api.members import router as members_router
from petring.api.public import router as public_router
from petring.core.config import APP_VERSION, settings
from petring.core.errors import PetringError
from petring.core.logging_setup import configure_logging
from petring.core.security import TokenAuthority
from petring.db.session import Base, engine
from petring.routes.bot import router as bot_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="petring API", version=APP_VERSION)

Base.metadata.create_all(bind=engine)

# one authority per process; a restart forgets setup state and revocations
app.state.token_authority = TokenAuthority.from_settings(settings)


@app.exception_handler(PetringError)
async def petring_error_handler(request: Request, exc: PetringError):
    if exc.status_code == 304:
        return Response(status_code=304)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(public_router)
app.include_router(bot_router)
app.include_router(members_router)
app.include_router(ads_router)


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


@app.get("/")
def root():
    return {"app": "petring", "docs": "/docs"}


def run():
    import uvicorn

    logger.info("Starting petring on %s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
