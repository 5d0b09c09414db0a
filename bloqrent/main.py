import logging

import yaml
from fastapi import FastAPI

from bloqrent.infrastructure.config import settings
from bloqrent.infrastructure.database import Base, engine
from bloqrent.infrastructure.logging import configure_logging
from bloqrent.infrastructure.models import models  # noqa: F401  registers the tables on Base
from bloqrent.presentation.bloq_router import router as bloq_router
from bloqrent.presentation.error_handlers import register_error_handlers
from bloqrent.presentation.locker_router import router as locker_router
from bloqrent.presentation.rent_router import router as rent_router

configure_logging(settings.log_level, settings.quiet_loggers)
logger = logging.getLogger(__name__)

app = FastAPI(title="bloqrent")


# Use the contractual schema
def custom_openapi():
    with open(settings.openapi_path) as f:
        return yaml.safe_load(f)


app.openapi = custom_openapi
Base.metadata.create_all(bind=engine)
register_error_handlers(app)
app.include_router(bloq_router)
app.include_router(locker_router)
app.include_router(rent_router)

logger.info("bloqrent ready (database=%s)", engine.url.render_as_string(hide_password=True))
