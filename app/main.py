import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1.appointments import router as appointments_router
from app.api.v1.scheduling import router as scheduling_router
from app.core.config import settings
from app.wiring.dependencies import close_http_clients

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("appointment_id", "operation", "sequence", "state", "query_key", "reason", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_http_clients()


app = FastAPI(title=f"{settings.BUSINESS_NAME} Scheduling", version="1.0.0", lifespan=lifespan)

app.include_router(scheduling_router, prefix="/api", tags=["scheduling"])
app.include_router(appointments_router, prefix="/api", tags=["appointments"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
