import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from estimate_wizard.api.v1.wizard import router as wizard_router
from estimate_wizard.core.config import settings
from estimate_wizard.wiring.dependencies import close_http_client


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("session_id", "category_id", "slug", "step", "status", "attempt", "account_id", "reason", "error"):
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
    await close_http_client()


app = FastAPI(title="Estimate Calculator Wizard", version="1.0.0", lifespan=lifespan)

app.include_router(wizard_router, prefix="/api/v1/wizard", tags=["wizard"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
