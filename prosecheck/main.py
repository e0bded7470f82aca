import logging
from fastapi import FastAPI
from prosecheck.api.routes_analyze import router as analyze_router
from prosecheck.core.config import LOG_LEVEL
from prosecheck.middleware.limits import BodySizeLimitMiddleware

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

app = FastAPI(title="ProseCheck")

app.add_middleware(BodySizeLimitMiddleware)

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(analyze_router)
