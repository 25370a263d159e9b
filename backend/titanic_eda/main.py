from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.logging_config import setup_logging

# Routers
from .routers.health import router as health_router
from .routers.ingest import router as ingest_router
from .routers.analysis import router as analysis_router
from .routers.export import router as export_router

# ---------------------------------------------------------
# Logging & App init
# ---------------------------------------------------------
setup_logging(settings.log_level)

api = FastAPI(title=settings.project_name)

# ---------------------------------------------------------
# CORS middleware
# ---------------------------------------------------------
api.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_list() or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------
# Routers
# ---------------------------------------------------------
api.include_router(health_router, prefix="/health", tags=["health"])

api.include_router(ingest_router, prefix="/ingest", tags=["ingest"])
api.include_router(analysis_router, prefix="/analysis", tags=["analysis"])
api.include_router(export_router, prefix="/export", tags=["export"])


@api.get("/")
def root():
    return {
        "status": "ok",
        "project": settings.project_name,
    }


# This is what pytest imports: from backend.titanic_eda.main import app
app = api


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
