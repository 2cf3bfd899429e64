import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings
from app.routes import report
from app.utils.database import ReportRepository

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[ReportRepository] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # A store that cannot be reached at startup keeps the service down
        owned = app.state.repository is None
        if owned:
            app.state.repository = ReportRepository.connect(settings)
        try:
            app.state.repository.ensure_indexes()
            yield
        finally:
            if owned:
                app.state.repository.close()
                app.state.repository = None
                logger.info("Closed report store connection")

    app = FastAPI(
        title="Crime Report Service",
        description="Backend API for submitting and searching crime reports",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.repository = repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    app.include_router(report.router, prefix="/api", tags=["Crime Reporting"])

    @app.get("/")
    def root():
        return {"message": "Welcome to the Crime Report Service API"}

    return app


app = create_app()
