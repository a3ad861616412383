"""
Application context.

Owns everything a request handler needs that outlives a single request:
settings, the database engine and session factory, the token issuer and
the attachment store. One context is built per application and stored on
``app.state.context``.
"""

import logging
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from backend.app.core.config import Settings
from backend.app.core.jwt import TokenIssuer
from backend.app.db.session import Base, build_engine, build_session_factory
from backend.app.services.attachments import AttachmentStore
from backend.app.services.credentials import bootstrap_seed

# Import models to ensure they are registered with Base
from backend.app.models.user import User  # noqa: F401
from backend.app.models.shift import Shift  # noqa: F401
from backend.app.models.report import Report  # noqa: F401

logger = logging.getLogger("equipment_monitoring.context")


class AppContext:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: AsyncEngine = build_engine(settings)
        self.session_factory: async_sessionmaker = build_session_factory(self.engine)
        self.tokens = TokenIssuer.from_settings(settings)
        self.attachments = AttachmentStore(settings.upload_dir, settings.max_upload_bytes)

    async def startup(self) -> None:
        """Create tables, the upload directory and the seed accounts."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        self.attachments.ensure_directory()

        if self.settings.seed_default_users:
            async with self.session_factory() as db:
                await bootstrap_seed(db)

        logger.info("Application context started (database=%s)", self.engine.url.render_as_string(hide_password=True))

    async def shutdown(self) -> None:
        await self.engine.dispose()
        logger.info("Database connection closed.")


def get_context(request: Request) -> AppContext:
    """FastAPI dependency returning the application context."""
    return request.app.state.context
