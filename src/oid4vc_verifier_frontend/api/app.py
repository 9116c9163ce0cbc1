"""FastAPI application for the OID4VC verifier frontend"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from oid4vc_verifier_frontend.api.dependencies import get_container
from oid4vc_verifier_frontend.api.routes import frontend

log = logging.getLogger(__name__)


def allowed_origins() -> List[str]:
    """CORS origins from VERIFIER_FRONTEND_ALLOWED_ORIGINS (comma separated)"""
    value = os.getenv("VERIFIER_FRONTEND_ALLOWED_ORIGINS", "")
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan context manager.

    Resolves the configuration at startup so misconfiguration fails fast.
    """
    log.info("Starting verifier frontend API...")

    config = get_container().get_config()
    log.info("Verifier backend: %s, public URL: %s", config.api_base_url, config.public_url)

    yield

    log.info("Shutting down verifier frontend API...")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="OID4VC Verifier Frontend",
        description="""
        Verifier-side orchestration of OpenID4VP presentation transactions

        The frontend talks to a verifier backend on behalf of the user's
        browser session:
        - starts a transaction and hands the user off to their wallet
          (redirect on mobile, QR code on desktop)
        - retrieves the wallet's JARM-protected response, decrypts it with the
          transaction's ephemeral key and verifies the MDOC credential

        ## Endpoints

        - `POST /init` - Initialize presentation transaction
        - `GET /result` - Get verification result
        """,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Session cookies require explicit origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.include_router(frontend.router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint"""
        return JSONResponse(content={"status": "healthy", "service": "oid4vc-verifier-frontend"})

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=3000, log_level="info")
