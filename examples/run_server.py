"""
Run the OID4VC verifier frontend API server

This script starts the FastAPI server. Configuration is read from
VERIFIER_FRONTEND_* environment variables, falling back to a local test setup.
"""

import logging

import uvicorn

from oid4vc_verifier_frontend.api.app import app

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("Starting OID4VC Verifier Frontend API Server")
    print("=" * 60)
    print("\nEndpoints:")
    print("  - Docs: http://localhost:3000/docs")
    print("  - Health: http://localhost:3000/health")
    print("\nFrontend endpoints:")
    print("  - POST /init")
    print("  - GET /result?response_code=...")
    print("\n" + "=" * 60)

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=3000,
        log_level="info",
        access_log=True,
    )
