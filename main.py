"""Main application entry point."""

from evhenter.config.environment import IS_PRODUCTION_ENVIRONMENT
from evhenter.api.app import app

if __name__ == "__main__":
    import uvicorn
    if not IS_PRODUCTION_ENVIRONMENT:
        # Development mode - import string so reload can re-import the app
        uvicorn.run(
            "evhenter.api.app:app",
            host="0.0.0.0",
            port=8000,
            reload=True,
            log_level="debug"
        )
    else:
        # Production mode - use string reference for proper multi-worker support
        uvicorn.run(
            "evhenter.api.app:app",  # String reference required for multiple workers
            host="0.0.0.0",
            port=8000,
            reload=False,
            workers=4,
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )
