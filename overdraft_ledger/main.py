"""
Overdraft Ledger — FastAPI Application.

This is the entry point for the application.
Logging is configured and all routers are registered here.
"""

from fastapi import FastAPI

from overdraft_ledger.config import get_settings
from overdraft_ledger.logging_config import setup_logging
from overdraft_ledger.api.health import router as health_router
from overdraft_ledger.api.customers import router as customers_router
from overdraft_ledger.api.transactions import router as transactions_router

settings = get_settings()

setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Account ledger with overdraft interest and transaction disputes",
)

# Register routers
app.include_router(health_router)
app.include_router(customers_router)
app.include_router(transactions_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "overdraft_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
