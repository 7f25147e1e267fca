from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from biztime.core.config import settings
from biztime.core.db import init_db
from biztime.core.error_handlers import register_error_handlers
from biztime.core.logging_config import setup_logging

# Models (all mappers must be registered before the first query)
from biztime.models import company_model, industry_model, invoice_model  # noqa: F401

# Routers
from biztime.routes import companies, industries, invoices, system

logger = logging.getLogger(__name__)

app = FastAPI(
    title="BizTime API",
    version="1.0.0",
)

# ==========================
# CORS
# ==========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ==========================
# Error responder
# ==========================
register_error_handlers(app)


# ==========================
# Startup Event
# ==========================
@app.on_event("startup")
def startup_event():
    setup_logging(settings.LOG_LEVEL)
    init_db()
    logger.info("BizTime API is running (%s)", settings.BIZTIME_ENV)


# ==========================
# Routers
# ==========================
app.include_router(system.router, prefix="/system", tags=["system"])
app.include_router(companies.router, prefix="/companies", tags=["companies"])
app.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
app.include_router(industries.router, prefix="/industries", tags=["industries"])


# ==========================
# Root Endpoint
# ==========================
@app.get("/")
def root():
    return {
        "service": "biztime-api",
        "status": "running",
        "endpoints": {
            "system": "/system/health",
            "companies": "/companies",
            "invoices": "/invoices",
            "industries": "/industries",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("biztime.main:app", host=settings.HOST, port=settings.PORT)
