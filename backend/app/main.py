import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import customers, orders
from app.core.config import settings
from app.core.exceptions import AppError
from app.db.base import get_engine, init_models

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DB_CREATE_ALL:
        logger.info("Creating tables from metadata")
        await init_models(get_engine())
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Customers with live order counts, order listings and analytics",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "Invalid request parameters",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


# Routers
app.include_router(customers.router)
app.include_router(orders.router)


@app.get("/")
async def root():
    return {
        "message": f"{settings.PROJECT_NAME} is running",
        "endpoints": {
            "GET /api/customers": "Customers with pagination and order count filters",
            "GET /api/customers/{id}": "Single customer with orders",
            "GET /api/orders": "Orders with customer details, optional status filter",
            "GET /api/orders/analytics": "Order summary and analytics",
            "GET /api/orders/customer/{customer_id}": "One customer's orders",
        },
    }


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": "0.1.0"}
