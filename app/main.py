from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.dependencies import account_store, verify_api_key
from app.routers.accounts import router as accounts_router
from app.utils.exceptions import register_exception_handlers

SERVICE_NAME = "account-service"
SERVICE_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    await account_store.init()
    yield
    await account_store.dispose()


app = FastAPI(
    title="Account Service API",
    description="Registro, inicio de sesión y recuperación de contraseña de usuarios",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

_api_key_dep = [Depends(verify_api_key)]

app.include_router(accounts_router, prefix="/api/v1", dependencies=_api_key_dep)


@app.get("/health")
async def health_check():
    return {"success": True, "data": {"service": SERVICE_NAME, "version": SERVICE_VERSION}}
