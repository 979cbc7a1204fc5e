# The module provides the FastAPI application that serves as the gateway's HTTP front door.
# Date: 2025-07-02
# Version: 0.2.0

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tool_gateway.api.api import api_router
from tool_gateway.core.config import get_settings
from tool_gateway.core.discovery import build_discovery_service
from tool_gateway.core.errors import GatewayError, MissingToolNameError
from tool_gateway.core.service_registry import service_registry
from tool_gateway.utils.logger import console


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Starts service discovery on startup and stops it on shutdown.
    With discovery disabled, the registry is filled once from STATIC_SERVICES.
    """
    settings = get_settings()
    console.set_level(settings.LOG_LEVEL)
    console.rule("Tool Gateway")
    console.display_data_as_table(
        {
            "listen": f"{settings.HOST}:{settings.PORT}",
            "discovery": "enabled" if settings.DISCOVERY_ENABLED else "static",
            "candidates": {c.name: c.address for c in settings.DISCOVERY_CANDIDATES},
            "shell restricted": settings.SHELL_RESTRICTED,
        },
        title="Gateway Configuration",
    )

    discovery_service = None
    if settings.DISCOVERY_ENABLED:
        discovery_service = build_discovery_service(service_registry)
        discovery_service.start()
    else:
        service_registry.replace(settings.STATIC_SERVICES)
        console.info(f"Discovery disabled. Static services: {service_registry.as_dict()}")

    console.success("Tool Gateway is ready to accept requests.")
    yield

    if discovery_service is not None:
        await discovery_service.stop()


app = FastAPI(
    title="Tool Gateway",
    version="0.2.0",
    description="Executes named tools locally or forwards them to discovered sibling services.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MissingToolNameError)
async def missing_tool_name_handler(request: Request, exc: MissingToolNameError):
    return JSONResponse(status_code=400, content={"error": exc.message})


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    return JSONResponse(status_code=500, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """An absent body is a missing tool name; any other malformed body is a failed call."""
    for error in exc.errors():
        if tuple(error.get("loc", ())) == ("body",) and error.get("type") == "missing":
            return JSONResponse(status_code=400, content={"error": MissingToolNameError().message})
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    return JSONResponse(status_code=500, content={"error": f"Invalid request: {details}"})


@app.get("/", summary="Health Check", tags=["Status"])
def read_root():
    """Root endpoint to check if the service is alive."""
    console.debug("Health check endpoint was hit.")
    return {"message": "Tool Gateway is alive and running!"}

app.include_router(api_router)
