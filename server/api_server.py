"""FastAPI application entry point for the extension data bridge."""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.logging.logging_setup import setup_logging
from shared.helper.HelperConfig import HelperConfig
from shared.clients.extdata.ExtensionDataClientManager import ExtensionDataClientManager
from server.core.bootstrap import build_tool_registry
from server.routers.ToolRouter import router as tool_router

app_version = os.getenv("APP_VERSION", "unknown")


def create_app(
    helper_config: HelperConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the FastAPI app.

    Args:
        helper_config (HelperConfig | None): Configuration to use. If omitted, logging
            is set up on startup and a new HelperConfig is created.
        transport (httpx.AsyncBaseTransport | None): Optional transport for the remote client.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        # when the app starts
        config = helper_config or HelperConfig(logger=setup_logging())
        logging = config.get_logger()
        app.state.logging = logging
        app.state.helper_config = config

        registry, client_manager = build_tool_registry(helper_config=config, transport=transport)
        app.state.tool_registry = registry
        app.state.client_manager = client_manager
        logging.info("Registered %d tools: %s", len(registry.get_tool_names()), ", ".join(registry.get_tool_names()))

        await check_connection(client_manager)

        # while the app is running...
        yield

        # when the app shuts down, close the client connection
        logging.info("Shutting down, closing extension data client...")
        await client_manager.close()

    app = FastAPI(
        title="extdata_bridge",
        description=(
            "Exposes the extension data storage (scoped JSON document collections of installed extensions) "
            "as tools for agent hosts. List tools via GET /tools and invoke them via POST /tools/{name}."
        ),
        version=app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(tool_router)

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "ok", "version": app_version}

    return app


async def check_connection(client_manager: ExtensionDataClientManager) -> None:
    """Check connectivity to the remote service on startup.

    Failures are non-fatal: the server stays up and every tool call reports the
    problem as an error result.
    """
    logging = client_manager.logging
    try:
        client = await client_manager.get_client()
        result: httpx.Response = await client.do_healthcheck()
    except (ValueError, httpx.HTTPError, httpx.InvalidURL) as e:
        logging.warning("Extension data backend is not available: %s. Tool calls will fail.", e)
        return
    if not result.is_success:
        logging.warning(
            "Extension data backend is not reachable (status %d). Tool calls may fail.",
            result.status_code,
        )


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("API_SERVER_PORT", "8000")))
