"""
main.py — FastAPI Entry Point for the Pedidos Service

This module provides the REST API of the bakery order-taking service.
It wires the in-memory catalog and order repository into the HTTP routes and
makes sure the required secrets are loaded before any traffic is accepted.

Responsibilities:
    • List and look up catalog products
    • Accept new orders and run the order-creation workflow
    • Translate workflow errors into JSON error responses
    • Load secrets once at startup, before the listener binds
    • Provide system health information
"""

import sys
from contextlib import asynccontextmanager
from typing import Dict, List, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .bootstrap import load_secrets
from .catalog import CatalogStore, default_catalog
from .clients import SecretProvider, build_secret_backend
from .config import HOST, PORT, REQUIRED_SECRETS
from .errors import PedidosError, ProductNotFound
from .logging_config import get_logger, setup_logging
from .models import CreateOrderResponse, ErrorResponse, Product
from .repository import OrderRepository
from .workflow import OrderWorkflow

# Initialization
setup_logging()
log = get_logger(__name__)

ORDER_CREATED_MESSAGE = "Pedido creado exitosamente."


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup/shutdown handler.

    If the app was built without preloaded secrets, loads them here. uvicorn
    runs this before binding the socket, so a FATAL result keeps the listener
    from ever accepting traffic. On shutdown the in-memory store is torn down.
    """
    log.info("Iniciando servicio de pedidos...")
    if app.state.secrets is None:
        provider = app.state.secret_provider or SecretProvider(build_secret_backend())
        result = load_secrets(provider, app.state.required_secrets)
        if not result.ready:
            raise RuntimeError(f"Arranque abortado: {result.error}")
        app.state.secrets = result.secrets
    yield
    log.info("Servicio de pedidos detenido. Liberando almacenamiento en memoria.")
    app.state.repository.clear()


def create_app(
        catalog: Optional[CatalogStore] = None,
        repository: Optional[OrderRepository] = None,
        secrets: Optional[Dict[str, str]] = None,
        secret_provider: Optional[SecretProvider] = None,
        required_secrets: Optional[List[str]] = None,
) -> FastAPI:
    """
    Builds the FastAPI application.

    Args:
        catalog (CatalogStore): Product catalog, defaults to the bakery catalog.
        repository (OrderRepository): Order store, defaults to an empty one.
        secrets (dict): Already loaded secrets. When None they are loaded at startup.
        secret_provider (SecretProvider): Provider used for the startup load.
        required_secrets (list): Names to load at startup, defaults to REQUIRED_SECRETS.

    Returns:
        FastAPI: The configured application.
    """
    app = FastAPI(title="API de Productos y Pedidos", lifespan=lifespan)

    app.state.catalog = catalog if catalog is not None else default_catalog()
    app.state.repository = repository if repository is not None else OrderRepository()
    app.state.workflow = OrderWorkflow(app.state.catalog, app.state.repository)
    app.state.secrets = secrets
    app.state.secret_provider = secret_provider
    app.state.required_secrets = REQUIRED_SECRETS if required_secrets is None else required_secrets

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PedidosError)
    async def handle_pedidos_error(request: Request, exc: PedidosError):
        log.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Bienvenido a la API de Productos con FastAPI."

    @app.get("/productos", response_model=List[Product])
    def list_products():
        """Returns the complete catalog."""
        return app.state.catalog.list_products()

    @app.get(
        "/productos/{product_id}",
        response_model=Product,
        responses={404: {"model": ErrorResponse}},
    )
    def get_product(product_id: str):
        """
        Returns a single product.

        The id arrives as a string; anything that is not a known integer id
        yields 404.
        """
        try:
            lookup_id = int(product_id)
        except ValueError:
            lookup_id = product_id.strip()
            product = None
        else:
            product = app.state.catalog.find_by_id(lookup_id)
        if product is None:
            raise ProductNotFound(lookup_id, message=f"Producto con id {lookup_id} no encontrado")
        return product

    @app.post(
        "/pedidos",
        status_code=201,
        response_model=CreateOrderResponse,
        responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    )
    async def create_order(request: Request):
        """
        Receives a new order and runs the order-creation workflow.

        The body is read raw and checked by the workflow itself, so that a
        malformed payload maps to 400 with the service's own error body.

        Returns:
            CreateOrderResponse: 'mensaje' plus the persisted order as 'pedido'.

        Raises:
            InvalidRequest (400): Payload is missing 'cliente' or a non-empty 'productos' array.
            ProductNotFound (404): A line references an unknown product.
        """
        try:
            payload = await request.json()
        except ValueError:
            payload = None

        order = app.state.workflow.place_order(payload)
        return CreateOrderResponse(mensaje=ORDER_CREATED_MESSAGE, pedido=order)

    @app.get("/health")
    def health_check():
        """
        Simple health check endpoint for monitoring systems and container orchestrators.
        """
        return {"status": "ok"}

    return app


def run():
    """
    Process entry point: loads secrets, then binds the HTTP listener.

    A FATAL startup result ends the process with exit status 1.
    """
    provider = SecretProvider(build_secret_backend())
    result = load_secrets(provider, REQUIRED_SECRETS)
    if not result.ready:
        log.critical("Fallo al iniciar el servidor: secretos no disponibles.")
        sys.exit(1)

    application = create_app(secrets=result.secrets, secret_provider=provider)
    log.info(f"Servidor escuchando en http://{HOST}:{PORT}")
    uvicorn.run(application, host=HOST, port=PORT)


app = create_app()


if __name__ == "__main__":
    run()
