from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from calculadora import __version__
from calculadora.api.errors import register_exception_handlers
from calculadora.api.routers import calculos_router, clientes_router, usuarios_router
from calculadora.core.config import get_settings
from calculadora.core.logging import setup_logging


def create_app() -> FastAPI:
    # Configure logging before creating the app
    setup_logging()
    settings = get_settings()

    app = FastAPI(
        title="Calculadora API",
        description="API para cálculos de caução de locação, clientes e usuários",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(calculos_router, prefix="/api")
    app.include_router(clientes_router, prefix="/api")
    app.include_router(usuarios_router, prefix="/api")

    @app.get("/api/health", tags=["Health"])
    def health_check():
        return {
            "status": "ok",
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


app = create_app()
