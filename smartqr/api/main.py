from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from smartqr import __version__
from smartqr.core.bootstrap.application import ApplicationBootstrap, ServiceContainer
from smartqr.core.config.settings import Settings, settings as default_settings
from smartqr.core.routers import monitoring_router, setup_exception_handlers
from smartqr.domains.banking.routers import router as banks_router
from smartqr.domains.qr_generation.routers import router as qr_router


def create_app(settings: Optional[Settings] = None,
               container: Optional[ServiceContainer] = None,
               warm_cache: bool = True) -> FastAPI:
    """
    Tạo FastAPI app.

    Args:
        settings (Settings, optional): Cấu hình, mặc định lấy từ environment variables
        container (ServiceContainer, optional): Service đã khởi tạo sẵn (dùng trong test)
        warm_cache (bool): Tải trước danh sách ngân hàng khi khởi động
    """
    settings = settings or default_settings
    bootstrap = ApplicationBootstrap(settings, container)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            print("🚀 Application startup...")
            app.state.container = await bootstrap.initialize(warm_cache=warm_cache)
            yield
        finally:
            print("🛑 Shutting down application")

    app = FastAPI(
        title="SmartQR - VietQR Generator",
        description="Tạo mã VietQR từ câu chuyển khoản tiếng Việt tự do với Gemini AI",
        version=__version__,
        lifespan=lifespan
    )
    app.state.bootstrap = bootstrap

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_exception_handlers(app)

    app.include_router(qr_router, prefix="/api")
    app.include_router(banks_router, prefix="/api")
    app.include_router(monitoring_router, prefix="/api")

    @app.get("/")
    async def root():
        """API root với thông tin hệ thống"""
        return {
            "service": "SmartQR - VietQR Generator",
            "version": __version__,
            "status": "healthy" if bootstrap.is_initialized else "initializing",
            "endpoints": {
                "generate_qr": "/api/generate-qr",
                "generate_qr_image": "/api/generate-qr/image",
                "banks": "/api/banks",
                "bank_deeplinks": "/api/bank-deeplinks",
                "health": "/api/health",
                "docs": "/docs"
            }
        }

    return app
