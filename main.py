import uvicorn

from smartqr.api.main import create_app
from smartqr.core.config.settings import settings

app = create_app(settings)

if __name__ == "__main__":
    print("🚀 Starting SmartQR VietQR Generator...")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
