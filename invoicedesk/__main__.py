"""Run the API with uvicorn: ``python -m invoicedesk``."""
import uvicorn

from invoicedesk.config import settings


if __name__ == "__main__":
    uvicorn.run(
        "invoicedesk.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
