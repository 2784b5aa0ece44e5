"""
启动入口

    python -m mcp_gateway
"""

import uvicorn

from mcp_gateway.core.config import settings


def main() -> None:
    uvicorn.run(
        "mcp_gateway.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG and settings.ENV == "development",
    )


if __name__ == "__main__":
    main()
