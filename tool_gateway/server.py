# The module runs the gateway under uvicorn with the configured host and port.
# Date: 2025-07-02
# Version: 0.1.0

import uvicorn

from tool_gateway.core.config import get_settings


def run():
    settings = get_settings()
    uvicorn.run(
        "tool_gateway.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
