"""
Entry point for running the User Event Service with uvicorn
"""

import uvicorn

from user_events.core.config import config
from user_events.core.logger import logger

if __name__ == "__main__":
    logger.info(
        f"Starting {config.service_name} on port {config.port}",
        metadata={
            "service_name": config.service_name,
            "version": config.service_version,
            "environment": config.environment,
            "port": config.port
        }
    )

    uvicorn.run(
        "user_events.main:app",
        host=config.host,
        port=config.port,
        reload=config.environment == "development"
    )
