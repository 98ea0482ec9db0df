import os

import uvicorn

from ducksmart.config import settings
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="server")


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name=settings.job_name)
    logger.info("Starting DuckSmart server", extra={"weather_source": settings.weather_source})

    uvicorn.run(
        "ducksmart.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=False,
    )
