#!/usr/bin/env python3
"""
Seattle Guide server launcher
Runs the FastAPI chat endpoint under uvicorn
"""
import os
import sys

# Fix encoding issues on servers with ASCII locale
os.environ.setdefault('PYTHONIOENCODING', 'utf-8')
os.environ.setdefault('LANG', 'en_US.UTF-8')
os.environ.setdefault('LC_ALL', 'en_US.UTF-8')

import logging
import uvicorn
from seattle_guide.config import settings

logging.basicConfig(
    level=settings.log_level_value,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
# httpx logs full request URLs at INFO, and Maps URLs carry the API key
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def main():
    logger.info("Starting Seattle Guide server...")
    logger.info(f"Python {sys.version}, encoding={sys.getdefaultencoding()}")
    logger.info(f"HTTP server will run on http://{settings.http_host}:{settings.http_port}")
    for name in ("google_maps_api_key", "fixie_api_key", "openai_api_key"):
        if not getattr(settings, name):
            logger.warning(f"{name.upper()} is not set; chat requests will fail until it is")

    uvicorn.run(
        "seattle_guide.main:app",
        host=settings.http_host,
        port=settings.http_port,
        log_level=logging.getLevelName(settings.log_level_value).lower(),
    )


if __name__ == "__main__":
    main()
