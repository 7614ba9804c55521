"""
ProxyServer class for CLI control of the FastAPI application.
"""
import logging
import os
from typing import Optional

import uvicorn

import settings
from settings import PORT, LOG_LEVEL, BIND_ADDRESS
from .app import app

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ProxyServer:
    """Relay server wrapper for CLI control"""

    def __init__(self, debug: bool = False, bind_address: Optional[str] = None, port: Optional[int] = None):
        self.server = None
        self.config = None
        self.debug = debug
        self.bind_address = bind_address or BIND_ADDRESS
        self.port = port or PORT
        self.log_file: Optional[str] = None

        if debug:
            self._setup_debug_logging()

    def _setup_debug_logging(self):
        """Send DEBUG logs to the console and append them to proxy_debug.log"""
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)

        # Clear existing handlers to avoid duplicates
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        self.log_file = os.path.abspath('proxy_debug.log')
        file_handler = logging.FileHandler(self.log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter(LOG_FORMAT)
        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)

        logger.info(f"Debug logging enabled - appending to {self.log_file}")

    def run(self):
        """Run the relay server (blocking)"""
        logger.info(f"Starting AI Stream Relay on http://{self.bind_address}:{self.port}")
        logger.info("Available endpoints: /v1/stream (chat relay), /v1/services (tool servers)")
        if settings.STREAM_TRACE_ENABLED:
            logger.warning(
                "Stream tracing is ENABLED - raw SSE chunks will be written inside '%s'",
                settings.STREAM_TRACE_DIR,
            )
        self.config = uvicorn.Config(
            app,
            host=self.bind_address,
            port=self.port,
            log_level="debug" if self.debug else LOG_LEVEL,
            access_log=False  # Reduce noise in CLI
        )
        self.server = uvicorn.Server(self.config)
        self.server.run()

    def stop(self):
        """Stop the relay server"""
        if self.server:
            self.server.should_exit = True
