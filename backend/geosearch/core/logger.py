import logging
import os
from logging.handlers import RotatingFileHandler
from geosearch.core.config import settings

class LoggerConfig:
    """
    Logger configuration class to setup logging for the application.
    Context passed as `extra` is rendered as sorted key=value pairs, so every
    search line carries the same lat/lng/radius fields in the same order.
    """
    def __init__(
        self, env=20, logger_name="GEOSEARCH", log_directory="logs", log_file="app.log"
    ):
        try:
            self.logger_name = logger_name
            self.log_directory = os.path.abspath(log_directory)
            self.log_file_path = os.path.join(self.log_directory, log_file)
            self.env = env
            self.log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

            self.logger = logging.getLogger(self.logger_name)
            self.setup_logger()
        except Exception as e:
            print(f"Failed to initialize logger: {str(e)}")

    def setup_logger(self):
        try:
            os.makedirs(self.log_directory, exist_ok=True)

            formatter = logging.Formatter(self.log_format)
            handlers = [
                RotatingFileHandler(
                    self.log_file_path, backupCount=5, maxBytes=1024 * 1024 * 10, encoding="utf-8"
                ),
                logging.StreamHandler(),
            ]

            # Only attach once; uvicorn --reload re-imports this module
            if not self.logger.handlers:
                for handler in handlers:
                    handler.setLevel(self.env)
                    handler.setFormatter(formatter)
                    self.logger.addHandler(handler)

            self.logger.setLevel(self.env)
            self.logger.propagate = False

        except Exception as e:
            print(f"Failed to setup logger handlers: {str(e)}")

    @staticmethod
    def render(message: str, extra: dict = None) -> str:
        if not extra:
            return message
        fields = " ".join(f"{key}={extra[key]}" for key in sorted(extra))
        return f"{message} | {fields}"

    @staticmethod
    def search_fields(request, **more) -> dict:
        """lat/lng/radius of a SearchRequest plus any additional context"""
        fields = {
            "lat": request.latitude,
            "lng": request.longitude,
            "radius_m": request.radius_meters,
        }
        fields.update(more)
        return fields

    def log(self, level: int, message: str, extra: dict = None):
        self.logger.log(level, self.render(message, extra))

    def exception(self, message: str, extra: dict = None):
        """Logs at ERROR with the active traceback attached"""
        self.logger.exception(self.render(message, extra))

logs = LoggerConfig(
    env=settings.LOGGER,
    logger_name="GEOSEARCH",
    log_directory="logs",
    log_file="app.log"
)
