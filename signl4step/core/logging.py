import logging
import logging.config
import os
import uuid

# silence the InsecureRequestWarning logs
import urllib3
from pythonjsonlogger.json import JsonFormatter

urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
SIGNL4STEP_LOG_FILE = os.environ.get("SIGNL4STEP_LOG_FILE")

LOG_FORMAT_OPEN_TELEMETRY = "open_telemetry"
LOG_FORMAT_DEVELOPMENT_TERMINAL = "dev_terminal"

LOG_FORMAT = os.environ.get("LOG_FORMAT", LOG_FORMAT_OPEN_TELEMETRY)

# attributes every LogRecord has, anything else came in through `extra`
_RESERVED_RECORD_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


class WorkflowLoggerAdapter(logging.LoggerAdapter):
    def __init__(self, logger, context_manager, tenant_id, workflow_id):
        super().__init__(logger, {})
        self.context_manager = context_manager
        self.tenant_id = tenant_id
        self.workflow_id = workflow_id

    def process(self, msg, kwargs):
        kwargs = kwargs.copy() if kwargs else {}
        extra = kwargs.setdefault("extra", {})
        extra.update(
            {
                "tenant_id": self.tenant_id,
                "workflow_id": self.workflow_id,
            }
        )
        return msg, kwargs


class ProviderLoggerAdapter(logging.LoggerAdapter):
    def __init__(self, logger, provider_instance, tenant_id, provider_id):
        super().__init__(logger, {})
        self.provider_instance = provider_instance
        self.tenant_id = tenant_id
        self.provider_id = provider_id
        self.execution_id = str(uuid.uuid4())

    def process(self, msg, kwargs):
        kwargs = kwargs.copy() if kwargs else {}
        if "extra" not in kwargs:
            kwargs["extra"] = {}

        kwargs["extra"].update(
            {
                "tenant_id": self.tenant_id,
                "provider_id": self.provider_id,
                "execution_id": self.execution_id,
            }
        )

        return msg, kwargs


class DevTerminalFormatter(logging.Formatter):
    def format(self, record):
        message = super().format(record)
        extra_info = " ".join(
            f"[{key}: {value}]"
            for key, value in record.__dict__.items()
            if key not in _RESERVED_RECORD_ATTRS
        )
        return f"{message} {extra_info}" if extra_info else message


class CustomJsonFormatter(JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        # never ship credentials even if a caller passed them as extra
        for key in ("team_secret", "authentication"):
            log_record.pop(key, None)


CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": CustomJsonFormatter,
            "fmt": "%(asctime)s %(message)s %(levelname)s %(name)s %(filename)s %(threadName)s %(process)s %(module)s",
            "rename_fields": {
                "levelname": "severity",
                "asctime": "timestamp",
            },
        },
        "dev_terminal": {
            "()": DevTerminalFormatter,
            "format": "%(asctime)s - %(thread)s %(threadName)s %(levelname)s - %(message)s",
        },
    },
    "handlers": {
        "default": {
            "level": LOG_LEVEL,
            "formatter": (
                "json" if LOG_FORMAT == LOG_FORMAT_OPEN_TELEMETRY else "dev_terminal"
            ),
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "": {
            "handlers": ["default"],
            "level": "DEBUG",
            "propagate": False,
        },
        "urllib3.connectionpool": {
            "handlers": ["default"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}


def setup_logging():
    # Add file handler if SIGNL4STEP_LOG_FILE is set
    if SIGNL4STEP_LOG_FILE and "file" not in CONFIG["handlers"]:
        CONFIG["handlers"]["file"] = {
            "level": "DEBUG",
            "formatter": ("json"),
            "class": "logging.FileHandler",
            "filename": SIGNL4STEP_LOG_FILE,
            "mode": "a",
        }
        # Add file handler to root logger
        CONFIG["loggers"][""]["handlers"].append("file")

    logging.config.dictConfig(CONFIG)
