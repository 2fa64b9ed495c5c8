# app/core/logging_config.py

import json
import logging
import sys
from typing import Any


class JSONFormatter(logging.Formatter):
    """LogRecord를 한 줄 JSON으로 출력"""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "funcName": record.funcName,
            "line": record.lineno,
        }

        # extra 로 전달된 요청 ID
        if hasattr(record, "request_id"):
            log_obj["request_id"] = record.request_id

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False)


PLAIN_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO", json_format: bool = True) -> None:
    """루트 로거가 stdout 으로 출력하도록 설정"""
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(PLAIN_FORMAT))

    # Uvicorn 등이 먼저 붙인 핸들러 제거 (중복 출력 방지)
    logger.handlers = []
    logger.addHandler(handler)

    logging.getLogger("uvicorn.access").handlers = []
    logging.getLogger("uvicorn.access").propagate = True
