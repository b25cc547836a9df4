import logging
import json
import sys
from typing import Any, Optional

# Atributos padrão do LogRecord; o resto veio via `extra=`
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """
    Formatador de logs em JSON para facilitar ingestão por ferramentas de observabilidade (Datadog, CloudWatch, etc).
    """

    def format(self, record: logging.LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "line": record.lineno,
        }

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        # Adiciona campos extras passados no log
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_record[key] = value

        return json.dumps(log_record, default=str, ensure_ascii=False)


TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None, json_format: Optional[bool] = None) -> None:
    """
    Configura o logging raiz da aplicação (JSON por padrão).

    Sem argumentos, usa log_level/log_json das Settings.
    """
    if level is None or json_format is None:
        from casadf.config import get_settings
        settings = get_settings()
        level = level or settings.log_level
        json_format = settings.log_json if json_format is None else json_format

    logger = logging.getLogger()
    logger.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT))

    # Remove handlers existentes para evitar duplicação
    logger.handlers = []
    logger.addHandler(handler)

    # Reduz ruído das bibliotecas
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
