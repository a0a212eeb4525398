import multiprocessing
import re

import structlog


cpu_count = multiprocessing.cpu_count()
workers = min(cpu_count * 2 + 1, 8)

# Issuance and institute writes block until the receipt is mined
timeout = 660  # CHAIN_RECEIPT_TIMEOUT + marge
keepalive = 5
graceful_timeout = 30
max_requests = 1000
max_requests_jitter = 50

loglevel = "info"
errorlog = "-"
accesslog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)s %(M)sms "%(a)s"'

worker_class = "sync"
preload_app = True

_ACCESS_RE = re.compile(
    r'(?P<remote>\S+) "(?P<method>\S+) (?P<path>\S+) (?P<version>[^"]+)" '
    r'(?P<status>\d+) (?P<size>\S+) (?P<duration_ms>\d+)ms "(?P<agent>.*)"\Z'
)


def access_fields(logger, name, event_dict):
    """Éclate la ligne d'access log en champs; laisse la ligne brute si elle ne matche pas."""
    if event_dict.get("logger") != "gunicorn.access":
        return event_dict
    m = _ACCESS_RE.match(event_dict.get("event", ""))
    if not m:
        return event_dict
    fields = m.groupdict()
    fields["status"] = int(fields["status"])
    fields["duration_ms"] = int(fields["duration_ms"])
    fields["size"] = 0 if fields["size"] == "-" else int(fields["size"])
    event_dict.update(fields)
    event_dict["event"] = "gunicorn.request"
    return event_dict


def boot_event_name(logger, name, event_dict):
    if event_dict.get("logger") != "gunicorn.error":
        return event_dict
    event = event_dict.get("event")
    if isinstance(event, str) and event.lower().startswith(("starting", "listening", "using", "booting")):
        event_dict["message"] = event
        event_dict["event"] = "gunicorn.booting"
    return event_dict


pre_chain = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    access_fields,
    boot_event_name,
]

logconfig_dict = {
    "version": 1,
    "disable_existing_loggers": False,
    "root": {"level": "INFO", "handlers": ["default"]},
    "loggers": {
        "gunicorn.error": {"level": "INFO", "handlers": ["default"], "propagate": False},
        "gunicorn.access": {"level": "INFO", "handlers": ["default"], "propagate": False},
        "django_structlog": {"level": "INFO", "handlers": ["default"], "propagate": False},
    },
    "handlers": {
        "default": {"class": "logging.StreamHandler", "formatter": "logfmt_formatter"},
    },
    "formatters": {
        "logfmt_formatter": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.processors.LogfmtRenderer(),
            "foreign_pre_chain": pre_chain,
        }
    },
}
