"""Custom structlog processors"""

import os
import socket

from structlog.types import EventDict, WrappedLogger

from watchpkg import __version__


def add_service_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level context to logs"""
    event_dict["service"] = "watchpkg"
    event_dict["version"] = __version__
    event_dict["pid"] = os.getpid()

    try:
        event_dict["hostname"] = socket.gethostname()
    except OSError:
        pass

    return event_dict


def set_log_severity(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Map the structlog level onto a syslog-style severity"""
    level = event_dict.get("level", method_name)

    severity_map = {
        "debug": "DEBUG",
        "info": "INFO",
        "warning": "WARNING",
        "warn": "WARNING",
        "error": "ERROR",
        "critical": "CRITICAL",
        "exception": "ERROR",
    }

    event_dict["severity"] = severity_map.get(str(level).lower(), "INFO")
    return event_dict
