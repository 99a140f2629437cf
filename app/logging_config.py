import structlog

def configure_logging(level: str = "info", fmt: str = "json") -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        # level names are accepted from structlog 25.1
        wrapper_class=structlog.make_filtering_bound_logger(level.lower()),
    )
