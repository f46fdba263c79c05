"""structlog configuration for nexusctl.

Logs go to stderr so stdout stays clean for command results (``--json``,
``--quiet``). Two output modes:
- Human (default): colored console output
- JSON (--log-json): one JSON object per line

The pipeline emits these structured events, keyed by stage:

==========================  =======  ======================================
event                       level    fields
==========================  =======  ======================================
``funding.top_up``          info     tier, address, available
``funding.top_up_failed``   warning  tier, error
``funding.resolved``        debug    address, coins (role -> coin id)
``transaction.executed``    info     digest, target
``network.created``         info     network_id, digest
``tool.registered``         info     tool_fqn, digest
==========================  =======  ======================================

Only warnings show by default; ``--verbose`` lowers the ``nexusctl``
loggers to DEBUG. The HTTP client's own request logging stays at WARNING
either way.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    nexus_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("nexusctl").setLevel(nexus_level)
    # Request lines from the HTTP stack would drown the pipeline's own events.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
