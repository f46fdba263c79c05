"""BaseService — abstract foundation for nexusctl command services.

Every service receives a :class:`Ledger` at construction time. The Ledger
provides the wallet, fullnode, and faucet; services compose the pipeline
stages and own the translation of pipeline errors into ServiceResult.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from nexusctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from nexusctl.domain.errors import NexusError
    from nexusctl.infrastructure.ledger import Ledger

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class NetworkService(BaseService):
            def create(self, ...) -> ServiceResult:
                try:
                    ...
                except NexusError as exc:
                    return self._failure("create_network", exc)
    """

    def __init__(self, ledger: Ledger) -> None:
        self._ledger = ledger

    @staticmethod
    def _failure(op: str, exc: NexusError, **context: Any) -> ServiceResult:
        """Convert a pipeline error into a failed ServiceResult.

        *context* (e.g. the digest of an already-executed transaction) is
        merged into the error detail.
        """
        logger.debug("%s failed with %s", op, exc.code, exc_info=True)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code=exc.code,
                message=exc.message,
                detail={**exc.detail, **context},
            ),
        )
