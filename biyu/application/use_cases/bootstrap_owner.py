"""Use case to provision a new owner through the backend procedure."""

from biyu.application.ports.ledger_repository import LedgerUnavailableError
from biyu.application.ports.ledger_writer import LedgerWriterPort
from biyu.domain.models import SessionContext
from biyu.infrastructure.logging.logger import get_app_logger


class BootstrapOwnerUseCase:
    """Create the default account and categories of an owner."""

    def __init__(self, ledger_writer: LedgerWriterPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            ledger_writer: Port exposing the bootstrap procedure.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_writer = ledger_writer
        self._logger = logger or get_app_logger()

    def execute(self, session: SessionContext) -> None:
        """Run the bootstrap procedure for the session owner.

        Raises:
            LedgerUnavailableError: If the procedure fails.
        """
        try:
            self._ledger_writer.bootstrap_owner(session.owner_id)
        except LedgerUnavailableError as exc:
            self._logger.error(
                f"Bootstrap failed for owner {session.owner_id}: {exc}"
            )
            raise
        self._logger.info(f"Bootstrapped owner {session.owner_id}")


__all__ = ["BootstrapOwnerUseCase"]
