"""CLI adapter to provision the default account and categories of an owner.

This module wires the BootstrapOwnerUseCase to the concrete database
adapter and provides a simple command-line entry point.
"""

from biyu.application.use_cases.bootstrap_owner import BootstrapOwnerUseCase
from biyu.domain.models import SessionContext
from biyu.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from biyu.infrastructure.ledger_writer import SqlAlchemyLedgerWriter
from biyu.infrastructure.logging.logger import get_app_logger
from biyu.infrastructure.settings import BiyuSettings


def main() -> None:
    """Run the bootstrap procedure for the configured owner."""
    logger = get_app_logger()
    settings = BiyuSettings.from_env()
    if not settings.owner_id:
        logger.warning("BIYU_OWNER_ID is required to bootstrap an owner.")
        return

    db_adapter = SqlAlchemyDatabaseEngineAdapter()
    use_case = BootstrapOwnerUseCase(
        ledger_writer=SqlAlchemyLedgerWriter(db_adapter),
        logger=logger,
    )
    use_case.execute(SessionContext(owner_id=settings.owner_id))

    print(f"Bootstrapped owner {settings.owner_id}.")


if __name__ == "__main__":  # pragma: no cover
    main()
