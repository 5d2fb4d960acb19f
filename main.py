import asyncio
import logging
import sys

from core.container import make_container
from core.exception_handler import fatal_exception_handler
from core.logging.providers import LOGGER_NAME
from scanner.entities import NETWORKS
from scanner.usecases import RunScanUseCase


async def run() -> int:
    """
    Run one scan over all configured networks.

    Returns
    -------
    int
        Process exit code: 0 once the report is persisted, nonzero when
        the run could not complete
    """
    container = make_container()
    logger = logging.getLogger(LOGGER_NAME)
    try:
        logger = await container.get(logging.Logger, component="logger")
        use_case = await container.get(RunScanUseCase, component="scanner")
        summary = await use_case(NETWORKS)
    except Exception as exc:
        return fatal_exception_handler(exc, logger)
    finally:
        await container.close()

    for outcome in summary.outcomes:
        failed_contracts = [contract.contract for contract in outcome.contracts if not contract.succeeded]
        detail = outcome.reason or f"{len(failed_contracts)} of {len(outcome.contracts)} contracts failed"
        logger.info(f"[{outcome.chain}] {outcome.status}: {detail}")

    logger.info(
        f"Scan complete: {len(summary.report.results)} networks reported in {summary.report_path}, "
        f"webhook delivered={summary.delivery.delivered}"
    )
    return 0


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
