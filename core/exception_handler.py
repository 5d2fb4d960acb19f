import logging

from core.exceptions import BaseCustomException


def fatal_exception_handler(exc: Exception, logger: logging.Logger) -> int:
    """
    Handler for exceptions that reached the process entry point.

    Parameters
    ----------
    exc : Exception
        Uncaught exception
    logger : logging.Logger
        Logger instance

    Returns
    -------
    int
        Process exit code
    """
    if isinstance(exc, BaseCustomException):
        logger.error(f"Scan run aborted: {exc.message}")
        return exc.get_exit_code()

    logger.exception(f"Scan run aborted with unexpected error: {exc}")
    return 1
