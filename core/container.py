from dishka import AsyncContainer, make_async_container

from core.environment.providers import EnvironmentProvider
from core.http.providers import HttpProvider
from core.logging.providers import LoggerProvider
from scanner.providers import ScannerProvider


def make_container() -> AsyncContainer:
    """
    Build the application container.

    Returns
    -------
    AsyncContainer
        Container holding settings, logger, HTTP session and the scan pipeline
    """
    return make_async_container(
        EnvironmentProvider(),
        LoggerProvider(),
        HttpProvider(),
        ScannerProvider()
    )
