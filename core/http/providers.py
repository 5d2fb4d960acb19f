from dishka import Provider, Scope, provide, FromComponent
from typing import Annotated, AsyncIterable
from core.environment.config import Settings
import aiohttp


class HttpProvider(Provider):
    """
    Provider for the outbound HTTP client session.
    """

    scope = Scope.APP
    component = "http"

    @provide(scope=Scope.APP)
    async def provide_http_session(
        self,
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> AsyncIterable[aiohttp.ClientSession]:
        """
        Create HTTP session shared by outbound deliveries.

        Parameters
        ----------
        settings : Settings
            Application settings

        Yields
        ------
        aiohttp.ClientSession
            Client session closed when the container shuts down
        """
        session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=settings.webhook_timeout)
        )

        try:
            yield session
        finally:
            await session.close()
