from abc import ABC


class BaseCustomException(Exception, ABC):
    """
    Base class for all custom exceptions.
    """

    def __init__(self, message: str | None = None):
        self.message = message or self.get_default_message()
        super().__init__(self.message)

    def get_default_message(self) -> str:
        """
        Return default error message.

        Returns
        -------
        str
            Default error message
        """
        return "error.unknown"

    def get_exit_code(self) -> int:
        """
        Return process exit code for exception reaching the top level.

        Returns
        -------
        int
            Process exit code
        """
        return 1


class ConnectivityException(BaseCustomException):
    """RPC height or log query failed."""

    def get_default_message(self) -> str:
        return "error.rpc.failed"


class InvalidAddressException(BaseCustomException):
    """Invalid address exception."""

    def get_default_message(self) -> str:
        return "error.address.invalid"


class MalformedRecordException(BaseCustomException):
    """Raw log is structurally corrupt."""

    def get_default_message(self) -> str:
        return "error.log.malformed"


class DeliveryException(BaseCustomException):
    """Webhook delivery failed."""

    def get_default_message(self) -> str:
        return "error.webhook.failed"


class PersistenceException(BaseCustomException):
    """Report could not be written."""

    def get_default_message(self) -> str:
        return "error.report.write_failed"

    def get_exit_code(self) -> int:
        return 2
