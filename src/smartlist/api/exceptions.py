"""Exceptions raised by the GraphQL API client."""


class SmartlistAPIError(Exception):
    """Base exception for API operations."""

    pass


class APIConnectionError(SmartlistAPIError):
    """Raised when the API cannot be reached or times out."""

    pass


class AuthenticationError(SmartlistAPIError):
    """Raised when the API rejects the configured token."""

    pass


class GraphQLError(SmartlistAPIError):
    """Raised when the response carries GraphQL errors."""

    def __init__(self, messages: list[str]):
        self.messages = messages
        super().__init__("; ".join(messages) or "Unknown GraphQL error")


class ResponseValidationError(SmartlistAPIError):
    """Raised when response data does not have the expected structure."""

    pass
