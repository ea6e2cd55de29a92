"""GraphQL API access: seed-track search and smart playlist creation."""

from .client import GraphQLClient
from .exceptions import (
    APIConnectionError,
    AuthenticationError,
    GraphQLError,
    ResponseValidationError,
    SmartlistAPIError,
)
