"""Authentication module supplying bearer tokens for Azure APIs.

Credentials are never handled by this tool directly: DefaultAzureCredential
from azure-identity resolves them from the environment (service principal
variables, managed identity, Azure CLI login, ...). A .env file is loaded
with python-dotenv first so the AZURE_* variables can live next to the
exported content.
"""

import logging
from typing import Any, Optional, Protocol

from azure.core.credentials import AccessToken
from azure.core.exceptions import ClientAuthenticationError
from azure.identity import DefaultAzureCredential
from dotenv import load_dotenv

from .errors import InvalidCredentialsError

logger = logging.getLogger(__name__)


class TokenProvider(Protocol):
    """Anything that can hand out an access token for a scope.

    DefaultAzureCredential satisfies this protocol, and so do the fakes used
    in tests.
    """

    def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        ...


class Authenticator:
    """Lazily builds the ambient Azure credential and issues tokens.

    Example:
        >>> auth = Authenticator()
        >>> token = auth.get_token("https://management.azure.com/.default")
        >>> headers = {"Authorization": f"Bearer {token.token}"}
    """

    def __init__(self, credential: Optional[TokenProvider] = None):
        """Initialize the authenticator by loading environment variables from .env file.

        Args:
            credential: Optional token provider to use instead of
                        DefaultAzureCredential
        """
        load_dotenv()
        self._credential = credential

    @property
    def credential(self) -> TokenProvider:
        """The underlying credential, created on first use."""
        if self._credential is None:
            self._credential = DefaultAzureCredential()
        return self._credential

    def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        """Get an access token for the given scopes.

        Keyword arguments such as ``claims`` or ``tenant_id`` come from the
        SDK pipeline and are passed through to the credential.

        Raises:
            InvalidCredentialsError: If no credential could authenticate
        """
        try:
            return self.credential.get_token(*scopes, **kwargs)
        except ClientAuthenticationError as e:
            logger.error(f"Token acquisition failed for {', '.join(scopes)}")
            raise InvalidCredentialsError(
                endpoint=", ".join(scopes),
                reason=e.message or "no credential available",
            ) from e
