"""API wrapper for the API Management developer portal control plane.

This module wraps the azure-mgmt-apimanagement client for content types,
content items and portal revisions. The media container secret has no SDK
operation, so that single call goes through a requests session with a bearer
token from the same credential. Failures of either path are translated to our
typed exception hierarchy.
"""

import logging
import re
import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests
from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    ResourceNotFoundError as AzureResourceNotFoundError,
    ServiceRequestError,
    ServiceResponseError,
)
from azure.core.paging import ItemPaged
from azure.mgmt.apimanagement import ApiManagementClient
from azure.mgmt.apimanagement.models import ContentItemContract, PortalRevisionContract
from requests.exceptions import ConnectionError, RequestException, Timeout

from src.models import ContentItem, ContentType, PortalRevision

from .auth import Authenticator, TokenProvider
from .errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    RemoteError,
    ResourceNotFoundError,
)
from .paging import drain
from .resource_id import ResourceIdentifier

logger = logging.getLogger(__name__)

# Used only for the media secret call, which the SDK does not expose
API_VERSION = "2021-08-01"
DEFAULT_ENDPOINT = "management.azure.com"

# Per-request timeout in seconds
DEFAULT_TIMEOUT = 60

# Wildcard precondition: overwrite or delete regardless of current version
MATCH_ANY = "*"


class APIWrapper:
    """Wrapper around the API Management control plane for one service.

    This class provides a thin layer over the management SDK that:
    1. Builds the client lazily from the shared credential
    2. Translates SDK and HTTP errors to typed exceptions
    3. Drains paginated list responses page by page
    4. Waits for long-running operations through the SDK poller

    Example:
        >>> resource = ResourceIdentifier.parse(service_id)
        >>> api = APIWrapper(resource, Authenticator())
        >>> types = api.list_content_types()
    """

    def __init__(
        self,
        resource: ResourceIdentifier,
        token_provider: Optional[TokenProvider] = None,
        endpoint: str = DEFAULT_ENDPOINT,
    ):
        """Initialize the API wrapper for a service.

        Args:
            resource: Parsed resource id of the API Management service
            token_provider: Source of bearer tokens (Authenticator by default)
            endpoint: ARM host name, e.g. management.azure.com
        """
        self.resource = resource
        self.endpoint = endpoint
        self.base_url = f"https://{endpoint}"
        self.scope = f"https://{endpoint}/.default"
        self._token_provider = token_provider or Authenticator()
        self._client: Optional[ApiManagementClient] = None
        self._session: Optional[requests.Session] = None
        self._lock = threading.Lock()

    def _get_client(self) -> ApiManagementClient:
        """Get or create the management client shared by all worker threads."""
        with self._lock:
            if self._client is None:
                self._client = ApiManagementClient(
                    self._token_provider,
                    self.resource.subscription_id,
                    base_url=self.base_url,
                    credential_scopes=[self.scope],
                )
            return self._client

    def _get_session(self) -> requests.Session:
        """Get or create the HTTP session for the media secret call."""
        with self._lock:
            if self._session is None:
                self._session = requests.Session()
                self._session.headers.update({
                    "Accept": "application/json",
                    "User-Agent": "devportal-migrate",
                })
            return self._session

    def _sanitize(self, text: str) -> str:
        """Mask bearer tokens and SAS signatures in error text.

        Example:
            >>> api._sanitize("GET https://acct.blob.core.windows.net/c?sv=1&sig=abc")
            "GET https://acct.blob.core.windows.net/c?sv=1&sig=***REDACTED***"
        """
        if not text:
            return text
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            text,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'([?&]sig=)[^&\s"\']+',
            r'\1***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        return sanitized

    def _error_detail(self, response: requests.Response) -> str:
        """Extract the ARM error message from a failed raw response."""
        try:
            body = response.json()
        except ValueError:
            return self._sanitize(response.text[:200])
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict):
            return self._sanitize(f"{error.get('code', '')}: {error.get('message', '')}".strip(": "))
        return self._sanitize(str(body)[:200])

    def _translate_error(self, exception: Exception, operation: str) -> RemoteError:
        """Translate SDK and HTTP exceptions to typed remote exceptions.

        Args:
            exception: The original exception from the SDK or requests
            operation: Description of the operation that failed

        Returns:
            RemoteError: Translated exception (one of our typed exceptions)
        """
        if isinstance(exception, (ServiceRequestError, ServiceResponseError, Timeout, ConnectionError)):
            return APIUnreachableError(endpoint=self.endpoint)

        if isinstance(exception, AzureError):
            status_code = getattr(exception, "status_code", None)
            detail = self._sanitize(exception.message or str(exception))
        else:
            response = getattr(exception, "response", None)
            status_code = getattr(response, "status_code", None)
            detail = self._error_detail(response) if response is not None else self._sanitize(str(exception))

        if isinstance(exception, ClientAuthenticationError) or status_code in (401, 403):
            return InvalidCredentialsError(endpoint=self.endpoint, reason=detail)
        if isinstance(exception, AzureResourceNotFoundError) or status_code == 404:
            return ResourceNotFoundError(resource=operation)

        logger.error(f"API operation failed: {operation} - {detail}")
        return APIAccessError(
            f"Management API failure during {operation}: {detail}",
            status_code=status_code,
        )

    def _call(self, operation: str, func: Callable[[], Any]) -> Any:
        """Run one SDK call and raise typed errors on failure."""
        logger.debug(operation)
        try:
            return func()
        except AzureError as e:
            raise self._translate_error(e, operation) from e

    def _list(self, list_operation: Callable[[], ItemPaged], operation: str) -> List[Dict[str, Any]]:
        """Drain a paged SDK listing into plain dictionaries."""
        def list_page(token: Optional[str]) -> Tuple[List[Dict[str, Any]], Optional[str]]:
            pages = list_operation().by_page(continuation_token=token)
            page = [contract.as_dict() for contract in next(pages)]
            return page, pages.continuation_token or None

        return drain(lambda token: self._call(operation, lambda: list_page(token)))

    def list_content_types(self) -> List[ContentType]:
        """List all content types of the developer portal.

        Raises:
            RemoteError: If the list call fails
        """
        client = self._get_client()
        values = self._list(
            lambda: client.content_type.list_by_service(self.resource.group, self.resource.name),
            "list_content_types",
        )
        return [ContentType.from_dict(value) for value in values]

    def list_content_items(self, content_type: str) -> List[ContentItem]:
        """List all content items of one content type.

        Raises:
            RemoteError: If the list call fails
        """
        client = self._get_client()
        values = self._list(
            lambda: client.content_item.list_by_service(
                self.resource.group, self.resource.name, content_type
            ),
            f"list_content_items({content_type})",
        )
        return [ContentItem.from_dict(value) for value in values]

    def upsert_content_item(self, content_type: str, name: str, item: ContentItem) -> None:
        """Create or overwrite a content item regardless of its current version."""
        client = self._get_client()
        self._call(
            f"upsert_content_item({content_type}/{name})",
            lambda: client.content_item.create_or_update(
                self.resource.group,
                self.resource.name,
                content_type,
                name,
                ContentItemContract(properties=item.properties),
                if_match=MATCH_ANY,
            ),
        )

    def delete_content_item(self, content_type: str, name: str) -> None:
        """Delete a content item regardless of its current version."""
        client = self._get_client()
        self._call(
            f"delete_content_item({content_type}/{name})",
            lambda: client.content_item.delete(
                self.resource.group,
                self.resource.name,
                content_type,
                name,
                if_match=MATCH_ANY,
            ),
        )

    def upsert_portal_revision(self, revision: PortalRevision) -> Dict[str, Any]:
        """Create or update a portal revision and wait until it is applied.

        Returns:
            Final revision resource as a dictionary

        Raises:
            RemoteError: If the revision cannot be created or the operation fails
        """
        client = self._get_client()
        poller = self._call(
            f"upsert_portal_revision({revision.name})",
            lambda: client.portal_revision.begin_create_or_update(
                self.resource.group,
                self.resource.name,
                revision.name,
                PortalRevisionContract(
                    description=revision.description,
                    is_current=revision.is_current,
                ),
            ),
        )
        result = self._call(f"upsert_portal_revision({revision.name})", poller.result)
        logger.info(f"Portal revision {revision.name} applied")
        return result.as_dict() if result is not None else {}

    def get_media_container_url(self) -> str:
        """Request a short-lived SAS URL for the portal media container.

        Raises:
            APIAccessError: If the response carries no container URL
        """
        operation = "list_media_secrets"
        url = (
            f"{self.base_url}{self.resource.to_path()}"
            f"/portalSettings/mediaContent/listSecrets?api-version={API_VERSION}"
        )
        logger.debug(f"POST {operation}")
        try:
            token = self._token_provider.get_token(self.scope)
            response = self._get_session().post(
                url,
                json={},
                headers={"Authorization": f"Bearer {token.token}"},
                timeout=DEFAULT_TIMEOUT,
            )
            response.raise_for_status()
        except RequestException as e:
            raise self._translate_error(e, operation) from e

        try:
            container_url = response.json().get("containerSasUrl")
        except ValueError:
            container_url = None
        if not container_url:
            raise APIAccessError("Unable to get storage SAS URL.")
        return container_url

    def close(self) -> None:
        """Close the management client and the HTTP session."""
        if self._client is not None:
            self._client.close()
            self._client = None
        if self._session is not None:
            self._session.close()
            self._session = None
