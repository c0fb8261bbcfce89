"""Parsing of Azure resource identifiers.

An API Management service is addressed by a path of the form
``/subscriptions/<sub>/resourceGroups/<rg>/providers/Microsoft.ApiManagement/service/<name>``.
"""

from typing import NamedTuple

from .errors import ValidationError

APIM_SERVICE_TYPE = "Microsoft.ApiManagement/service"


class ResourceIdentifier(NamedTuple):
    """Components of a parsed resource identifier."""
    subscription_id: str
    group: str
    provider: str
    type: str
    name: str

    @classmethod
    def parse(cls, resource_id: str, expected_type: str = APIM_SERVICE_TYPE) -> "ResourceIdentifier":
        """Parse ``resource_id`` and check it points at ``expected_type``.

        Args:
            resource_id: Full resource path, starting with ``/subscriptions/``
            expected_type: ``<provider>/<type>`` the resource must have

        Returns:
            ResourceIdentifier with the five components as written

        Raises:
            ValidationError: If the path is malformed or has the wrong type
        """
        components = resource_id.split("/")
        if len(components) != 9 or components[0] != "" or components[1] != "subscriptions":
            raise ValidationError(f"Invalid resource ID: {resource_id}")

        actual_type = f"{components[6]}/{components[7]}"
        if actual_type != expected_type:
            raise ValidationError(
                f"Invalid resource type: {actual_type}. Expected: {expected_type}"
            )

        return cls(
            subscription_id=components[2],
            group=components[4],
            provider=components[6],
            type=components[7],
            name=components[8],
        )

    def to_path(self) -> str:
        """Rebuild the resource path (``resourceGroups`` casing normalized)."""
        return (
            f"/subscriptions/{self.subscription_id}/resourceGroups/{self.group}"
            f"/providers/{self.provider}/{self.type}/{self.name}"
        )
