"""Unit tests for apim_client.resource_id module."""

import pytest

from src.apim_client.errors import ValidationError
from src.apim_client.resource_id import APIM_SERVICE_TYPE, ResourceIdentifier

SERVICE_ID = (
    "/subscriptions/sub-123/resourceGroups/portal-rg"
    "/providers/Microsoft.ApiManagement/service/contoso-apim"
)


class TestParse:
    """Test cases for ResourceIdentifier.parse."""

    def test_parses_all_components(self):
        """parse should split a service id into its five components."""
        resource = ResourceIdentifier.parse(SERVICE_ID)

        assert resource.subscription_id == "sub-123"
        assert resource.group == "portal-rg"
        assert resource.provider == "Microsoft.ApiManagement"
        assert resource.type == "service"
        assert resource.name == "contoso-apim"

    def test_to_path_round_trips(self):
        """to_path should rebuild the id the components came from."""
        assert ResourceIdentifier.parse(SERVICE_ID).to_path() == SERVICE_ID

    def test_default_expected_type_is_apim_service(self):
        assert APIM_SERVICE_TYPE == "Microsoft.ApiManagement/service"

    def test_custom_expected_type(self):
        """parse should accept any resource type that matches expected_type."""
        resource_id = (
            "/subscriptions/sub/resourceGroups/rg"
            "/providers/Microsoft.Storage/storageAccounts/acct"
        )
        resource = ResourceIdentifier.parse(resource_id, "Microsoft.Storage/storageAccounts")

        assert resource.name == "acct"

    @pytest.mark.parametrize("resource_id", [
        "",
        "subscriptions/sub/resourceGroups/rg/providers/Microsoft.ApiManagement/service/x",
        "/subscription/sub/resourceGroups/rg/providers/Microsoft.ApiManagement/service/x",
        "/subscriptions/sub/resourceGroups/rg/providers/Microsoft.ApiManagement/service",
        "/subscriptions/sub/resourceGroups/rg/providers/Microsoft.ApiManagement/service/x/extra",
        "/subscriptions/sub/resourceGroups/rg/providers/Microsoft.ApiManagement/service/x/",
    ])
    def test_malformed_ids_rejected(self, resource_id):
        """parse should reject ids with the wrong shape."""
        with pytest.raises(ValidationError) as exc_info:
            ResourceIdentifier.parse(resource_id)

        assert str(exc_info.value) == f"Invalid resource ID: {resource_id}"

    def test_wrong_resource_type_rejected(self):
        """parse should name both the actual and the expected type."""
        resource_id = (
            "/subscriptions/sub/resourceGroups/rg"
            "/providers/Microsoft.Web/sites/my-site"
        )

        with pytest.raises(ValidationError) as exc_info:
            ResourceIdentifier.parse(resource_id)

        assert str(exc_info.value) == (
            "Invalid resource type: Microsoft.Web/sites. "
            "Expected: Microsoft.ApiManagement/service"
        )

    def test_identifier_is_immutable(self):
        resource = ResourceIdentifier.parse(SERVICE_ID)

        with pytest.raises(AttributeError):
            resource.name = "other"
