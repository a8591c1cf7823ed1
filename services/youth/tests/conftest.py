import pytest
from unittest.mock import AsyncMock, MagicMock
from mcp_youth.api_client import YouthActivityApiClient


@pytest.fixture
def client():
    """Provides a YouthActivityApiClient instance for testing."""
    # Use a dummy service key for testing
    return YouthActivityApiClient(service_key="TEST_SERVICE_KEY")


@pytest.fixture
def mock_api_client():
    """Create a mock API client."""
    mock_client = MagicMock(spec=YouthActivityApiClient)

    # Mock async methods
    mock_client.get_sido_list = AsyncMock()
    mock_client.get_sigungu_list = AsyncMock()
    mock_client.search_activities = AsyncMock()
    mock_client.get_facility_group_list = AsyncMock()

    return mock_client
