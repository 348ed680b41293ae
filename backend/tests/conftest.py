"""
Pytest configuration and fixtures for testing.
"""
import pytest
from unittest.mock import Mock
from fastapi.testclient import TestClient

from notely.api.dependencies.pipeline import get_pipeline
from notely.main import app
from notely.schemas.section import Section
from notely.services.transformation_pipeline import TransformationPipeline


@pytest.fixture
def sample_transcript():
    """Sample transcript text."""
    return "Load balancers distribute traffic across servers."


@pytest.fixture
def sample_section():
    """A populated section."""
    return Section(
        title="Load Balancing",
        summary="Explains traffic distribution.",
        bullets=["Distributes requests", "Improves availability"]
    )


@pytest.fixture
def sample_sections(sample_section):
    """Two sections forming a small note."""
    return [
        sample_section,
        Section(
            title="Health Checks",
            summary="How unhealthy servers are removed from rotation.",
            bullets=["Periodic probes", "Automatic failover"]
        ),
    ]


@pytest.fixture
def regenerated_payload():
    """A canonical valid section response."""
    return {
        "title": "Load Balancing",
        "summary": "Explains traffic distribution.",
        "bullets": ["Distributes requests", "Improves availability"]
    }


@pytest.fixture
def mock_generate():
    """Stand-in for the external generate(prompt) capability."""
    return Mock(return_value="")


@pytest.fixture
def pipeline(mock_generate):
    return TransformationPipeline(generate=mock_generate, logger=Mock())


@pytest.fixture
def client(pipeline):
    """Test client with the pipeline dependency bound to mock_generate."""
    app.dependency_overrides[get_pipeline] = lambda: pipeline

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
