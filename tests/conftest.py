"""
Pytest configuration and shared fixtures for the size advisor tests.
"""
import os
import sys
from typing import Generator
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

@pytest.fixture
def sample_chart_dicts() -> list[dict]:
    """Two small charts in the stored record form."""
    return [
        {
            "id": "shirts",
            "name": "Shirts",
            "data": [
                {"Size": "S", "Chest": "90"},
                {"Size": "M", "Chest": "98"},
                {"Size": "L", "Chest": "106"},
            ],
        },
        {
            "id": "coats",
            "name": "Coats",
            "data": [
                {"size": "48", "height": "176-182"},
                {"size": "50", "height": "182-188"},
            ],
        },
    ]


@pytest.fixture
def sample_charts(sample_chart_dicts):
    """The sample charts as ChartCategory models."""
    from charts.models import charts_from_dicts
    return charts_from_dicts(sample_chart_dicts)


@pytest.fixture
def chart_store(sample_charts):
    """A ChartStore holding the two sample charts."""
    from charts.store import ChartStore
    return ChartStore(sample_charts)


@pytest.fixture
def sample_image():
    """A tiny JPEG-typed payload (content is never decoded by the app)."""
    from analysis.intake import ImagePayload
    return ImagePayload.from_bytes(b"\xff\xd8\xff\xe0fake-jpeg", "image/jpeg")


@pytest.fixture
def sample_result_dict() -> dict:
    """A well-formed model answer."""
    return {
        "estimatedChest": 98,
        "estimatedWaist": 84,
        "estimatedHips": 99.5,
        "recommendedSize": "M",
        "reasoning": "Chest estimate falls into the M range.",
        "confidence": 82,
    }


# ============================================================================
# Fixtures: Mock Services
# ============================================================================

@pytest.fixture
def mock_analyzer(sample_result_dict):
    """Analyzer stand-in that always recommends M."""
    from analysis.models import AnalysisResult

    analyzer = MagicMock()
    analyzer.configured = True
    analyzer.model = "test-model"
    analyzer.analyze.return_value = AnalysisResult(**sample_result_dict)
    return analyzer


@pytest.fixture
def openai_response():
    """Build an object shaped like a chat completion with the given content."""
    def _build(content):
        response = MagicMock()
        response.choices = [MagicMock()]
        response.choices[0].message.content = content
        return response
    return _build


@pytest.fixture
def sizing_app(chart_store, mock_analyzer):
    """SizingApp over the sample charts, English UI, mocked analyzer."""
    from services.sizing_app import SizingApp
    return SizingApp(store=chart_store, analyzer=mock_analyzer, language="en")


# ============================================================================
# Fixtures: FastAPI Test Client
# ============================================================================

@pytest.fixture
def session_manager(mock_analyzer, monkeypatch) -> Generator:
    """Fresh process-wide session manager whose apps use the mocked analyzer."""
    from services import session_manager as sm
    from services.sizing_app import SizingApp

    manager = sm.SessionManager(
        factory=lambda language: SizingApp(analyzer=mock_analyzer, language=language),
    )
    monkeypatch.setattr(sm, "_sessions", manager)
    yield manager
    sm.reset_session_manager()


@pytest.fixture
def client(session_manager):
    """Synchronous HTTP client for the API."""
    from fastapi.testclient import TestClient
    from api.app import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


# ============================================================================
# Markers auto-use
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "slow: marks tests as slow")
