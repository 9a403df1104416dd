"""
Tests for the vision-model size analyzer and its request assembly.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from analysis.analyzer import SizeAnalyzer
from analysis.models import AnalysisResult, MeasurementInput
from analysis.prompt import RESULT_FIELDS, build_messages, build_prompt, response_format
from config.settings import get_settings_for_testing
from core.errors import AnalysisError, ConfigurationError


CHART_ROWS = [
    {"int": "M", "height": "176-182", "chest": "94-98"},
    {"int": "L", "height": "182-186", "chest": "98-102"},
]


@pytest.fixture
def measurements():
    return MeasurementInput(height="178", weight="75", language="en")


@pytest.fixture
def analyzer():
    """Analyzer with a mocked OpenAI client."""
    instance = SizeAnalyzer(settings=get_settings_for_testing())
    instance._client = MagicMock()
    return instance


class TestPrompt:
    """Tests for the request sent to the model."""

    def test_prompt_embeds_measurements_and_chart(self, measurements):
        prompt = build_prompt(measurements, CHART_ROWS)

        assert "(178 cm)" in prompt
        assert "(75 kg)" in prompt
        assert json.dumps(CHART_ROWS, ensure_ascii=False) in prompt
        assert "English" in prompt

    def test_missing_weight_is_unknown(self):
        prompt = build_prompt(MeasurementInput(height="175", language="uk"), CHART_ROWS)

        assert "weight (Unknown)" in prompt
        assert "Ukrainian" in prompt

    def test_messages_carry_image(self, measurements, sample_image):
        messages = build_messages(measurements, sample_image, CHART_ROWS)

        parts = messages[-1]["content"]
        assert parts[0]["image_url"]["url"] == sample_image.data_url
        assert parts[1]["type"] == "text"

    def test_response_format_is_strict(self):
        fmt = response_format("ru")
        schema = fmt["json_schema"]["schema"]

        assert fmt["json_schema"]["strict"] is True
        assert schema["required"] == list(RESULT_FIELDS)
        assert schema["additionalProperties"] is False
        assert "Russian" in schema["properties"]["reasoning"]["description"]


class TestConfiguration:
    """Missing credentials fail before any request."""

    def test_missing_key_raises_configuration_error(self, measurements, sample_image):
        analyzer = SizeAnalyzer(settings=get_settings_for_testing(openai_api_key=""))

        with patch("openai.OpenAI") as mock_openai:
            with pytest.raises(ConfigurationError):
                analyzer.analyze(measurements, sample_image, CHART_ROWS)

        mock_openai.assert_not_called()
        assert analyzer.configured is False

    def test_client_has_retries_disabled(self):
        analyzer = SizeAnalyzer(settings=get_settings_for_testing(analysis_timeout_seconds=12.5))

        with patch("openai.OpenAI") as mock_openai:
            analyzer.client

        mock_openai.assert_called_once_with(api_key="test-key", timeout=12.5, max_retries=0)


class TestAnalyze:
    """Tests for parsing the model answer."""

    def test_successful_analysis(self, analyzer, measurements, sample_image, openai_response, sample_result_dict):
        analyzer._client.chat.completions.create.return_value = openai_response(
            json.dumps(sample_result_dict)
        )

        result = analyzer.analyze(measurements, sample_image, CHART_ROWS)

        assert isinstance(result, AnalysisResult)
        assert result.recommendedSize == "M"
        assert result.estimatedHips == 99.5
        kwargs = analyzer._client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["response_format"]["type"] == "json_schema"

    def test_extra_fields_are_ignored(self, analyzer, measurements, sample_image, openai_response, sample_result_dict):
        analyzer._client.chat.completions.create.return_value = openai_response(
            json.dumps({**sample_result_dict, "note": "extra"})
        )

        result = analyzer.analyze(measurements, sample_image, CHART_ROWS)

        assert not hasattr(result, "note")

    def test_request_failure(self, analyzer, measurements, sample_image):
        analyzer._client.chat.completions.create.side_effect = TimeoutError("timed out")

        with pytest.raises(AnalysisError) as exc_info:
            analyzer.analyze(measurements, sample_image, CHART_ROWS)

        assert isinstance(exc_info.value.cause, TimeoutError)
        assert analyzer._client.chat.completions.create.call_count == 1

    def test_empty_answer(self, analyzer, measurements, sample_image, openai_response):
        analyzer._client.chat.completions.create.return_value = openai_response("")

        with pytest.raises(AnalysisError):
            analyzer.analyze(measurements, sample_image, CHART_ROWS)

    def test_malformed_json(self, analyzer, measurements, sample_image, openai_response):
        analyzer._client.chat.completions.create.return_value = openai_response("{not json")

        with pytest.raises(AnalysisError):
            analyzer.analyze(measurements, sample_image, CHART_ROWS)

    def test_non_object_json(self, analyzer, measurements, sample_image, openai_response):
        analyzer._client.chat.completions.create.return_value = openai_response("[1, 2]")

        with pytest.raises(AnalysisError):
            analyzer.analyze(measurements, sample_image, CHART_ROWS)

    def test_missing_field(self, analyzer, measurements, sample_image, openai_response, sample_result_dict):
        incomplete = dict(sample_result_dict)
        del incomplete["recommendedSize"]
        analyzer._client.chat.completions.create.return_value = openai_response(json.dumps(incomplete))

        with pytest.raises(AnalysisError):
            analyzer.analyze(measurements, sample_image, CHART_ROWS)

    def test_ill_typed_field(self, analyzer, measurements, sample_image, openai_response, sample_result_dict):
        bad = {**sample_result_dict, "estimatedChest": "wide"}
        analyzer._client.chat.completions.create.return_value = openai_response(json.dumps(bad))

        with pytest.raises(AnalysisError):
            analyzer.analyze(measurements, sample_image, CHART_ROWS)


class TestMeasurementInput:
    """Form validation of height and weight."""

    def test_weight_is_optional(self):
        m = MeasurementInput(height="175", weight="  ")

        assert m.weight is None

    def test_decimal_comma(self):
        assert MeasurementInput(height="175,5").height == "175,5"

    @pytest.mark.parametrize("height", ["", "139", "221", "tall"])
    def test_invalid_height(self, height):
        with pytest.raises(ValueError):
            MeasurementInput(height=height)

    @pytest.mark.parametrize("weight", ["39", "151", "heavy"])
    def test_invalid_weight(self, weight):
        with pytest.raises(ValueError):
            MeasurementInput(height="175", weight=weight)

    def test_unsupported_language(self):
        with pytest.raises(ValueError):
            MeasurementInput(height="175", language="de")
