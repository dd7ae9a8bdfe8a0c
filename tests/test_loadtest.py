import json
from unittest import mock

import pytest
import requests

from loadtest.client import PassgenClient, RetryableError, ValidationFailed
from loadtest.metrics import LoadMetrics
from loadtest.runner import LoadRunner
from loadtest.scenario import DEFAULT_SCENARIOS, LoadScenario
from passgen.errors import HistoryItemNotFound


def fake_response(status_code, payload):
    response = mock.Mock(status_code=status_code)
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(response=response)
    return response


@pytest.fixture
def api():
    client = PassgenClient("http://passgen.test/")
    client.session = mock.Mock()
    return client


def test_generate_posts_length_and_options(api):
    api.session.request.return_value = fake_response(200, {"password": "abcd"})

    assert api.generate(4, {"lower": True}) == {"password": "abcd"}
    api.session.request.assert_called_once_with(
        "POST",
        "http://passgen.test/api/generate",
        timeout=10,
        json={"length": 4, "options": {"lower": True}},
    )


def test_empty_pool_raises_validation_failed(api):
    api.session.request.return_value = fake_response(
        400, {"error": "empty_pool", "detail": "select at least one character class"}
    )

    with pytest.raises(ValidationFailed) as exc:
        api.generate(8, {})
    assert exc.value.error == "empty_pool"


def test_connection_error_is_retryable(api):
    api.session.request.side_effect = requests.ConnectionError("refused")

    with pytest.raises(RetryableError):
        api.stats()


def test_storage_unavailable_is_retryable(api):
    api.session.request.return_value = fake_response(
        503, {"error": "storage_unavailable", "retryable": True}
    )

    with pytest.raises(RetryableError):
        api.history()


@pytest.mark.parametrize("status_code", [500, 502, 503, 504])
def test_server_errors_without_json_body_are_retryable(api, status_code):
    response = fake_response(status_code, None)
    response.json.side_effect = ValueError("Expecting value: line 1 column 1")
    api.session.request.return_value = response

    with pytest.raises(RetryableError) as exc:
        api.generate(12)
    assert str(status_code) in str(exc.value)


def test_bad_request_without_json_body_is_validation_failed(api):
    response = fake_response(400, None)
    response.json.side_effect = ValueError("Expecting value: line 1 column 1")
    api.session.request.return_value = response

    with pytest.raises(ValidationFailed) as exc:
        api.generate(12)
    assert exc.value.error == "bad_request"


def test_delete_missing_item(api):
    api.session.request.return_value = fake_response(404, {"error": "not_found"})

    with pytest.raises(HistoryItemNotFound):
        api.delete("abc")


def test_history_passes_limit(api):
    api.session.request.return_value = fake_response(200, {"items": [{"id": "1"}]})

    assert api.history(limit=1) == [{"id": "1"}]
    assert api.session.request.call_args.kwargs["params"] == {"limit": 1}


def test_scenario_defaults():
    scenario = LoadScenario("default")
    assert scenario.options == {
        "upper": True,
        "lower": True,
        "numbers": True,
        "symbols": False,
    }
    assert len(DEFAULT_SCENARIOS) == 3
    with pytest.raises(ValueError):
        LoadScenario("none", requests=0)


def test_empty_metrics_report():
    metrics = LoadMetrics("empty")
    metrics.start()
    metrics.stop()

    report = metrics.get_report()
    assert report["total_requests"] == 0
    assert report["success_rate"] == 0
    assert report["avg_latency_ms"] == 0
    assert report["strength_distribution"] == {}


def test_runner_records_every_request(tmp_path):
    client = mock.Mock()
    client.generate.side_effect = [
        {"strength": "Strong", "response_time": 0.1},
        RetryableError("timeout"),
        {"strength": "Strong", "response_time": 0.3},
    ]
    client.stats.return_value = {"total_generated": 2, "history_cap": 20}

    metrics = LoadMetrics("runner")
    stats = LoadRunner(client).run(LoadScenario("runner", requests=3), metrics)

    client.clear.assert_called_once_with()
    assert stats["total_generated"] == 2
    report = metrics.save_report(output_dir=str(tmp_path))
    assert report["total_requests"] == 3
    assert report["failed_requests"] == 1
    assert report["avg_generation_ms"] == 0.2
    assert report["strength_distribution"] == {"Strong": 2}
    saved = list(tmp_path.glob("runner_*.json"))
    assert json.loads(saved[0].read_text())["scenario"] == "runner"


def test_runner_stops_on_validation_failure():
    client = mock.Mock()
    client.generate.side_effect = ValidationFailed("empty_pool")
    client.stats.return_value = {}

    metrics = LoadMetrics("invalid")
    LoadRunner(client).run(LoadScenario("invalid", requests=5), metrics)

    assert client.generate.call_count == 1
    assert metrics.failed_requests == 1
