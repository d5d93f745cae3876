"""
Telemetry setup tests

Exporters and global providers are patched so nothing leaves the process.
"""

import time
import threading
from unittest.mock import patch, MagicMock

from opentelemetry.sdk.trace import TracerProvider

from gonit_api.telemetry import tracer as tracer_module
from gonit_api.telemetry import metrics as metrics_module


def test_setup_tracer_installs_provider():
    with patch.object(tracer_module, "OTLPSpanExporter") as mock_exporter, \
            patch.object(tracer_module.trace, "set_tracer_provider") as mock_set:
        tracer = tracer_module.setup_tracer("gonit-api", "collector:4317")

    mock_exporter.assert_called_once_with(endpoint="collector:4317", insecure=True)
    provider = mock_set.call_args[0][0]
    assert isinstance(provider, TracerProvider)
    assert provider.resource.attributes["service.name"] == "gonit-api"
    assert tracer is not None
    provider.shutdown()


def test_create_span_is_context_manager():
    with tracer_module.create_span("rpc.client API.About", {"rpc.method": "API.About"}) as span:
        assert span is not None


def test_setup_metrics_installs_provider():
    with patch.object(metrics_module, "OTLPMetricExporter") as mock_exporter, \
            patch.object(metrics_module, "PeriodicExportingMetricReader") as mock_reader, \
            patch.object(metrics_module, "MeterProvider") as mock_provider, \
            patch.object(metrics_module.metrics, "set_meter_provider") as mock_set:
        metrics_module.setup_metrics("gonit-api", "collector:4317", export_interval_ms=1000)

    mock_exporter.assert_called_once_with(endpoint="collector:4317", insecure=True)
    mock_reader.assert_called_once_with(mock_exporter.return_value, export_interval_millis=1000)
    assert mock_provider.call_args[1]["metric_readers"] == [mock_reader.return_value]
    mock_set.assert_called_once_with(mock_provider.return_value)


def test_counter_and_histogram_are_cached():
    meter = MagicMock()
    with patch.object(metrics_module.metrics, "get_meter", return_value=meter), \
            patch.dict(metrics_module._counters, clear=True), \
            patch.dict(metrics_module._histograms, clear=True):
        metrics_module.increment_counter("rpc.client.requests", 1, {"method": "API.About"})
        metrics_module.increment_counter("rpc.client.requests", 2)
        metrics_module.record_latency("rpc.client.latency", 1.5, {"method": "API.About"})

        meter.create_counter.assert_called_once()
        meter.create_histogram.assert_called_once()
        counter = meter.create_counter.return_value
        counter.add.assert_any_call(1, {"method": "API.About"})
        counter.add.assert_any_call(2, {})
        meter.create_histogram.return_value.record.assert_called_once_with(1.5, {"method": "API.About"})


def test_concurrent_callers_share_one_counter():
    def slow_create_counter(**kwargs):
        time.sleep(0.01)
        return MagicMock()

    meter = MagicMock()
    meter.create_counter.side_effect = slow_create_counter
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(metrics_module.get_counter("rpc.client.requests", "Requests"))

    with patch.object(metrics_module.metrics, "get_meter", return_value=meter), \
            patch.dict(metrics_module._counters, clear=True):
        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

    meter.create_counter.assert_called_once()
    assert len(results) == 8
    assert all(counter is results[0] for counter in results)
