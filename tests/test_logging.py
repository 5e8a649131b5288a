import logging

import pytest
import requests
import structlog
from structlog.testing import capture_logs

from core.logging import RequestEvents, configure_logging, drop_secrets
from core.settings import Settings
from payments.errors import APIConnectionError
from payments.invoice import InvoiceClient, InvoiceParams


class _TestLogger:
    def __init__(self):
        self.output = []

    def __call__(self, logger, method_name, event_dict):
        """Process log events and store them for test assertions"""
        self.output.append(event_dict.copy())
        return event_dict


def test_structlog_json():
    test_logger = _TestLogger()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            drop_secrets,
            test_logger,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    log = structlog.get_logger("test")
    log.bind(foo="bar", api_key="sk_live_secret").warning("hello world")

    assert len(test_logger.output) > 0
    log_dict = test_logger.output[-1]

    assert log_dict["foo"] == "bar"
    assert log_dict["api_key"] == "***"
    assert log_dict["event"] == "hello world"
    assert "timestamp" in log_dict
    assert log_dict["level"] == "warning"
    structlog.reset_defaults()


def test_configure_logging_without_instrumentation(capsys):
    configure_logging(instrument=False)

    structlog.get_logger("test").info("configured", answer=42)

    out = capsys.readouterr().out
    assert '"event": "configured"' in out
    assert '"answer": 42' in out
    logging.getLogger().handlers = []
    structlog.reset_defaults()


def test_configure_logging_reads_settings(capsys):
    # Environment says test/DEBUG; the settings object wins
    settings = Settings(
        STRIPE_API_KEY="sk_test_mock", LOG_LEVEL="warning", ENVIRONMENT="production"
    )

    configure_logging(settings, instrument=False)

    assert logging.getLogger().level == logging.WARNING
    log = structlog.get_logger("test.settings")
    log.info("hidden")
    log.warning("shown")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert '"event": "shown"' in captured.err
    assert "hidden" not in captured.err
    logging.getLogger().handlers = []
    structlog.reset_defaults()


def test_transport_failure_is_logged(base_client, mock_session):
    mock_session.request.side_effect = requests.ConnectionError("boom")

    with capture_logs() as logs:
        with pytest.raises(APIConnectionError):
            base_client.query("GET", "/v1/account", None, object)

    failed = [e for e in logs if e["event"] == RequestEvents.REQUEST_FAILED]
    assert failed and failed[0]["path"] == "/v1/account"
    assert all("sk_test_mock" not in str(e) for e in logs)


def test_invalid_params_are_logged(fake_client):
    with capture_logs() as logs:
        with pytest.raises(ValueError):
            InvoiceClient(fake_client).create(InvoiceParams())

    assert logs[-1]["event"] == RequestEvents.INVALID_PARAMS
    assert logs[-1]["log_level"] == "warning"
