"""
Tests for logging helpers and client log output.
"""

import logging

import pytest

from erc20_client.utils.logging import ROOT_LOGGER_NAME, configure_logging, get_logger, set_level

from ..conftest import BOB, TEST_PRIVATE_KEY


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestGetLogger:
    def test_namespaces_foreign_names(self) -> None:
        assert get_logger("scripts.transfer").name == "erc20_client.scripts.transfer"

    def test_keeps_package_names(self) -> None:
        assert get_logger("erc20_client.client").name == "erc20_client.client"
        assert get_logger(ROOT_LOGGER_NAME).name == ROOT_LOGGER_NAME


class TestConfigureLogging:
    def test_does_not_stack_handlers(self) -> None:
        configure_logging("DEBUG")
        configure_logging("INFO")
        root = logging.getLogger(ROOT_LOGGER_NAME)
        ours = [h for h in root.handlers if getattr(h, "_erc20_client_handler", False)]
        assert len(ours) == 1
        assert root.level == logging.INFO

    def test_set_level_accepts_lowercase_names(self) -> None:
        set_level("warning")
        assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.WARNING


class TestClientLogging:
    def test_broadcast_logged_without_key(self, client, caplog) -> None:
        with caplog.at_level(logging.INFO, logger=ROOT_LOGGER_NAME):
            handle = client.transfer(TEST_PRIVATE_KEY, BOB, 3)
        assert handle.tx_hash in caplog.text
        assert TEST_PRIVATE_KEY[2:] not in caplog.text

    def test_read_failure_logged_as_warning(self, client, token, caplog) -> None:
        token.fail_read = ConnectionError("boom")
        with caplog.at_level(logging.WARNING, logger=ROOT_LOGGER_NAME):
            with pytest.raises(Exception):
                client.total_supply()
        assert any(r.levelno == logging.WARNING and "totalSupply" in r.getMessage() for r in caplog.records)
