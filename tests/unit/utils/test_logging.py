"""
Unit tests for structured logging helpers.
"""

import json
import logging

from sqlrow.utils.logging import (
    MASK,
    bind_context,
    configure_logging,
    describe_args,
    get_logger,
    mask_secrets,
)


class TestMaskSecrets:
    """Tests for secret masking."""

    def test_masks_secret_keys(self):
        fields = {
            "password": "hunter2",
            "api_token": "abc",
            "client_secret": "xyz",
            "database_url": "postgresql://user:pw@host/db",
            "SQLROW_DATABASE_URL": "sqlite:///x.db",
            "table": "company",
        }

        masked = mask_secrets(fields)

        assert masked["password"] == MASK
        assert masked["api_token"] == MASK
        assert masked["client_secret"] == MASK
        assert masked["database_url"] == MASK
        assert masked["SQLROW_DATABASE_URL"] == MASK
        assert masked["table"] == "company"

    def test_nested_mappings(self):
        masked = mask_secrets({"conn": {"password": "x", "host": "db"}})

        assert masked == {"conn": {"password": MASK, "host": "db"}}

    def test_input_not_modified(self):
        fields = {"password": "x"}
        mask_secrets(fields)
        assert fields == {"password": "x"}


class TestDescribeArgs:
    def test_binary_values_summarized(self):
        args = ["IBM", 3, b"\x00\x01\x02", bytearray(b"ab"), None]

        assert describe_args(args) == ["IBM", 3, "<3 bytes>", "<2 bytes>", None]


class TestLoggers:
    """Tests for logger factories and rendering."""

    def test_statement_event_rendering(self, caplog):
        """Statement events render as JSON with binary args summarized."""
        with caplog.at_level(logging.DEBUG, logger="sqlrow"):
            get_logger("sqlrow.render_test").debug(
                "sql.statement",
                sql="INSERT INTO t (a,b) VALUES (?,?)",
                args=["x", b"blob"],
                database_url="sqlite:///secret.db",
            )

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["event"] == "sql.statement"
        assert payload["args"] == ["x", "<4 bytes>"]
        assert payload["database_url"] == MASK
        assert payload["level"] == "debug"
        assert payload["logger"] == "sqlrow.render_test"

    def test_configure_is_repeatable(self):
        """Reconfiguring does not attach duplicate handlers."""
        before = len(logging.getLogger("sqlrow").handlers)
        configure_logging()
        assert len(logging.getLogger("sqlrow").handlers) == before

    def test_bind_context(self):
        logger = bind_context(table="company")
        assert callable(logger.info)
