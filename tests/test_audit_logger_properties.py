"""
Property-based tests for the audit logger.

Covers dual-format output, severity filtering, masking of sensitive values
and error context.
"""

import json
from io import StringIO

from hypothesis import given, settings, assume
from hypothesis import strategies as st

from domain_sifter.audit_logger import AuditLogger, LEVEL_ORDER, parse_log_level
from domain_sifter.enums import LogLevel


SENSITIVE_PATTERNS = sorted(AuditLogger.SENSITIVE_KEYS)


@st.composite
def log_level_strategy(draw) -> LogLevel:
    return draw(st.sampled_from(list(LogLevel)))


@st.composite
def component_name_strategy(draw) -> str:
    return draw(st.text(
        alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-"),
        min_size=1,
        max_size=30,
    ))


@st.composite
def message_strategy(draw) -> str:
    return draw(st.text(
        alphabet=st.characters(
            whitelist_categories=('L', 'N', 'P', 'S', 'Z'),
            blacklist_characters='\x00\n\r',
        ),
        min_size=1,
        max_size=100,
    ))


@st.composite
def non_sensitive_key_strategy(draw) -> str:
    key = draw(st.text(
        alphabet=st.sampled_from("abcdefghijklmnopqrstuvwxyz_"),
        min_size=1,
        max_size=20,
    ))
    for pattern in SENSITIVE_PATTERNS:
        assume(pattern not in key)
    return key


@st.composite
def sensitive_key_strategy(draw) -> str:
    base = draw(st.sampled_from(SENSITIVE_PATTERNS))
    prefix = draw(st.sampled_from(['', 'registry_', 'X-']))
    suffix = draw(st.sampled_from(['', '_value', '_1']))
    return f"{prefix}{base}{suffix}"


@st.composite
def simple_value_strategy(draw):
    return draw(st.one_of(
        st.text(max_size=30),
        st.integers(min_value=-1000, max_value=1000),
        st.booleans(),
        st.none(),
    ))


@st.composite
def non_sensitive_data_strategy(draw) -> dict:
    return draw(st.dictionaries(
        non_sensitive_key_strategy(), simple_value_strategy(), max_size=5
    ))


class TestDualFormatProperty:
    """
    Entries are written as JSON, text, or both.
    """

    @given(
        level=log_level_strategy(),
        component=component_name_strategy(),
        message=message_strategy(),
        data=non_sensitive_data_strategy(),
    )
    @settings(max_examples=100, deadline=None)
    def test_both_formats_written(
        self, level: LogLevel, component: str, message: str, data: dict
    ) -> None:
        """
        *For any* entry logged in 'both' mode, the output SHALL contain one
        parseable JSON line and one text line carrying the same content.
        """
        stream = StringIO()
        logger = AuditLogger(output_format="both", output_stream=stream)

        entry = logger.log(level, component, message, data)
        assert entry is not None

        lines = stream.getvalue().split("\n")[:-1]
        assert len(lines) == 2

        parsed = json.loads(lines[0])
        assert parsed["level"] == level.value
        assert parsed["component"] == component
        assert parsed["message"] == message
        assert parsed["data"] == data

        assert lines[1].startswith(f"[{entry.timestamp}] {level.value.upper()} [{component}]")
        assert message in lines[1]

    @given(message=message_strategy())
    @settings(max_examples=50)
    def test_json_only(self, message: str) -> None:
        stream = StringIO()
        logger = AuditLogger(output_format="json", output_stream=stream)
        logger.log(LogLevel.INFO, "Test", message)
        lines = stream.getvalue().split("\n")[:-1]
        assert len(lines) == 1
        assert json.loads(lines[0])["message"] == message

    def test_invalid_format_rejected(self) -> None:
        try:
            AuditLogger(output_format="xml")
        except ValueError:
            pass
        else:
            raise AssertionError("expected ValueError")


class TestLevelFilterProperty:
    """
    Entries below the minimum level are dropped.
    """

    @given(level=log_level_strategy(), min_level=log_level_strategy())
    @settings(max_examples=100)
    def test_filter(self, level: LogLevel, min_level: LogLevel) -> None:
        """
        *For any* level and minimum level, an entry SHALL be emitted iff its
        severity is at least the minimum.
        """
        stream = StringIO()
        logger = AuditLogger(output_format="text", output_stream=stream, min_level=min_level)

        entry = logger.log(level, "Test", "message")

        emitted = LEVEL_ORDER[level] >= LEVEL_ORDER[min_level]
        assert (entry is not None) == emitted
        assert bool(stream.getvalue()) == emitted
        assert len(logger.entries) == (1 if emitted else 0)

    def test_parse_log_level(self) -> None:
        assert parse_log_level("debug") == LogLevel.DEBUG
        assert parse_log_level("WARN") == LogLevel.WARN
        assert parse_log_level("verbose") == LogLevel.INFO


class TestSensitiveDataMaskingProperty:
    """
    Secrets such as the registry session token never reach the output.
    """

    @given(
        key=sensitive_key_strategy(),
        secret=st.text(alphabet="abcdef0123456789", min_size=12, max_size=40),
    )
    @settings(max_examples=100)
    def test_sensitive_values_masked(self, key: str, secret: str) -> None:
        """
        *For any* key containing a sensitive pattern, the logged value SHALL
        be replaced by the mask in both formats.
        """
        stream = StringIO()
        logger = AuditLogger(output_format="both", output_stream=stream)

        entry = logger.log(LogLevel.INFO, "Test", "message", {key: secret})

        assert entry.data[key] == AuditLogger.MASK_VALUE
        assert secret not in stream.getvalue()

    @given(data=non_sensitive_data_strategy())
    @settings(max_examples=100)
    def test_other_values_untouched(self, data: dict) -> None:
        logger = AuditLogger(output_stream=StringIO())
        assert logger.mask_sensitive_data(data) == data

    def test_nested_form_token_masked(self) -> None:
        logger = AuditLogger(output_stream=StringIO())
        masked = logger.mask_sensitive_data({
            "url": "https://registry.test/",
            "form": {"d": "example", "tld": "fr", "security": "abc123"},
            "headers": [{"Cookie": "session=1"}, {"Accept": "*/*"}],
        })
        assert masked["form"] == {"d": "example", "tld": "fr", "security": AuditLogger.MASK_VALUE}
        assert masked["headers"] == [{"Cookie": AuditLogger.MASK_VALUE}, {"Accept": "*/*"}]
        assert masked["url"] == "https://registry.test/"


class TestErrorContextProperty:
    """
    log_error records the exception, the URL and the status code.
    """

    @given(
        message=message_strategy(),
        status_code=st.one_of(st.none(), st.sampled_from([400, 403, 500, 503])),
    )
    @settings(max_examples=50)
    def test_error_context(self, message: str, status_code) -> None:
        logger = AuditLogger(output_format="json", output_stream=StringIO())
        error = ConnectionError(message)

        entry = logger.log_error(
            "Checker",
            "Check failed",
            error=error,
            request_url="https://example.fr",
            response_status_code=status_code,
            additional_data={"domain": "example.fr"},
        )

        assert entry.level == LogLevel.ERROR
        assert entry.data["error_type"] == "ConnectionError"
        assert entry.data["error_message"] == message
        assert entry.data["request_url"] == "https://example.fr"
        assert entry.data["domain"] == "example.fr"
        assert ("response_status_code" in entry.data) == (status_code is not None)

    def test_minimal_error(self) -> None:
        logger = AuditLogger(output_stream=StringIO())
        entry = logger.log_error("Checker", "Something broke")
        assert entry.data == {}
        logger.clear_entries()
        assert logger.entries == []
