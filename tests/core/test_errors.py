"""Tests for error types and codes."""

from collections.abc import Iterator
from contextlib import contextmanager

import pytest

from lootledger.core.errors import (
    ConfigError,
    ConflictError,
    ErrorCategory,
    ErrorCode,
    InternalError,
    InvalidInputError,
    LootLedgerError,
    NoMatchingItemError,
    NotFoundError,
    UpstreamError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.MEMBER_NOT_FOUND, 1000),
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.INVALID_LINK, 3000),
            (ErrorCode.ALREADY_ASSIGNED, 4000),
            (ErrorCode.NO_MATCHING_ITEM, 5000),
            (ErrorCode.UPSTREAM_UNAVAILABLE, 6000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        assert expected_range <= code.value < expected_range + 1000


class TestLootLedgerError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = ConflictError(
            code=ErrorCode.ALREADY_ASSIGNED,
            message="Test message",
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 4001,
            "error": "ALREADY_ASSIGNED",
            "category": "conflict",
            "message": "Test message",
            "retryable": False,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        error = InternalError.unexpected("Something broke")
        assert str(error) == "[9001] INTERNAL_ERROR: Internal error: Something broke"

    def test_given_subclass_when_raised_then_caught_as_base(self) -> None:
        """Every typed error is a LootLedgerError."""
        with pytest.raises(LootLedgerError):
            raise NotFoundError.member("abc")


class TestCategories:
    """Each error family maps to one stable category."""

    @pytest.mark.parametrize(
        ("error", "category"),
        [
            (NotFoundError.week(3), ErrorCategory.NOT_FOUND),
            (ConfigError.parse_error("/x.yaml", "bad"), ErrorCategory.CONFIG),
            (InvalidInputError.floor(7), ErrorCategory.INVALID_INPUT),
            (ConflictError.already_undone("id"), ErrorCategory.CONFLICT),
            (
                NoMatchingItemError.for_target("m", "Head", "MainSpec"),
                ErrorCategory.NO_MATCHING_ITEM,
            ),
            (UpstreamError.unavailable("http://x", "timeout"), ErrorCategory.UPSTREAM_FAILURE),
            (InternalError.unexpected("boom"), ErrorCategory.INTERNAL),
        ],
    )
    def test_given_factory_error_when_category_checked_then_matches_family(
        self, error: LootLedgerError, category: ErrorCategory
    ) -> None:
        assert error.category == category
        assert error.to_dict()["category"] == category.value


class TestFactories:
    """Factory method detail tests."""

    def test_already_assigned_carries_context(self) -> None:
        error = ConflictError.already_assigned(2, 3, "Body")
        assert error.code == ErrorCode.ALREADY_ASSIGNED
        assert error.details == {"week_number": 2, "floor": 3, "target": "Body"}
        assert "Body" in error.message

    def test_upstream_unavailable_is_retryable(self) -> None:
        assert UpstreamError.unavailable("http://x", "HTTP 503").retryable is True
        assert UpstreamError.bad_response("http://x", "HTTP 404").retryable is False

    def test_invalid_link_records_link_and_reason(self) -> None:
        error = InvalidInputError.link("nope", "no page parameter")
        assert error.code == ErrorCode.INVALID_LINK
        assert error.details["link"] == "nope"
        assert error.details["reason"] == "no page parameter"

    def test_config_invalid_value_stringifies_value(self) -> None:
        error = ConfigError.invalid_value("server.port", 99999, "out of range")
        assert error.details["value"] == "99999"
        assert error.error_name == "CONFIG_INVALID_VALUE"


@contextmanager
def _passthrough() -> Iterator[None]:
    yield


class TestContextManagerPropagation:
    """Errors must survive contextlib re-raising them with a new traceback."""

    @pytest.mark.parametrize(
        "error",
        [
            LootLedgerError(code=ErrorCode.INTERNAL_ERROR, message="base"),
            ConflictError.already_assigned(1, 2, "Head"),
            NotFoundError.member("m1"),
        ],
    )
    def test_given_error_when_raised_in_with_block_then_caught_unchanged(
        self, error: LootLedgerError
    ) -> None:
        with pytest.raises(type(error)) as exc_info, _passthrough():
            raise error
        assert exc_info.value is error
