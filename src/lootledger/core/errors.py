"""LootLedger error types with typed error codes.

Error code ranges:
- 1xxx: Not found
- 2xxx: Config
- 3xxx: Invalid input
- 4xxx: Conflict
- 5xxx: No matching gear item
- 6xxx: Upstream (gear-list source)
- 9xxx: Internal

Each error also carries a stable ErrorCategory so callers (HTTP, CLI) can
tell "nothing to do" (CONFLICT) from "broken input" (INVALID_INPUT) from
"transient, retry" (UPSTREAM_FAILURE) without inspecting codes.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, ClassVar


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Not found (1xxx)
    MEMBER_NOT_FOUND = 1001
    ASSIGNMENT_NOT_FOUND = 1002
    WEEK_NOT_FOUND = 1003

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_MISSING_REQUIRED = 2003
    CONFIG_FILE_NOT_FOUND = 2004

    # Invalid input (3xxx)
    INVALID_LINK = 3001
    INVALID_FLOOR = 3002
    INVALID_SLOT = 3003
    INVALID_SPEC_TYPE = 3004
    INVALID_WEEK_NUMBER = 3005
    INVALID_ITEM_TYPE = 3006
    INVALID_VALUE = 3007

    # Conflict (4xxx)
    ALREADY_ASSIGNED = 4001
    ALREADY_UNDONE = 4002
    WEEK_EXISTS = 4003
    NO_CURRENT_WEEK = 4004

    # No matching item (5xxx)
    NO_MATCHING_ITEM = 5001

    # Upstream (6xxx)
    UPSTREAM_UNAVAILABLE = 6001
    UPSTREAM_BAD_RESPONSE = 6002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001
    INTERNAL_TIMEOUT = 9002


class ErrorCategory(str, Enum):
    """Stable status categories exposed to callers."""

    NOT_FOUND = "not_found"
    CONFIG = "config"
    INVALID_INPUT = "invalid_input"
    CONFLICT = "conflict"
    NO_MATCHING_ITEM = "no_matching_item"
    UPSTREAM_FAILURE = "upstream_failure"
    INTERNAL = "internal"


# Not frozen: contextlib assigns __traceback__ when re-raising out of a with-block.
@dataclass(eq=False)
class LootLedgerError(Exception):
    """Base error with structured context for API responses."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    category: ClassVar[ErrorCategory] = ErrorCategory.INTERNAL

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'ALREADY_ASSIGNED')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "category": self.category.value,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class NotFoundError(LootLedgerError):
    """Member, assignment or week does not exist."""

    category = ErrorCategory.NOT_FOUND

    @classmethod
    def member(cls, member_id: str) -> "NotFoundError":
        return cls(
            code=ErrorCode.MEMBER_NOT_FOUND,
            message=f"Member with ID {member_id} not found",
            details={"member_id": member_id},
        )

    @classmethod
    def assignment(cls, assignment_id: str) -> "NotFoundError":
        return cls(
            code=ErrorCode.ASSIGNMENT_NOT_FOUND,
            message=f"Assignment with ID {assignment_id} not found",
            details={"assignment_id": assignment_id},
        )

    @classmethod
    def week(cls, week_number: int) -> "NotFoundError":
        return cls(
            code=ErrorCode.WEEK_NOT_FOUND,
            message=f"Week {week_number} not found",
            details={"week_number": week_number},
        )


class ConfigError(LootLedgerError):
    """Configuration-related errors."""

    category = ErrorCategory.CONFIG

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class InvalidInputError(LootLedgerError):
    """Malformed or out-of-range caller input."""

    category = ErrorCategory.INVALID_INPUT

    @classmethod
    def link(cls, link: str, reason: str) -> "InvalidInputError":
        return cls(
            code=ErrorCode.INVALID_LINK,
            message=f"Invalid gear link: {reason}",
            details={"link": link, "reason": reason},
        )

    @classmethod
    def floor(cls, floor: Any) -> "InvalidInputError":
        return cls(
            code=ErrorCode.INVALID_FLOOR,
            message=f"Invalid floor number: {floor}. Must be between 1 and 4.",
            details={"floor": str(floor)},
        )

    @classmethod
    def slot(cls, slot: Any) -> "InvalidInputError":
        return cls(
            code=ErrorCode.INVALID_SLOT,
            message=f"Unknown gear slot or material: {slot}",
            details={"slot": str(slot)},
        )

    @classmethod
    def spec_type(cls, spec_type: Any, reason: str) -> "InvalidInputError":
        return cls(
            code=ErrorCode.INVALID_SPEC_TYPE,
            message=f"Invalid spec type {spec_type}: {reason}",
            details={"spec_type": str(spec_type), "reason": reason},
        )

    @classmethod
    def week_number(cls, week_number: Any) -> "InvalidInputError":
        return cls(
            code=ErrorCode.INVALID_WEEK_NUMBER,
            message=f"Invalid week number: {week_number}. Must be a positive integer.",
            details={"week_number": str(week_number)},
        )

    @classmethod
    def not_aug_tome(cls, slot: str) -> "InvalidInputError":
        return cls(
            code=ErrorCode.INVALID_ITEM_TYPE,
            message=f"Item in slot {slot} is not an augmented tome item",
            details={"slot": slot},
        )

    @classmethod
    def value(cls, field: str, reason: str) -> "InvalidInputError":
        return cls(
            code=ErrorCode.INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "reason": reason},
        )


class ConflictError(LootLedgerError):
    """Operation conflicts with current ledger or week state."""

    category = ErrorCategory.CONFLICT

    @classmethod
    def already_assigned(cls, week_number: int, floor: int, target: str) -> "ConflictError":
        return cls(
            code=ErrorCode.ALREADY_ASSIGNED,
            message=f"{target} from floor {floor} has already been assigned in week {week_number}",
            details={"week_number": week_number, "floor": floor, "target": target},
        )

    @classmethod
    def already_undone(cls, assignment_id: str) -> "ConflictError":
        return cls(
            code=ErrorCode.ALREADY_UNDONE,
            message="This assignment has already been undone",
            details={"assignment_id": assignment_id},
        )

    @classmethod
    def week_exists(cls, week_number: int) -> "ConflictError":
        return cls(
            code=ErrorCode.WEEK_EXISTS,
            message=f"Week {week_number} already exists",
            details={"week_number": week_number},
        )

    @classmethod
    def no_current_week(cls) -> "ConflictError":
        return cls(
            code=ErrorCode.NO_CURRENT_WEEK,
            message="No current week set. Start a new week first.",
        )


class NoMatchingItemError(LootLedgerError):
    """Target member has no gear entry the operation can act on."""

    category = ErrorCategory.NO_MATCHING_ITEM

    @classmethod
    def for_target(cls, member_id: str, target: str, spec_type: str) -> "NoMatchingItemError":
        return cls(
            code=ErrorCode.NO_MATCHING_ITEM,
            message=f"No gear item for {target} found for member {member_id} (spec: {spec_type})",
            details={"member_id": member_id, "target": target, "spec_type": spec_type},
        )


class UpstreamError(LootLedgerError):
    """External gear-list source failed."""

    category = ErrorCategory.UPSTREAM_FAILURE

    @classmethod
    def unavailable(cls, url: str, reason: str) -> "UpstreamError":
        return cls(
            code=ErrorCode.UPSTREAM_UNAVAILABLE,
            message=f"Gear list fetch failed: {reason}",
            retryable=True,
            details={"url": url, "reason": reason},
        )

    @classmethod
    def bad_response(cls, url: str, reason: str) -> "UpstreamError":
        return cls(
            code=ErrorCode.UPSTREAM_BAD_RESPONSE,
            message=f"Invalid gear list response: {reason}",
            details={"url": url, "reason": reason},
        )


class InternalError(LootLedgerError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
