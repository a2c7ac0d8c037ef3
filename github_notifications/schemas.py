"""Input validation for tool arguments.

Every identifier that ends up in a request path or query string passes through
one of the validated types below before a URL is built. Argument models are
composed from field groups (`RepoIdentifier`, `Pagination`,
`NotificationFilter`) and report every failing field at once through
`InvalidArguments`.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any, TypeVar
from urllib.parse import unquote

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    TypeAdapter,
    ValidationError,
)
from pydantic_core import PydanticCustomError

OWNER_MAX_LENGTH = 39
REPO_MAX_LENGTH = 100
THREAD_ID_MAX_LENGTH = 20
TIMESTAMP_MAX_LENGTH = 64
PAGE_MIN = 1
PAGE_MAX = 100

# Matched with fullmatch; [0-9] rather than \d so non-ASCII digits are rejected.
_OWNER_RE = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?")
_REPO_RE = re.compile(r"[A-Za-z0-9._-]+")
_THREAD_ID_RE = re.compile(r"[0-9]+")
_TIMESTAMP_RE = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(?:\.[0-9]+)?(?:Z|[+-][0-9]{2}:[0-9]{2})"
)


@dataclass(frozen=True)
class FieldError:
    """One violated rule on one input field."""

    field: str
    rule: str
    message: str

    def __str__(self):
        return f"{self.field}: {self.message}"


class InvalidArguments(Exception):
    """Raised when tool arguments fail validation; no request is made."""

    def __init__(self, errors: list[FieldError]):
        self.errors = errors
        super().__init__("; ".join(str(e) for e in errors))

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]


def _check_length(value: str, max_length: int, empty_msg: str, long_msg: str) -> None:
    if not value:
        raise PydanticCustomError("empty", empty_msg)
    if len(value) > max_length:
        raise PydanticCustomError("too_long", long_msg)


def _check_owner(value: str) -> str:
    _check_length(
        value,
        OWNER_MAX_LENGTH,
        "Owner cannot be empty",
        "GitHub username maximum length is 39 characters",
    )
    if not _OWNER_RE.fullmatch(value):
        raise PydanticCustomError(
            "pattern",
            "Owner must start and end with alphanumeric characters, may contain hyphens",
        )
    return value


def _has_traversal(decoded: str) -> bool:
    return (
        ".." in decoded
        or "\0" in decoded
        or "/" in decoded
        or "\\" in decoded
        or decoded.startswith(".")
    )


def _check_repo(value: str) -> str:
    _check_length(
        value,
        REPO_MAX_LENGTH,
        "Repository name cannot be empty",
        "Repository name maximum length is 100 characters",
    )
    if not _REPO_RE.fullmatch(value):
        raise PydanticCustomError(
            "pattern",
            "Repository name can only contain alphanumeric characters, dots, underscores, and hyphens",
        )
    # The pattern alone can be sidestepped with percent-encoding (%2e%2e%2f).
    if _has_traversal(unquote(value)):
        raise PydanticCustomError(
            "path_traversal",
            "Repository name contains invalid characters or path traversal attempts",
        )
    return value


def _check_thread_id(value: str) -> str:
    _check_length(value, THREAD_ID_MAX_LENGTH, "Thread ID cannot be empty", "Thread ID too long")
    if not _THREAD_ID_RE.fullmatch(value):
        raise PydanticCustomError("pattern", "Thread ID must be numeric")
    return value


def _check_timestamp(value: str) -> str:
    if len(value) > TIMESTAMP_MAX_LENGTH:
        raise PydanticCustomError("too_long", "Timestamp exceeds maximum length")
    if not _TIMESTAMP_RE.fullmatch(value):
        raise PydanticCustomError(
            "pattern",
            "Must be a valid ISO 8601 timestamp (e.g., 2024-01-15T10:30:00Z)",
        )
    return value


def _bounded(low_msg: str, high_msg: str):
    def check(value: int) -> int:
        if value < PAGE_MIN:
            raise PydanticCustomError("out_of_bounds", low_msg)
        if value > PAGE_MAX:
            raise PydanticCustomError("out_of_bounds", high_msg)
        return value

    return check


RepoOwner = Annotated[
    str,
    Field(strict=True, description="The account owner of the repository"),
    AfterValidator(_check_owner),
]
RepoName = Annotated[
    str,
    Field(strict=True, description="The name of the repository"),
    AfterValidator(_check_repo),
]
ThreadId = Annotated[
    str,
    Field(strict=True, description="GitHub notification thread ID"),
    AfterValidator(_check_thread_id),
]
Timestamp = Annotated[
    str,
    Field(strict=True, description="ISO 8601 formatted timestamp"),
    AfterValidator(_check_timestamp),
]
PageNumber = Annotated[
    int,
    Field(strict=True, description="Page number for pagination (1-100)"),
    AfterValidator(_bounded("Page must be at least 1", "GitHub API limits pagination to 100 pages")),
]
PerPage = Annotated[
    int,
    Field(strict=True, description="Number of results per page (1-100)"),
    AfterValidator(
        _bounded("Must request at least 1 item per page", "GitHub API maximum is 100 items per page")
    ),
]


class ToolArgs(BaseModel):
    """Base for validated tool arguments. Unknown keys are dropped."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class ThreadArgs(ToolArgs):
    thread_id: ThreadId


class RepoIdentifier(ToolArgs):
    owner: RepoOwner
    repo: RepoName


class Pagination(ToolArgs):
    page: PageNumber | None = None
    per_page: PerPage | None = None


class NotificationFilter(Pagination):
    all: StrictBool | None = Field(
        default=None, description="If true, show notifications marked as read (default: false)"
    )
    participating: StrictBool | None = Field(
        default=None,
        description="If true, only show notifications for threads you're directly participating in",
    )
    since: Timestamp | None = Field(
        default=None, description="Only show notifications updated after this time"
    )
    before: Timestamp | None = Field(
        default=None, description="Only show notifications updated before this time"
    )


class RepoNotificationFilter(RepoIdentifier, NotificationFilter):
    pass


def _field_errors(exc: ValidationError, default_field: str = "arguments") -> list[FieldError]:
    errors = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"]) or default_field
        errors.append(FieldError(field=loc, rule=err["type"], message=err["msg"]))
    return errors


M = TypeVar("M", bound=BaseModel)


def parse_args(model: type[M], raw: Mapping[str, Any] | None) -> M:
    """Validate raw tool arguments into `model`, collecting every field failure."""
    try:
        return model.model_validate(dict(raw or {}))
    except ValidationError as exc:
        raise InvalidArguments(_field_errors(exc)) from None


_owner_adapter = TypeAdapter(RepoOwner)
_repo_adapter = TypeAdapter(RepoName)
_thread_id_adapter = TypeAdapter(ThreadId)
_timestamp_adapter = TypeAdapter(Timestamp)
_page_adapter = TypeAdapter(PageNumber)
_per_page_adapter = TypeAdapter(PerPage)


def _validate_field(adapter: TypeAdapter, raw: Any, field: str):
    try:
        return adapter.validate_python(raw)
    except ValidationError as exc:
        raise InvalidArguments(_field_errors(exc, default_field=field)) from None


def validate_owner(raw: Any) -> str:
    return _validate_field(_owner_adapter, raw, "owner")


def validate_repo(raw: Any) -> str:
    return _validate_field(_repo_adapter, raw, "repo")


def validate_thread_id(raw: Any) -> str:
    return _validate_field(_thread_id_adapter, raw, "thread_id")


def validate_timestamp(raw: Any) -> str:
    return _validate_field(_timestamp_adapter, raw, "timestamp")


def validate_page(raw: Any) -> int:
    return _validate_field(_page_adapter, raw, "page")


def validate_per_page(raw: Any) -> int:
    return _validate_field(_per_page_adapter, raw, "per_page")
