"""API check construct: a single HTTP request plus response assertions."""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, cast

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from construct_engine.constructs.check import Check, CheckProps
from construct_engine.session import Session


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class BodyType(str, Enum):
    JSON = "JSON"
    FORM = "FORM"
    RAW = "RAW"
    GRAPHQL = "GRAPHQL"
    NONE = "NONE"


class AssertionSource(str, Enum):
    STATUS_CODE = "STATUS_CODE"
    JSON_BODY = "JSON_BODY"
    HEADERS = "HEADERS"
    TEXT_BODY = "TEXT_BODY"
    RESPONSE_TIME = "RESPONSE_TIME"


class AssertionComparison(str, Enum):
    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    HAS_KEY = "HAS_KEY"
    NOT_HAS_KEY = "NOT_HAS_KEY"
    HAS_VALUE = "HAS_VALUE"
    NOT_HAS_VALUE = "NOT_HAS_VALUE"
    IS_EMPTY = "IS_EMPTY"
    NOT_EMPTY = "NOT_EMPTY"
    GREATER_THAN = "GREATER_THAN"
    LESS_THAN = "LESS_THAN"
    CONTAINS = "CONTAINS"
    NOT_CONTAINS = "NOT_CONTAINS"
    IS_NULL = "IS_NULL"
    NOT_NULL = "NOT_NULL"


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Assertion(_WireModel):
    """One condition the response must satisfy."""

    source: AssertionSource
    property: str = ""
    comparison: AssertionComparison
    target: str = ""
    regex: str | None = None


class KeyValuePair(_WireModel):
    key: str
    value: str = ""
    locked: bool = False


class ApiCheckRequest(_WireModel):
    """The HTTP request an API check sends on every run."""

    method: HttpMethod = HttpMethod.GET
    url: str = Field(..., min_length=1)
    follow_redirects: bool = True
    skip_ssl: bool = Field(default=False, alias="skipSSL")
    headers: list[KeyValuePair] = Field(default_factory=list)
    query_parameters: list[KeyValuePair] = Field(default_factory=list)
    body: str | None = None
    body_type: BodyType = BodyType.NONE
    assertions: list[Assertion] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Assertion builder
# ---------------------------------------------------------------------------


class _AssertionTarget:
    def __init__(self, source: AssertionSource, property: str = "", regex: str | None = None) -> None:
        self._source = source
        self._property = property
        self._regex = regex

    def _build(self, comparison: AssertionComparison, target: Any = "") -> Assertion:
        return Assertion(
            source=self._source,
            property=self._property,
            comparison=comparison,
            target=str(target),
            regex=self._regex,
        )

    def equals(self, target: Any) -> Assertion:
        return self._build(AssertionComparison.EQUALS, target)

    def not_equals(self, target: Any) -> Assertion:
        return self._build(AssertionComparison.NOT_EQUALS, target)

    def greater_than(self, target: Any) -> Assertion:
        return self._build(AssertionComparison.GREATER_THAN, target)

    def less_than(self, target: Any) -> Assertion:
        return self._build(AssertionComparison.LESS_THAN, target)

    def contains(self, target: Any) -> Assertion:
        return self._build(AssertionComparison.CONTAINS, target)

    def not_contains(self, target: Any) -> Assertion:
        return self._build(AssertionComparison.NOT_CONTAINS, target)

    def is_empty(self) -> Assertion:
        return self._build(AssertionComparison.IS_EMPTY)

    def not_empty(self) -> Assertion:
        return self._build(AssertionComparison.NOT_EMPTY)

    def is_null(self) -> Assertion:
        return self._build(AssertionComparison.IS_NULL)

    def not_null(self) -> Assertion:
        return self._build(AssertionComparison.NOT_NULL)


class AssertionBuilder:
    """Fluent helpers, e.g. ``AssertionBuilder.status_code().equals(200)``."""

    @staticmethod
    def status_code() -> _AssertionTarget:
        return _AssertionTarget(AssertionSource.STATUS_CODE)

    @staticmethod
    def json_body(property: str = "") -> _AssertionTarget:
        return _AssertionTarget(AssertionSource.JSON_BODY, property)

    @staticmethod
    def headers(property: str = "", regex: str | None = None) -> _AssertionTarget:
        return _AssertionTarget(AssertionSource.HEADERS, property, regex)

    @staticmethod
    def text_body(property: str = "") -> _AssertionTarget:
        return _AssertionTarget(AssertionSource.TEXT_BODY, property)

    @staticmethod
    def response_time() -> _AssertionTarget:
        return _AssertionTarget(AssertionSource.RESPONSE_TIME)


# ---------------------------------------------------------------------------
# Construct
# ---------------------------------------------------------------------------


class ApiCheckProps(CheckProps):
    request: ApiCheckRequest
    degraded_response_time: int = Field(default=10000, ge=0, le=30000)
    max_response_time: int = Field(default=20000, ge=0, le=30000)
    local_setup_script: str | None = None
    local_teardown_script: str | None = None


class ApiCheck(Check):
    """Runs one HTTP request and evaluates its assertions.

    Example::

        ApiCheck(
            "books-api",
            name="Books API",
            request=ApiCheckRequest(
                url="https://example.com/api/books",
                assertions=[AssertionBuilder.status_code().equals(200)],
            ),
        )
    """

    check_type: ClassVar[str] = "API"
    props_model: ClassVar[type[CheckProps]] = ApiCheckProps

    def _configure(self, props: CheckProps, session: Session) -> None:
        props = cast(ApiCheckProps, props)
        if props.degraded_response_time > props.max_response_time:
            raise ValueError("degraded_response_time must not exceed max_response_time.")
        self.request = props.request
        self.degraded_response_time = props.degraded_response_time
        self.max_response_time = props.max_response_time
        self.local_setup_script = props.local_setup_script
        self.local_teardown_script = props.local_teardown_script

    def _type_payload(self) -> dict[str, Any]:
        return {
            "checkType": self.check_type,
            "request": self.request.model_dump(by_alias=True, mode="json"),
            "degradedResponseTime": self.degraded_response_time,
            "maxResponseTime": self.max_response_time,
            "localSetupScript": self.local_setup_script,
            "localTearDownScript": self.local_teardown_script,
        }
