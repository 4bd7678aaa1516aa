"""검색 조건(Criteria) 빌더 — 필드별 조건을 SQL WHERE 절로 변환.

Criteria builder module.
A Criteria is a set of explicit {field, operator, value} filters bound to a
CriteriaSpec, which lists an entity's filterable columns and their types.
One interpreter (CriteriaSpec.predicate) turns every filter into exactly one
SQLAlchemy clause; the clauses are ANDed together. There is no OR support.

Operators:
    EQUALS(v)          column = v
    IN(vs)             column IN (vs)
    RANGE(min, max)    min <= column <= max, either bound optional
    IS_NULL            column IS NULL
    IS_NOT_NULL        column IS NOT NULL
    CONTAINS(s)        lower(column) LIKE '%' || lower(s) || '%'  (case-insensitive,
                       LIKE wildcards in s are escaped)

Query-string syntax (parse):
    title.contains=cov        quiz_id.equals=<uuid>     id.in=<uuid>,<uuid>
    position.greaterThanOrEqual=1&position.lessThanOrEqual=5
    content_type.specified=false                         title=cover (equals)

Usage:
    image_criteria = CriteriaSpec(Image, {"title": FieldType.STRING})
    criteria = image_criteria.build(FieldFilter("title", Operator.CONTAINS, "cov"))
    query = criteria.apply(select(Image))
"""

import enum
import uuid
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import Field, TypeAdapter, ValidationError
from sqlalchemy import ColumnElement, Select, and_

from app.database import INT4_MAX
from app.utils.exceptions import InvalidCriteriaError

# 필터가 아닌 페이지네이션 예약 파라미터 — Pagination params, never treated as filters
RESERVED_PARAMS: frozenset[str] = frozenset({"page", "size", "sort"})


class FieldType(str, enum.Enum):
    """필터 가능한 필드의 값 타입 (Value type of a filterable field)."""

    STRING = "string"
    UUID = "uuid"
    INTEGER = "integer"
    DATETIME = "datetime"


class Operator(str, enum.Enum):
    """필터 연산자 (Filter operator)."""

    EQUALS = "equals"
    IN = "in"
    RANGE = "range"
    IS_NULL = "isNull"
    IS_NOT_NULL = "isNotNull"
    CONTAINS = "contains"


# 타입별 값 변환기 — pydantic lax-mode coercion per field type ("5" -> 5, ISO str -> datetime)
# INTEGER는 int4 범위로 제한 — INTEGER values must fit an int4 column
_ADAPTERS: dict[FieldType, TypeAdapter] = {
    FieldType.STRING: TypeAdapter(str),
    FieldType.UUID: TypeAdapter(uuid.UUID),
    FieldType.INTEGER: TypeAdapter(Annotated[int, Field(ge=-INT4_MAX - 1, le=INT4_MAX)]),
    FieldType.DATETIME: TypeAdapter(datetime),
}

_BOOL_ADAPTER: TypeAdapter = TypeAdapter(bool)

_COMMON_OPERATORS: frozenset[Operator] = frozenset(
    {Operator.EQUALS, Operator.IN, Operator.IS_NULL, Operator.IS_NOT_NULL}
)

# 타입별 허용 연산자 — CONTAINS는 문자열만, RANGE는 정렬 가능한 타입만
# CONTAINS applies to strings only, RANGE to orderable types only
_ALLOWED_OPERATORS: dict[FieldType, frozenset[Operator]] = {
    FieldType.STRING: _COMMON_OPERATORS | {Operator.CONTAINS},
    FieldType.UUID: _COMMON_OPERATORS,
    FieldType.INTEGER: _COMMON_OPERATORS | {Operator.RANGE},
    FieldType.DATETIME: _COMMON_OPERATORS | {Operator.RANGE},
}


@dataclass(frozen=True)
class FieldFilter:
    """단일 필드 조건 — {field, operator, value}.

    value shape by operator:
        EQUALS / CONTAINS: scalar
        IN: list/tuple/set of scalars
        RANGE: (min, max) tuple, None for an open bound
        IS_NULL / IS_NOT_NULL: ignored
    """

    field: str
    operator: Operator
    value: Any = None


class CriteriaSpec:
    """엔티티별 필터 가능 필드 정의 및 조건 해석기.

    Per-entity description of filterable columns, plus the single generic
    interpreter that turns FieldFilters into SQLAlchemy clauses.

    Attributes:
        model: SQLAlchemy 모델 클래스 (Model the columns belong to)
        fields: 필드명 -> 값 타입 (Filterable field name -> FieldType)
    """

    def __init__(self, model: type, fields: dict[str, FieldType]) -> None:
        self.model: type = model
        self.fields: dict[str, FieldType] = dict(fields)

    def build(self, *filters: FieldFilter) -> "Criteria":
        """필터 목록으로 Criteria를 생성합니다 (검증 포함)."""
        return Criteria(self, tuple(filters))

    def field_type(self, name: str) -> FieldType:
        try:
            return self.fields[name]
        except KeyError:
            raise InvalidCriteriaError(f"Unknown filter field '{name}'") from None

    def normalize(self, field_filter: FieldFilter) -> FieldFilter:
        """필터를 검증하고 값을 필드 타입으로 변환합니다.

        Validate a filter against this spec and coerce its value(s) to the
        field's type.

        Raises:
            InvalidCriteriaError: 알 수 없는 필드, 허용되지 않는 연산자, 잘못된 값
                                  (Unknown field, disallowed operator, bad value)
        """
        name: str = field_filter.field
        operator = Operator(field_filter.operator)
        field_type: FieldType = self.field_type(name)

        if operator not in _ALLOWED_OPERATORS[field_type]:
            raise InvalidCriteriaError(
                f"Operator '{operator.value}' is not supported for {field_type.value} field '{name}'"
            )

        value: Any = field_filter.value
        if operator in (Operator.IS_NULL, Operator.IS_NOT_NULL):
            return FieldFilter(name, operator)

        if operator is Operator.IN:
            if not isinstance(value, (list, tuple, set, frozenset)):
                raise InvalidCriteriaError(f"Filter '{name}.in' expects a list of values")
            return FieldFilter(name, operator, tuple(self._coerce(name, field_type, v) for v in value))

        if operator is Operator.RANGE:
            if not isinstance(value, (list, tuple)) or len(value) != 2:
                raise InvalidCriteriaError(f"Range filter on '{name}' expects a (min, max) pair")
            low, high = value
            if low is None and high is None:
                raise InvalidCriteriaError(f"Range filter on '{name}' needs at least one bound")
            return FieldFilter(
                name,
                operator,
                (
                    None if low is None else self._coerce(name, field_type, low),
                    None if high is None else self._coerce(name, field_type, high),
                ),
            )

        if value is None:
            raise InvalidCriteriaError(f"Filter '{name}.{operator.value}' requires a value")
        return FieldFilter(name, operator, self._coerce(name, field_type, value))

    def predicate(self, field_filter: FieldFilter) -> ColumnElement[bool]:
        """정규화된 필터 하나를 SQL 절 하나로 변환합니다.

        Translate one normalized filter into exactly one clause.
        """
        column = getattr(self.model, field_filter.field)
        operator: Operator = field_filter.operator
        value: Any = field_filter.value

        if operator is Operator.EQUALS:
            return column == value
        if operator is Operator.IN:
            return column.in_(value)
        if operator is Operator.RANGE:
            low, high = value
            bounds: list[ColumnElement[bool]] = []
            if low is not None:
                bounds.append(column >= low)
            if high is not None:
                bounds.append(column <= high)
            # min > max이면 결과가 비게 됨 (에러 아님) — an inverted range simply matches nothing
            return bounds[0] if len(bounds) == 1 else and_(*bounds)
        if operator is Operator.IS_NULL:
            return column.is_(None)
        if operator is Operator.IS_NOT_NULL:
            return column.is_not(None)
        # CONTAINS — 대소문자 무시 (case-insensitive, % and _ escaped)
        return column.icontains(value, autoescape=True)

    def order_by(self, sort: Sequence[tuple[str, bool]]) -> list[ColumnElement[Any]]:
        """정렬 조건을 ORDER BY 절로 변환합니다.

        Build ORDER BY clauses from (field, ascending) pairs. Without an
        explicit sort the order is created_at ASC; id ASC is always appended
        so pages are deterministic.

        Raises:
            InvalidCriteriaError: 알 수 없는 정렬 필드 (Unknown sort field)
        """
        clauses: list[ColumnElement[Any]] = []
        sorted_fields: set[str] = set()
        for name, ascending in sort or [("created_at", True)]:
            if name not in self.fields:
                raise InvalidCriteriaError(f"Unknown sort field '{name}'")
            column = getattr(self.model, name)
            clauses.append(column.asc() if ascending else column.desc())
            sorted_fields.add(name)
        if "id" not in sorted_fields:
            clauses.append(self.model.id.asc())
        return clauses

    def parse(self, params: Iterable[tuple[str, str]]) -> "Criteria":
        """쿼리 스트링 파라미터를 Criteria로 변환합니다.

        Parse `<field>.<op>=<value>` query parameters into a Criteria.
        Pagination parameters (page, size, sort) are skipped. `in` values are
        comma-separated and repeated `in` params are merged; the two range
        bounds of a field merge into one RANGE filter; for any other repeated
        parameter the last one wins.

        Args:
            params: (키, 값) 쌍 — e.g. request.query_params.multi_items()

        Returns:
            Criteria: 검증된 조건 (Validated criteria)

        Raises:
            InvalidCriteriaError: 알 수 없는 필드/연산자 또는 잘못된 값
        """
        filters: dict[tuple[str, str], FieldFilter] = {}
        in_values: dict[str, list[str]] = {}
        ranges: dict[str, list[str | None]] = {}

        for key, raw in params:
            if key in RESERVED_PARAMS:
                continue
            name, _, op_name = key.partition(".")
            op_name = op_name or "equals"

            if op_name == "equals":
                filters[(name, op_name)] = FieldFilter(name, Operator.EQUALS, raw)
            elif op_name == "contains":
                filters[(name, op_name)] = FieldFilter(name, Operator.CONTAINS, raw)
            elif op_name == "in":
                in_values.setdefault(name, []).extend(v.strip() for v in raw.split(",") if v.strip())
            elif op_name == "specified":
                try:
                    specified: bool = _BOOL_ADAPTER.validate_python(raw)
                except ValidationError as exc:
                    raise InvalidCriteriaError(f"Invalid boolean '{raw}' for '{key}'") from exc
                operator = Operator.IS_NOT_NULL if specified else Operator.IS_NULL
                filters[(name, op_name)] = FieldFilter(name, operator)
            elif op_name == "greaterThanOrEqual":
                ranges.setdefault(name, [None, None])[0] = raw
            elif op_name == "lessThanOrEqual":
                ranges.setdefault(name, [None, None])[1] = raw
            else:
                raise InvalidCriteriaError(f"Unknown filter operator '{op_name}' in '{key}'")

        collected: list[FieldFilter] = list(filters.values())
        collected.extend(FieldFilter(name, Operator.IN, tuple(values)) for name, values in in_values.items())
        collected.extend(FieldFilter(name, Operator.RANGE, tuple(bounds)) for name, bounds in ranges.items())
        return Criteria(self, tuple(collected))

    def _coerce(self, name: str, field_type: FieldType, raw: Any) -> Any:
        try:
            value: Any = _ADAPTERS[field_type].validate_python(raw)
        except ValidationError as exc:
            raise InvalidCriteriaError(f"Invalid value '{raw}' for filter field '{name}'") from exc
        if field_type is FieldType.DATETIME:
            # 저장 값과 같은 UTC 기준으로 비교 — compare on UTC; naive values are taken as UTC
            value = value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)
        return value


@dataclass(frozen=True)
class Criteria:
    """검증된 필터 묶음 — 생성 시점에 모든 필터를 검증합니다.

    A validated set of filters. Construction fails fast on any invalid
    filter; an empty Criteria matches every row.
    """

    spec: CriteriaSpec
    filters: tuple[FieldFilter, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "filters", tuple(self.spec.normalize(f) for f in self.filters))

    def predicates(self) -> list[ColumnElement[bool]]:
        """필터당 하나의 절 (One clause per filter)."""
        return [self.spec.predicate(f) for f in self.filters]

    def apply(self, query: Select) -> Select:
        """모든 절을 AND로 결합해 쿼리에 적용합니다 (AND all clauses onto the query)."""
        clauses: list[ColumnElement[bool]] = self.predicates()
        if clauses:
            query = query.where(*clauses)
        return query
