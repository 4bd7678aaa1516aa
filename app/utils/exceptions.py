"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for common error patterns.
These simplify error raising across services and repositories by
eliminating the need to specify status codes at each call site.

Usage:
    from app.utils.exceptions import NotFoundError, BadRequestError
    raise NotFoundError("Image not found")
    raise BadRequestError("A new image cannot already have an ID")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when an update target (image, question, quiz) does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request data is invalid beyond what Pydantic validation catches
    (e.g. id present on create, path/body id mismatch, dangling foreign key).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidCriteriaError(BadRequestError):
    """잘못된 검색 조건 — 알 수 없는 필드, 허용되지 않는 연산자, 형식 오류.

    Raised when a criteria filter or sort order cannot be built:
    unknown field, operator not allowed for the field type, or a value
    that does not coerce to the field type.
    """

    def __init__(self, detail: str = "Invalid criteria") -> None:
        super().__init__(detail=detail)
