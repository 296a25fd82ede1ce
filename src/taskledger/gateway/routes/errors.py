"""领域错误 -> HTTP 响应映射

错误响应体统一为 {"error": {"code": ..., "message": ...}}。
"""

from starlette.responses import JSONResponse
from taskledger.core.exceptions import (
    CapacityExceededError,
    DeletionBlockedError,
    NotFoundError,
    ReconciliationError,
    TaskLedgerError,
)

_STATUS_CODES: list[tuple[type[TaskLedgerError], int]] = [
    (NotFoundError, 404),
    (CapacityExceededError, 400),
    (DeletionBlockedError, 400),
    # 事务已回滚，调用方可整体重试
    (ReconciliationError, 500),
]


def error_response(error: TaskLedgerError) -> JSONResponse:
    """将领域错误转换为 JSON 错误响应"""
    status_code = next(
        (code for kind, code in _STATUS_CODES if isinstance(error, kind)),
        500,
    )
    return error_body(status_code, error.code, error.message)


def error_body(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )
