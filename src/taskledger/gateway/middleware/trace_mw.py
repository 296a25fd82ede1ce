"""TraceMiddleware

为单个聚合的操作绑定 trace_id，贯穿该聚合的读写日志。
trace_id 从 /api/tasks/{task_id} 或 /api/projects/{project_id} 路径中提取。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# ULID 字符串长度
_ID_LENGTH = 26

_TRACED_COLLECTIONS = {"tasks": "task", "projects": "project"}


class TraceMiddleware(BaseHTTPMiddleware):
    """聚合级追踪中间件 -- 为任务/项目操作绑定 trace_id"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        parts = request.url.path.strip("/").split("/")
        for i, part in enumerate(parts[:-1]):
            kind = _TRACED_COLLECTIONS.get(part)
            # 排除 /tasks/project/{id}、/tasks/reports/... 等子路由
            if kind and len(parts[i + 1]) == _ID_LENGTH:
                structlog.contextvars.bind_contextvars(
                    trace_id=f"{kind}-{parts[i + 1]}"
                )
                break

        return await call_next(request)
