"""健康检查路由

GET /health: 进程存活即返回 200。
GET /ready: 数据库可查询时返回 200，否则 503。
"""

import aiosqlite
import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()


async def _check_sqlite(conn: aiosqlite.Connection) -> str:
    try:
        async with conn.execute("SELECT 1") as cursor:
            await cursor.fetchone()
    except (aiosqlite.Error, ValueError) as e:
        # 连接已关闭时 aiosqlite 抛 ValueError
        await log.awarning("readiness_check_failed", check="sqlite", error=str(e))
        return f"error: {e}"
    return "ok"


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request):
    store_group = request.app.state.store_group
    async with store_group.conn_lock:
        checks = {"sqlite": await _check_sqlite(store_group.conn)}
    ok = all(v == "ok" for v in checks.values())
    return JSONResponse(
        status_code=200 if ok else 503,
        content={"status": "ready" if ok else "not_ready", "checks": checks},
    )
