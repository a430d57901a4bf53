"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，反映引导加载状态。
"""

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from ..deps import get_loader

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(loader=Depends(get_loader)):
    """Readiness 检查

    - 已加载: 200 ready
    - 加载中 / 加载失败 / 未配置 loader: 503 not_ready
    """
    if loader is None:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "loader": None},
        )

    status = loader.status
    status_code = 200 if status.loaded else 503
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "ready" if status.loaded else "not_ready",
            "loader": status.model_dump(),
        },
    )
