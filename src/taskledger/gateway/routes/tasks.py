"""任务路由

GET /api/tasks/project/{project_id}: 项目内任务列表。
GET /api/tasks/reports/completion: 完成率报表（仅 manager）。
GET /api/tasks/{task_id}: 任务详情，含审计记录与评论。
POST /api/tasks: 创建任务（项目容量检查）。
PUT /api/tasks/{task_id}/status: 变更状态。
POST /api/tasks/{task_id}/comments: 追加评论。
DELETE /api/tasks/{task_id}: 删除任务。
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field
from taskledger.core.config import (
    COMMENT_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)
from taskledger.core.exceptions import TaskLedgerError
from taskledger.core.models import (
    Comment,
    Task,
    TaskCompletionReport,
    TaskHistory,
    TaskPriority,
    TaskStatus,
)

from ..deps import get_task_service
from ..services.task_service import TaskService
from .errors import error_body, error_response

router = APIRouter()


class CreateTaskRequest(BaseModel):
    """创建任务请求体"""

    project_id: str = Field(min_length=1, description="所属项目 ID")
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH, description="任务标题")
    description: str = Field(
        default="",
        max_length=DESCRIPTION_MAX_LENGTH,
        description="任务描述",
    )
    due_date: datetime = Field(description="截止时间")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="优先级")


class UpdateTaskStatusRequest(BaseModel):
    """状态变更请求体"""

    status: TaskStatus
    user_id: str = Field(min_length=1, description="操作者 ID")


class AddCommentRequest(BaseModel):
    """评论请求体"""

    content: str = Field(min_length=1, max_length=COMMENT_MAX_LENGTH, description="评论内容")
    user_id: str = Field(min_length=1, description="作者 ID")


class CommentResponse(BaseModel):
    comment_id: str
    content: str
    created_at: datetime
    user_id: str

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        return cls(
            comment_id=comment.comment_id,
            content=comment.content,
            created_at=comment.created_at,
            user_id=comment.user_id,
        )


class TaskHistoryResponse(BaseModel):
    history_id: str
    description: str
    ts: datetime
    user_id: str | None

    @classmethod
    def from_history(cls, entry: TaskHistory) -> "TaskHistoryResponse":
        return cls(
            history_id=entry.history_id,
            description=entry.description,
            ts=entry.ts,
            user_id=entry.user_id,
        )


class TaskResponse(BaseModel):
    """任务详情"""

    task_id: str
    project_id: str
    title: str
    description: str
    due_date: datetime
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    comments: list[CommentResponse]
    history: list[TaskHistoryResponse]

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            task_id=task.task_id,
            project_id=task.project_id,
            title=task.title,
            description=task.description,
            due_date=task.due_date,
            status=task.status,
            priority=task.priority,
            created_at=task.created_at,
            comments=[CommentResponse.from_comment(c) for c in task.comments],
            history=[TaskHistoryResponse.from_history(h) for h in task.history],
        )


@router.get("/api/tasks/project/{project_id}", response_model=list[TaskResponse])
async def list_project_tasks(
    project_id: str,
    service: TaskService = Depends(get_task_service),
):
    """查询项目内的任务，按创建时间正序"""
    tasks = await service.list_project_tasks(project_id)
    return [TaskResponse.from_task(t) for t in tasks]


@router.get("/api/tasks/reports/completion", response_model=TaskCompletionReport)
async def completion_report(
    user_id: str = Query(min_length=1, description="统计的操作者 ID"),
    is_manager: bool = Query(default=False, description="调用者是否为 manager"),
    days: int | None = Query(default=None, ge=1, description="统计窗口（天）"),
    service: TaskService = Depends(get_task_service),
):
    """完成率报表

    是否为 manager 的能力检查在边界层完成，核心查询不感知权限。
    """
    if not is_manager:
        return error_body(401, "MANAGER_REQUIRED", "Completion report requires manager access")
    return await service.completion_report(user_id, days)


@router.get("/api/tasks/{task_id}", response_model=TaskResponse)
async def get_task_detail(
    task_id: str,
    service: TaskService = Depends(get_task_service),
):
    """查询任务详情，包含审计记录与评论"""
    try:
        task = await service.get_task(task_id)
    except TaskLedgerError as e:
        return error_response(e)
    return TaskResponse.from_task(task)


@router.post("/api/tasks", response_model=TaskResponse, status_code=201)
async def create_task(
    body: CreateTaskRequest,
    service: TaskService = Depends(get_task_service),
):
    """创建任务

    - 201: 创建成功
    - 400: 项目任务数已达上限
    - 404: 项目不存在
    """
    try:
        task = await service.create_task(
            project_id=body.project_id,
            title=body.title,
            description=body.description,
            due_date=body.due_date,
            priority=body.priority,
        )
    except TaskLedgerError as e:
        return error_response(e)
    return TaskResponse.from_task(task)


@router.put("/api/tasks/{task_id}/status", status_code=204)
async def update_task_status(
    task_id: str,
    body: UpdateTaskStatusRequest,
    service: TaskService = Depends(get_task_service),
):
    """变更任务状态；目标状态与当前相同时不产生审计记录"""
    try:
        await service.update_status(task_id, body.status, body.user_id)
    except TaskLedgerError as e:
        return error_response(e)
    return Response(status_code=204)


@router.post("/api/tasks/{task_id}/comments", response_model=CommentResponse)
async def add_comment(
    task_id: str,
    body: AddCommentRequest,
    service: TaskService = Depends(get_task_service),
):
    """追加评论，返回新评论"""
    try:
        comment = await service.add_comment(task_id, body.content, body.user_id)
    except TaskLedgerError as e:
        return error_response(e)
    return CommentResponse.from_comment(comment)


@router.delete("/api/tasks/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    service: TaskService = Depends(get_task_service),
):
    try:
        await service.delete_task(task_id)
    except TaskLedgerError as e:
        return error_response(e)
    return Response(status_code=204)
