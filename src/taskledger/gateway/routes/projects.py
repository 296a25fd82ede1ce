"""项目路由

GET /api/projects/user/{user_id}: 用户的项目列表。
GET /api/projects/{project_id}: 项目详情。
POST /api/projects: 创建项目。
DELETE /api/projects/{project_id}: 删除项目（仅当所有任务均已完成）。
- 204: 删除成功
- 400: 仍有未完成任务
- 404: 项目不存在
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field
from taskledger.core.config import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH
from taskledger.core.exceptions import TaskLedgerError
from taskledger.core.models import Project

from ..deps import get_project_service
from ..services.project_service import ProjectService
from .errors import error_response

router = APIRouter()


class CreateProjectRequest(BaseModel):
    """创建项目请求体"""

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH, description="项目名称")
    description: str = Field(
        default="",
        max_length=DESCRIPTION_MAX_LENGTH,
        description="项目描述",
    )
    user_id: str = Field(min_length=1, description="所有者 ID")


class ProjectResponse(BaseModel):
    """项目摘要"""

    project_id: str
    name: str
    description: str
    user_id: str
    created_at: datetime
    task_count: int
    completed_task_count: int

    @classmethod
    def from_project(cls, project: Project) -> "ProjectResponse":
        return cls(
            project_id=project.project_id,
            name=project.name,
            description=project.description,
            user_id=project.user_id,
            created_at=project.created_at,
            task_count=project.task_count,
            completed_task_count=project.completed_task_count,
        )


@router.get("/api/projects/user/{user_id}", response_model=list[ProjectResponse])
async def list_user_projects(
    user_id: str,
    service: ProjectService = Depends(get_project_service),
):
    """查询用户拥有的项目"""
    projects = await service.list_user_projects(user_id)
    return [ProjectResponse.from_project(p) for p in projects]


@router.get("/api/projects/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
):
    try:
        project = await service.get_project(project_id)
    except TaskLedgerError as e:
        return error_response(e)
    return ProjectResponse.from_project(project)


@router.post("/api/projects", response_model=ProjectResponse, status_code=201)
async def create_project(
    body: CreateProjectRequest,
    service: ProjectService = Depends(get_project_service),
):
    """创建项目，返回 201"""
    project = await service.create_project(body.name, body.description, body.user_id)
    return ProjectResponse.from_project(project)


@router.delete("/api/projects/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    service: ProjectService = Depends(get_project_service),
):
    """删除项目

    删除资格判定与删除在同一事务内完成。
    """
    try:
        await service.delete_project(project_id)
    except TaskLedgerError as e:
        return error_response(e)
    return Response(status_code=204)
