"""聚合写入的原子事务封装

每个写操作要么全部可见，要么完全不可见：
异常或取消（asyncio.CancelledError）都会回滚到调用前的状态。

容量与删除资格是跨 Project/Task 两个聚合的约束，
这里在同一个 BEGIN IMMEDIATE 事务内完成“加载 -> 判定 -> 写入”，
不依赖调用方先检查再执行。
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiosqlite
import structlog

from ..config import PROJECT_TASK_LIMIT
from ..exceptions import (
    CapacityExceededError,
    DeletionBlockedError,
    ProjectNotFoundError,
    ReconciliationError,
    TaskNotFoundError,
)
from ..models.enums import TaskStatus
from ..models.project import Project
from ..models.task import Task
from .protocols import ProjectStore, TaskStore
from .task_store import TaskWriteResult

log = structlog.get_logger()


@asynccontextmanager
async def atomic(
    conn: aiosqlite.Connection,
    immediate: bool = False,
) -> AsyncIterator[None]:
    """原子提交上下文

    Args:
        conn: 数据库连接（需在同一连接上操作以保证事务性）
        immediate: 是否以 BEGIN IMMEDIATE 开启事务，
            先取得写锁再读取判定所需的数据
    """
    if immediate and not conn.in_transaction:
        await conn.execute("BEGIN IMMEDIATE")
    try:
        yield
        await conn.commit()
    except BaseException:
        await conn.rollback()
        raise


async def create_task_in_project(
    conn: aiosqlite.Connection,
    project_store: ProjectStore,
    task_store: TaskStore,
    task: Task,
) -> Task:
    """在项目容量检查通过后写入新任务

    Raises:
        ProjectNotFoundError: 项目不存在
        CapacityExceededError: 项目任务数已达上限（未写入任何数据）
    """
    async with atomic(conn, immediate=True):
        project = await project_store.get_project(task.project_id)
        if project is None:
            raise ProjectNotFoundError(task.project_id)
        if not project.can_add_task():
            await log.awarning(
                "task_admission_rejected",
                project_id=project.project_id,
                task_count=project.task_count,
                limit=PROJECT_TASK_LIMIT,
            )
            raise CapacityExceededError(project.project_id, PROJECT_TASK_LIMIT)
        await task_store.create_task(task)

    await log.ainfo(
        "task_created",
        task_id=task.task_id,
        project_id=task.project_id,
    )
    return task


async def save_task(
    conn: aiosqlite.Connection,
    task_store: TaskStore,
    task: Task,
) -> TaskWriteResult:
    """回写加载后修改过的 Task：标量覆盖 + 子集合增量插入，单事务提交

    重复调用是安全的：第二次调用时子记录 ID 已全部存在，不会重复插入。

    Raises:
        TaskNotFoundError: 标量行已不存在
        ChildOwnershipError: 携带其他任务的子记录（未写入任何数据）
        ReconciliationError: 存储写入失败，事务已回滚
    """
    try:
        async with atomic(conn):
            result = await task_store.update_task(task)
            if result is None:
                raise TaskNotFoundError(task.task_id)
    except aiosqlite.Error as e:
        await log.aerror(
            "task_reconciliation_failed",
            task_id=task.task_id,
            error_type=type(e).__name__,
        )
        raise ReconciliationError(task.task_id, e) from e

    await log.ainfo(
        "task_reconciled",
        task_id=task.task_id,
        status=task.status.value,
        history_inserted=result.history_inserted,
        comments_inserted=result.comments_inserted,
    )
    return result


async def delete_task(
    conn: aiosqlite.Connection,
    task_store: TaskStore,
    task_id: str,
) -> None:
    """删除任务及其审计记录与评论"""
    async with atomic(conn):
        deleted = await task_store.delete_task(task_id)
        if not deleted:
            raise TaskNotFoundError(task_id)

    await log.ainfo("task_deleted", task_id=task_id)


async def create_project(
    conn: aiosqlite.Connection,
    project_store: ProjectStore,
    project: Project,
) -> Project:
    """写入新项目"""
    async with atomic(conn):
        await project_store.create_project(project)

    await log.ainfo(
        "project_created",
        project_id=project.project_id,
        user_id=project.user_id,
    )
    return project


async def delete_project_if_completed(
    conn: aiosqlite.Connection,
    project_store: ProjectStore,
    project_id: str,
) -> None:
    """在所有任务均已完成时删除项目（级联删除任务及其子记录）

    Raises:
        ProjectNotFoundError: 项目不存在
        DeletionBlockedError: 仍有未完成任务（未写入任何数据）
    """
    async with atomic(conn, immediate=True):
        project = await project_store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        if not project.can_be_deleted():
            unfinished = sum(1 for t in project.tasks if t.status != TaskStatus.COMPLETED)
            await log.awarning(
                "project_deletion_blocked",
                project_id=project_id,
                unfinished_tasks=unfinished,
            )
            raise DeletionBlockedError(project_id, unfinished)
        await project_store.delete_project(project_id)

    await log.ainfo("project_deleted", project_id=project_id)
