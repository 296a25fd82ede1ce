"""Project 聚合单元测试 -- 容量与删除资格判定"""

from datetime import UTC, datetime

import pytest
from taskledger.core.config import PROJECT_TASK_LIMIT
from taskledger.core.models import Project, Task, TaskPriority, TaskStatus


def _task(project: Project, status: TaskStatus = TaskStatus.PENDING) -> Task:
    task = Task.create("子任务", "", datetime.now(UTC), TaskPriority.LOW, project.project_id)
    task.update_status(status, "user-a")
    return task


class TestCanAddTask:
    """can_add_task"""

    @pytest.mark.parametrize("count", [0, 1, 10, PROJECT_TASK_LIMIT - 1])
    def test_below_limit_accepts(self, count: int):
        project = Project.create("P", "", "owner")
        project.tasks.extend(_task(project) for _ in range(count))

        assert project.can_add_task() is True

    def test_at_limit_rejects(self):
        project = Project.create("P", "", "owner")
        project.tasks.extend(_task(project) for _ in range(PROJECT_TASK_LIMIT))

        assert project.can_add_task() is False


class TestCanBeDeleted:
    """can_be_deleted"""

    def test_empty_project_is_deletable(self):
        assert Project.create("P", "", "owner").can_be_deleted() is True

    def test_all_completed_is_deletable(self):
        project = Project.create("P", "", "owner")
        project.tasks.extend(_task(project, TaskStatus.COMPLETED) for _ in range(3))

        assert project.can_be_deleted() is True

    @pytest.mark.parametrize("status", [TaskStatus.PENDING, TaskStatus.IN_PROGRESS])
    def test_any_unfinished_task_blocks(self, status: TaskStatus):
        project = Project.create("P", "", "owner")
        project.tasks.append(_task(project, TaskStatus.COMPLETED))
        project.tasks.append(_task(project, status))

        assert project.can_be_deleted() is False

    def test_nineteen_completed_then_twentieth(self):
        """19 个已完成任务 -> 加入第 20 个 -> 完成后可删除"""
        project = Project.create("P", "", "owner")
        project.tasks.extend(_task(project, TaskStatus.COMPLETED) for _ in range(19))
        assert project.can_add_task() is True

        last = _task(project)
        project.tasks.append(last)
        assert project.can_add_task() is False
        assert project.can_be_deleted() is False

        last.update_status(TaskStatus.COMPLETED, "user-a")
        assert project.can_be_deleted() is True
        assert project.completed_task_count == 20
