"""TaskLedger 异常体系

所有领域错误在违规点抛出，核心层内部不做重试、不降级。
存储层对不存在的记录返回 None，由服务层转换为 NotFoundError。
"""


class TaskLedgerError(Exception):
    """TaskLedger 基础异常"""

    code: str = "TASKLEDGER_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(TaskLedgerError):
    """请求的聚合不存在"""

    code = "NOT_FOUND"
    entity = "Entity"

    def __init__(self, entity_id: str) -> None:
        """
        Args:
            entity_id: 未找到的实体 ID
        """
        super().__init__(f"{self.entity} with id {entity_id} does not exist")
        self.entity_id = entity_id


class TaskNotFoundError(NotFoundError):
    code = "TASK_NOT_FOUND"
    entity = "Task"


class ProjectNotFoundError(NotFoundError):
    code = "PROJECT_NOT_FOUND"
    entity = "Project"


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"
    entity = "User"


class CapacityExceededError(TaskLedgerError):
    """项目任务数已达上限，拒绝创建新任务（在任何写入之前）"""

    code = "PROJECT_CAPACITY_EXCEEDED"

    def __init__(self, project_id: str, limit: int) -> None:
        super().__init__(
            f"Project {project_id} has reached the maximum number of tasks ({limit})"
        )
        self.project_id = project_id
        self.limit = limit


class DeletionBlockedError(TaskLedgerError):
    """项目仍有未完成任务，拒绝删除（在任何写入之前）"""

    code = "PROJECT_DELETION_BLOCKED"

    def __init__(self, project_id: str, unfinished_count: int) -> None:
        super().__init__(
            f"Cannot delete project {project_id} with {unfinished_count} unfinished "
            "task(s). Please complete or remove all tasks first."
        )
        self.project_id = project_id
        self.unfinished_count = unfinished_count


class ReconciliationError(TaskLedgerError):
    """Task 聚合回写失败

    事务已回滚，存储保持调用前状态。调用方可整体重试：
    重新对比存储中的子记录 ID 是安全的。
    """

    code = "TASK_RECONCILIATION_FAILED"

    def __init__(self, task_id: str, original_error: Exception) -> None:
        """
        Args:
            task_id: 回写失败的 Task ID
            original_error: 原始存储异常
        """
        super().__init__(f"Failed to save task {task_id}: {original_error}")
        self.task_id = task_id
        self.original_error = original_error


class ChildOwnershipError(ReconciliationError):
    """待回写的 Task 携带了属于其他任务的子记录，未写入任何数据"""

    code = "TASK_CHILD_OWNERSHIP_VIOLATION"

    def __init__(self, task_id: str, child_ids: list[str]) -> None:
        super().__init__(
            task_id,
            ValueError(f"children owned by other tasks: {', '.join(child_ids)}"),
        )
        self.child_ids = child_ids
