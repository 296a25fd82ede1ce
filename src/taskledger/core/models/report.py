"""完成率报表 -- 审计记录上的只读投影"""

from pydantic import BaseModel, Field


class TaskCompletionReport(BaseModel):
    """指定用户在时间窗口内完成的任务统计"""

    user_id: str = Field(description="统计的操作者 ID")
    window_days: int = Field(description="统计窗口（天）")
    completed_tasks: int = Field(description="窗口内由该用户推进到 Completed 的任务数")
    average_tasks_per_day: float = Field(description="日均完成数")

    @classmethod
    def build(cls, user_id: str, window_days: int, completed_tasks: int) -> "TaskCompletionReport":
        return cls(
            user_id=user_id,
            window_days=window_days,
            completed_tasks=completed_tasks,
            average_tasks_per_day=completed_tasks / window_days if window_days else 0.0,
        )
