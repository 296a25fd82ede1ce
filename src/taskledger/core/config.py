"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径、报表时间窗口，以及项目容量、字段长度等固定约束。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKLEDGER_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKLEDGER_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskledger.db"),
    )


def get_report_window_days() -> int:
    """获取完成率报表的默认时间窗口（天）"""
    return int(os.environ.get("TASKLEDGER_REPORT_WINDOW_DAYS", "30"))


# 单个项目最多容纳的任务数（新任务入队前检查）
PROJECT_TASK_LIMIT: int = 20

# 边界层字段长度限制
TITLE_MAX_LENGTH: int = 100
NAME_MAX_LENGTH: int = 100
DESCRIPTION_MAX_LENGTH: int = 500
COMMENT_MAX_LENGTH: int = 1000
