"""CLI 入口模块 -- python -m taskledger.core <command>

支持的命令：
  init-db                             在配置路径创建数据库表结构
  completion-report <user_id> [days]  统计用户在时间窗口内完成的任务数
"""

import asyncio
import sys

from .config import get_db_path, get_report_window_days


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m taskledger.core <command>")
        print("命令:")
        print("  init-db                             创建数据库表结构")
        print("  completion-report <user_id> [days]  完成率报表")
        sys.exit(1)

    command = sys.argv[1]

    if command == "init-db":
        asyncio.run(init_database())
    elif command == "completion-report":
        if len(sys.argv) < 3:
            print("用法: python -m taskledger.core completion-report <user_id> [days]")
            sys.exit(1)
        days = int(sys.argv[3]) if len(sys.argv) > 3 else get_report_window_days()
        asyncio.run(completion_report(sys.argv[2], days))
    else:
        print(f"未知命令: {command}")
        print("可用命令: init-db, completion-report")
        sys.exit(1)


async def init_database() -> None:
    """创建数据库（表结构已存在时不做修改）"""
    from .store import create_store_group

    db_path = get_db_path()
    print(f"数据库路径: {db_path}")

    store_group = await create_store_group(db_path)
    await store_group.close()
    print("初始化完成")


async def completion_report(user_id: str, days: int) -> None:
    """输出完成率报表"""
    from datetime import UTC, datetime, timedelta

    from .models.report import TaskCompletionReport
    from .store import create_store_group

    store_group = await create_store_group(get_db_path())

    try:
        since = datetime.now(UTC) - timedelta(days=days)
        count = await store_group.history_store.count_completed_by_user_since(user_id, since)
        report = TaskCompletionReport.build(user_id, days, count)
        print(report.model_dump_json(indent=2))
    finally:
        await store_group.close()


if __name__ == "__main__":
    main()
