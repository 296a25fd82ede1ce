"""SQLite 数据库初始化

PRAGMA 配置 + 五张表 DDL + 索引创建。
所有归属关系使用 ON DELETE CASCADE：删除 Project 级联删除 Task，
删除 Task 级联删除其审计记录与评论。
"""

import aiosqlite

# users 表 DDL（外部资料，只读引用）
_USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    user_id  TEXT PRIMARY KEY,
    name     TEXT NOT NULL DEFAULT '',
    role     TEXT NOT NULL DEFAULT 'Member'
);
"""

# projects 表 DDL
_PROJECTS_DDL = """
CREATE TABLE IF NOT EXISTS projects (
    project_id   TEXT PRIMARY KEY,
    name         TEXT NOT NULL,
    description  TEXT NOT NULL DEFAULT '',
    user_id      TEXT NOT NULL,
    created_at   TEXT NOT NULL
);
"""

# tasks 表 DDL
_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    task_id      TEXT PRIMARY KEY,
    project_id   TEXT NOT NULL,
    title        TEXT NOT NULL,
    description  TEXT NOT NULL DEFAULT '',
    due_date     TEXT NOT NULL,
    status       TEXT NOT NULL DEFAULT 'Pending',
    priority     TEXT NOT NULL DEFAULT 'Medium',
    created_at   TEXT NOT NULL,

    FOREIGN KEY (project_id) REFERENCES projects(project_id) ON DELETE CASCADE
);
"""

# task_history 表 DDL（append-only）
_TASK_HISTORY_DDL = """
CREATE TABLE IF NOT EXISTS task_history (
    history_id   TEXT PRIMARY KEY,
    task_id      TEXT NOT NULL,
    description  TEXT NOT NULL,
    ts           TEXT NOT NULL,
    user_id      TEXT,

    FOREIGN KEY (task_id) REFERENCES tasks(task_id) ON DELETE CASCADE
);
"""

# comments 表 DDL（append-only）
_COMMENTS_DDL = """
CREATE TABLE IF NOT EXISTS comments (
    comment_id   TEXT PRIMARY KEY,
    task_id      TEXT NOT NULL,
    content      TEXT NOT NULL,
    created_at   TEXT NOT NULL,
    user_id      TEXT NOT NULL,

    FOREIGN KEY (task_id) REFERENCES tasks(task_id) ON DELETE CASCADE
);
"""

_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_projects_user_id ON projects(user_id);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_project_id ON tasks(project_id, created_at);",
    "CREATE INDEX IF NOT EXISTS idx_task_history_task_ts ON task_history(task_id, ts);",
    # 完成率报表：按操作者 + 描述 + 时间过滤
    (
        "CREATE INDEX IF NOT EXISTS idx_task_history_user_ts "
        "ON task_history(user_id, description, ts) WHERE user_id IS NOT NULL;"
    ),
    "CREATE INDEX IF NOT EXISTS idx_comments_task_ts ON comments(task_id, created_at);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    # 设置 PRAGMA（foreign_keys 按连接生效，级联删除依赖它）
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    # 创建表
    for ddl in (_USERS_DDL, _PROJECTS_DDL, _TASKS_DDL, _TASK_HISTORY_DDL, _COMMENTS_DDL):
        await conn.execute(ddl)

    # 创建索引
    for idx_sql in _INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()
