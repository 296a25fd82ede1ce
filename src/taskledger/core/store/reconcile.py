"""Append-only 子集合回写 -- 基于 ID 集合差

聚合在内存中被修改后整体交回存储时，子集合里混合着已持久化的
和新追加的对象，且没有任何旁路信息标记哪些是新的。
这里每次都重新读取存储中该父记录下已有的子 ID，
只插入 ID 不在其中的对象；已存在的对象既不重写也不删除。

此函数不提交事务，调用方负责把它包进同一个原子单元。
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

T = TypeVar("T")


async def insert_new_children(
    parent_id: str,
    children: Iterable[T],
    *,
    child_id: Callable[[T], str],
    load_persisted_ids: Callable[[str], Awaitable[set[str]]],
    insert: Callable[[T], Awaitable[None]],
) -> list[T]:
    """插入 children 中存储尚未持有的对象

    Args:
        parent_id: 父记录 ID，用于读取已持久化的子 ID
        children: 内存中的完整子集合（保持其顺序插入）
        child_id: 取子对象 ID 的访问器
        load_persisted_ids: 读取父记录下已持久化子 ID 集合
        insert: 插入单个子对象（不提交）

    Returns:
        本次实际插入的子对象列表
    """
    persisted = await load_persisted_ids(parent_id)
    inserted: list[T] = []
    for child in children:
        key = child_id(child)
        if key in persisted:
            continue
        await insert(child)
        # 同一 ID 在内存集合中重复出现时只写一次
        persisted.add(key)
        inserted.append(child)
    return inserted
