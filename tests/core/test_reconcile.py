"""ID 差集插入例程单元测试（不依赖数据库）"""

from taskledger.core.store.reconcile import insert_new_children


class _FakeChildTable:
    """记录插入调用的内存子表"""

    def __init__(self, persisted: dict[str, set[str]]) -> None:
        self.persisted = persisted
        self.inserted: list[tuple[str, str]] = []
        self.loads = 0

    async def load_ids(self, parent_id: str) -> set[str]:
        self.loads += 1
        return set(self.persisted.get(parent_id, set()))

    async def insert(self, child: tuple[str, str]) -> None:
        self.inserted.append(child)
        self.persisted.setdefault(child[0], set()).add(child[1])


async def _run(table: _FakeChildTable, parent_id: str, children: list[tuple[str, str]]):
    return await insert_new_children(
        parent_id,
        children,
        child_id=lambda c: c[1],
        load_persisted_ids=table.load_ids,
        insert=table.insert,
    )


class TestInsertNewChildren:

    async def test_only_unknown_ids_are_inserted(self):
        table = _FakeChildTable({"p": {"a", "b"}})
        children = [("p", "a"), ("p", "b"), ("p", "c")]

        inserted = await _run(table, "p", children)

        assert inserted == [("p", "c")]
        assert table.inserted == [("p", "c")]

    async def test_second_pass_inserts_nothing(self):
        table = _FakeChildTable({})
        children = [("p", "a"), ("p", "b")]

        await _run(table, "p", children)
        inserted = await _run(table, "p", children)

        assert inserted == []
        assert len(table.inserted) == 2

    async def test_duplicate_ids_in_memory_are_written_once(self):
        table = _FakeChildTable({})

        inserted = await _run(table, "p", [("p", "a"), ("p", "a")])

        assert inserted == [("p", "a")]
        assert len(table.inserted) == 1

    async def test_persisted_ids_are_read_on_every_call(self):
        table = _FakeChildTable({})

        await _run(table, "p", [("p", "a")])
        await _run(table, "p", [("p", "a")])

        assert table.loads == 2

    async def test_insertion_follows_in_memory_order(self):
        table = _FakeChildTable({"p": {"b"}})

        await _run(table, "p", [("p", "c"), ("p", "b"), ("p", "a")])

        assert [c[1] for c in table.inserted] == ["c", "a"]
