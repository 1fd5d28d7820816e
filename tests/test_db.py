import types

from honorboard.models.db import SupabaseDAL


class _Query:
    """Records the PostgREST builder chain and answers with a fixed count."""

    def __init__(self, table, count):
        self.calls = [("table", table)]
        self.count = count

    def select(self, *columns, **kwargs):
        self.calls.append(("select", columns, kwargs))
        return self

    def eq(self, column, value):
        self.calls.append(("eq", column, value))
        return self

    def or_(self, filters):
        self.calls.append(("or_", filters))
        return self

    def execute(self):
        self.calls.append(("execute",))
        return types.SimpleNamespace(data=[], count=self.count)


class _Client:
    def __init__(self, count=None):
        self.count = count
        self.queries = []

    def table(self, name):
        q = _Query(name, self.count)
        self.queries.append(q)
        return q


def _dal(count=None):
    dal = object.__new__(SupabaseDAL)
    dal.client = _Client(count)
    return dal


def test_user_keyed_counts_use_exact_head_count():
    for method, table in (
        ("count_posts", "posts"),
        ("count_comments", "comments"),
        ("count_reactions", "reactions"),
    ):
        dal = _dal(count=4)
        assert getattr(dal, method)("u1") == 4
        (q,) = dal.client.queries
        assert q.calls == [
            ("table", table),
            ("select", ("*",), {"count": "exact", "head": True}),
            ("eq", "user_id", "u1"),
            ("execute",),
        ]


def test_friendships_match_either_endpoint_once_and_only_accepted():
    dal = _dal(count=2)

    assert dal.count_accepted_friendships("u1") == 2

    (q,) = dal.client.queries
    assert q.calls == [
        ("table", "friendships"),
        ("select", ("*",), {"count": "exact", "head": True}),
        ("or_", "user_id.eq.u1,friend_id.eq.u1"),
        ("eq", "status", "accepted"),
        ("execute",),
    ]
    # One query, one OR filter: a row with user_id == friend_id matches once
    assert sum(1 for c in q.calls if c[0] == "or_") == 1


def test_absent_count_is_passed_through_as_none():
    dal = _dal(count=None)
    assert dal.count_posts("u1") is None


def test_count_read_from_model_dump_when_attribute_missing():
    class _Resp:
        def model_dump(self):
            return {"data": [], "count": 6}

    dal = _dal()
    dal.client.table = lambda name: types.SimpleNamespace(
        select=lambda *a, **k: types.SimpleNamespace(
            eq=lambda *a: types.SimpleNamespace(execute=lambda: _Resp())
        )
    )
    assert dal.count_comments("u1") == 6
