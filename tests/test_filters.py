import pytest

from yearning_notify.filters import (
    Query,
    according_to_all_order_state,
    according_to_all_query_order_state,
    according_to_assigned,
    according_to_date,
    according_to_datetime,
    according_to_group_source_is_query,
    according_to_order_state,
    according_to_relevant,
    according_to_rule_super_or_admin,
    according_to_text,
    according_to_username,
    according_to_work_id,
)


def test_empty_query_renders_nothing():
    assert Query().where_sql() == ("", [])


@pytest.mark.parametrize(
    "scope",
    [
        according_to_work_id(""),
        according_to_username(""),
        according_to_text(""),
        according_to_all_order_state(7),
        according_to_all_query_order_state(7),
        according_to_datetime(["", ""]),
        according_to_datetime(["only-one"]),
        according_to_date(["a", "b", "c"]),
    ],
)
def test_scopes_that_leave_query_unchanged(scope):
    assert Query().scopes(scope) == Query()


def test_work_id_is_a_like_match():
    assert Query().scopes(according_to_work_id("abc")).where_sql() == (
        "(work_id like ?)",
        ["%abc%"],
    )


def test_list_arguments_expand_placeholders():
    sql, params = Query().scopes(according_to_order_state()).where_sql()
    assert params == [1, 4]
    assert sql.count("?") == len(params)
    sql, params = Query().scopes(according_to_rule_super_or_admin()).where_sql()
    assert params == ["admin", "super"]
    assert sql.count("?") == len(params)


def test_order_state_filter():
    assert Query().scopes(according_to_all_order_state(2)).where_sql()[1] == [2]


def test_datetime_span_binds_both_ends():
    span = ["2024-01-01", "2024-02-01"]
    sql, params = Query().scopes(according_to_datetime(span)).where_sql()
    assert sql == "(time >= ? AND time <= ?)"
    assert params == span


def test_scopes_combine_in_order():
    query = Query().scopes(
        according_to_assigned("admin"),
        according_to_relevant("bob"),
        according_to_group_source_is_query(0, 2),
    )
    sql, params = query.where_sql()
    assert params == ["admin", "bob", 0, 2]
    assert sql.count(") AND (") == 2
    assert sql.startswith("(`assigned` = ?)")


def test_where_does_not_mutate_original():
    base = Query()
    extended = base.where("a = ?", 1)
    assert base.conditions == ()
    assert extended.conditions == (("a = ?", (1,)),)


def test_where_rejects_mismatched_arguments():
    with pytest.raises(ValueError):
        Query().where("a = ? AND b = ?", 1)