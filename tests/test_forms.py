import pytest

from yearning_notify.forms import (
    CommonList,
    ExecuteStr,
    PageInfo,
    QueryOrder,
    Search,
    SQLTest,
)


def test_execute_str_reads_all_fields():
    data = {"work_id": "w1", "perform": "bob", "page": 3, "flag": 1, "text": "t", "tp": "agree"}
    assert ExecuteStr.from_dict(data) == ExecuteStr(
        work_id="w1", perform="bob", page=3, flag=1, text="t", tp="agree"
    )


def test_missing_and_null_fields_take_defaults():
    assert ExecuteStr.from_dict({}) == ExecuteStr()
    assert ExecuteStr.from_dict({"work_id": None, "page": None}) == ExecuteStr()


@pytest.mark.parametrize(
    "data",
    [{"page": "1"}, {"flag": True}, {"page": 1.5}, {"work_id": 123}],
)
def test_execute_str_rejects_wrong_types(data):
    with pytest.raises(ValueError):
        ExecuteStr.from_dict(data)


def test_whole_number_float_is_accepted():
    assert ExecuteStr.from_dict({"page": 2.0}).page == 2


def test_non_mapping_is_rejected():
    with pytest.raises(ValueError):
        PageInfo.from_dict(["page", 1])


def test_page_info_reads_nested_search():
    data = {
        "page": 2,
        "tp": "list",
        "find": {"picker": ["a", "b"], "valve": True, "text": "x", "status": 7},
    }
    info = PageInfo.from_dict(data)
    assert info.page == 2
    assert info.tp == "list"
    assert info.find == Search(picker=["a", "b"], valve=True, text="x", status=7)


def test_page_info_without_find_has_empty_search():
    assert PageInfo.from_dict({"page": 1}).find == Search()


@pytest.mark.parametrize(
    "find", [{"picker": [1, 2]}, {"picker": "a"}, {"valve": 1}, "text"]
)
def test_search_rejects_wrong_types(find):
    with pytest.raises(ValueError):
        PageInfo.from_dict({"find": find})


def test_sql_test_maps_data_base_key():
    form = SQLTest.from_dict(
        {"source": "s", "sql": "select 1", "data_base": "db", "is_dml": True, "work_id": "w"}
    )
    assert form == SQLTest(source="s", sql="select 1", database="db", is_dml=True, work_id="w")


def test_query_order_reads_fields_and_rejects_negative_export():
    form = QueryOrder.from_dict({"idc": "i", "source": "s", "export": 1, "tp": "agreed"})
    assert (form.idc, form.source, form.export, form.tp) == ("i", "s", 1, "agreed")
    with pytest.raises(ValueError):
        QueryOrder.from_dict({"export": -1})


def test_common_list_to_dict_uses_json_names():
    listing = CommonList(page=5, data=[{"a": 1}], idc=["x"], multi=True)
    assert listing.to_dict() == {
        "page": 5,
        "data": [{"a": 1}],
        "idc": ["x"],
        "source": None,
        "query": None,
        "auditor": None,
        "multi": True,
    }