from bizadmin.schemas.editor import Option
from bizadmin.services.search import UNKNOWN_LABEL, filter_rows, matches, resolve_label

ROWS = [
    {"code": 1, "ref": "PO-77", "contact": "Dana"},
    {"code": 2, "ref": None, "contact": "Sam Hill"},
    {"code": 3, "ref": "po-9", "contact": None},
]


def test_empty_term_keeps_all_rows_in_order():
    assert filter_rows(ROWS, ("ref", "contact"), "") == ROWS


def test_substring_of_any_field_matches():
    assert [r["code"] for r in filter_rows(ROWS, ("ref", "contact"), "po-")] == [1, 3]
    assert [r["code"] for r in filter_rows(ROWS, ("ref", "contact"), "hill")] == [2]


def test_missing_values_search_as_empty_text():
    assert matches({"ref": None}, ("ref", "contact"), "") is True
    assert matches({"ref": None}, ("ref", "contact"), "none") is False


def test_term_absent_everywhere_excludes_row():
    assert filter_rows(ROWS, ("ref", "contact"), "zzz") == []


def test_resolve_label():
    options = [Option(value=1, label="Electrician"), Option(value=2, label="Plumber")]
    assert resolve_label(2, options) == "Plumber"
    assert resolve_label(5, options) == UNKNOWN_LABEL
    assert resolve_label(None, options) == UNKNOWN_LABEL
    assert resolve_label("1", options) == UNKNOWN_LABEL
    assert resolve_label(1, []) == UNKNOWN_LABEL


def test_matched_option_with_empty_label_resolves_unknown():
    assert resolve_label(5, [Option(value=5, label="")]) == UNKNOWN_LABEL
