from __future__ import annotations

from packing.models.filter_criteria import FilterCriteria


def test_blank_and_missing_are_equivalent():
    assert FilterCriteria.from_query({}) == FilterCriteria()
    assert FilterCriteria.from_query(
        {"date": "", "product": None, "status": "  ", "quantityMin": "", "quantity_max": None}
    ) == FilterCriteria()


def test_numeric_strings_are_coerced():
    criteria = FilterCriteria.from_query({"quantityMin": "5", "quantityMax": "12", "limit": "20", "offset": "0"})
    assert criteria.quantity_min == 5
    assert criteria.quantity_max == 12
    assert criteria.limit == 20
    assert criteria.offset == 0


def test_unparseable_numbers_are_not_supplied():
    criteria = FilterCriteria.from_query({"quantity_min": "many"})
    assert criteria.quantity_min is None


def test_text_values_are_trimmed():
    criteria = FilterCriteria.from_query({"product": " 醤油 ", "status": "完了"})
    assert criteria.product == "醤油"
    assert criteria.status == "完了"
