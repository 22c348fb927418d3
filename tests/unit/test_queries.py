from __future__ import annotations

import pytest

from boj_client.core.errors import BojValidationError
from boj_client.timeseries.options import CsvEncoding, Format, Frequency, Language
from boj_client.timeseries.queries import DataCodeQuery, DataLayerQuery, MetadataQuery


def test_data_code_query_uppercases_db_only():
    query = DataCodeQuery(db="co", code=["tk99f1000601gcq01000"])
    assert query.db == "CO"
    assert query.code == ("tk99f1000601gcq01000",)


def test_data_code_query_parses_options_case_insensitively():
    query = DataCodeQuery(db="CO", code=["A"], format="CSV", lang="En")
    assert query.format is Format.CSV
    assert query.lang is Language.EN


def test_data_code_query_with_codes_returns_new_instance():
    query = DataCodeQuery(db="CO", code=["A", "B"])
    replaced = query.with_codes(["X"])
    assert replaced is not query
    assert query.code == ("A", "B")
    assert replaced.code == ("X",)


def test_data_code_query_rejects_scalar_string_input():
    with pytest.raises(TypeError):
        DataCodeQuery(db="CO", code="ABC")


def test_data_code_query_rejects_non_string_entries():
    with pytest.raises(TypeError):
        DataCodeQuery(db="CO", code=["A", 1])  # type: ignore[list-item]


def test_data_code_query_reports_first_invalid_field():
    # db is checked before code, code before dates
    with pytest.raises(BojValidationError, match="DB"):
        DataCodeQuery(db="", code=[], start_date="1800")
    with pytest.raises(BojValidationError, match="CODE"):
        DataCodeQuery(db="CO", code=[], start_date="1800")


def test_data_code_query_rejects_unknown_format():
    with pytest.raises(BojValidationError, match="unsupported format"):
        DataCodeQuery(db="CO", code=["A"], format="xml")


@pytest.mark.parametrize(
    "order",
    ["start-first", "end-first"],
)
def test_date_setters_check_order_regardless_of_call_order(order: str):
    query = DataCodeQuery(db="CO", code=["A"])
    with pytest.raises(BojValidationError, match="earlier"):
        if order == "start-first":
            query.with_start_date("202405").with_end_date("202401")
        else:
            query.with_end_date("202401").with_start_date("202405")

    if order == "start-first":
        ok = query.with_start_date("202401").with_end_date("202405")
    else:
        ok = query.with_end_date("202405").with_start_date("202401")
    assert (ok.start_date, ok.end_date) == ("202401", "202405")


def test_data_code_query_setters_revalidate():
    query = DataCodeQuery(db="CO", code=["A"])
    with pytest.raises(BojValidationError):
        query.with_start_position(0)
    with pytest.raises(BojValidationError):
        query.with_lang("fr")
    assert query.with_start_position(250).start_position == 250


def test_data_layer_query_uses_frequency_specific_dates():
    query = DataLayerQuery(db="bp01", frequency="q", layer=["1", "*"], start_date="202401", end_date="202404")
    assert query.db == "BP01"
    assert query.frequency is Frequency.Q
    assert query.layer == ("1", "*")

    with pytest.raises(BojValidationError):
        DataLayerQuery(db="BP01", frequency="Q", layer=["1"], start_date="202405")
    with pytest.raises(BojValidationError):
        DataLayerQuery(db="BP01", frequency="CY", layer=["1"], start_date="202401")


def test_data_layer_query_rejects_unknown_frequency():
    with pytest.raises(BojValidationError, match="unsupported frequency"):
        DataLayerQuery(db="BP01", frequency="H", layer=["1"])


def test_data_layer_query_rejects_bad_layers():
    with pytest.raises(BojValidationError):
        DataLayerQuery(db="BP01", frequency="M", layer=[])
    with pytest.raises(BojValidationError):
        DataLayerQuery(db="BP01", frequency="M", layer=["1", "A"])
    with pytest.raises(BojValidationError):
        DataLayerQuery(db="BP01", frequency="M", layer=["1"] * 6)


def test_metadata_query_requires_db():
    with pytest.raises(BojValidationError):
        MetadataQuery(db=" ")
    assert MetadataQuery(db="fm08").db == "FM08"


@pytest.mark.parametrize(
    ("lang", "expected"),
    [(None, CsvEncoding.SHIFT_JIS), ("jp", CsvEncoding.SHIFT_JIS), ("en", CsvEncoding.UTF8)],
)
def test_csv_encoding_hint_follows_language(lang, expected):
    assert MetadataQuery(db="FM08", lang=lang).csv_encoding_hint is expected
    assert DataCodeQuery(db="CO", code=["A"], lang=lang).csv_encoding_hint is expected
    assert DataLayerQuery(db="BP01", frequency="M", layer=["1"], lang=lang).csv_encoding_hint is expected
