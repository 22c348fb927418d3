from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from boj_client.core.models import ResponseMeta
from boj_client.timeseries.models import (
    CodeParameterEcho,
    DataCodeResponse,
    DataPoint,
    MetadataResponse,
    TimeSeries,
)
from boj_client.timeseries.queries import DataCodeQuery


def _meta() -> ResponseMeta:
    return ResponseMeta(status=200, message_id="M181000I", message="ok")


def test_data_code_query_code_is_tuple():
    query = DataCodeQuery(db="CO", code=["A", "B"])
    assert query.code == ("A", "B")
    assert isinstance(query.code, tuple)
    with pytest.raises(FrozenInstanceError):
        query.db = "FM08"  # type: ignore[misc]


def test_time_series_points_are_tuple_and_immutable():
    series = TimeSeries(series_code="A", points=[DataPoint(survey_date="202401", value="1")])
    assert isinstance(series.points, tuple)
    with pytest.raises(FrozenInstanceError):
        series.points = ()  # type: ignore[misc]


def test_time_series_requires_series_code():
    with pytest.raises(ValueError):
        TimeSeries(series_code="")


def test_data_code_response_series_is_tuple_and_immutable():
    response = DataCodeResponse(
        meta=_meta(),
        parameter=CodeParameterEcho(),
        next_position=None,
        series=[],
    )
    assert isinstance(response.series, tuple)
    with pytest.raises(FrozenInstanceError):
        response.series = ()  # type: ignore[misc]


def test_raw_text_is_hidden_from_repr():
    response = MetadataResponse(meta=_meta(), db="FM08", entries=[], raw="SECRET-RAW")
    assert "SECRET-RAW" not in repr(response)
    assert isinstance(response.entries, tuple)


def test_response_meta_success_flag():
    assert _meta().is_success is True
    assert ResponseMeta(status=500, message_id="M181090S", message="x").is_success is False
