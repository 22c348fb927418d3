"""Timeseries service package."""

from .models import (
    CodeParameterEcho,
    DataCodeResponse,
    DataLayerResponse,
    DataPoint,
    LayerParameterEcho,
    MetadataEntry,
    MetadataResponse,
    TimeSeries,
)
from .options import Format, Frequency, Language
from .queries import DataCodeQuery, DataLayerQuery, MetadataQuery

__all__ = [
    "DataCodeQuery",
    "DataLayerQuery",
    "MetadataQuery",
    "Format",
    "Frequency",
    "Language",
    "DataCodeResponse",
    "DataLayerResponse",
    "MetadataResponse",
    "CodeParameterEcho",
    "LayerParameterEcho",
    "TimeSeries",
    "DataPoint",
    "MetadataEntry",
]
