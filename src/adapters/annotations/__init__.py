"""Annotation adapters - Read fixture annotations from test code."""

from .attributes import (
    DATA_FIXTURE,
    DATA_FIXTURE_BEFORE_TRANSACTION,
    DB_ISOLATION,
    AttributeAnnotationReader,
    AttributeDataProvider,
    annotate,
    data_fixture,
    db_isolation,
    fixture_data_provider,
)

__all__ = [
    "DATA_FIXTURE",
    "DATA_FIXTURE_BEFORE_TRANSACTION",
    "DB_ISOLATION",
    "AttributeAnnotationReader",
    "AttributeDataProvider",
    "annotate",
    "data_fixture",
    "db_isolation",
    "fixture_data_provider",
]
