"""Parsing module for the datamodel DSL."""

from dmmf_transform.parsing.datamodel_parser import DatamodelParser

__all__ = [
    "DatamodelParser",
]
