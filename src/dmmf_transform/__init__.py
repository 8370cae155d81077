"""DMMF Transform - synthesizes query-layer input types for a DMMF document."""

from dmmf_transform.codec import (
    DocumentFormatError,
    document_from_dict,
    document_to_dict,
    dump_document,
    load_document,
)
from dmmf_transform.filters import FilterBuild, FilterCategory, FilterTypeFactory
from dmmf_transform.finisher import Finisher, FinishResult
from dmmf_transform.naming import (
    DEFAULT_NAMING,
    LOGICAL_OPERATORS,
    RELATION_QUANTIFIERS,
    NamingConvention,
)
from dmmf_transform.order import OrderInputSynthesizer, OrderPassResult
from dmmf_transform.transform import TransformReport, run_transform, transform_document
from dmmf_transform.types import (
    Datamodel,
    Document,
    EnumType,
    Field,
    FieldKind,
    InputType,
    Model,
    OutputType,
    Schema,
    SchemaArg,
)
from dmmf_transform.where import WhereInputSynthesizer, WhereOutcome, WherePassResult

__all__ = [
    # Main API
    "transform_document",
    "run_transform",
    "TransformReport",
    # Passes
    "WhereInputSynthesizer",
    "WhereOutcome",
    "WherePassResult",
    "FilterTypeFactory",
    "FilterBuild",
    "FilterCategory",
    "OrderInputSynthesizer",
    "OrderPassResult",
    "Finisher",
    "FinishResult",
    # Naming
    "NamingConvention",
    "DEFAULT_NAMING",
    "LOGICAL_OPERATORS",
    "RELATION_QUANTIFIERS",
    # Document types
    "Document",
    "Datamodel",
    "Model",
    "Field",
    "FieldKind",
    "EnumType",
    "Schema",
    "InputType",
    "OutputType",
    "SchemaArg",
    # JSON
    "DocumentFormatError",
    "document_from_dict",
    "document_to_dict",
    "load_document",
    "dump_document",
]

__version__ = "0.1.0"
