"""Value types for DMMF-style documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldKind(Enum):
    """Kinds of datamodel fields."""

    SCALAR = "scalar"
    RELATION = "relation"
    ENUM = "enum"


# Mapping from kind strings to FieldKind enum values
FIELD_KIND_NAMES: dict[str, FieldKind] = {fk.value: fk for fk in FieldKind}


@dataclass(frozen=True)
class Field:
    """A field on a datamodel model."""

    name: str
    type: str
    kind: FieldKind = FieldKind.SCALAR
    is_list: bool = False
    is_required: bool = False
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def is_relation(self) -> bool:
        return self.kind is FieldKind.RELATION

    @property
    def effective_required(self) -> bool:
        """Relations always filter through the non-nullable filter type."""
        return self.is_required or self.is_relation


@dataclass(frozen=True)
class Model:
    """An entity in the datamodel."""

    name: str
    fields: tuple[Field, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def get_field(self, name: str) -> Field | None:
        """Get a field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def singular_relation_names(self) -> list[str]:
        """Names of relation fields that hold at most one related record."""
        return [f.name for f in self.fields if f.is_relation and not f.is_list]


@dataclass(frozen=True)
class EnumType:
    """A named enum, either in the datamodel or in the query schema."""

    name: str
    values: tuple[str, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Datamodel:
    """The normalized data-model description."""

    models: tuple[Model, ...] = ()
    enums: tuple[EnumType, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def parse(cls, text: str) -> Datamodel:
        """Build a datamodel from the datamodel DSL.

        Args:
            text: DSL source with ``model`` and ``enum`` blocks.

        Returns:
            A new Datamodel.
        """
        from dmmf_transform.parsing import DatamodelParser

        return DatamodelParser().parse(text)

    def get_model(self, name: str) -> Model | None:
        """Get a model by name."""
        for m in self.models:
            if m.name == name:
                return m
        return None

    def model_names(self) -> list[str]:
        return [m.name for m in self.models]


@dataclass(frozen=True)
class SchemaArg:
    """An argument of an input type.

    ``type`` is a union of referenceable type names, ``"null"`` included
    where a caller may pass null directly.
    """

    name: str
    type: tuple[str, ...]
    is_list: bool = False
    is_required: bool = False
    is_enum: bool = False
    is_scalar: bool = False
    is_relation_filter: bool | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class InputType:
    """An input type of the query schema.

    ``at_least_one`` means a caller must supply one or more properties,
    ``at_most_one`` means one at most. Unset flags are ``None``.
    """

    name: str
    args: tuple[SchemaArg, ...] = ()
    at_least_one: bool | None = None
    at_most_one: bool | None = None
    is_where_type: bool | None = None
    is_order_type: bool | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def get_arg(self, name: str) -> SchemaArg | None:
        """Get an argument by name."""
        for a in self.args:
            if a.name == name:
                return a
        return None

    def arg_names(self) -> list[str]:
        return [a.name for a in self.args]


@dataclass(frozen=True)
class OutputType:
    """An output type; only its name matters to the transform."""

    name: str
    fields: tuple[Any, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Schema:
    """Query-API type descriptors."""

    input_types: tuple[InputType, ...] = ()
    output_types: tuple[OutputType, ...] = ()
    enums: tuple[EnumType, ...] = ()
    queries: tuple[Any, ...] = ()
    mutations: tuple[Any, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def get_input_type(self, name: str) -> InputType | None:
        """Get the first input type with the given name."""
        for t in self.input_types:
            if t.name == name:
                return t
        return None

    def get_enum(self, name: str) -> EnumType | None:
        """Get the first enum with the given name."""
        for e in self.enums:
            if e.name == name:
                return e
        return None


@dataclass(frozen=True)
class Document:
    """A DMMF-style document: datamodel, mappings and schema."""

    datamodel: Datamodel = field(default_factory=Datamodel)
    schema: Schema = field(default_factory=Schema)
    mappings: tuple[Any, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict, compare=False)
