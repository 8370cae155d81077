"""Construction of per-type comparison filter input types."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from dmmf_transform.naming import DEFAULT_NAMING, NULL_TYPE, RELATION_QUANTIFIERS, NamingConvention
from dmmf_transform.types import Field, FieldKind, InputType, SchemaArg

logger = logging.getLogger(__name__)


class FilterCategory(Enum):
    """Operator policy applied to a base type."""

    TEXT = "text"
    ORDERED = "ordered"
    BOOLEAN = "boolean"
    ENUM = "enum"
    RELATION = "relation"
    UNRECOGNIZED = "unrecognized"


TEXT_TYPES = frozenset({"String", "ID", "UUID"})
ORDERED_TYPES = frozenset({"Int", "Float", "DateTime"})
BOOLEAN_TYPES = frozenset({"Boolean"})

INCLUSION_OPERATORS = ("in", "notIn")
ORDERING_OPERATORS = ("lt", "lte", "gt", "gte")
TEXT_OPERATORS = ("contains", "startsWith", "endsWith")


def classify(base_type: str, kind: FieldKind = FieldKind.SCALAR) -> FilterCategory:
    """Return the operator category for a base type."""
    if kind is FieldKind.RELATION:
        return FilterCategory.RELATION
    if kind is FieldKind.ENUM:
        return FilterCategory.ENUM
    if base_type in TEXT_TYPES:
        return FilterCategory.TEXT
    if base_type in ORDERED_TYPES:
        return FilterCategory.ORDERED
    if base_type in BOOLEAN_TYPES:
        return FilterCategory.BOOLEAN
    return FilterCategory.UNRECOGNIZED


@dataclass(frozen=True)
class FilterBuild:
    """A freshly built filter type and the category that shaped it."""

    input_type: InputType
    category: FilterCategory

    @property
    def is_recognized(self) -> bool:
        return self.category is not FilterCategory.UNRECOGNIZED


def operator_args(names: tuple[str, ...], types: list[str], is_list: bool = False) -> list[SchemaArg]:
    """Build one scalar operator argument per name, all sharing a type union."""
    return [
        SchemaArg(
            name=name,
            type=tuple(types),
            is_list=is_list,
            is_required=False,
            is_enum=False,
            is_scalar=True,
        )
        for name in names
    ]


class FilterTypeFactory:
    """Builds filter input types, one per base type and nullability class."""

    def __init__(self, naming: NamingConvention = DEFAULT_NAMING) -> None:
        self.naming = naming

    def build(self, base_type: str, kind: FieldKind, required: bool) -> FilterBuild:
        """Build the filter type for a base type.

        Args:
            base_type: Scalar, enum or entity name.
            kind: Kind of the field the filter is for.
            required: Effective requiredness; relations are always required.

        Returns:
            The filter type together with its operator category.
        """
        category = classify(base_type, kind)
        if category is FilterCategory.RELATION:
            required = True
        name = self.naming.filter_type_name(base_type, required)

        if category is FilterCategory.RELATION:
            args = self._relation_args(base_type)
        else:
            args = self._scalar_args(base_type, name, required, category)

        if category is FilterCategory.UNRECOGNIZED:
            logger.debug("No filter operators for unrecognized type %s (%s)", base_type, name)

        return FilterBuild(
            input_type=InputType(name=name, args=tuple(args), at_least_one=True),
            category=category,
        )

    def for_field(self, f: Field, cache: dict[str, InputType]) -> str:
        """Return the filter type name for a field, adding it to ``cache`` if new.

        The name doubles as the cache key, so two fields with the same base
        type and nullability class share one filter type.
        """
        name = self.naming.filter_type_name(f.type, f.effective_required)
        if name not in cache:
            cache[name] = self.build(f.type, f.kind, f.effective_required).input_type
        return name

    def _relation_args(self, entity: str) -> list[SchemaArg]:
        return operator_args(RELATION_QUANTIFIERS, [self.naming.where_input_name(entity)])

    def _scalar_args(
        self, base_type: str, filter_name: str, required: bool, category: FilterCategory
    ) -> list[SchemaArg]:
        if category is FilterCategory.UNRECOGNIZED:
            return []

        nullable = [] if required else [NULL_TYPE]
        args = operator_args(("equals",), [base_type, *nullable])
        # not also accepts a nested filter of the same type
        args += operator_args(("not",), [base_type, *nullable, filter_name])

        if category is FilterCategory.BOOLEAN:
            return args

        args += operator_args(INCLUSION_OPERATORS, [base_type], is_list=True)
        args += operator_args(ORDERING_OPERATORS, [base_type])
        if category is FilterCategory.TEXT:
            args += operator_args(TEXT_OPERATORS, [base_type])
        return args
