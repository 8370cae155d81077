"""Naming conventions that link schema descriptors to the datamodel.

Everything the engine infers from names (which entity a where-type belongs
to, which fields an order-by enum sorts on, which types are change-event
payloads) goes through this module.
"""

from __future__ import annotations

from dataclasses import dataclass

# Combinators every where-type keeps from its naive form
LOGICAL_OPERATORS: tuple[str, ...] = ("AND", "OR", "NOT")

# Quantifiers of a relation filter over a list relation
RELATION_QUANTIFIERS: tuple[str, ...] = ("every", "some", "none")

NULL_TYPE = "null"


@dataclass(frozen=True)
class NamingConvention:
    """Suffixes and markers used by the naively generated schema."""

    where_suffix: str = "WhereInput"
    order_by_suffix: str = "OrderByInput"
    ascending_suffix: str = "_ASC"
    filter_suffix: str = "Filter"
    nullable_prefix: str = "Nullable"
    sort_direction_enum: str = "OrderByArg"
    sort_directions: tuple[str, ...] = ("asc", "desc")
    subscription_marker: str = "Subscription"
    previous_values_suffix: str = "PreviousValues"
    mutation_kind_marker: str = "MutationType"

    def where_entity_name(self, type_name: str) -> str | None:
        """Return the entity a where-type belongs to, or None if not one.

        The last occurrence of the suffix is stripped, so a type called
        ``WhereInput`` yields the empty entity name.
        """
        return _strip_suffix(type_name, self.where_suffix)

    def order_by_entity_name(self, type_name: str) -> str | None:
        return _strip_suffix(type_name, self.order_by_suffix)

    def where_input_name(self, entity: str) -> str:
        return f"{entity}{self.where_suffix}"

    def filter_type_name(self, base_type: str, required: bool) -> str:
        """Name of the filter type for a base type and nullability class."""
        prefix = "" if required else self.nullable_prefix
        return f"{prefix}{base_type}{self.filter_suffix}"

    def ascending_field_name(self, value: str) -> str | None:
        """Recover the field name from an ascending sort value like ``id_ASC``."""
        return _strip_suffix(value, self.ascending_suffix)

    def is_event_input_type(self, name: str) -> bool:
        """Input types describing subscription payloads or mutation kinds."""
        return self.subscription_marker in name or name == self.mutation_kind_marker

    def is_event_output_type(self, name: str) -> bool:
        """Output types describing change-event payloads."""
        return name.endswith(self.previous_values_suffix) or self.subscription_marker in name


DEFAULT_NAMING = NamingConvention()


def _strip_suffix(name: str, suffix: str) -> str | None:
    if not name.endswith(suffix):
        return None
    return name[: name.rindex(suffix)]
