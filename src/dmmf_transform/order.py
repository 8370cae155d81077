"""Rewrites ``<Entity>OrderByInput`` enums into single-key sort input types."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from dmmf_transform.naming import DEFAULT_NAMING, NamingConvention
from dmmf_transform.types import Document, EnumType, InputType, SchemaArg

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderPassResult:
    """Output of the order pass and the enum names it replaced."""

    document: Document
    rewritten: tuple[str, ...] = ()


class OrderInputSynthesizer:
    """Replaces order-by enums with input types over a shared direction enum."""

    def __init__(self, naming: NamingConvention = DEFAULT_NAMING) -> None:
        self.naming = naming

    def sort_direction_enum(self) -> EnumType:
        return EnumType(
            name=self.naming.sort_direction_enum,
            values=tuple(self.naming.sort_directions),
        )

    def orderable_fields(self, enum: EnumType) -> list[str]:
        """Field names recovered from the ascending values of an order-by enum."""
        names = []
        for value in enum.values:
            field_name = self.naming.ascending_field_name(value)
            if field_name is not None:
                names.append(field_name)
        return names

    def synthesize(self, enum: EnumType) -> InputType:
        """Build the order-by input type replacing ``enum``."""
        args = tuple(
            SchemaArg(
                name=name,
                type=(self.naming.sort_direction_enum,),
                is_list=False,
                is_required=False,
                is_enum=False,
                is_scalar=True,
                is_relation_filter=False,
            )
            for name in self.orderable_fields(enum)
        )
        return InputType(
            name=enum.name,
            args=args,
            at_least_one=True,
            at_most_one=True,
            is_order_type=True,
        )

    def run(self, document: Document) -> OrderPassResult:
        """Rewrite every order-by enum in the document.

        The sort direction enum is always emitted first, exactly once, even
        when the document has no order-by enums.
        """
        enums: list[EnumType] = [self.sort_direction_enum()]
        order_types: list[InputType] = []

        for enum in document.schema.enums:
            if enum.name == self.naming.sort_direction_enum:
                continue
            if self.naming.order_by_entity_name(enum.name) is None:
                enums.append(enum)
                continue
            order_types.append(self.synthesize(enum))

        rewritten = tuple(t.name for t in order_types)
        if rewritten:
            logger.debug("Order pass rewrote %s", ", ".join(rewritten))

        schema = replace(
            document.schema,
            input_types=document.schema.input_types + tuple(order_types),
            enums=tuple(enums),
        )
        return OrderPassResult(document=replace(document, schema=schema), rewritten=rewritten)
