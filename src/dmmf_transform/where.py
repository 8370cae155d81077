"""Rewrites naive ``<Entity>WhereInput`` types into composite filter types."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping

from dmmf_transform.filters import FilterTypeFactory
from dmmf_transform.naming import DEFAULT_NAMING, LOGICAL_OPERATORS, NULL_TYPE, NamingConvention
from dmmf_transform.types import Document, Field, InputType, Model, SchemaArg

logger = logging.getLogger(__name__)


class WhereOutcome(Enum):
    """What happened to a where-type."""

    TRANSFORMED = "transformed"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True)
class WherePassResult:
    """Output of the where pass.

    ``filter_types`` holds every filter type built during the pass, keyed by
    name, in the order they were first requested.
    """

    document: Document
    filter_types: dict[str, InputType] = field(default_factory=dict)
    outcomes: dict[str, WhereOutcome] = field(default_factory=dict)


def is_filterable(f: Field) -> bool:
    """Whether a field gets a synthesized where argument.

    List relations and single scalars/enums do. Scalar lists have no filter
    operators, and singular relations keep their original argument.
    """
    if f.is_relation:
        return f.is_list
    return not f.is_list


def operator_whitelist(model: Model) -> list[str]:
    """Names of original where arguments kept as-is for a model."""
    return [*LOGICAL_OPERATORS, *model.singular_relation_names()]


class WhereInputSynthesizer:
    """Builds composite where-types and the filter types they reference."""

    def __init__(self, naming: NamingConvention = DEFAULT_NAMING) -> None:
        self.naming = naming
        self.factory = FilterTypeFactory(naming)

    def run(
        self, document: Document, cache: Mapping[str, InputType] | None = None
    ) -> WherePassResult:
        """Rewrite every where-type in the document.

        Args:
            document: Document to transform.
            cache: Filter types already built, keyed by name. It is copied,
                not modified.

        Returns:
            The new document, the filter types and the outcome per where-type.
        """
        filter_types: dict[str, InputType] = dict(cache or {})
        outcomes: dict[str, WhereOutcome] = {}
        input_types: list[InputType] = []

        for input_type in document.schema.input_types:
            entity = self.naming.where_entity_name(input_type.name)
            if entity is None:
                input_types.append(input_type)
                continue

            model = document.datamodel.get_model(entity)
            if model is None:
                logger.debug("No model for %s, leaving it unchanged", input_type.name)
                outcomes[input_type.name] = WhereOutcome.PASSTHROUGH
                input_types.append(input_type)
                continue

            input_types.append(self.synthesize(input_type, model, filter_types))
            outcomes[input_type.name] = WhereOutcome.TRANSFORMED

        input_types.extend(filter_types.values())
        logger.debug(
            "Where pass: %d transformed, %d filter types",
            sum(1 for o in outcomes.values() if o is WhereOutcome.TRANSFORMED),
            len(filter_types),
        )

        schema = replace(document.schema, input_types=tuple(input_types))
        return WherePassResult(
            document=replace(document, schema=schema),
            filter_types=filter_types,
            outcomes=outcomes,
        )

    def synthesize(
        self, input_type: InputType, model: Model, filter_types: dict[str, InputType]
    ) -> InputType:
        """Build the composite where-type for one model.

        Field filters come first, followed by the whitelisted original args.
        """
        whitelist = operator_whitelist(model)
        kept = [
            replace(arg, is_relation_filter=True)
            for arg in input_type.args
            if arg.name in whitelist
        ]
        derived = [
            self._field_arg(f, filter_types) for f in model.fields if is_filterable(f)
        ]
        return InputType(
            name=input_type.name,
            args=tuple(derived + kept),
            at_least_one=True,
            is_where_type=True,
        )

    def _field_arg(self, f: Field, filter_types: dict[str, InputType]) -> SchemaArg:
        filter_name = self.factory.for_field(f, filter_types)

        types: list[str] = []
        if not f.is_relation:
            types.append(f.type)
        types.append(filter_name)
        # optional scalars may be compared against null directly
        if not f.is_required and not f.is_relation:
            types.append(NULL_TYPE)

        return SchemaArg(
            name=f.name,
            type=tuple(types),
            is_list=False,
            is_required=False,
            is_enum=False,
            is_scalar=False,
            is_relation_filter=False,
        )
