"""Final cleanup: name deduplication and change-event payload pruning."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable, TypeVar

from dmmf_transform.naming import DEFAULT_NAMING, NamingConvention
from dmmf_transform.types import Document, InputType, OutputType

logger = logging.getLogger(__name__)

T = TypeVar("T")


def unique_by(items: Iterable[T], key: Callable[[T], object]) -> list[T]:
    """Drop items whose key was already seen; the first occurrence wins."""
    seen: set[object] = set()
    result: list[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        result.append(item)
    return result


@dataclass(frozen=True)
class FinishResult:
    """Finished document and the names pruned as change-event payloads."""

    document: Document
    dropped_inputs: tuple[str, ...] = ()
    dropped_outputs: tuple[str, ...] = ()


class Finisher:
    """Deduplicates input and output types and prunes event payload types."""

    def __init__(self, naming: NamingConvention = DEFAULT_NAMING) -> None:
        self.naming = naming

    def filter_input_types(self, types: Iterable[InputType]) -> tuple[list[InputType], list[str]]:
        """Return the kept input types and the names pruned."""
        kept, dropped = [], []
        for t in unique_by(types, lambda t: t.name):
            if self.naming.is_event_input_type(t.name):
                dropped.append(t.name)
            else:
                kept.append(t)
        return kept, dropped

    def filter_output_types(self, types: Iterable[OutputType]) -> tuple[list[OutputType], list[str]]:
        """Return the kept output types and the names pruned."""
        kept, dropped = [], []
        for t in unique_by(types, lambda t: t.name):
            if self.naming.is_event_output_type(t.name):
                dropped.append(t.name)
            else:
                kept.append(t)
        return kept, dropped

    def run(self, document: Document) -> FinishResult:
        inputs, dropped_inputs = self.filter_input_types(document.schema.input_types)
        outputs, dropped_outputs = self.filter_output_types(document.schema.output_types)

        if dropped_inputs or dropped_outputs:
            logger.debug(
                "Pruned input types %s and output types %s", dropped_inputs, dropped_outputs
            )

        schema = replace(
            document.schema,
            input_types=tuple(inputs),
            output_types=tuple(outputs),
        )
        return FinishResult(
            document=replace(document, schema=schema),
            dropped_inputs=tuple(dropped_inputs),
            dropped_outputs=tuple(dropped_outputs),
        )
