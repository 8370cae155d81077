"""The transform pipeline: where pass, order pass, finisher."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dmmf_transform.finisher import Finisher, FinishResult
from dmmf_transform.naming import DEFAULT_NAMING, NamingConvention
from dmmf_transform.order import OrderInputSynthesizer, OrderPassResult
from dmmf_transform.types import Document
from dmmf_transform.where import WhereInputSynthesizer, WherePassResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransformReport:
    """Final document plus the result of each pass."""

    document: Document
    where: WherePassResult
    order: OrderPassResult
    finish: FinishResult


def run_transform(document: Document, naming: NamingConvention = DEFAULT_NAMING) -> TransformReport:
    """Run all passes over ``document`` and report what each one did.

    Running the transform on its own output is not supported: synthesized
    where-types still carry the where suffix and would be rebuilt.
    """
    where = WhereInputSynthesizer(naming).run(document)
    order = OrderInputSynthesizer(naming).run(where.document)
    finish = Finisher(naming).run(order.document)
    logger.info(
        "Transformed document: %d input types, %d output types, %d enums",
        len(finish.document.schema.input_types),
        len(finish.document.schema.output_types),
        len(finish.document.schema.enums),
    )
    return TransformReport(document=finish.document, where=where, order=order, finish=finish)


def transform_document(document: Document, naming: NamingConvention = DEFAULT_NAMING) -> Document:
    """Synthesize filter, where and order-by types and prune event payloads."""
    return run_transform(document, naming).document
