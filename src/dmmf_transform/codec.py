"""Conversion between DMMF JSON documents and the dataclasses in ``types``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from dmmf_transform.types import (
    FIELD_KIND_NAMES,
    Datamodel,
    Document,
    EnumType,
    Field,
    InputType,
    Model,
    OutputType,
    Schema,
    SchemaArg,
)


class DocumentFormatError(ValueError):
    """Raised when a JSON document lacks data the transform needs."""


_FIELD_KEYS = {"name", "type", "kind", "isList", "isRequired"}
_MODEL_KEYS = {"name", "fields"}
_ARG_KEYS = {"name", "type", "isList", "isRequired", "isEnum", "isScalar", "isRelationFilter"}
_INPUT_TYPE_KEYS = {"name", "args", "atLeastOne", "atMostOne", "isWhereType", "isOrderType"}
_OUTPUT_TYPE_KEYS = {"name", "fields"}
_ENUM_KEYS = {"name", "values"}
_DATAMODEL_KEYS = {"models", "enums"}
_SCHEMA_KEYS = {"inputTypes", "outputTypes", "enums", "queries", "mutations"}
_DOCUMENT_KEYS = {"datamodel", "schema", "mappings"}

# Optional InputType flags: JSON key -> attribute name
_INPUT_TYPE_FLAGS = {
    "atLeastOne": "at_least_one",
    "atMostOne": "at_most_one",
    "isWhereType": "is_where_type",
    "isOrderType": "is_order_type",
}


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if not isinstance(data, dict):
        raise DocumentFormatError(f"{path}: expected an object")
    if key not in data:
        raise DocumentFormatError(f"{path}: missing '{key}'")
    return data[key]


def _extra(data: dict[str, Any], known: set[str]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


# ---- Decoding ----


def _field_from_dict(data: dict[str, Any], path: str) -> Field:
    kind_name = _require(data, "kind", path)
    kind = FIELD_KIND_NAMES.get(kind_name)
    if kind is None:
        raise DocumentFormatError(f"{path}: unknown field kind '{kind_name}'")
    return Field(
        name=_require(data, "name", path),
        type=_require(data, "type", path),
        kind=kind,
        is_list=bool(data.get("isList", False)),
        is_required=bool(data.get("isRequired", False)),
        extra=_extra(data, _FIELD_KEYS),
    )


def _model_from_dict(data: dict[str, Any], path: str) -> Model:
    name = _require(data, "name", path)
    fields = _require(data, "fields", path)
    return Model(
        name=name,
        fields=tuple(_field_from_dict(f, f"{path}.fields[{i}]") for i, f in enumerate(fields)),
        extra=_extra(data, _MODEL_KEYS),
    )


def _enum_from_dict(data: dict[str, Any], path: str) -> EnumType:
    return EnumType(
        name=_require(data, "name", path),
        values=tuple(data.get("values", [])),
        extra=_extra(data, _ENUM_KEYS),
    )


def _arg_from_dict(data: dict[str, Any], path: str) -> SchemaArg:
    arg_type = _require(data, "type", path)
    if isinstance(arg_type, str):
        arg_type = [arg_type]
    return SchemaArg(
        name=_require(data, "name", path),
        type=tuple(arg_type),
        is_list=bool(data.get("isList", False)),
        is_required=bool(data.get("isRequired", False)),
        is_enum=bool(data.get("isEnum", False)),
        is_scalar=bool(data.get("isScalar", False)),
        is_relation_filter=data.get("isRelationFilter"),
        extra=_extra(data, _ARG_KEYS),
    )


def _input_type_from_dict(data: dict[str, Any], path: str) -> InputType:
    flags = {attr: data[key] for key, attr in _INPUT_TYPE_FLAGS.items() if key in data}
    return InputType(
        name=_require(data, "name", path),
        args=tuple(
            _arg_from_dict(a, f"{path}.args[{i}]") for i, a in enumerate(data.get("args", []))
        ),
        extra=_extra(data, _INPUT_TYPE_KEYS),
        **flags,
    )


def _output_type_from_dict(data: dict[str, Any], path: str) -> OutputType:
    return OutputType(
        name=_require(data, "name", path),
        fields=tuple(data.get("fields", [])),
        extra=_extra(data, _OUTPUT_TYPE_KEYS),
    )


def document_from_dict(data: dict[str, Any]) -> Document:
    """Build a Document from parsed DMMF JSON.

    Raises:
        DocumentFormatError: If a required key is missing or a field kind is
            not recognized.
    """
    datamodel_data = _require(data, "datamodel", "document")
    schema_data = _require(data, "schema", "document")

    models = _require(datamodel_data, "models", "datamodel")
    datamodel = Datamodel(
        models=tuple(_model_from_dict(m, f"datamodel.models[{i}]") for i, m in enumerate(models)),
        enums=tuple(
            _enum_from_dict(e, f"datamodel.enums[{i}]")
            for i, e in enumerate(datamodel_data.get("enums", []))
        ),
        extra=_extra(datamodel_data, _DATAMODEL_KEYS),
    )

    schema = Schema(
        input_types=tuple(
            _input_type_from_dict(t, f"schema.inputTypes[{i}]")
            for i, t in enumerate(schema_data.get("inputTypes", []))
        ),
        output_types=tuple(
            _output_type_from_dict(t, f"schema.outputTypes[{i}]")
            for i, t in enumerate(schema_data.get("outputTypes", []))
        ),
        enums=tuple(
            _enum_from_dict(e, f"schema.enums[{i}]")
            for i, e in enumerate(schema_data.get("enums", []))
        ),
        queries=tuple(schema_data.get("queries", [])),
        mutations=tuple(schema_data.get("mutations", [])),
        extra=_extra(schema_data, _SCHEMA_KEYS),
    )

    return Document(
        datamodel=datamodel,
        schema=schema,
        mappings=tuple(data.get("mappings", [])),
        extra=_extra(data, _DOCUMENT_KEYS),
    )


# ---- Encoding ----


def _field_to_dict(f: Field) -> dict[str, Any]:
    return {
        "name": f.name,
        "type": f.type,
        "kind": f.kind.value,
        "isList": f.is_list,
        "isRequired": f.is_required,
        **f.extra,
    }


def _model_to_dict(m: Model) -> dict[str, Any]:
    return {"name": m.name, "fields": [_field_to_dict(f) for f in m.fields], **m.extra}


def _enum_to_dict(e: EnumType) -> dict[str, Any]:
    return {"name": e.name, "values": list(e.values), **e.extra}


def _arg_to_dict(a: SchemaArg) -> dict[str, Any]:
    result: dict[str, Any] = {
        "name": a.name,
        "type": list(a.type),
        "isList": a.is_list,
        "isRequired": a.is_required,
        "isEnum": a.is_enum,
        "isScalar": a.is_scalar,
    }
    if a.is_relation_filter is not None:
        result["isRelationFilter"] = a.is_relation_filter
    result.update(a.extra)
    return result


def _input_type_to_dict(t: InputType) -> dict[str, Any]:
    result: dict[str, Any] = {"name": t.name, "args": [_arg_to_dict(a) for a in t.args]}
    for key, attr in _INPUT_TYPE_FLAGS.items():
        value = getattr(t, attr)
        if value is not None:
            result[key] = value
    result.update(t.extra)
    return result


def _output_type_to_dict(t: OutputType) -> dict[str, Any]:
    return {"name": t.name, "fields": list(t.fields), **t.extra}


def document_to_dict(document: Document) -> dict[str, Any]:
    """Convert a Document back to the DMMF JSON shape."""
    schema = document.schema
    return {
        "datamodel": {
            "models": [_model_to_dict(m) for m in document.datamodel.models],
            "enums": [_enum_to_dict(e) for e in document.datamodel.enums],
            **document.datamodel.extra,
        },
        "mappings": list(document.mappings),
        "schema": {
            "enums": [_enum_to_dict(e) for e in schema.enums],
            "queries": list(schema.queries),
            "mutations": list(schema.mutations),
            "outputTypes": [_output_type_to_dict(t) for t in schema.output_types],
            "inputTypes": [_input_type_to_dict(t) for t in schema.input_types],
            **schema.extra,
        },
        **document.extra,
    }


def load_document(path: Path | str) -> Document:
    """Read a DMMF JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        DocumentFormatError: If the JSON is not a usable document.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return document_from_dict(data)


def dump_document(document: Document, path: Path | str | None = None) -> str:
    """Serialize a Document as indented JSON, writing it to ``path`` if given."""
    text = json.dumps(document_to_dict(document), indent=2)
    if path is not None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    return text
