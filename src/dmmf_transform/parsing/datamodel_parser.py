"""Parser for the datamodel DSL.

Example::

    enum Role { ADMIN, USER }

    model User {
      id: ID!
      name: String
      role: Role!
      posts: Post[]
    }

Field kinds are not written in the source. A field whose type names a model
is a relation, one naming an enum is an enum field, anything else a scalar.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import ply.yacc as yacc

from dmmf_transform.parsing.datamodel_lexer import DatamodelLexer
from dmmf_transform.types import Datamodel, EnumType, Field, FieldKind, Model


@dataclass
class TypeRef:
    """Reference to a type, possibly as a list."""

    name: str
    is_list: bool = False


@dataclass
class FieldSpec:
    """Specification for a field before kind resolution."""

    name: str
    type_ref: TypeRef
    is_required: bool = False


@dataclass
class ModelSpec:
    """Specification for a model before kind resolution."""

    name: str
    fields: list[FieldSpec]


@dataclass
class EnumSpec:
    name: str
    values: list[str]


class DatamodelParser:
    """Parser for the datamodel DSL."""

    tokens = DatamodelLexer.tokens

    def __init__(self) -> None:
        self.lexer = DatamodelLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_datamodel(self, p: yacc.YaccProduction) -> None:
        """datamodel : definition_list"""
        p[0] = p[1]

    def p_definition_list_single(self, p: yacc.YaccProduction) -> None:
        """definition_list : definition"""
        p[0] = [p[1]]

    def p_definition_list_multiple(self, p: yacc.YaccProduction) -> None:
        """definition_list : definition_list definition"""
        p[0] = p[1] + [p[2]]

    def p_definition(self, p: yacc.YaccProduction) -> None:
        """definition : model_def
                      | enum_def"""
        p[0] = p[1]

    def p_model_def(self, p: yacc.YaccProduction) -> None:
        """model_def : MODEL IDENTIFIER LBRACE field_list RBRACE
                     | MODEL IDENTIFIER LBRACE field_list COMMA RBRACE"""
        p[0] = ModelSpec(name=p[2], fields=p[4])

    def p_model_def_empty(self, p: yacc.YaccProduction) -> None:
        """model_def : MODEL IDENTIFIER LBRACE RBRACE"""
        p[0] = ModelSpec(name=p[2], fields=[])

    def p_field_list_single(self, p: yacc.YaccProduction) -> None:
        """field_list : field"""
        p[0] = [p[1]]

    def p_field_list_multiple(self, p: yacc.YaccProduction) -> None:
        """field_list : field_list field
                      | field_list COMMA field"""
        p[0] = p[1] + [p[len(p) - 1]]

    def p_field(self, p: yacc.YaccProduction) -> None:
        """field : IDENTIFIER COLON type_ref"""
        p[0] = FieldSpec(name=p[1], type_ref=p[3])

    def p_field_required(self, p: yacc.YaccProduction) -> None:
        """field : IDENTIFIER COLON type_ref BANG"""
        p[0] = FieldSpec(name=p[1], type_ref=p[3], is_required=True)

    def p_type_ref_simple(self, p: yacc.YaccProduction) -> None:
        """type_ref : IDENTIFIER"""
        p[0] = TypeRef(name=p[1])

    def p_type_ref_list(self, p: yacc.YaccProduction) -> None:
        """type_ref : IDENTIFIER LBRACKET RBRACKET"""
        p[0] = TypeRef(name=p[1], is_list=True)

    def p_enum_def(self, p: yacc.YaccProduction) -> None:
        """enum_def : ENUM IDENTIFIER LBRACE value_list RBRACE
                    | ENUM IDENTIFIER LBRACE value_list COMMA RBRACE"""
        p[0] = EnumSpec(name=p[2], values=p[4])

    def p_value_list_single(self, p: yacc.YaccProduction) -> None:
        """value_list : IDENTIFIER"""
        p[0] = [p[1]]

    def p_value_list_multiple(self, p: yacc.YaccProduction) -> None:
        """value_list : value_list IDENTIFIER
                      | value_list COMMA IDENTIFIER"""
        p[0] = p[1] + [p[len(p) - 1]]

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Syntax error at '{p.value}' (line {p.lineno})")
        else:
            raise SyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> Datamodel:
        """Parse datamodel definitions and return a Datamodel."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        if not data.strip():
            return Datamodel()

        self.lexer.lexer.lineno = 1
        specs = self.parser.parse(data, lexer=self.lexer.lexer) or []
        return self._resolve_specs(specs)

    def _resolve_specs(self, specs: list[ModelSpec | EnumSpec]) -> Datamodel:
        """Resolve field kinds once every model and enum name is known."""
        kinds: dict[str, FieldKind] = {}
        for spec in specs:
            if spec.name in kinds:
                raise ValueError(f"Type '{spec.name}' is already defined")
            kinds[spec.name] = (
                FieldKind.RELATION if isinstance(spec, ModelSpec) else FieldKind.ENUM
            )

        models: list[Model] = []
        enums: list[EnumType] = []
        for spec in specs:
            if isinstance(spec, EnumSpec):
                enums.append(EnumType(name=spec.name, values=tuple(spec.values)))
                continue

            fields: list[Field] = []
            seen: set[str] = set()
            for fspec in spec.fields:
                if fspec.name in seen:
                    raise ValueError(f"Field '{fspec.name}' defined twice in model '{spec.name}'")
                seen.add(fspec.name)
                fields.append(
                    Field(
                        name=fspec.name,
                        type=fspec.type_ref.name,
                        kind=kinds.get(fspec.type_ref.name, FieldKind.SCALAR),
                        is_list=fspec.type_ref.is_list,
                        is_required=fspec.is_required,
                    )
                )
            models.append(Model(name=spec.name, fields=tuple(fields)))

        return Datamodel(models=tuple(models), enums=tuple(enums))
