"""Tests for where-type synthesis."""

from dmmf_transform.types import Datamodel, Document, InputType, Schema, SchemaArg
from dmmf_transform.where import (
    WhereInputSynthesizer,
    WhereOutcome,
    is_filterable,
    operator_whitelist,
)

USER_DATAMODEL = """
model User {
  id: ID!
  name: String
  posts: Post[]
  profile: Profile
}

model Post {
  id: ID!
  title: String!
  author: User!
}

model Profile {
  id: ID!
  bio: String
}
"""


def naive_arg(name: str, *types: str) -> SchemaArg:
    return SchemaArg(name=name, type=types or ("String",), is_scalar=True)


def naive_where(entity: str, *arg_names: str) -> InputType:
    return InputType(
        name=f"{entity}WhereInput",
        args=tuple(naive_arg(n, f"{entity}WhereInput") for n in arg_names),
    )


def make_document(datamodel: str, *input_types: InputType) -> Document:
    return Document(
        datamodel=Datamodel.parse(datamodel),
        schema=Schema(input_types=input_types),
    )


class TestFieldSelection:
    """Tests for which fields get synthesized where arguments."""

    def test_filterable_fields(self):
        model = Datamodel.parse(
            """
            model Item {
              name: String
              tags: String[]
              owner: User
              parts: Part[]
            }
            model User { id: ID! }
            model Part { id: ID! }
            """
        ).get_model("Item")

        assert [f.name for f in model.fields if is_filterable(f)] == ["name", "parts"]

    def test_whitelist(self):
        model = Datamodel.parse(USER_DATAMODEL).get_model("Post")
        assert operator_whitelist(model) == ["AND", "OR", "NOT", "author"]


class TestWhereInputSynthesizer:
    """Tests for WhereInputSynthesizer.run."""

    def test_user_where_input(self):
        """The canonical User example rewrites into field filters plus whitelisted args."""
        document = make_document(
            USER_DATAMODEL, naive_where("User", "AND", "OR", "NOT", "profile")
        )

        result = WhereInputSynthesizer().run(document)
        where = result.document.schema.get_input_type("UserWhereInput")

        assert where.arg_names() == ["id", "name", "posts", "AND", "OR", "NOT", "profile"]
        assert where.get_arg("id").type == ("ID", "IDFilter")
        assert where.get_arg("name").type == ("String", "NullableStringFilter", "null")
        assert where.get_arg("posts").type == ("PostFilter",)
        assert where.get_arg("profile").is_relation_filter is True
        assert where.get_arg("AND").is_relation_filter is True
        assert where.get_arg("id").is_relation_filter is False
        assert where.is_where_type is True
        assert where.at_least_one is True

        post_filter = result.filter_types["PostFilter"]
        assert post_filter.arg_names() == ["every", "some", "none"]
        assert result.outcomes == {"UserWhereInput": WhereOutcome.TRANSFORMED}

    def test_synthesized_args_are_plain(self):
        document = make_document(USER_DATAMODEL, naive_where("User"))

        where = WhereInputSynthesizer().run(document).document.schema.get_input_type("UserWhereInput")

        for arg in where.args:
            assert arg.is_list is False
            assert arg.is_required is False
            assert arg.is_scalar is False
            assert arg.is_enum is False

    def test_non_whitelisted_args_dropped(self):
        """Naive per-field operator args are replaced by the synthesized ones."""
        document = make_document(
            USER_DATAMODEL, naive_where("User", "id_gt", "name_contains", "AND")
        )

        where = WhereInputSynthesizer().run(document).document.schema.get_input_type("UserWhereInput")

        assert "id_gt" not in where.arg_names()
        assert "name_contains" not in where.arg_names()
        assert where.arg_names()[-1] == "AND"

    def test_scalar_list_has_no_filter(self):
        document = make_document(
            "model Tagged { id: ID!, tags: String[] }", naive_where("Tagged")
        )

        result = WhereInputSynthesizer().run(document)
        where = result.document.schema.get_input_type("TaggedWhereInput")

        assert where.arg_names() == ["id"]
        assert "NullableStringFilter" not in result.filter_types

    def test_filter_types_shared_across_models(self):
        """Each filter type is appended once even when many fields use it."""
        document = make_document(
            USER_DATAMODEL,
            naive_where("User"),
            naive_where("Post"),
            naive_where("Profile"),
        )

        result = WhereInputSynthesizer().run(document)
        names = [t.name for t in result.document.schema.input_types]

        assert names.count("IDFilter") == 1
        assert names.count("NullableStringFilter") == 1
        assert names[:3] == ["UserWhereInput", "PostWhereInput", "ProfileWhereInput"]
        assert names[3:] == list(result.filter_types)

    def test_unknown_entity_passes_through(self):
        """A where-type with no matching model is left untouched."""
        orphan = naive_where("Ghost", "AND", "id_gt")
        document = make_document(USER_DATAMODEL, orphan)

        result = WhereInputSynthesizer().run(document)

        assert result.outcomes == {"GhostWhereInput": WhereOutcome.PASSTHROUGH}
        assert result.document.schema.get_input_type("GhostWhereInput") is orphan
        assert result.filter_types == {}

    def test_bare_where_input_name(self):
        """A type named just ``WhereInput`` resolves to no model."""
        document = make_document(USER_DATAMODEL, InputType(name="WhereInput"))

        result = WhereInputSynthesizer().run(document)

        assert result.outcomes == {"WhereInput": WhereOutcome.PASSTHROUGH}

    def test_other_input_types_untouched(self):
        create = InputType(name="UserCreateInput", args=(naive_arg("name"),))
        document = make_document(USER_DATAMODEL, create, naive_where("User"))

        result = WhereInputSynthesizer().run(document)

        assert result.document.schema.input_types[0] is create
        assert "UserCreateInput" not in result.outcomes

    def test_enum_field_filter(self):
        document = make_document(
            """
            enum Role { ADMIN, USER }
            model Account { role: Role! }
            """,
            naive_where("Account"),
        )

        result = WhereInputSynthesizer().run(document)
        where = result.document.schema.get_input_type("AccountWhereInput")

        assert where.get_arg("role").type == ("Role", "RoleFilter")
        assert "lt" in result.filter_types["RoleFilter"].arg_names()

    def test_cache_is_not_mutated(self):
        """The incoming cache is copied and returned extended."""
        seed = {"IDFilter": InputType(name="IDFilter", at_least_one=True)}
        document = make_document(USER_DATAMODEL, naive_where("User"))

        result = WhereInputSynthesizer().run(document, cache=seed)

        assert list(seed) == ["IDFilter"]
        assert result.filter_types["IDFilter"] is seed["IDFilter"]
        assert "NullableStringFilter" in result.filter_types

    def test_input_document_unchanged(self):
        naive = naive_where("User", "AND")
        document = make_document(USER_DATAMODEL, naive)

        result = WhereInputSynthesizer().run(document)

        assert document.schema.input_types == (naive,)
        assert result.document.datamodel is document.datamodel
