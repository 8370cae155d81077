"""Tests for order-by type synthesis."""

from dmmf_transform.order import OrderInputSynthesizer
from dmmf_transform.types import Document, EnumType, InputType, Schema


def make_document(*enums: EnumType, input_types: tuple[InputType, ...] = ()) -> Document:
    return Document(schema=Schema(enums=enums, input_types=input_types))


class TestOrderInputSynthesizer:
    """Tests for OrderInputSynthesizer.run."""

    def test_user_order_by_input(self):
        """Order-by enums become single-key input types over OrderByArg."""
        document = make_document(
            EnumType(name="UserOrderByInput", values=("id_ASC", "id_DESC", "name_ASC", "name_DESC"))
        )

        result = OrderInputSynthesizer().run(document)
        order = result.document.schema.get_input_type("UserOrderByInput")

        assert order.arg_names() == ["id", "name"]
        for arg in order.args:
            assert arg.type == ("OrderByArg",)
            assert arg.is_list is False
            assert arg.is_required is False
            assert arg.is_scalar is True
        assert order.is_order_type is True
        assert order.at_least_one is True
        assert order.at_most_one is True
        assert result.rewritten == ("UserOrderByInput",)

    def test_order_enum_removed(self):
        document = make_document(EnumType(name="UserOrderByInput", values=("id_ASC", "id_DESC")))

        enums = OrderInputSynthesizer().run(document).document.schema.enums

        assert [e.name for e in enums] == ["OrderByArg"]

    def test_sort_direction_enum_without_order_types(self):
        """OrderByArg is emitted even when nothing is sortable."""
        result = OrderInputSynthesizer().run(make_document())

        assert result.document.schema.enums == (EnumType(name="OrderByArg", values=("asc", "desc")),)
        assert result.rewritten == ()

    def test_sort_direction_enum_emitted_once(self):
        document = make_document(
            EnumType(name="OrderByArg", values=("asc", "desc")),
            EnumType(name="UserOrderByInput", values=("id_ASC",)),
            EnumType(name="PostOrderByInput", values=("id_ASC",)),
        )

        enums = OrderInputSynthesizer().run(document).document.schema.enums

        assert [e.name for e in enums].count("OrderByArg") == 1

    def test_other_enums_pass_through(self):
        role = EnumType(name="Role", values=("ADMIN", "USER"))
        document = make_document(role, EnumType(name="UserOrderByInput", values=("id_ASC",)))

        enums = OrderInputSynthesizer().run(document).document.schema.enums

        assert enums == (EnumType(name="OrderByArg", values=("asc", "desc")), role)

    def test_only_ascending_values_counted(self):
        """Field names come from ``_ASC`` values only."""
        document = make_document(
            EnumType(name="PostOrderByInput", values=("title_DESC", "createdAt_ASC", "ASC", "rank_ASC"))
        )

        order = OrderInputSynthesizer().run(document).document.schema.get_input_type("PostOrderByInput")

        assert order.arg_names() == ["createdAt", "rank"]

    def test_field_names_with_underscores(self):
        document = make_document(EnumType(name="PostOrderByInput", values=("created_at_ASC",)))

        order = OrderInputSynthesizer().run(document).document.schema.get_input_type("PostOrderByInput")

        assert order.arg_names() == ["created_at"]

    def test_order_types_appended(self):
        where = InputType(name="UserWhereInput")
        document = make_document(
            EnumType(name="UserOrderByInput", values=("id_ASC",)),
            input_types=(where,),
        )

        input_types = OrderInputSynthesizer().run(document).document.schema.input_types

        assert [t.name for t in input_types] == ["UserWhereInput", "UserOrderByInput"]
        assert input_types[0] is where

    def test_suffix_must_end_name(self):
        """Only enums ending in OrderByInput are rewritten."""
        other = EnumType(name="OrderByInputKind", values=("id_ASC",))

        result = OrderInputSynthesizer().run(make_document(other))

        assert result.rewritten == ()
        assert other in result.document.schema.enums
