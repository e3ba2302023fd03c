"""Tests for the built-in operator, predicate and function resolvers."""

import pytest

from typemodel import DomainModel, TypeResolutionError
from typemodel.resolvers.base import (
    FunctionTypeResolver,
    OperationTypeResolver,
    validate_argument_types,
)
from typemodel.resolvers.builtin import (
    BUILTIN_FACTORIES,
    DeclaredResultFunctionTypeResolver,
    FirstArgumentFunctionTypeResolver,
    FixedFunctionTypeResolver,
    FixedOperationTypeResolver,
    OperandRestrictedOperationTypeResolver,
    OperandRestrictedPredicateTypeResolver,
    RestrictedOperationTypeResolver,
    RestrictedPredicateTypeResolver,
    WidestFunctionTypeResolver,
    WidestOperationTypeResolver,
    WidestPredicateTypeResolver,
)

NUMERIC = ["Integer", "Long", "Double"]


class TestFixed:
    def test_ignores_operands(self, model: DomainModel) -> None:
        resolver = FixedOperationTypeResolver("Boolean")
        assert resolver.resolve_type(model, [model.types["Person"]]) is model.types["Boolean"]
        assert resolver.resolve_type(model, []) is model.types["Boolean"]

    def test_unknown_type_yields_none(self, model: DomainModel) -> None:
        assert FixedOperationTypeResolver("Nope").resolve_type(model, []) is None


class TestRestricted:
    def test_allowed_operands(self, model: DomainModel) -> None:
        resolver = RestrictedOperationTypeResolver("Boolean", ["Integer", "Long"])
        t = model.types
        assert resolver.resolve_type(model, [t["Integer"], t["Long"]]) is t["Boolean"]

    def test_rejected_operand_message(self, model: DomainModel) -> None:
        resolver = RestrictedOperationTypeResolver("Boolean", ["Integer", "Long"])
        t = model.types
        with pytest.raises(TypeResolutionError) as excinfo:
            resolver.resolve_type(model, [t["Integer"], t["String"]])
        assert str(excinfo.value) == (
            "The operation operand at index 1 with the domain type 'String' is unsupported! "
            "Expected one of the following types: [Integer, Long]"
        )
        assert excinfo.value.index == 1
        assert excinfo.value.actual == "String"
        assert excinfo.value.expected == ("Integer", "Long")

    def test_predicate_wording(self, model: DomainModel) -> None:
        resolver = RestrictedPredicateTypeResolver("Boolean", ["Integer"])
        with pytest.raises(TypeResolutionError, match="The predicate operand at index 0"):
            resolver.resolve_type(model, [model.types["Double"]])

    def test_unknown_operand(self, model: DomainModel) -> None:
        resolver = RestrictedOperationTypeResolver("Boolean", ["Integer"])
        with pytest.raises(TypeResolutionError, match="domain type 'None'"):
            resolver.resolve_type(model, [None])

    def test_no_operands(self, model: DomainModel) -> None:
        resolver = RestrictedOperationTypeResolver("Boolean", ["Integer"])
        assert resolver.resolve_type(model, []) is model.types["Boolean"]


class TestOperandRestricted:
    def test_per_position(self, model: DomainModel) -> None:
        resolver = OperandRestrictedOperationTypeResolver(
            "String", [["String"], ["Integer", "Long"]]
        )
        t = model.types
        assert resolver.resolve_type(model, [t["String"], t["Long"]]) is t["String"]

    def test_rejected_position(self, model: DomainModel) -> None:
        resolver = OperandRestrictedPredicateTypeResolver(
            "Boolean", [["String"], ["Integer"]]
        )
        t = model.types
        with pytest.raises(TypeResolutionError) as excinfo:
            resolver.resolve_type(model, [t["String"], t["String"]])
        assert "predicate operand at index 1" in str(excinfo.value)
        assert excinfo.value.expected == ("Integer",)

    def test_operand_count_mismatch(self, model: DomainModel) -> None:
        resolver = OperandRestrictedOperationTypeResolver("String", [["String"], ["String"]])
        with pytest.raises(TypeResolutionError, match="expects 2 operand"):
            resolver.resolve_type(model, [model.types["String"]])


class TestWidest:
    def test_minimum_index_wins(self, model: DomainModel) -> None:
        resolver = WidestOperationTypeResolver(NUMERIC)
        t = model.types
        assert resolver.resolve_type(model, [t["Long"], t["Integer"]]) is t["Integer"]
        assert resolver.resolve_type(model, [t["Double"], t["Long"]]) is t["Long"]

    def test_no_operands_yields_first(self, model: DomainModel) -> None:
        assert WidestOperationTypeResolver(NUMERIC).resolve_type(model, []) is model.types[
            "Integer"
        ]

    def test_empty_ordering(self, model: DomainModel) -> None:
        assert WidestOperationTypeResolver([]).resolve_type(model, []) is None

    def test_operand_outside_ordering(self, model: DomainModel) -> None:
        resolver = WidestPredicateTypeResolver(NUMERIC)
        with pytest.raises(TypeResolutionError) as excinfo:
            resolver.resolve_type(model, [model.types["Integer"], model.types["String"]])
        assert str(excinfo.value) == (
            "The predicate operand at index 1 with the domain type 'String' is unsupported! "
            "Expected one of the following types: [Integer, Long, Double]"
        )


class TestFunctionResolvers:
    def test_declared_result(self, model: DomainModel) -> None:
        concat = model.functions["concat"]
        string = model.types["String"]
        resolver = DeclaredResultFunctionTypeResolver()
        assert resolver.resolve_type(model, concat, [string, string]) is string

    def test_first_argument(self, model: DomainModel) -> None:
        coalesce = model.functions["coalesce"]
        t = model.types
        resolver = FirstArgumentFunctionTypeResolver()
        assert resolver.resolve_type(model, coalesce, [t["Double"], t["Integer"]]) is t["Double"]
        assert resolver.resolve_type(model, coalesce, []) is None

    def test_fixed(self, model: DomainModel) -> None:
        now = model.functions["now"]
        assert FixedFunctionTypeResolver("Long").resolve_type(model, now, []) is model.types[
            "Long"
        ]

    def test_widest(self, model: DomainModel) -> None:
        abs_fn = model.functions["abs"]
        resolver = WidestFunctionTypeResolver(NUMERIC)
        assert resolver.resolve_type(model, abs_fn, [model.types["Long"]]) is model.types["Long"]

    def test_widest_rejects_argument(self, model: DomainModel) -> None:
        abs_fn = model.functions["abs"]
        resolver = WidestFunctionTypeResolver(NUMERIC)
        with pytest.raises(TypeResolutionError) as excinfo:
            resolver.resolve_type(model, abs_fn, [model.types["String"]])
        assert excinfo.value.function == "abs"
        assert excinfo.value.argument == "number"
        assert "of function 'abs'" in str(excinfo.value)

    def test_protocols(self) -> None:
        assert isinstance(WidestOperationTypeResolver(NUMERIC), OperationTypeResolver)
        assert isinstance(FirstArgumentFunctionTypeResolver(), FunctionTypeResolver)


class TestValidateArgumentTypes:
    def test_mismatch_message(self, model: DomainModel) -> None:
        concat = model.functions["concat"]
        t = model.types
        with pytest.raises(TypeResolutionError) as excinfo:
            validate_argument_types(model, concat, [t["String"], t["Integer"]])
        assert str(excinfo.value) == (
            "Unsupported argument type 'Integer' for argument "
            "'DomainFunctionArgument{name='b', index=1, type=String}' "
            "of function 'concat'! Expected type: String"
        )
        assert excinfo.value.index == 1
        assert excinfo.value.expected == ("String",)

    def test_unknown_supplied_type_passes(self, model: DomainModel) -> None:
        concat = model.functions["concat"]
        validate_argument_types(model, concat, [None, model.types["String"]])

    def test_untyped_argument_passes(self, model: DomainModel) -> None:
        coalesce = model.functions["coalesce"]
        validate_argument_types(model, coalesce, [model.types["Person"]])

    def test_generic_collection_matches_any_collection(self, model: DomainModel) -> None:
        size = model.functions["size"]
        validate_argument_types(model, size, [model.types["Collection[String]"]])

    def test_collection_against_basic_fails(self, model: DomainModel) -> None:
        size = model.functions["size"]
        with pytest.raises(TypeResolutionError):
            validate_argument_types(model, size, [model.types["String"]])

    def test_extra_arguments_not_checked(self, model: DomainModel) -> None:
        coalesce = model.functions["coalesce"]
        t = model.types
        validate_argument_types(model, coalesce, [t["String"], t["Integer"], t["Person"]])


def test_builtin_factory_names() -> None:
    assert set(BUILTIN_FACTORIES) == {
        "FixedDomainOperationTypeResolver",
        "RestrictedDomainOperationTypeResolver",
        "OperandRestrictedDomainOperationTypeResolver",
        "WidestDomainOperationTypeResolver",
        "FixedDomainPredicateTypeResolver",
        "RestrictedDomainPredicateTypeResolver",
        "OperandRestrictedDomainPredicateTypeResolver",
        "WidestDomainPredicateTypeResolver",
        "FirstArgumentDomainFunctionTypeResolver",
        "FixedDomainFunctionTypeResolver",
        "WidestDomainFunctionTypeResolver",
    }
