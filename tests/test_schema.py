"""Tests for schema validation."""

import pytest

from quire import schema as s
from quire.value import Value, to_value


def leaf_messages(err):
    return [leaf.message for leaf in err.leaves()]


# =============================================================================
# Bounds, options and aggregation
# =============================================================================


class TestObjectSchema:
    def test_bounds_and_options(self):
        """A failing field yields one child under its path mentioning the rule."""
        schema = s.object().field("count", s.int().required().min(3).options([3, 4, 5]))

        with pytest.raises(s.ValidError) as exc:
            schema.validate({"count": 2})

        err = exc.value
        assert len(err.errors) == 1
        child = err.errors[0]
        assert str(child.path) == "count"
        assert "min" in child.message

        result = schema.validate({"count": 4})
        assert result.get("count") == Value.from_i64(4)

    def test_two_failing_fields(self):
        """Each failing field becomes its own child error."""
        schema = s.object().fields({"a": s.string().required(), "b": s.int().max(1)})

        with pytest.raises(s.ValidError) as exc:
            schema.validate({"b": 5})

        paths = [str(e.path) for e in exc.value.errors]
        assert paths == ["a", "b"]

    def test_unexpected_field(self):
        schema = s.object().field("a", s.int())

        with pytest.raises(s.ValidError) as exc:
            schema.validate({"a": 1, "extra": True})

        (child,) = exc.value.errors
        assert str(child.path) == "extra"
        assert child.message == "unexpected field 'extra'"

    def test_index_key_is_unexpected(self):
        """An integer key never matches a declared field of the same text."""
        schema = s.object().field("0", s.int())

        with pytest.raises(s.ValidError) as exc:
            schema.validate({0: 5})

        (child,) = exc.value.errors
        assert str(child.path) == "0"
        assert child.message == "unexpected field '0'"
        assert schema.validate({"0": 5}).as_struct().field("0") == Value.from_i64(5)

    def test_missing_optional_field(self):
        """Missing fields validate as null and are left out of the result."""
        result = s.object().field("a", s.int()).validate({})
        assert result.is_struct()
        assert len(result) == 0

    def test_validate_is_idempotent(self):
        schema = s.object().fields(
            {
                "name": s.string().min(1),
                "tags": s.array().items(s.string()),
                "score": s.number(),
            }
        )
        first = schema.validate({"name": "ada", "tags": ["x"], "score": 1.5})
        assert schema.validate(first) == first

    def test_render_tree(self):
        schema = s.object().field("count", s.int().min(3))

        with pytest.raises(s.ValidError) as exc:
            schema.validate({"count": 1})

        text = str(exc.value)
        assert text.splitlines()[0] == "Error[object] @ /"
        assert "Error[min] @ /count" in text
        assert "expected min of 3, received 1" in text


class TestRuleSemantics:
    def test_rules_run_in_phase_order(self):
        """Presence rules run before constraints regardless of insertion order."""
        schema = s.string().min(3).required()
        assert [rule.key for rule in schema.rules.ordered()] == ["required", "min"]

        with pytest.raises(s.ValidError) as exc:
            schema.validate(None)
        assert [leaf.rule for leaf in exc.value.leaves()] == ["required"]

    def test_failures_are_collected(self):
        """A failing rule does not stop the rules after it."""
        with pytest.raises(s.ValidError) as exc:
            s.string().min(5).max(1).validate("abc")
        assert [leaf.rule for leaf in exc.value.leaves()] == ["min", "max"]

    def test_length_bounds(self):
        assert s.string().min(2).is_valid("ab")
        assert not s.string().max(2).is_valid("abc")
        assert s.array().max(2).is_valid([1, 2])

        with pytest.raises(s.ValidError) as exc:
            s.array().min(2).validate([1])
        assert leaf_messages(exc.value) == ["expected min length of 2, received 1"]

    def test_bound_not_applicable_to_bool(self):
        with pytest.raises(s.ValidError) as exc:
            s.any().rule(s.Min(to_value(1).as_number())).validate(True)
        assert leaf_messages(exc.value) == ["min is not applicable to bool"]

    def test_null_passes_constraints(self):
        assert s.int().min(3).validate(None).is_null()
        assert s.string().pattern("^a").validate(None).is_null()

    def test_required_false_is_noop(self):
        schema = s.string().required(False)
        assert schema.validate(None).is_null()
        assert not schema.is_required()

    def test_equals(self):
        with pytest.raises(s.ValidError) as exc:
            s.string().equals("x").validate("y")
        assert leaf_messages(exc.value) == ["y is not equal to x"]

    def test_options(self):
        with pytest.raises(s.ValidError) as exc:
            s.int().options([1, 2]).validate(3)
        assert leaf_messages(exc.value) == ["must be one of [1, 2]"]

    def test_pattern(self):
        schema = s.string().pattern(r"^a+$")
        assert schema.is_valid("aaa")

        with pytest.raises(s.ValidError) as exc:
            schema.validate("b")
        assert leaf_messages(exc.value) == ["'b' does not match pattern '^a+$'"]

    def test_invalid_pattern(self):
        with pytest.raises(s.ValidError) as exc:
            s.string().pattern("(").validate("x")
        assert exc.value.errors[0].rule == "pattern"

    def test_items(self):
        """Element errors are reported at their index."""
        schema = s.array().items(s.int().min(0))

        with pytest.raises(s.ValidError) as exc:
            schema.validate([1, -1, "x"])

        assert [str(e.path) for e in exc.value.errors] == ["1", "2"]
        assert leaf_messages(exc.value.errors[1]) == ["expected int"]


class TestTypes:
    @pytest.mark.parametrize(
        "schema, good, bad",
        [
            (s.string(), "a", 1),
            (s.bool(), True, "true"),
            (s.number(), 1.5, "1"),
            (s.int(), 1, 1.5),
            (s.float(), 1.5, 1),
            (s.array(), [1], (1,)),
            (s.object(), {"a": 1}, [1]),
        ],
    )
    def test_type_check(self, schema, good, bad):
        assert schema.is_valid(good)
        assert schema.is_valid(None)

        with pytest.raises(s.ValidError) as exc:
            schema.validate(bad)
        (leaf,) = exc.value.leaves()
        assert leaf.rule == "type"
        assert leaf.message == f"expected {schema.type_name}"

    def test_any_accepts_everything(self):
        for data in (None, 1, "a", [1], {"a": 1}, (1, 2)):
            assert s.any().is_valid(data)

    def test_int_accepts_unsigned(self):
        assert s.int().is_valid(Value.from_u8(1))

    def test_number_narrowing(self):
        """int() and float() keep the rules built so far."""
        narrowed = s.number().min(1).int()
        assert isinstance(narrowed, s.IntSchema)
        assert "min" in narrowed.rules

    def test_builders_do_not_mutate(self):
        base = s.string()
        base.min(1).required()
        assert len(base.rules) == 0

    def test_same_rule_replaces(self):
        schema = s.int().min(1).max(9).min(2)
        assert [rule.key for rule in schema.rules] == ["min", "max"]
        assert schema.rules.get("min") == s.Min(to_value(2).as_number())


def test_error_to_dict():
    with pytest.raises(s.ValidError) as exc:
        s.object().field("a", s.string().required()).validate({})

    assert exc.value.to_dict() == {
        "rule": "object",
        "path": "",
        "errors": [
            {
                "rule": "string",
                "path": "a",
                "errors": [{"rule": "required", "path": "a", "message": "required"}],
            }
        ],
    }
