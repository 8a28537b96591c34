"""
Tests for table topology and the primary key schema builder.
"""

import pytest
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from dynamodb_schema.exceptions import (
    InvalidKeySpecificationError,
    KeyTopologyMismatchError,
    KeyValueTypeError,
    MissingAttributeValueError,
)
from dynamodb_schema.models import (
    AttributeType,
    AutoGenerateKeySpec,
    ExplicitKeySpec,
    KeySpecification,
    Table,
    build_primary_key_schema,
)


class TestTable:
    """Test Table topology."""

    def test_simple_table(self, simple_table):
        assert simple_table.uses_composite_key() is False

    def test_composite_table(self, composite_table):
        assert composite_table.uses_composite_key() is True

    def test_table_is_immutable(self, simple_table):
        with pytest.raises(PydanticValidationError):
            simple_table.sort_key = "SK"

    def test_empty_names_rejected(self):
        with pytest.raises(PydanticValidationError):
            Table(name="")
        with pytest.raises(PydanticValidationError):
            Table(name="t", sort_key="")


class TestAttributeType:
    """Test scalar kind checks."""

    def test_number_excludes_bool(self):
        assert AttributeType.NUMBER.matches(1)
        assert AttributeType.NUMBER.matches(1.5)
        assert not AttributeType.NUMBER.matches(True)

    def test_string_and_boolean(self):
        assert AttributeType.STRING.matches("x")
        assert not AttributeType.STRING.matches(1)
        assert AttributeType.BOOLEAN.matches(False)
        assert not AttributeType.BOOLEAN.matches(0)


class TestKeySpecification:
    """Test the key specification tagged union."""

    def test_discriminated_union(self):
        adapter = TypeAdapter(KeySpecification)

        auto = adapter.validate_python({"kind": "auto"})
        explicit = adapter.validate_python({"kind": "explicit", "partition_key": "USER#{{id}}"})

        assert isinstance(auto, AutoGenerateKeySpec)
        assert isinstance(explicit, ExplicitKeySpec)
        assert explicit.sort_key is None

    def test_empty_patterns_rejected(self):
        with pytest.raises(PydanticValidationError):
            ExplicitKeySpec(partition_key="")
        with pytest.raises(PydanticValidationError):
            ExplicitKeySpec(partition_key="PK", sort_key="")


class TestBuildPrimaryKeySchema:
    """Test build_primary_key_schema."""

    def test_simple_table_schema(self, simple_table):
        schema = build_primary_key_schema(
            table=simple_table,
            key_spec=ExplicitKeySpec(partition_key="USER#{{id}}"),
            attributes={"id": AttributeType.STRING, "name": AttributeType.STRING},
        )

        assert schema.sort_key is None
        assert schema.partition_key.name == "PK"
        assert schema.partition_key.placeholders == ("id",)
        assert schema.attributes == {"id": AttributeType.STRING}
        assert schema.resolve({"id": "42"}) == {"PK": "USER#42"}

    def test_composite_table_schema(self, composite_table):
        schema = build_primary_key_schema(
            table=composite_table,
            key_spec=ExplicitKeySpec(partition_key="ORG#{{org}}", sort_key="USER#{{id}}"),
            attributes={"org": AttributeType.STRING, "id": AttributeType.NUMBER},
        )

        assert schema.sort_key is not None
        assert schema.placeholders == ["org", "id"]
        assert schema.resolve({"org": "acme", "id": 7}) == {"PK": "ORG#acme", "SK": "USER#7"}

    def test_sort_key_on_simple_table_rejected(self, simple_table):
        with pytest.raises(KeyTopologyMismatchError) as exc_info:
            build_primary_key_schema(
                table=simple_table,
                key_spec=ExplicitKeySpec(partition_key="USER#{{id}}", sort_key="USER#{{id}}"),
                attributes={"id": AttributeType.STRING},
            )

        assert exc_info.value.table_name == "simple_table"
        assert "simple key" in str(exc_info.value)

    def test_missing_sort_key_on_composite_table_rejected(self, composite_table):
        with pytest.raises(KeyTopologyMismatchError, match="composite key"):
            build_primary_key_schema(
                table=composite_table,
                key_spec=ExplicitKeySpec(partition_key="USER#{{id}}"),
                attributes={"id": AttributeType.STRING},
            )

    def test_undeclared_placeholder_rejected(self, simple_table):
        with pytest.raises(MissingAttributeValueError) as exc_info:
            build_primary_key_schema(
                table=simple_table,
                key_spec=ExplicitKeySpec(partition_key="USER#{{email}}"),
                attributes={"id": AttributeType.STRING},
            )

        assert exc_info.value.attribute_name == "email"

    def test_auto_generate_spec_rejected(self, simple_table):
        with pytest.raises(InvalidKeySpecificationError):
            build_primary_key_schema(
                table=simple_table,
                key_spec=AutoGenerateKeySpec(),
                attributes={},
            )

    def test_literal_key(self, composite_table):
        schema = build_primary_key_schema(
            table=composite_table,
            key_spec=ExplicitKeySpec(partition_key="CONFIG", sort_key="GLOBAL"),
            attributes={},
        )

        assert schema.placeholders == []
        assert schema.resolve({}) == {"PK": "CONFIG", "SK": "GLOBAL"}

    def test_deterministic(self, composite_table):
        kwargs = dict(
            table=composite_table,
            key_spec=ExplicitKeySpec(partition_key="USER#{{id}}", sort_key="USER#{{id}}"),
            attributes={"id": AttributeType.STRING},
        )

        first = build_primary_key_schema(**kwargs)
        second = build_primary_key_schema(**kwargs)

        assert first == second
        assert first.resolve({"id": "1"}) == second.resolve({"id": "1"})


class TestResolve:
    """Test KeySchema.resolve validation."""

    @pytest.fixture
    def schema(self, simple_table):
        return build_primary_key_schema(
            table=simple_table,
            key_spec=ExplicitKeySpec(partition_key="ITEM#{{sku}}#{{count}}"),
            attributes={"sku": AttributeType.STRING, "count": AttributeType.NUMBER},
        )

    def test_missing_value(self, schema):
        with pytest.raises(MissingAttributeValueError, match="count"):
            schema.resolve({"sku": "A1"})

    def test_type_mismatch(self, schema):
        with pytest.raises(KeyValueTypeError) as exc_info:
            schema.resolve({"sku": "A1", "count": "three"})

        assert exc_info.value.attribute_name == "count"
        assert exc_info.value.expected_type == "NUMBER"

    def test_can_resolve(self, schema):
        assert schema.can_resolve({"sku": "A1", "count": 3})
        assert not schema.can_resolve({"sku": "A1"})
