"""
Test configuration and fixtures for DynamoDB Schema.

Provides tables of both key topologies, a registry of sample entities, and
moto-backed DynamoDB tables for the gateway and unique record writer.
"""

import boto3
import pytest
from moto import mock_aws

from dynamodb_schema import (
    AttributeOptions,
    AttributeType,
    DynamoDBConfig,
    EntityOptions,
    EntityRegistry,
    ExplicitKeySpec,
    Table,
)


@pytest.fixture
def schema_config():
    """Configuration with explicit values, independent of the environment."""
    return DynamoDBConfig(
        aws_access_key_id="test_key",
        aws_secret_access_key="test_secret",
        region_name="us-east-1",
        endpoint_url=None,  # Use default AWS endpoint for moto
        environment="test",
        table_prefix="",
        attribute_prefix="DYNAMO_ATTRIBUTE_PREFIX",
    )


@pytest.fixture
def simple_table():
    """Table keyed by partition key only."""
    return Table(name="simple_table", partition_key="PK")


@pytest.fixture
def composite_table():
    """Table keyed by partition key and sort key."""
    return Table(name="composite_table", partition_key="PK", sort_key="SK")


@pytest.fixture
def user_options(composite_table):
    """User entity with a unique email on a composite-key table."""
    return EntityOptions(
        name="User",
        table=composite_table,
        primary_key=ExplicitKeySpec(partition_key="USER#{{id}}", sort_key="USER#{{id}}"),
        attributes=[
            AttributeOptions(name="id", type=AttributeType.STRING),
            AttributeOptions(name="email", type=AttributeType.STRING, unique=True),
            AttributeOptions(name="active", type=AttributeType.BOOLEAN, default=True),
        ],
    )


@pytest.fixture
def order_options(composite_table):
    """Order entity declaring a unique attribute named like one on another entity."""
    return EntityOptions(
        name="Order",
        table=composite_table,
        primary_key=ExplicitKeySpec(partition_key="ORDER#{{id}}", sort_key="ORDER#{{id}}"),
        attributes=[
            AttributeOptions(name="id", type=AttributeType.STRING),
            AttributeOptions(name="code", type=AttributeType.STRING, unique=True),
        ],
    )


@pytest.fixture
def registry(schema_config, user_options, order_options):
    """Registry with the User and Order entities registered."""
    registry = EntityRegistry(schema_config)
    registry.register(user_options)
    registry.register(order_options)
    return registry


@pytest.fixture
def mock_dynamodb_resource():
    """Mock DynamoDB resource."""
    with mock_aws():
        yield boto3.resource('dynamodb', region_name='us-east-1')


@pytest.fixture
def composite_dynamodb_table(mock_dynamodb_resource):
    """Create the composite-key table in moto."""
    return mock_dynamodb_resource.create_table(
        TableName='composite_table',
        KeySchema=[
            {'AttributeName': 'PK', 'KeyType': 'HASH'},
            {'AttributeName': 'SK', 'KeyType': 'RANGE'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'PK', 'AttributeType': 'S'},
            {'AttributeName': 'SK', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )


@pytest.fixture
def simple_dynamodb_table(mock_dynamodb_resource):
    """Create the simple-key table in moto."""
    return mock_dynamodb_resource.create_table(
        TableName='simple_table',
        KeySchema=[
            {'AttributeName': 'PK', 'KeyType': 'HASH'}
        ],
        AttributeDefinitions=[
            {'AttributeName': 'PK', 'AttributeType': 'S'}
        ],
        BillingMode='PAY_PER_REQUEST'
    )
