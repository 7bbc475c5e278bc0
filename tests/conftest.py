"""Shared test fixtures."""

from __future__ import annotations

import pytest

from _models import Address, ComplexModel
from pyjsonmodel import FieldSchema, Schema


@pytest.fixture
def name_schema() -> Schema:
    return Schema([
        FieldSchema(name="firstName", key="first_name"),
        FieldSchema(name="lastName", key="last_name", required=False),
    ])


@pytest.fixture
def address_schema() -> Schema:
    return Schema([
        FieldSchema(name="street"),
        FieldSchema(name="city"),
        FieldSchema(name="state"),
        FieldSchema(name="postalCode"),
    ])


@pytest.fixture
def person_schema(address_schema: Schema) -> Schema:
    return Schema([
        FieldSchema(name="firstName"),
        FieldSchema(name="lastName"),
        FieldSchema(name="phoneNumbers", repeated=True),
        FieldSchema(name="address", type="object", schema=address_schema),
    ])


@pytest.fixture
def complex_json() -> dict:
    return {
        "lastName": "Smith",
        "phoneNumbers": ["616-555-1212", "616-555-2121"],
        "firstName": "Hannible",
        "address": {
            "city": "Grand Rapids",
            "postalCode": "49506",
            "state": "MI",
            "street": "1234 Main St.",
        },
    }


@pytest.fixture
def complex_model() -> ComplexModel:
    return ComplexModel(
        firstName="Hannible",
        lastName="Smith",
        phoneNumbers=["616-555-1212", "616-555-2121"],
        address=Address(
            street="1234 Main St.",
            city="Grand Rapids",
            state="MI",
            postalCode="49506",
        ),
    )
