"""Tests for name mangling and data type inference."""

import pytest

from ormrel.exceptions import InvalidNamingError, OrmRelError
from ormrel.generator.naming import (
    infer_primitive,
    reference_mode_token,
    role_player_name,
    role_type,
    to_snake_case,
)
from ormrel.orm import DataType, FactType, ObjectKind, ObjectType, ORMModel, Role


@pytest.mark.parametrize(
    "name, expected",
    [
        ("EventRegistration", "event_registration"),
        ("Person", "person"),
        ("VipAttendee", "vip_attendee"),
        ("Id", "id"),
        ("PersonHasPersonId", "person_has_person_id"),
        ("Event2Venue", "event2_venue"),
    ],
)
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


@pytest.mark.parametrize("name", ["personId", "", "_Person", "person"])
def test_to_snake_case_rejects_non_pascal_case(name):
    with pytest.raises(InvalidNamingError) as exc_info:
        to_snake_case(name)
    assert str(exc_info.value) == f"Expected string '{name}' to be in PascalCase"


def test_invalid_naming_is_an_ormrel_error():
    with pytest.raises(OrmRelError):
        to_snake_case("personId")


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("VariableLengthTextDataType", "String"),
        ("FixedLengthTextDataType", "String"),
        ("AutoCounterNumericDataType", "String"),
        ("SignedIntegerNumericDataType", "Int"),
        ("UnsignedIntegerNumericDataType", "Int"),
        ("UnsignedSmallIntegerNumericDataType", "Int"),
        ("TrueOrFalseLogicalDataType", "Int"),
        ("TimeTemporalDataType", "Int"),
        ("DateTemporalDataType", "Date"),
        ("DateAndTimeTemporalDataType", "DateTime"),
        ("DecimalNumericDataType", "String"),
    ],
)
def test_infer_primitive(kind, expected):
    assert infer_primitive(DataType(id="_DT", kind=kind)) == expected


def test_infer_primitive_without_data_type():
    assert infer_primitive(None) == "String"


def test_role_type_uses_entity_name_or_primitive(orm_model):
    assert role_type("_R1", orm_model).name == "Event"
    assert role_type("_R2", orm_model).name == "String"
    assert role_type("_R4", orm_model).name == "Date"
    assert role_type("_R8", orm_model).name == "Int"


@pytest.mark.parametrize(
    "mode, expected",
    [
        ("Id", "id"),
        ("", ""),
        ("code", "code"),
        ("ExternalId", "external_id"),
        ("ISBN", "isbn"),
        ("ISBNCode", "isbn_code"),
    ],
)
def test_reference_mode_token(mode, expected):
    entity = ObjectType(
        id="_E", name="Book", kind=ObjectKind.ENTITY, reference_mode=mode
    )
    assert reference_mode_token(entity) == expected


def test_role_player_name(orm_model):
    assert role_player_name("_R2", orm_model) == "event_code"


def test_role_player_name_requires_player():
    model = ORMModel(
        fact_types=[FactType(id="_F", name="Dangling", roles=(Role("_R", "_F"),))]
    )
    with pytest.raises(OrmRelError, match="no role player"):
        role_player_name("_R", model)
