import re
from typing import Optional

from ormrel.exceptions import InvalidNamingError, OrmRelError
from ormrel.orm.models import DataType, ObjectType, ORMModel
from ormrel.rel.ast import RelType

PASCAL_CASE_WORD = re.compile(r"^[A-Z][^A-Z]*")

# An acronym run is a word of its own: "ISBNCode" -> ISBN, Code
LABEL_WORD = re.compile(r"[A-Z]+(?![a-z])|[A-Z][^A-Z]*")

STRING_DATA_TYPES = {
    "VariableLengthTextDataType",
    "FixedLengthTextDataType",
    "AutoCounterNumericDataType",
}

INT_DATA_TYPES = {
    "SignedIntegerNumericDataType",
    "UnsignedIntegerNumericDataType",
    "UnsignedSmallIntegerNumericDataType",
    "TrueOrFalseLogicalDataType",
    "TimeTemporalDataType",
}

DATE_DATA_TYPES = {"DateTemporalDataType"}

DATETIME_DATA_TYPES = {"DateAndTimeTemporalDataType"}


def to_snake_case(name: str) -> str:
    """
    Maps a PascalCase ORM name to a snake_case Rel name.

    Each word is a capital letter followed by non-capitals, so
    "EventRegistration" becomes "event_registration".

    Raises:
        InvalidNamingError: if the name does not start with a capital letter
    """
    words = []
    remainder = name
    while remainder:
        match = PASCAL_CASE_WORD.match(remainder)
        if match is None:
            raise InvalidNamingError(name)
        words.append(match.group(0).lower())
        remainder = remainder[match.end() :]
    if not words:
        raise InvalidNamingError(name)
    return "_".join(words)


def infer_primitive(data_type: Optional[DataType]) -> str:
    """Rel primitive type for a conceptual data type; unknown types map to String"""
    if data_type is None or data_type.kind in STRING_DATA_TYPES:
        return "String"
    if data_type.kind in INT_DATA_TYPES:
        return "Int"
    if data_type.kind in DATE_DATA_TYPES:
        return "Date"
    if data_type.kind in DATETIME_DATA_TYPES:
        return "DateTime"
    return "String"


def role_type(role_id: str, model: ORMModel) -> RelType:
    """Rel type of the object that plays the role"""
    entity = model.entity_that_plays(role_id)
    if entity is not None:
        return RelType(entity.name)
    return RelType(infer_primitive(model.data_type_of_player(role_id)))


def reference_mode_token(entity: ObjectType) -> str:
    """
    Reference mode label as it appears in predicate names.

    Capitalised labels are snake-cased with acronyms kept whole ("Id" -> "id",
    "ISBN" -> "isbn", "ISBNCode" -> "isbn_code"), anything else is taken
    verbatim.
    """
    mode = entity.reference_mode
    if mode and PASCAL_CASE_WORD.match(mode):
        return "_".join(word.lower() for word in LABEL_WORD.findall(mode))
    return mode


def role_player_name(role_id: str, model: ORMModel) -> str:
    """Snake-cased name of the object playing the role"""
    player = model.role_player(role_id)
    if player is None:
        raise OrmRelError(f"Role {role_id} has no role player")
    return to_snake_case(player.name)
