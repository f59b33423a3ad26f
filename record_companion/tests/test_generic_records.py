import pytest

from record_companion.runtime import ConversionMismatch, EnumCompanion


@pytest.fixture
def measurements(load_companion, load_declaration):
    return load_companion(load_declaration("measurements.json"))


def test_generic_record_accessors(measurements):
    Field = measurements.TaggedField
    Value = measurements.TaggedValue
    record = measurements.Tagged[int](label="x", data=1, history=[0, 1])

    assert measurements.Tagged.fields() == (Field.Label, Field.Data, Field.History)
    assert record.value(Field.Data) == Value.Data(1)

    record.update(Value.Data(2))
    assert record.data == 2
    assert record.as_values() == [Value.Label("x"), Value.Data(2), Value.History([0, 1])]


def test_generic_record_binds_interface(measurements):
    assert issubclass(measurements.Tagged, EnumCompanion)


def test_generic_fields_have_no_conversion(measurements):
    Field = measurements.TaggedField
    Value = measurements.TaggedValue

    with pytest.raises(ConversionMismatch):
        Value.Data(1).try_into(int)
    with pytest.raises(ConversionMismatch):
        Value.try_from_pair((Field.Data, 1))
    with pytest.raises(ConversionMismatch):
        Value.try_from_pair((Field.History, [1]), list[int])


def test_non_generic_fields_of_generic_record_convert(measurements):
    Field = measurements.TaggedField
    Value = measurements.TaggedValue

    assert Value.Label("x").try_into(str) == "x"
    assert Value.try_from_pair((Field.Label, "y")) == Value.Label("y")


def test_generic_metadata_keeps_type_text(measurements):
    Field = measurements.TaggedField

    assert Field.Data.type_name == "T"
    assert Field.History.type_name == "list[T]"


def test_generic_conversion_table_skips_generic_types(load_declaration):
    from record_companion import generate_companion

    code = generate_companion(load_declaration("measurements.json"))

    assert "_TAGGED_CONVERSIONS = conversion_table(\n    (str, (TaggedField.Label,)),\n)" in code
    assert "class Tagged(EnumCompanion[TaggedField, TaggedValue[T]], Generic[T]):" in code
    assert "class TaggedValue(Generic[T]):" in code
    assert 'T = TypeVar("T")' in code
