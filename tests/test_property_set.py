import json

import pytest

from roomview.propertyset import PropertyAttributes, PropertySet, cleanPropertyName


def create_sample_property_set():
    props = PropertySet()
    props.addProperty("Hours", 0, attributes=PropertyAttributes(minimum=0, maximum=23))
    props.addProperty("Neutral", False)
    props.addProperty("Clock", "current", attributes=PropertyAttributes(enumNames=["current", "custom"]))
    props.addProperty("Target", [0.0, 1.3, 0.0])
    return props


def test_clean_property_name():
    assert cleanPropertyName("Reset Scene") == "reset_scene"
    assert cleanPropertyName("3D View") == "_3d_view"


def test_alternate_names():
    props = create_sample_property_set()
    assert props.hours == 0
    props.neutral = True
    assert props.getProperty("Neutral") is True
    with pytest.raises(AttributeError):
        props.missing


def test_numeric_values_are_clamped():
    props = create_sample_property_set()
    props.setProperty("Hours", 30)
    assert props.getProperty("Hours") == 23
    props.setProperty("Hours", -2)
    assert props.getProperty("Hours") == 0


def test_numeric_assignment_preserves_type():
    props = PropertySet()
    props.addProperty("Scalar", 1.5)
    props.setProperty("Scalar", 2)
    assert props.getProperty("Scalar") == 2.0
    assert isinstance(props.getProperty("Scalar"), float)


def test_type_mismatch_raises_value_error():
    props = create_sample_property_set()
    with pytest.raises(ValueError):
        props.setProperty("Hours", "noon")
    with pytest.raises(ValueError):
        props.setProperty("Target", [1.0, 2.0])
    with pytest.raises(ValueError):
        props.setProperty("Neutral", "yes")


def test_enum_properties_accept_string_and_int():
    props = create_sample_property_set()
    assert props.getProperty("Clock") == 0

    props.setProperty("Clock", "custom")
    assert props.getProperty("Clock") == 1
    assert props.getPropertyEnumValue("Clock") == "custom"

    props.setProperty("Clock", 0)
    assert props.getPropertyEnumValue("Clock") == "current"

    with pytest.raises(ValueError):
        props.setProperty("Clock", "sundial")
    with pytest.raises(ValueError):
        props.setProperty("Clock", 5)


def test_duplicate_alternate_name_raises():
    props = create_sample_property_set()
    with pytest.raises(ValueError):
        props.addProperty("hours", 1)


def test_property_value_changed_subscription():
    props = create_sample_property_set()
    values = []
    subscription = props.connectPropertyValueChanged("Hours", values.append)

    props.setProperty("Hours", 5)
    props.setProperty("Hours", 5)
    props.setProperty("Neutral", True)
    subscription.release()
    props.setProperty("Hours", 6)

    assert values == [5]

    with pytest.raises(KeyError):
        props.connectPropertyValueChanged("Missing", values.append)


def test_attribute_changed_signal():
    props = create_sample_property_set()
    changes = []
    props.connectPropertyAttributeChanged(lambda propertySet, name, attribute: changes.append((name, attribute)))
    props.setPropertyAttribute("Hours", "maximum", 12)
    props.setPropertyAttribute("Hours", "maximum", 12)
    assert changes == [("Hours", "maximum")]
    assert props.getPropertyAttribute("Hours", "maximum") == 12


def test_unknown_attribute_raises():
    props = PropertySet()
    with pytest.raises(TypeError):
        props.addProperty("Hours", 0, attributes={"colour": "red"})
    props.addProperty("Hours", 0, attributes={"maximum": 23})
    assert props.getPropertyAttribute("Hours", "maximum") == 23


def test_snapshot_round_trip():
    props = create_sample_property_set()
    state = json.loads(json.dumps(props.snapshot()))

    props.setProperty("Hours", 12)
    props.setProperty("Clock", "custom")
    props.setProperty("Target", (1.0, 1.0, 1.0))
    props.restore(state)

    assert props.getProperty("Hours") == 0
    assert props.getPropertyEnumValue("Clock") == "current"
    assert props.getProperty("Target") == (0.0, 1.3, 0.0)


def test_restore_ignores_unknown_properties():
    props = create_sample_property_set()
    props.restore({"Minutes": 3, "Hours": 4, "Neutral": True}, exclude=("Neutral",))
    assert props.getProperty("Hours") == 4
    assert not props.hasProperty("Minutes")
    assert props.getProperty("Neutral") is False
