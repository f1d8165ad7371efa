import json

import pytest

from m2ebridge.filtras.comparator import SCHEMA, ComparatorFT, ComparatorOperator
from m2ebridge.filtras.filtra import PipelineIface, common_schema
from m2ebridge.message import Message, MessageFormat, MessageWrapper


class MockPipeline(PipelineIface):
    def schedule_event(self, msec):
        pass


def make_config(oper="eq", comparand=45):
    return {
        "type": "comparator",
        "operator": oper,
        "value_key": "temp",
        "comparand": comparand,
        "goto_passed": "cooler_on",
        "goto_rejected": "cooler_off",
    }


def run(config, value):
    msg_w = MessageWrapper(Message({"temp": value}, "/topc/test", MessageFormat.JSON))
    ComparatorFT(MockPipeline(), config).process_message(msg_w)
    return msg_w.passed


@pytest.mark.parametrize(
    "oper, value, expected",
    [
        ("eq", 45, True),
        ("eq", 10, False),
        ("eq", 45.0, True),
        ("eq", 45.5, False),
        ("gt", 80, True),
        ("gt", 45, False),
        ("gt", 45.5, True),
        ("gt", 44.5, False),
        ("gte", 45, True),
        ("gte", 10, False),
        ("gte", 45.0, True),
        ("gte", 44.5, False),
        ("lt", 10, True),
        ("lt", 45, False),
        ("lt", 44.5, True),
        ("lt", 45.5, False),
        ("lte", 45, True),
        ("lte", 80, False),
        ("lte", 45.0, True),
        ("lte", 45.5, False),
    ],
)
def test_operators(oper, value, expected):
    assert run(make_config(oper), value) is expected


def test_operator_parsed():
    ft = ComparatorFT(MockPipeline(), make_config("gte"))
    assert ft.operator is ComparatorOperator.GTE
    assert ft.value_key == "temp"
    assert ft.comparand == 45


def test_float_comparand():
    config = make_config("gt", 44.5)
    assert run(config, 45) is True
    assert run(config, 44) is False


def test_logical_negation():
    config = make_config("eq")
    config["logical_negation"] = True
    assert run(config, 45) is False
    assert run(config, 10) is True


def test_unknown_operator_rejects():
    config = make_config("ne")
    assert ComparatorFT(MockPipeline(), config).operator is ComparatorOperator.UNKN
    assert run(config, 45) is False


def test_non_number_comparand_is_zero():
    config = make_config("eq", "45")
    assert run(config, 0) is True


def test_string_payload_raises():
    ft = ComparatorFT(MockPipeline(), make_config())
    msg = Message(json.dumps({"temp": "value"}), "/topc/test", MessageFormat.JSON)
    with pytest.raises(ValueError):
        ft.process_message(MessageWrapper(msg))


def test_non_numeric_value_raises():
    ft = ComparatorFT(MockPipeline(), make_config())
    for value in ("value", True, None):
        msg_w = MessageWrapper(Message({"temp": value}, "/t", MessageFormat.JSON))
        with pytest.raises(ValueError):
            ft.process_message(msg_w)


def test_missing_key_raises():
    ft = ComparatorFT(MockPipeline(), make_config())
    msg_w = MessageWrapper(Message({"hum": 3}, "/t", MessageFormat.JSON))
    with pytest.raises(ValueError):
        ft.process_message(msg_w)


def test_serialized_json_message():
    ft = ComparatorFT(MockPipeline(), make_config("lt"))
    msg_w = MessageWrapper(Message('{"temp": 12}', "/t"))
    ft.process_message(msg_w)
    assert msg_w.passed


def test_schema_extends_common_fields():
    expected = common_schema("comparator")
    expected["operator"] = {
        "type": "string",
        "enum": ["eq", "gt", "gte", "lt", "lte"],
        "required": True,
    }
    expected["value_key"] = {"type": "string", "required": True}
    expected["comparand"] = {"type": "integer", "required": True}
    assert SCHEMA == expected