import ctypes
from datetime import date, datetime
from decimal import Decimal
from enum import Enum, IntEnum

import pytest

from pyinicfg import (
    Configuration,
    ConverterNotFoundError,
    Setting,
    SettingShapeError,
    SettingValueCastError,
)


class Mode(Enum):
    Succeeded = 0
    Failed = 1
    NotApplicable = 3


class Level(IntEnum):
    LOW = 1
    HIGH = 5


def test_single_values():
    cfg = Configuration()
    cfg['TestSection']['IntSetting1'].int_value = 100
    cfg['TestSection']['IntSetting2'].int_value = 200
    cfg['TestSection']['StringSetting1'].string_value = 'Test'

    assert cfg['TestSection']['IntSetting1'].int_value == 100
    assert cfg['TestSection']['IntSetting2'].int_value == 200
    assert cfg['TestSection']['StringSetting1'].string_value == 'Test'
    assert len(cfg) == 1
    assert len(cfg['TestSection']) == 3


def test_array_values():
    section = Configuration()['TestSection']
    ints = [-3, -2, -1, 0, 1, 2, 3]
    strings = ['Hello', 'World', '!']
    floats = [0.5, 1.0, 1.5]

    section['IntArray'].int_value_array = ints
    section['StringArray'].string_value_array = strings
    section['FloatArray'].float_value_array = floats

    assert section['IntArray'].int_value_array == ints
    assert section['StringArray'].string_value_array == strings
    assert section['FloatArray'].float_value_array == floats
    assert section['IntArray'].raw_value == '{-3,-2,-1,0,1,2,3}'


def test_set_get_value():
    section = Configuration()['TestSection']
    section['IntSetting1'].set_value(100)
    section['StringSetting1'].set_value('Test')
    section['IntArray'].set_value([1, 2, 3])

    assert section['IntSetting1'].get_value(int) == 100
    assert section['StringSetting1'].get_value(str) == 'Test'
    assert section['IntArray'].get_value_array(int) == [1, 2, 3]


@pytest.mark.parametrize('target', [int, list, list[int], list[list[int]],
                                    tuple[int, ...]])
def test_scalar_accessor_rejects_arrays(target):
    setting = Setting('IntArray', [1, 2, 3])
    with pytest.raises(SettingShapeError):
        setting.get_value(target)


@pytest.mark.parametrize('target', [list, list[int], list[list[int]]])
def test_array_accessor_rejects_array_types(target):
    setting = Setting('IntArray', [1, 2, 3])
    with pytest.raises(SettingShapeError):
        setting.get_value_array(target)


def test_scalar_accessor_rejects_array_type_on_scalar():
    with pytest.raises(SettingShapeError):
        Setting('x', 5).get_value(list[int])


def test_array_accessor_rejects_scalar_setting():
    with pytest.raises(SettingShapeError):
        Setting('x', 5).get_value_array(int)


def test_set_value_with_mixed_sequence():
    setting = Setting('Mixed')
    setting.set_value((1, 'two', 3.5, True, Mode.Failed))

    assert setting.is_array
    assert setting.array_size == 5
    assert setting.string_value_array == ['1', 'two', '3.5', 'True', 'Failed']


def test_set_value_object_array():
    setting = Setting('TestSetting')
    setting.set_value([1, 2, 3])

    with pytest.raises(SettingShapeError):
        setting.get_value(int)
    assert setting.get_value_array(int) == [1, 2, 3]
    assert setting.get_value_array(float) == [1.0, 2.0, 3.0]
    assert setting.get_value_array(str) == ['1', '2', '3']


def test_switching_back_to_scalar():
    setting = Setting('x', [1, 2])
    setting.set_value(7)
    assert not setting.is_array
    assert setting.int_value == 7


def test_array_element_failure_fails_whole_call():
    setting = Setting('x')
    setting.raw_value = '{1, two, 3}'
    with pytest.raises(SettingValueCastError) as info:
        setting.get_value_array(int)
    assert info.value.raw == 'two'
    assert info.value.target is int


def test_no_converter_differs_from_cast_failure():
    class Unknown:
        pass

    setting = Setting('x', 'abc')
    with pytest.raises(ConverterNotFoundError):
        setting.get_value(Unknown)
    with pytest.raises(ConverterNotFoundError):
        setting.get_value_or_default(Unknown())
    with pytest.raises(ConverterNotFoundError):
        setting.set_value(Unknown())
    with pytest.raises(SettingValueCastError):
        setting.get_value(int)


def test_fixed_width_ranges():
    setting = Setting('Setting')
    setting.set_value(ctypes.c_int8(100))
    assert setting.get_value(ctypes.c_int8) == 100

    setting.int_value = 500
    with pytest.raises(SettingValueCastError):
        setting.get_value(ctypes.c_int8)
    with pytest.raises(SettingValueCastError):
        setting.get_value(ctypes.c_uint8)
    assert setting.get_value(ctypes.c_int16) == 500

    setting.int_value = -1
    with pytest.raises(SettingValueCastError):
        setting.get_value(ctypes.c_uint64)
    assert setting.get_value(ctypes.c_int64) == -1

    setting.set_value(ctypes.c_uint8(255))
    assert setting.get_value(ctypes.c_ubyte) == 255


def test_single_precision():
    setting = Setting('Setting')
    setting.set_value(ctypes.c_float(20.4028))
    assert setting.get_value(ctypes.c_float) == ctypes.c_float(20.4028).value

    setting.raw_value = '1e300'
    with pytest.raises(SettingValueCastError):
        setting.get_value(ctypes.c_float)
    assert setting.get_value(ctypes.c_double) == 1e300


def test_bool_spellings():
    setting = Setting('b')
    for text in ('true', 'Yes', 'ON', '1', 'y'):
        setting.raw_value = text
        assert setting.bool_value is True
    for text in ('False', 'no', 'off', '0', 'N'):
        setting.raw_value = text
        assert setting.bool_value is False
    setting.bool_value = True
    assert setting.raw_value == 'True'


def test_enums():
    setting = Setting('e', Mode.NotApplicable)
    assert setting.raw_value == 'NotApplicable'
    assert setting.get_value(Mode) is Mode.NotApplicable

    setting.raw_value = '1'
    assert setting.get_value(Mode) is Mode.Failed

    setting.raw_value = 'notapplicable'
    with pytest.raises(SettingValueCastError):
        setting.get_value(Mode)

    setting.set_value([Level.HIGH, Level.LOW])
    assert setting.get_value_array(Level) == [Level.HIGH, Level.LOW]


def test_dates_and_decimals():
    setting = Setting('d', datetime(2024, 10, 14, 1, 33, 52))
    assert setting.datetime_value == datetime(2024, 10, 14, 1, 33, 52)

    setting.set_value(date(2024, 10, 14))
    assert setting.get_value(date) == date(2024, 10, 14)

    setting.decimal_value = Decimal('2004.40493028')
    assert setting.decimal_value == Decimal('2004.40493028')


def test_chars():
    setting = Setting('c')
    setting.set_value(ctypes.c_wchar('x'))
    assert setting.get_value(ctypes.c_wchar) == 'x'

    setting.string_value = 'xy'
    with pytest.raises(SettingValueCastError):
        setting.get_value(ctypes.c_wchar)

    setting.set_value(ctypes.c_char(b'q'))
    assert setting.get_value(ctypes.c_char) == b'q'


def test_quoted_chars():
    setting = Setting('c')
    for raw, expected in [('"x"', 'x'), ('" "', ' '), ('"#"', '#'),
                          ('"', '"')]:
        setting.raw_value = raw
        assert setting.get_value(ctypes.c_wchar) == expected

    setting.raw_value = '";"'
    assert setting.get_value(ctypes.c_char) == b';'

    # one layer only.
    setting.raw_value = '""x""'
    with pytest.raises(SettingValueCastError):
        setting.get_value(ctypes.c_wchar)

    cfg = Configuration.load_from_string('[A]\nc = "#" # marker\n')
    assert cfg['A']['c'].get_value(ctypes.c_wchar) == '#'


def test_string_value_trims_quotes():
    setting = Setting('s')
    setting.raw_value = '"string"'
    assert setting.string_value == 'string'
    setting.raw_value = '"""Triple quotes"""'
    assert setting.string_value == 'Triple quotes'


def test_none_clears_value():
    setting = Setting('s', 5)
    setting.set_value(None)
    assert setting.raw_value == ''
    assert not setting.is_array
