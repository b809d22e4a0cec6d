from dataclasses import dataclass
from typing import NamedTuple

import pytest

from pyinicfg import (
    Configuration,
    SettingShapeError,
    SettingValueCastError,
    TypeStringConverter,
    register_type_string_converter,
    registry,
)


@dataclass
class Person:
    name: str
    age: int


class PersonStringConverter(TypeStringConverter[Person]):
    type = Person

    def to_string(self, value: Person) -> str:
        return f'[{value.name};{value.age}]'

    def from_string(self, text: str, hint: type) -> Person | None:
        parts = text.strip('[]').split(';')
        if len(parts) != 2:
            return None
        return Person(parts[0], int(parts[1]))


class Point(NamedTuple):
    x: int
    y: int


class PointStringConverter(TypeStringConverter[Point]):
    type = Point

    def to_string(self, value: Point) -> str:
        return f'{value.x}:{value.y}'

    def from_string(self, text: str, hint: type) -> Point:
        x, y = text.split(':')
        return Point(int(x), int(y))


class ShoutingStringConverter(TypeStringConverter[str]):
    type = str

    def to_string(self, value: str) -> str:
        return value.upper()

    def from_string(self, text: str, hint: type) -> str:
        return text.lower()


def test_custom_converter():
    Configuration.register_type_string_converter(PersonStringConverter())
    p = Person('TestPerson', 123)

    cfg = Configuration()
    cfg['TestSection']['Person'].set_value(p)
    assert cfg['TestSection']['Person'].raw_value == '[TestPerson;123]'
    assert cfg['TestSection']['Person'].get_value(Person) == p

    cfg['TestSection']['People'].set_value([p, Person('Other', 7)])
    assert cfg['TestSection']['People'].get_value_array(Person) == [
        p, Person('Other', 7)]


def test_custom_converter_failures():
    register_type_string_converter(PersonStringConverter())
    setting = Configuration()['S']['Person']

    setting.string_value = 'no separator'
    with pytest.raises(SettingValueCastError):
        setting.get_value(Person)

    setting.string_value = '[Name;old]'
    with pytest.raises(SettingValueCastError):
        setting.get_value(Person)
    assert setting.get_value_or_default(Person('x', 1), True) == Person('x', 1)
    assert setting.raw_value == '[x;1]'


def test_registration_replaces_builtins_globally():
    first, second = Configuration(), Configuration()
    register_type_string_converter(ShoutingStringConverter())

    first['S']['k'].set_value('hello')
    assert first['S']['k'].raw_value == 'HELLO'
    second['S']['k'].raw_value = 'WORLD'
    assert second['S']['k'].string_value == 'world'

    registry.reset()
    assert second['S']['k'].string_value == 'WORLD'


def test_converter_without_type():
    class Broken(TypeStringConverter[int]):
        def to_string(self, value: int) -> str:
            return str(value)

        def from_string(self, text: str, hint: type) -> int:
            return int(text)

    with pytest.raises(TypeError):
        register_type_string_converter(Broken())
    assert int in registry


def test_registered_tuple_type_is_scalar():
    setting = Configuration()['S']['p']
    setting.set_value(Point(1, 2))
    assert setting.is_array  # no converter yet, so a plain tuple

    register_type_string_converter(PointStringConverter())
    setting.set_value(Point(1, 2))
    assert setting.raw_value == '1:2'
    assert not setting.is_array
    assert setting.get_value(Point) == Point(1, 2)
    with pytest.raises(SettingShapeError):
        setting.get_value_array(Point)

    setting.set_value([Point(1, 2), Point(3, 4)])
    assert setting.raw_value == '{1:2,3:4}'
    assert setting.get_value_array(Point) == [Point(1, 2), Point(3, 4)]

    # plain tuples are still arrays.
    setting.set_value((1, 2))
    assert setting.get_value_array(int) == [1, 2]
