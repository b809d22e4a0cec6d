# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/10/10 00:57:10
# @Author : Kariko Lin

"""
Configuration documents: sections holding settings.

Both sections and settings are *ordered* and names may repeat, like

    ```ini
    [Section]
    Key = 1
    Key = 2   ; still there, `section.get_settings_named('Key')` gets both.
    [Section]
    ```

Looking up by name gets the first match.
"""

import logging
from collections.abc import Iterator, Mapping
from datetime import datetime
from decimal import Decimal
from io import IOBase
from os import PathLike
from typing import Any, TypeVar

from .consts import HEADER_SECTION
from .converters import (
    TypeStringConverter,
    is_array_type,
    is_array_value,
    registry,
)
from .errors import SettingShapeError, SettingValueCastError
from .value import SettingValue

__all__ = ['Setting', 'Section', 'Configuration']

T = TypeVar('T')

_log = logging.getLogger(__name__)


class Setting:
    """A `name = value` entry. The value is kept as raw text and is only
    converted when asked for, by type:

        ```python
        setting.set_value([1, 2, 3])      # raw "{1,2,3}", an array now
        setting.get_value_array(int)      # [1, 2, 3]
        setting.get_value(int)            # SettingShapeError
        ```
    """
    def __init__(
        self, name: str, value: Any = '', *,
        comment: str | None = None,
        pre_comment: str | None = None
    ) -> None:
        self.name = name
        self.comment = comment
        self.pre_comment = pre_comment
        self._value = SettingValue()
        self.set_value(value)

    @property
    def raw_value(self) -> str:
        return self._value.raw

    @raw_value.setter
    def raw_value(self, text: str) -> None:
        self._value = SettingValue.parse(text)

    @property
    def value(self) -> SettingValue:
        return self._value

    @value.setter
    def value(self, value: SettingValue) -> None:
        self._value = value

    @property
    def is_array(self) -> bool:
        return self._value.is_array

    @property
    def array_size(self) -> int:
        """Count of elements, or -1 if not an array."""
        return self._value.array_size

    def __convert(
        self, converter: TypeStringConverter, text: str, type_: type
    ) -> Any:
        try:
            ret = converter.from_string(text, type_)
        except (ValueError, TypeError, LookupError, ArithmeticError) as e:
            raise SettingValueCastError(self.name, text, type_) from e
        if ret is None:
            raise SettingValueCastError(self.name, text, type_)
        return ret

    def get_value(self, type_: type[T]) -> T:
        if self.is_array or is_array_type(type_):
            raise SettingShapeError(
                f'Setting "{self.name}" is '
                + ('an array' if self.is_array else 'not an array')
                + f', unable to get it as {type_!r}. '
                'Use get_value_array() to obtain arrays.')
        return self.__convert(registry.find(type_), self._value.raw, type_)

    def get_value_array(self, type_: type[T]) -> list[T]:
        """Convert each element to `type_`. One bad element fails them all."""
        if is_array_type(type_):
            raise SettingShapeError(
                f'Unable to get setting "{self.name}" as an array of '
                f'{type_!r}: arrays of arrays are not supported.')
        if not self.is_array:
            raise SettingShapeError(
                f'Setting "{self.name}" is not an array. Use get_value().')
        converter = registry.find(type_)
        return [self.__convert(converter, i, type_)
                for i in self._value.elements]  # type: ignore[union-attr]

    def get_value_or_default(
        self, default: T, set_default: bool = False, *,
        target_type: type | None = None
    ) -> T:
        """Like `get_value(type(default))`, but a value failing to convert
        gives `default` back, and is replaced with it if `set_default`.

        Pass `target_type` when `type(default)` is not the one to convert to,
        e.g. `get_value_or_default(7, target_type=ctypes.c_uint8)`.
        """
        type_ = type(default) if target_type is None else target_type
        try:
            return self.get_value(type_)
        except SettingValueCastError as e:
            _log.debug('%s, falling back to %r', e, default)
            if set_default:
                self.set_value(default)
            return default

    def set_value(self, value: Any) -> None:
        """Store the string form of `value`.

        A list or tuple turns the setting into an array, each element
        converted by its own runtime type.
        """
        if value is None:
            self._value = SettingValue()
        elif is_array_value(value):
            self._value = SettingValue.from_elements(
                registry.to_string(i) for i in value)
        else:
            self._value = SettingValue.parse(registry.to_string(value))

    # shortcuts
    @property
    def string_value(self) -> str:
        return self.get_value(str)

    @string_value.setter
    def string_value(self, value: str) -> None:
        self.set_value(value)

    @property
    def int_value(self) -> int:
        return self.get_value(int)

    @int_value.setter
    def int_value(self, value: int) -> None:
        self.set_value(value)

    @property
    def float_value(self) -> float:
        return self.get_value(float)

    @float_value.setter
    def float_value(self, value: float) -> None:
        self.set_value(value)

    @property
    def bool_value(self) -> bool:
        return self.get_value(bool)

    @bool_value.setter
    def bool_value(self, value: bool) -> None:
        self.set_value(value)

    @property
    def decimal_value(self) -> Decimal:
        return self.get_value(Decimal)

    @decimal_value.setter
    def decimal_value(self, value: Decimal) -> None:
        self.set_value(value)

    @property
    def datetime_value(self) -> datetime:
        return self.get_value(datetime)

    @datetime_value.setter
    def datetime_value(self, value: datetime) -> None:
        self.set_value(value)

    @property
    def string_value_array(self) -> list[str]:
        return self.get_value_array(str)

    @string_value_array.setter
    def string_value_array(self, values: list[str]) -> None:
        self.set_value(list(values))

    @property
    def int_value_array(self) -> list[int]:
        return self.get_value_array(int)

    @int_value_array.setter
    def int_value_array(self, values: list[int]) -> None:
        self.set_value(list(values))

    @property
    def float_value_array(self) -> list[float]:
        return self.get_value_array(float)

    @float_value_array.setter
    def float_value_array(self, values: list[float]) -> None:
        self.set_value(list(values))

    @property
    def bool_value_array(self) -> list[bool]:
        return self.get_value_array(bool)

    @bool_value_array.setter
    def bool_value_array(self, values: list[bool]) -> None:
        self.set_value(list(values))

    @property
    def decimal_value_array(self) -> list[Decimal]:
        return self.get_value_array(Decimal)

    @decimal_value_array.setter
    def decimal_value_array(self, values: list[Decimal]) -> None:
        self.set_value(list(values))

    def __str__(self) -> str:
        return f'{self.name} = {self.raw_value}'

    def __repr__(self) -> str:
        return f'<Setting {self.name}={self.raw_value!r}>'


class Section:
    """INI 小节。维护一组*有序*的键值对，允许重名。

    按名字取值（`section['key']`）得到的是第一个同名键值对，
    不存在时会新建一个空值的键值对追加到末尾。
    只想查找而不想新建的话，请用`self.find()`。
    """
    def __init__(
        self, name: str = HEADER_SECTION, *,
        comment: str | None = None,
        pre_comment: str | None = None
    ) -> None:
        self.name = name
        self.comment = comment
        self.pre_comment = pre_comment
        self.__settings: list[Setting] = []

    @classmethod
    def from_mapping(cls, name: str, pairs: Mapping[str, Any]) -> 'Section':
        ret = cls(name)
        for k, v in pairs.items():
            ret.add(k).set_value(v)
        return ret

    def __getitem__(self, key: str | int) -> Setting:
        if isinstance(key, int):
            return self.__settings[key]
        if (ret := self.find(key)) is None:
            ret = self.add(key)
        return ret

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Setting):
            return any(i is item for i in self.__settings)
        return self.find(item) is not None  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[Setting]:
        return iter(self.__settings)

    def __len__(self) -> int:
        return len(self.__settings)

    def find(self, name: str) -> Setting | None:
        for i in self.__settings:
            if i.name == name:
                return i
        return None

    def get_settings_named(self, name: str) -> list[Setting]:
        return [i for i in self.__settings if i.name == name]

    def add(self, setting: Setting | str, value: Any = '') -> Setting:
        if isinstance(setting, str):
            setting = Setting(setting, value)
        elif any(i is setting for i in self.__settings):
            raise ValueError(
                f'Setting "{setting.name}" already belongs to [{self.name}].')
        self.__settings.append(setting)
        return setting

    def remove(self, setting: Setting | str) -> bool:
        for idx, i in enumerate(self.__settings):
            if i is setting or i.name == setting:
                del self.__settings[idx]
                return True
        return False

    def remove_all_named(self, name: str) -> None:
        self.__settings = [i for i in self.__settings if i.name != name]

    def clear(self) -> None:
        self.__settings.clear()

    def __str__(self) -> str:
        return f'[{self.name}]'

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self.name, len(self.__settings))


class Configuration:
    """INI 文档表示，也就是一组*有序*、允许重名的小节。

        ```ini
        Key = val  ; 不属于任何小节的键值对，用 self.header 访问。

        [Section]
        Key = 233
        [Section]  ; 重名小节同样保留，可用 get_sections_named() 取全部。
        Array = { 1, 2, "3, 4" }
        ```
    """
    def __init__(self) -> None:
        self.__sections: list[Section] = []

    @property
    def header(self) -> Section:
        """位于文件头部、不属于任何小节的键值对（名字为空串的首个小节）。"""
        if self.__sections and self.__sections[0].name == HEADER_SECTION:
            return self.__sections[0]
        ret = Section(HEADER_SECTION)
        self.__sections.insert(0, ret)
        return ret

    def __getitem__(self, key: str | int) -> Section:
        if isinstance(key, int):
            return self.__sections[key]
        if (ret := self.find(key)) is None:
            ret = self.add(key)
        return ret

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Section):
            return any(i is item for i in self.__sections)
        return self.find(item) is not None  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[Section]:
        return iter(self.__sections)

    def __len__(self) -> int:
        return len(self.__sections)

    def contains(self, section: str, setting: str | None = None) -> bool:
        if (sect := self.find(section)) is None:
            return False
        return setting is None or setting in sect

    def find(self, name: str) -> Section | None:
        for i in self.__sections:
            if i.name == name:
                return i
        return None

    def get_sections_named(self, name: str) -> list[Section]:
        return [i for i in self.__sections if i.name == name]

    def add(self, section: Section | str) -> Section:
        if isinstance(section, str):
            section = Section(section)
        elif any(i is section for i in self.__sections):
            raise ValueError(f'{section} is already in this configuration.')
        self.__sections.append(section)
        return section

    def remove(self, section: Section | str) -> bool:
        for idx, i in enumerate(self.__sections):
            if i is section or i.name == section:
                del self.__sections[idx]
                return True
        return False

    def remove_all_named(self, name: str) -> None:
        self.__sections = [i for i in self.__sections if i.name != name]

    def clear(self) -> None:
        self.__sections.clear()

    @staticmethod
    def register_type_string_converter(
        converter: TypeStringConverter
    ) -> None:
        """Process-wide; see `pyinicfg.converters.registry`."""
        registry.register(converter)

    # loading / saving. Format handlers live in `pyinicfg.formats`,
    # which import this module, hence the local imports.
    @classmethod
    def load_from_string(cls, text: str, **kwargs: Any) -> 'Configuration':
        from .formats.ini import IniParser
        return IniParser(**kwargs).loads(text)

    @classmethod
    def load_from_file(
        cls, filename: str | PathLike,
        encoding: str | None = None, **kwargs: Any
    ) -> 'Configuration':
        from .formats.ini import IniParser
        return IniParser(filename, encoding, **kwargs).read()

    @classmethod
    def load_from_stream(
        cls, stream: IOBase,
        encoding: str | None = None, **kwargs: Any
    ) -> 'Configuration':
        """`stream` may give either `bytes` or `str`."""
        from .formats.ini import IniParser
        parser = IniParser(encoding=encoding, **kwargs)
        data = stream.read()
        if isinstance(data, (bytes, bytearray)):
            data = parser.decode(bytes(data), encoding)
        return parser.loads(data)

    @classmethod
    def load_from_binary_file(
        cls, filename: str | PathLike
    ) -> 'Configuration':
        from .formats.binary import ConfigBinaryParser
        return ConfigBinaryParser(filename).read()

    @classmethod
    def load_from_binary_stream(cls, stream: IOBase) -> 'Configuration':
        from .formats.binary import ConfigBinaryParser
        return ConfigBinaryParser().readstream(stream)

    def save_to_string(self, **kwargs: Any) -> str:
        from .formats.ini import IniParser
        return IniParser(**kwargs).dumps(self)

    def save_to_file(
        self, filename: str | PathLike,
        encoding: str | None = None, **kwargs: Any
    ) -> None:
        from .formats.ini import IniParser
        IniParser(filename, encoding, **kwargs).write(self)

    def save_to_stream(
        self, stream: IOBase,
        encoding: str | None = None, **kwargs: Any
    ) -> None:
        """Text streams get `str`, anything else `bytes`."""
        from .formats.ini import IniParser
        IniParser(encoding=encoding, **kwargs).writestream(stream, self)

    def save_to_binary_file(self, filename: str | PathLike) -> None:
        from .formats.binary import ConfigBinaryParser
        ConfigBinaryParser(filename).write(self)

    def save_to_binary_stream(self, stream: IOBase) -> None:
        from .formats.binary import ConfigBinaryParser
        ConfigBinaryParser().writestream(stream, self)

    def __str__(self) -> str:
        return self.save_to_string()

    def __repr__(self) -> str:
        return '<Configuration { .cnt = %d }>' % len(self.__sections)
