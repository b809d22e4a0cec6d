# -*- encoding: utf-8 -*-
# @File   : converters.py
# @Time   : 2024/10/14 01:33:52
# @Author : Kariko Lin

"""Type <-> string converters, and the process-wide registry of them.

Python has no fixed-width numbers, so sized types are asked for with
their `ctypes` counterparts:

    ```python
    setting.get_value(int)             # any int
    setting.get_value(ctypes.c_uint8)  # int in [0, 255]
    setting.get_value(ctypes.c_float)  # float rounded to single precision
    setting.get_value(ctypes.c_wchar)  # one character
    ```

Registering a converter replaces the old one for that exact type,
built-ins included, for every `Configuration` from then on.
The registry does no locking.
"""

import ctypes
import logging
import struct
from abc import ABCMeta, abstractmethod
from collections.abc import Sequence
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Generic, TypeVar, get_origin

from .consts import QUOTE
from .errors import ConverterNotFoundError

__all__ = [
    'TypeStringConverter', 'TypeStringConverterRegistry',
    'registry', 'register_type_string_converter',
    'is_array_type', 'is_array_value'
]

T = TypeVar('T')

_log = logging.getLogger(__name__)


class TypeStringConverter(Generic[T], metaclass=ABCMeta):
    """Converts values of `self.type` to strings and back.

    Subclasses either set `type` as a class attribute, or pass it in.
    `from_string()` signals a bad value by raising (`ValueError` and the
    like) or by returning `None`.
    """
    type: type

    def __init__(self, type_: type | None = None) -> None:
        if type_ is not None:
            self.type = type_

    @abstractmethod
    def to_string(self, value: T) -> str:
        raise NotImplementedError

    @abstractmethod
    def from_string(self, text: str, hint: type) -> T | None:
        raise NotImplementedError

    def __repr__(self) -> str:
        name = getattr(getattr(self, 'type', None), '__name__', None)
        return f'<{type(self).__name__} for {name}>'


class StringConverter(TypeStringConverter[str]):
    type = str

    def to_string(self, value: str) -> str:
        return value

    def from_string(self, text: str, hint: type) -> str:
        return text.strip(QUOTE)


class BoolConverter(TypeStringConverter[bool]):
    type = bool

    TRUE = ('true', 'yes', 'on', 'y', '1')
    FALSE = ('false', 'no', 'off', 'n', '0')

    def to_string(self, value: bool) -> str:
        return str(bool(value))

    def from_string(self, text: str, hint: type) -> bool:
        match text.strip().lower():
            case i if i in self.TRUE:
                return True
            case i if i in self.FALSE:
                return False
            case _:
                raise ValueError(f'not a boolean: {text!r}')


def _unwrap(value: Any) -> Any:
    """ctypes instance -> the Python value it holds."""
    if isinstance(value, ctypes._SimpleCData):
        return value.value
    return value


def _unquote_once(text: str) -> str:
    """`"#"` -> `#`, the way to write a space or a comment marker."""
    if len(text) > 2 and text[0] == QUOTE and text[-1] == QUOTE:
        return text[1:-1]
    return text


class IntConverter(TypeStringConverter[int]):
    def __init__(
        self, type_: type = int,
        bits: int | None = None, signed: bool = True
    ) -> None:
        super().__init__(type_)
        if bits is None:
            self._range = None
        elif signed:
            self._range = (-(1 << (bits - 1)), (1 << (bits - 1)) - 1)
        else:
            self._range = (0, (1 << bits) - 1)

    def to_string(self, value: int) -> str:
        return str(int(_unwrap(value)))

    def from_string(self, text: str, hint: type) -> int:
        ret = int(text.strip(), 10)
        if self._range is not None:
            lo, hi = self._range
            if not lo <= ret <= hi:
                raise OverflowError(
                    f'{ret} out of range [{lo}, {hi}] of {self.type.__name__}')
        return ret


class FloatConverter(TypeStringConverter[float]):
    def __init__(self, type_: type = float, single: bool = False) -> None:
        super().__init__(type_)
        self._single = single

    def to_string(self, value: float) -> str:
        return repr(float(_unwrap(value)))

    def from_string(self, text: str, hint: type) -> float:
        ret = float(text.strip())
        if self._single:
            # struct raises OverflowError beyond float32.
            ret = struct.unpack('<f', struct.pack('<f', ret))[0]
        return ret


class DecimalConverter(TypeStringConverter[Decimal]):
    type = Decimal

    def to_string(self, value: Decimal) -> str:
        return str(value)

    def from_string(self, text: str, hint: type) -> Decimal:
        # raises decimal.InvalidOperation, an ArithmeticError.
        return Decimal(text.strip())


class CharConverter(TypeStringConverter[str]):
    type = ctypes.c_wchar

    def to_string(self, value: str) -> str:
        ret = _unwrap(value)
        if len(ret) != 1:
            raise ValueError(f'not a single character: {ret!r}')
        return ret

    def from_string(self, text: str, hint: type) -> str:
        text = _unquote_once(text)
        if len(text) != 1:
            raise ValueError(f'not a single character: {text!r}')
        return text


class ByteCharConverter(TypeStringConverter[bytes]):
    type = ctypes.c_char

    def to_string(self, value: bytes) -> str:
        return bytes(_unwrap(value)).decode('latin-1')

    def from_string(self, text: str, hint: type) -> bytes:
        ret = _unquote_once(text).encode('latin-1')
        if len(ret) != 1:
            raise ValueError(f'not a single byte: {text!r}')
        return ret


class DateTimeConverter(TypeStringConverter[datetime]):
    type = datetime

    def to_string(self, value: datetime) -> str:
        return value.isoformat()

    def from_string(self, text: str, hint: type) -> datetime:
        return datetime.fromisoformat(text.strip().strip(QUOTE))


class DateConverter(TypeStringConverter[date]):
    type = date

    def to_string(self, value: date) -> str:
        return value.isoformat()

    def from_string(self, text: str, hint: type) -> date:
        return date.fromisoformat(text.strip().strip(QUOTE))


class EnumConverter(TypeStringConverter[Enum]):
    """Shared by every `Enum` subclass; `hint` tells which one."""
    type = Enum

    def to_string(self, value: Enum) -> str:
        return value.name

    def from_string(self, text: str, hint: type) -> Enum:
        text = text.strip()
        try:
            return hint[text]
        except KeyError:
            pass
        # falls back to the underlying value, e.g. `2` for `Color.BLUE = 2`.
        return hint(int(text, 10))


def _builtins() -> list[TypeStringConverter]:
    ret: list[TypeStringConverter] = [
        StringConverter(),
        BoolConverter(),
        IntConverter(int),
        FloatConverter(float),
        FloatConverter(ctypes.c_double),
        FloatConverter(ctypes.c_float, single=True),
        DecimalConverter(),
        CharConverter(),
        ByteCharConverter(),
        DateTimeConverter(),
        DateConverter(),
    ]
    for bits in (8, 16, 32, 64):
        ret.append(IntConverter(getattr(ctypes, f'c_int{bits}'), bits, True))
        ret.append(IntConverter(getattr(ctypes, f'c_uint{bits}'), bits, False))
    return ret


def is_array_type(type_: object) -> bool:
    """`list`, `tuple[int, ...]`, `list[list[int]]` and so on.

    A sequence type with a converter of its own, e.g. a registered
    `NamedTuple`, is a scalar.
    """
    if type_ in registry:
        return False
    origin = get_origin(type_) or type_
    return (
        isinstance(origin, type)
        and issubclass(origin, Sequence)
        and not issubclass(origin, (str, bytes, bytearray))
    )


def is_array_value(value: object) -> bool:
    return (isinstance(value, (list, tuple))
            and type(value) not in registry)


class TypeStringConverterRegistry:
    """Type -> converter table. Lookup is by exact type,
    except that any `Enum` subclass falls back to the shared enum converter.
    """
    def __init__(self) -> None:
        self.__converters: dict[type, TypeStringConverter] = {}
        self.__enum = EnumConverter()
        self.reset()

    def reset(self) -> None:
        """Drop custom converters, back to the built-in ones only."""
        self.__converters.clear()
        for i in _builtins():
            self.__converters[i.type] = i

    def register(self, converter: TypeStringConverter) -> None:
        type_ = getattr(converter, 'type', None)
        if not isinstance(type_, type):
            raise TypeError(
                f'{converter!r} does not declare the type it converts.')
        if type_ in self.__converters:
            _log.info('Converter for %s replaced by %r',
                      type_.__name__, converter)
        self.__converters[type_] = converter

    def find(self, type_: type) -> TypeStringConverter:
        if type_ in self.__converters:
            return self.__converters[type_]
        if isinstance(type_, type) and issubclass(type_, Enum):
            return self.__converters.get(Enum, self.__enum)
        raise ConverterNotFoundError(type_)

    def __contains__(self, type_: object) -> bool:
        try:
            self.find(type_)  # type: ignore[arg-type]
        except ConverterNotFoundError:
            return False
        return True

    def to_string(self, value: object) -> str:
        """Stringify `value` with the converter of its runtime type."""
        return self.find(type(value)).to_string(value)


registry = TypeStringConverterRegistry()


def register_type_string_converter(converter: TypeStringConverter) -> None:
    registry.register(converter)
