# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/12 21:52:07
# @Author : Kariko Lin

"""Exceptions raised across the package.

- `ParserError`: the document cannot be made sense of.
- `SettingShapeError`: scalar accessor on an array, or the other way round.
- `SettingValueCastError`: the raw text does not convert to the type asked.
- `ConverterNotFoundError`: no converter registered for the type asked.
"""


class ConfigError(Exception):
    """Base of every error raised by `pyinicfg`."""
    pass


class ParserError(ConfigError):
    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f'line {line}: {message}'
        super().__init__(message)


class InvalidBinaryRecord(ParserError):
    """To record errors when reading binary configurations."""
    pass


class SettingShapeError(ConfigError, TypeError):
    pass


class SettingValueCastError(ConfigError, ValueError):
    def __init__(self, setting: str, raw: str, target: type) -> None:
        self.setting = setting
        self.raw = raw
        self.target = target
        super().__init__(
            f'Failed to convert value "{raw}" of setting "{setting}" '
            f'to type {getattr(target, "__name__", target)}.')


class ConverterNotFoundError(ConfigError, LookupError):
    def __init__(self, target: object) -> None:
        self.target = target
        super().__init__(
            'No converter is registered for type '
            f'{getattr(target, "__name__", target)}.')
