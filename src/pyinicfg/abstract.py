# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/09/08 20:22:30
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike, fspath
from typing import Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Reads a `T` from, and writes one to, a single file.

    `filename` may be left `None` when only the stream methods
    of a subclass are used.
    """
    def __init__(self, filename: str | PathLike | None = None) -> None:
        self._fn = None if filename is None else fspath(filename)

    def _require_filename(self) -> str:
        if self._fn is None:
            raise ValueError(
                f'{type(self).__name__} was created without a filename.')
        return self._fn

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return str(self._fn)
