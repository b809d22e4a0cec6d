# -*- encoding: utf-8 -*-
# @File   : value.py
# @Time   : 2024/10/13 16:20:31
# @Author : Kariko Lin

from dataclasses import dataclass, field
from typing import Iterable

from .arrays import format_array, split_array


@dataclass(frozen=True)
class SettingValue:
    """Raw value of a setting: the text, plus its elements if array-shaped.

    Always kept as text. Converting to program values is up to
    `Setting.get_value()` and friends.
    """
    raw: str = ''
    elements: tuple[str, ...] | None = field(default=None, compare=False)

    @classmethod
    def parse(cls, raw: str) -> 'SettingValue':
        elements = split_array(raw)
        return cls(raw, None if elements is None else tuple(elements))

    @classmethod
    def from_elements(cls, elements: Iterable[str]) -> 'SettingValue':
        elements = tuple(elements)
        return cls(format_array(elements), elements)

    @property
    def is_array(self) -> bool:
        return self.elements is not None

    @property
    def array_size(self) -> int:
        return -1 if self.elements is None else len(self.elements)
