# -*- encoding: utf-8 -*-
# @File   : binding.py
# @Time   : 2024/10/18 23:31:55
# @Author : Kariko Lin

"""Map dataclasses to sections and back.

Only uses the public setting accessors, i.e. `get_value()`,
`get_value_array()` and `set_value()`, by field name:

    ```python
    @dataclass
    class Window:
        title: str = ''
        size: list[int] = field(default_factory=list)
        cache: dict = ignored(default_factory=dict)

    win = section_to_object(cfg['Window'], Window)
    ```
"""

from dataclasses import Field, field, fields, is_dataclass
from typing import Any, TypeVar, get_args, get_origin, get_type_hints

from .converters import is_array_type
from .model import Section

__all__ = [
    'IGNORE', 'ignored', 'is_ignored',
    'section_to_object', 'section_from_object', 'section_update_from_object'
]

T = TypeVar('T')

IGNORE = 'pyinicfg.ignore'


def ignored(**kwargs: Any) -> Any:
    """`dataclasses.field()` that the mapping skips."""
    metadata = dict(kwargs.pop('metadata', None) or {})
    metadata[IGNORE] = True
    return field(metadata=metadata, **kwargs)


def is_ignored(f: Field) -> bool:
    return bool(f.metadata.get(IGNORE, False))


def _bindable(cls: type) -> list[Field]:
    if not is_dataclass(cls):
        raise TypeError(f'{cls!r} is not a dataclass.')
    return [i for i in fields(cls) if not is_ignored(i)]


def section_to_object(section: Section, cls: type[T]) -> T:
    """Settings missing from `section` keep the field defaults."""
    hints = get_type_hints(cls)
    kwargs: dict[str, Any] = {}
    for f in _bindable(cls):
        if not f.init or (setting := section.find(f.name)) is None:
            continue
        hint = hints[f.name]
        if not is_array_type(hint):
            kwargs[f.name] = setting.get_value(hint)
            continue
        args = get_args(hint)
        values = setting.get_value_array(args[0] if args else str)
        kwargs[f.name] = (tuple(values) if get_origin(hint) is tuple
                          else values)
    return cls(**kwargs)


def section_update_from_object(section: Section, obj: Any) -> Section:
    for f in _bindable(type(obj)):
        section[f.name].set_value(getattr(obj, f.name))
    return section


def section_from_object(name: str, obj: Any) -> Section:
    return section_update_from_object(Section(name), obj)
