# -*- encoding: utf-8 -*-
# @File   : yml.py
# @Time   : 2024/10/17 00:12:26
# @Author : Kariko Lin

"""Dump a configuration as YAML, e.g. to diff or to feed other tools.

    ```yaml
    sections:
    - name: Section
      comment: inline comment
      pre_comment: null
      settings:
      - name: Ints
        value: ['1', '2', '3']
        comment: null
        pre_comment: null
    ```
"""

from os import PathLike
from typing import Any, TypedDict

import yaml

from ..abstract import FileHandler
from ..errors import ParserError
from ..model import Configuration, Section, Setting

__all__ = ['ConfigYamlParser']


class _YamlSetting(TypedDict):
    name: str
    value: str | list[str]
    comment: str | None
    pre_comment: str | None


class _YamlSection(TypedDict):
    name: str
    comment: str | None
    pre_comment: str | None
    settings: list[_YamlSetting]


class ConfigYamlParser(FileHandler[Configuration]):
    def __init__(
        self, filename: str | PathLike | None = None,
        encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def __to_setting(setting: Setting) -> _YamlSetting:
        return _YamlSetting(
            name=setting.name,
            value=(list(setting.value.elements)  # type: ignore[arg-type]
                   if setting.is_array else setting.raw_value),
            comment=setting.comment,
            pre_comment=setting.pre_comment)

    @classmethod
    def to_dict(cls, instance: Configuration) -> dict[str, Any]:
        return {'sections': [
            _YamlSection(
                name=sect.name,
                comment=sect.comment,
                pre_comment=sect.pre_comment,
                settings=[cls.__to_setting(i) for i in sect])
            for sect in instance
        ]}

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Configuration:
        ret = Configuration()
        if not isinstance(data, dict) or 'sections' not in data:
            raise ParserError('YAML document has no "sections" list.')
        for sect in data['sections'] or []:
            section = ret.add(Section(
                str(sect.get('name') or ''),
                comment=sect.get('comment'),
                pre_comment=sect.get('pre_comment')))
            for i in sect.get('settings') or []:
                setting = section.add(str(i['name']))
                setting.comment = i.get('comment')
                setting.pre_comment = i.get('pre_comment')
                value = i.get('value')
                if isinstance(value, list):
                    setting.set_value([str(j) for j in value])
                else:
                    # pure digits may come back as int.
                    setting.raw_value = '' if value is None else str(value)
        return ret

    def dumps(self, instance: Configuration) -> str:
        return yaml.safe_dump(
            self.to_dict(instance), allow_unicode=True, sort_keys=False)

    def loads(self, text: str) -> Configuration:
        return self.from_dict(yaml.safe_load(text))

    def read(self) -> Configuration:
        with open(self._require_filename(), 'r', encoding=self._codec) as fp:
            return self.loads(fp.read())

    def write(self, instance: Configuration) -> None:
        with open(self._require_filename(), 'w', encoding=self._codec) as fp:
            fp.write(self.dumps(instance))
