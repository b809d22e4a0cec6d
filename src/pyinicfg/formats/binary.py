# -*- encoding: utf-8 -*-
# @File   : binary.py
# @Time   : 2024/10/16 19:47:03
# @Author : Kariko Lin

"""Binary configurations, for when nobody has to edit them by hand.

Same sections and settings as the text format, written in document order
with explicit lengths, so none of the comment/quote/brace rules apply.
"""

from struct import error as StructError
from struct import calcsize, pack, unpack
from typing import IO

from ..abstract import FileHandler
from ..consts import BINARY_VERSION, BinMark
from ..errors import InvalidBinaryRecord
from ..model import Configuration, Section, Setting
from ..value import SettingValue

__all__ = ['ConfigBinaryParser']


class ConfigBinaryParser(FileHandler[Configuration]):
    """Layout, all little endian:

    Header:

    offset | element
    ----|------
    00H | char tag[4]  (` GFC`)
    04H | DWORD version
    08H | DWORD numsections

    Section: `char tag[4]` (` CES`), `DWORD numsettings`,
    then name, comment, pre_comment as strings.

    Setting: `char tag[4]` (` TES`), name, comment, pre_comment, raw value
    as strings, `BYTE isarray`, `DWORD numelements`, elements as strings.

    String: `long len` then `char utf8[len]`; `len == -1` means `None`.
    """
    @staticmethod
    def __readexact(fp: IO[bytes], size: int) -> bytes:
        ret = fp.read(size)
        if len(ret) != size:
            raise InvalidBinaryRecord('数据不完整——文件可能已被截断。')
        return ret

    def __unpack(self, fp: IO[bytes], fmt: str) -> tuple:
        try:
            return unpack(fmt, self.__readexact(fp, calcsize(fmt)))
        except StructError as e:
            raise InvalidBinaryRecord(str(e)) from e

    def __readtag(self, fp: IO[bytes], mark: BinMark) -> None:
        if self.__readexact(fp, 4) != mark.encode('ascii'):
            raise InvalidBinaryRecord(
                f'记录校验失败——应为 "{mark.value}"，文件可能已损坏。')

    def __readstring(self, fp: IO[bytes]) -> str | None:
        length = self.__unpack(fp, '<l')[0]
        if length < 0:
            return None
        try:
            return self.__readexact(fp, length).decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidBinaryRecord(str(e)) from e

    def __readsetting(self, fp: IO[bytes]) -> Setting:
        self.__readtag(fp, BinMark.IS_SET)
        name = self.__readstring(fp) or ''
        ret = Setting(
            name,
            comment=self.__readstring(fp),
            pre_comment=self.__readstring(fp))
        raw = self.__readstring(fp) or ''
        is_array, numelem = self.__unpack(fp, '<BL')
        elements = []
        i = 0
        while i < numelem:
            elements.append(self.__readstring(fp) or '')
            i += 1
        ret.value = SettingValue(raw, tuple(elements) if is_array else None)
        return ret

    def __readsection(self, fp: IO[bytes]) -> Section:
        self.__readtag(fp, BinMark.IS_SEC)
        numsettings = self.__unpack(fp, '<L')[0]
        ret = Section(
            self.__readstring(fp) or '',
            comment=self.__readstring(fp),
            pre_comment=self.__readstring(fp))
        i = 0
        while i < numsettings:
            ret.add(self.__readsetting(fp))
            i += 1
        return ret

    def readstream(self, fp: IO[bytes]) -> Configuration:
        self.__readtag(fp, BinMark.IS_CFG)
        version, numsections = self.__unpack(fp, '<LL')
        if version > BINARY_VERSION:
            raise InvalidBinaryRecord(
                f'不支持的版本 {version}（当前最高 {BINARY_VERSION}）。')
        ret = Configuration()
        i = 0
        while i < numsections:
            ret.add(self.__readsection(fp))
            i += 1
        return ret

    def read(self) -> Configuration:
        with open(self._require_filename(), 'rb') as fp:
            return self.readstream(fp)

    @staticmethod
    def __writestring(fp: IO[bytes], val: str | None) -> None:
        if val is None:
            fp.write(pack('<l', -1))
            return
        data = val.encode('utf-8')
        fp.write(pack(f'<l{len(data)}s', len(data), data))

    def __writesetting(self, fp: IO[bytes], setting: Setting) -> None:
        fp.write(BinMark.IS_SET.encode('ascii'))
        self.__writestring(fp, setting.name)
        self.__writestring(fp, setting.comment)
        self.__writestring(fp, setting.pre_comment)
        self.__writestring(fp, setting.raw_value)
        elements = setting.value.elements or ()
        fp.write(pack('<BL', setting.is_array, len(elements)))
        for i in elements:
            self.__writestring(fp, i)

    def __writesection(self, fp: IO[bytes], section: Section) -> None:
        fp.write(pack(
            '<4sL',
            BinMark.IS_SEC.encode('ascii'),
            len(section)))
        self.__writestring(fp, section.name)
        self.__writestring(fp, section.comment)
        self.__writestring(fp, section.pre_comment)
        for i in section:
            self.__writesetting(fp, i)

    def writestream(self, fp: IO[bytes], instance: Configuration) -> None:
        # force little endian.
        fp.write(pack(
            '<4sLL',
            BinMark.IS_CFG.encode('ascii'),
            BINARY_VERSION,
            len(instance)))
        for i in instance:
            self.__writesection(fp, i)

    def write(self, instance: Configuration) -> None:
        with open(self._require_filename(), 'wb') as fp:
            self.writestream(fp, instance)
