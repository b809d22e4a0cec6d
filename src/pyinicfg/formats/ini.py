# -*- encoding: utf-8 -*-
# @File   : ini.py
# @Time   : 2024/10/15 22:08:41
# @Author : Kariko Lin

"""Text configurations, INI flavoured:

    ```ini
    # pre-comment of [Section], one or more lines
    [Section]  ; inline comment
    Key = Value  # inline comment
    Quoted = "this is # not a comment"
    Escaped = this is \\# not a comment either
    Array = { 1, "2, 3", {4} }
    ```

Both `#` and `;` start a comment, unless escaped with a backslash or
within double quotes. Comment lines right above a section or setting
are its pre-comment; a blank line in between discards them.
"""

import logging
import warnings
from io import StringIO, TextIOBase
from os import PathLike
from typing import IO

import chardet

from ..abstract import FileHandler
from ..consts import COMMENT_CHARS, ESCAPE, HEADER_SECTION, QUOTE
from ..errors import ParserError
from ..model import Configuration, Section, Setting

__all__ = ['IniParser', 'find_comment']

_log = logging.getLogger(__name__)


def find_comment(line: str) -> tuple[int, bool]:
    """Locate the comment marker starting an inline comment.

    Returns the marker index (-1 if none) and
    whether a double quote was left open before it.
    """
    quoted = False
    for i, ch in enumerate(line):
        if ch == QUOTE:
            quoted = not quoted
        elif quoted:
            continue
        elif ch in COMMENT_CHARS and (i == 0 or line[i - 1] != ESCAPE):
            return i, False
    return -1, quoted


class IniParser(FileHandler[Configuration]):
    def __init__(
        self, filename: str | PathLike | None = None,
        encoding: str | None = None, *,
        ignore_inline_comments: bool = False,
        ignore_pre_comments: bool = False,
        comment_char: str = '#',
        space_between_equals: bool = True,
        blank_lines: int = 1
    ) -> None:
        """
        Args:
            encoding: `None` tries UTF-8 first, then `chardet`'s guess.
            comment_char: marker used when writing comments, `#` or `;`.
            space_between_equals: write `key = value` rather than `key=value`.
            blank_lines: how many lines between sections?
        """
        super().__init__(filename)
        if comment_char not in COMMENT_CHARS:
            raise ValueError(
                f'comment_char must be one of {COMMENT_CHARS}, '
                f'got {comment_char!r}')
        self._codec = encoding
        self._ignore_inline = ignore_inline_comments
        self._ignore_pre = ignore_pre_comments
        self._marker = comment_char
        self._delimiter = ' = ' if space_between_equals else '='
        self._blank_lines = blank_lines

    # reading
    @staticmethod
    def decode(raw: bytes, encoding: str | None = None) -> str:
        """Decode file content, guessing the codec if `encoding` fails."""
        try:
            return raw.decode(encoding or 'utf-8-sig')
        except UnicodeDecodeError:
            _log.debug('Not %s, guessing the codec.', encoding or 'utf-8')

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'gbk'}

        # fallbacks
        try:
            return raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            return raw.decode('gbk')

    @staticmethod
    def __split_comment(line: str, lineno: int) -> tuple[str, str | None]:
        idx, quoted = find_comment(line)
        if quoted:
            raise ParserError('closing quote mark expected', lineno)
        if idx < 0:
            return line, None
        return line[:idx].rstrip(), line[idx + 1:].strip()

    @staticmethod
    def __parse_section(content: str, lineno: int) -> Section:
        if not content.endswith(']'):
            raise ParserError('closing bracket "]" expected', lineno)
        return Section(content[1:-1].strip())

    @staticmethod
    def __parse_setting(content: str, lineno: int) -> Setting:
        if (idx := content.find('=')) < 0:
            raise ParserError(
                f'setting assignment expected: {content!r}', lineno)
        name = content[:idx].strip()
        if not name:
            raise ParserError('setting name expected', lineno)
        ret = Setting(name)
        ret.raw_value = content[idx + 1:].strip()
        return ret

    def readstream(
        self, buf: TextIOBase | IO[str],
        ins: Configuration | None = None
    ) -> Configuration:
        """读取解码好的字符串流。

        如没有特殊需求，直接调用`self.read()`便是。
        """
        if ins is None:
            ins = Configuration()
        this_sect: Section | None = None
        comments: list[str] = []
        lineno = 0
        while i := buf.readline():
            lineno += 1
            i = i.strip()
            if not i:
                if comments:
                    _log.debug('line %d: dropped %d dangling comment lines',
                               lineno, len(comments))
                comments.clear()
                continue
            if i[0] in COMMENT_CHARS:
                # only the first marker goes, `## ###` -> `# ###`.
                comments.append(i[1:].strip())
                continue

            content, comment = self.__split_comment(i, lineno)
            if self._ignore_inline:
                comment = None
            pre_comment = (
                None if self._ignore_pre or not comments
                else '\n'.join(comments))
            comments.clear()

            if content[0] == '[':
                this_sect = ins.add(self.__parse_section(content, lineno))
                entity: Section | Setting = this_sect
            else:
                if this_sect is None:
                    this_sect = ins.header
                entity = this_sect.add(self.__parse_setting(content, lineno))
            entity.comment = comment
            entity.pre_comment = pre_comment

        if comments:
            _log.debug('dropped %d comment lines at end of input',
                       len(comments))
        return ins

    def loads(self, text: str) -> Configuration:
        # `\r`, `\r\n` and `\n` all end a line.
        return self.readstream(StringIO(text, newline=None))

    def read(self) -> Configuration:
        with open(self._require_filename(), 'rb') as fp:
            raw = fp.read()
        return self.loads(self.decode(raw, self._codec))

    # writing
    def __output_comments(self, pre_comment: str | None) -> list[str]:
        if pre_comment is None:
            return []
        return [f'{self._marker} {i}' if i else self._marker
                for i in pre_comment.split('\n')]

    def __with_comment(self, line: str, comment: str | None) -> str:
        if comment is None:
            return line
        return f'{line} {self._marker} {comment}'.rstrip()

    @staticmethod
    def __breaks_line(*texts: str | None) -> bool:
        return any(i is not None and ('\n' in i or '\r' in i) for i in texts)

    def __output_setting(self, setting: Setting, section: Section) -> str:
        raw = setting.raw_value
        idx, quoted = find_comment(raw)
        if idx >= 0 or quoted:
            warnings.warn(
                f'[{section.name}] 中 "{setting.name}" 的值含有未转义的注释符'
                f'或未闭合的引号：{raw!r}，再次读取时将被截断。')
        if self.__breaks_line(setting.name, raw, setting.comment):
            warnings.warn(
                f'[{section.name}] 中 {setting.name!r} 的键、值或注释含有'
                f'换行符，再次读取时将无法解析。')
        ret = self.__output_comments(setting.pre_comment)
        ret.append(self.__with_comment(
            f'{setting.name}{self._delimiter}{raw}'.rstrip(),
            setting.comment))
        return '\n'.join(ret)

    def __output_section(self, section: Section, is_first: bool) -> str:
        if find_comment(section.name)[0] >= 0:
            warnings.warn(
                f'节名 {section.name!r} 含有未转义的注释符，'
                f'再次读取时将被截断。')
        if self.__breaks_line(section.name, section.comment):
            warnings.warn(f'节 {section.name!r} 的名称或注释含有换行符，'
                          f'再次读取时将无法解析。')
        ret = self.__output_comments(section.pre_comment)
        # keys before any section need no header line, unless
        # there is nothing else to tell that the section exists.
        if not (
            is_first
            and section.name == HEADER_SECTION
            and section.comment is None
            and section.pre_comment is None
            and len(section) > 0
        ):
            ret.append(self.__with_comment(f'[{section.name}]',
                                           section.comment))
        ret.extend(self.__output_setting(i, section) for i in section)
        return '\n'.join(ret) + '\n'

    def dumps(self, instance: Configuration) -> str:
        return ('\n' * self._blank_lines).join(
            self.__output_section(sect, idx == 0)
            for idx, sect in enumerate(instance))

    def writestream(self, fp: IO, instance: Configuration) -> None:
        text = self.dumps(instance)
        if isinstance(fp, TextIOBase):
            fp.write(text)
        else:
            fp.write(text.encode(self._codec or 'utf-8'))

    def write(self, instance: Configuration) -> None:
        with open(self._require_filename(), 'w',
                  encoding=self._codec or 'utf-8') as fp:
            fp.write(self.dumps(instance))

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"
