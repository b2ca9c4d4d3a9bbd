"""
Section-grouped key/value descriptor documents.

Global keys come before any ``[SECTION]`` header. Entries keep the order in
which they were declared, so a section can be walked as an ordered sequence.
"""

from __future__ import annotations
import configparser
import logging
import re
from typing import Dict, Iterator, Optional, Tuple

from .errors import DescriptorError

logger = logging.getLogger(__name__)

# Leading integer as accepted by C's atoi: optional sign, then digits
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
# Section holding the keys declared before the first header
_GLOBAL = "\0global"


def parse_int(value: Optional[str]) -> int:
    """Parse the leading integer of ``value``; anything else reads as 0."""
    if value is None:
        return 0
    m = _INT_PREFIX.match(value)
    return int(m.group(1)) if m else 0


class Descriptor:
    """
    Parsed descriptor: ``None`` names the global section.
    Usage:
        desc = Descriptor.from_string(text)
        desc.get(None, "is_sheet")
        for key, value in desc.entries("FILES"):
            ...
    """

    def __init__(
        self, sections: Optional[Dict[Optional[str], Dict[str, str]]] = None
    ) -> None:
        self._sections: Dict[Optional[str], Dict[str, str]] = {None: {}}
        for name, values in (sections or {}).items():
            self._sections.setdefault(name, {}).update(values)

    @classmethod
    def from_string(cls, text: str) -> "Descriptor":
        parser = configparser.ConfigParser(
            delimiters=("=",),
            comment_prefixes=("#", ";"),
            strict=False,
            interpolation=None,
            default_section="\0defaults",
        )
        # Keep key case; FILES keys are opaque names
        parser.optionxform = str
        try:
            # Indented lines are entries, not value continuations
            lines = "\n".join(line.strip() for line in text.splitlines())
            parser.read_string(f"[{_GLOBAL}]\n{lines}")
        except configparser.Error as e:
            raise DescriptorError("<string>", str(e)) from e
        sections: Dict[Optional[str], Dict[str, str]] = {}
        for name in parser.sections():
            key = None if name == _GLOBAL else name
            sections[key] = dict(parser.items(name))
        return cls(sections)

    @classmethod
    def from_file(cls, path: str) -> "Descriptor":
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Unable to open descriptor %s: %s", path, e)
            raise DescriptorError(path, str(e)) from e
        try:
            return cls.from_string(text)
        except DescriptorError as e:
            logger.error("Unable to parse descriptor %s: %s", path, e)
            raise DescriptorError(path, str(e.__cause__ or e)) from e

    def get(self, section: Optional[str], key: str) -> Optional[str]:
        """Return the raw value, or None if the section or key is absent."""
        return self._sections.get(section, {}).get(key)

    def get_int(self, section: Optional[str], key: str) -> int:
        value = self.get(section, key)
        if value is None:
            logger.debug(
                "Descriptor key %s.%s missing, reading as 0",
                section or "<global>",
                key,
            )
        return parse_int(value)

    def has_section(self, section: str) -> bool:
        return section in self._sections

    def entries(self, section: Optional[str]) -> Iterator[Tuple[str, str]]:
        """
        Yield (key, value) pairs of ``section`` in declaration order.
        Each call starts a fresh pass.
        """
        for key, value in list(self._sections.get(section, {}).items()):
            yield key, value
