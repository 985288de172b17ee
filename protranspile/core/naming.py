"""Naming scheme for protranspile

Converts canonical (camelCase, dotted) names into the file-name conventions
of the generated targets:
- Test names: test.watchOrderBook -> test_watch_order_book
- Identifiers: validated against a plain identifier grammar
"""

import re
from typing import Iterable, List, Optional


class NamingScheme:
    """Identifier conversion helpers shared by every generator"""

    _LOWER_UPPER = re.compile(r"[a-z0-9][A-Z]")
    _ACRONYM_TAIL = re.compile(r"[A-Z0-9][A-Z0-9][a-z][^$]")
    _TRAILING_DIGIT = re.compile(r"[a-z][0-9]$")
    _IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

    @staticmethod
    def uncamelcase(name: str) -> str:
        """Convert a camelCase name to lower snake case

        Names without any uppercase letter are returned unchanged.

        Args:
            name: Name such as "watchOrderBook" or "fetchOHLCVWs"

        Returns:
            Lower-cased name with underscores (e.g., "watch_order_book")
        """
        if not re.search(r"[A-Z]", name):
            return name
        result = NamingScheme._LOWER_UPPER.sub(lambda m: m.group(0)[0] + "_" + m.group(0)[1], name)
        result = NamingScheme._ACRONYM_TAIL.sub(lambda m: m.group(0)[0] + "_" + m.group(0)[1:], result)
        result = NamingScheme._TRAILING_DIGIT.sub(lambda m: m.group(0)[0] + "_" + m.group(0)[1], result)
        return result.lower()

    @staticmethod
    def uncamelcase_name(name: str, separator: str = "_") -> str:
        """File stem for a canonical test name

        Dots separate name segments in canonical test names ("test.Cache")
        and become the separator as well.
        """
        stem = NamingScheme.uncamelcase(name).replace(".", separator)
        if separator != "_":
            stem = stem.replace("_", separator)
        return stem

    @staticmethod
    def is_valid_identifier(name: str) -> bool:
        return bool(name) and NamingScheme._IDENTIFIER.match(name) is not None

    @staticmethod
    def unique(items: Iterable[str]) -> List[str]:
        """Drop repeated items, keeping first-seen order"""
        return list(dict.fromkeys(items))

    @staticmethod
    def strip_marker(name: str, marker: str) -> Optional[str]:
        """Remove the first occurrence of marker, or None if absent"""
        if not marker or marker not in name:
            return None
        return name.replace(marker, "", 1)
