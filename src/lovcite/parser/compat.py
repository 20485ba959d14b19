"""Deprecated names from when the parser only handled Riksdagen dumps.

Every name here warns and delegates to the Lovdata-neutral name in
lovcite.parser. Nothing inside lovcite imports this module.
"""

import warnings
from typing import List, Optional

from .models import ParseDiagnostics, Provision, ProvisionParseResult
from .statute_parser import ParserSettings, parse_statute_provisions, parse_statute_text

_RENAMED_TYPES = {
    "RiksdagenProvision": ("Provision", Provision),
    "RiksdagenParseDiagnostics": ("ParseDiagnostics", ParseDiagnostics),
    "RiksdagenParseResult": ("ProvisionParseResult", ProvisionParseResult),
}


def _warn(old: str, new: str) -> None:
    warnings.warn(
        f"{old} is deprecated, use lovcite.parser.{new} instead",
        DeprecationWarning,
        stacklevel=3,
    )


def parse_riksdagen_provisions(
    text: str, settings: Optional[ParserSettings] = None
) -> ProvisionParseResult:
    _warn("parse_riksdagen_provisions", "parse_statute_provisions")
    return parse_statute_provisions(text, settings)


def parse_riksdagen_text(text: str, settings: Optional[ParserSettings] = None) -> List[Provision]:
    _warn("parse_riksdagen_text", "parse_statute_text")
    return parse_statute_text(text, settings)


def __getattr__(name: str):
    if name in _RENAMED_TYPES:
        new_name, model = _RENAMED_TYPES[name]
        _warn(name, new_name)
        return model
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
