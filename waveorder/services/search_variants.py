"""
Diacritic-insensitive search term expansion.

Storefront shoppers type "Pjate" when the catalog says "Pjatë" (and the
other way round). A search term is expanded into up to three variants:
the term itself, its base form (accents stripped) and its diacritic form
(base letters accented). Every variant is then matched as a substring.

Tables are keyed by storefront locale so each market carries its own
mapping.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Set

from waveorder.config import get_settings

settings = get_settings()


# Common Latin vowel accents, folded to their base letter in every table
_LATIN_ACCENTS = {
    "á": "a", "à": "a", "â": "a", "ä": "a", "ã": "a",
    "é": "e", "è": "e", "ê": "e",
    "í": "i", "ì": "i", "î": "i", "ï": "i",
    "ó": "o", "ò": "o", "ô": "o", "ö": "o", "õ": "o",
    "ú": "u", "ù": "u", "û": "u", "ü": "u",
}


def _with_upper(mapping: Dict[str, str]) -> Dict[str, str]:
    result = dict(mapping)
    for src, dst in mapping.items():
        result[src.upper()] = dst.upper()
    return result


@dataclass(frozen=True)
class DiacriticTable:
    """Accented -> base letters, and base -> accented letters, for one locale."""
    base_forms: Dict[str, str]
    diacritic_forms: Dict[str, str] = field(default_factory=dict)

    def to_base(self, term: str) -> str:
        return term.translate(str.maketrans(self.base_forms))

    def to_diacritic(self, term: str) -> str:
        if not self.diacritic_forms:
            return term
        return term.translate(str.maketrans(self.diacritic_forms))


LATIN = DiacriticTable(base_forms=_with_upper(_LATIN_ACCENTS))

ALBANIAN = DiacriticTable(
    base_forms=_with_upper({**_LATIN_ACCENTS, "ë": "e", "ç": "c"}),
    diacritic_forms=_with_upper({"e": "ë", "c": "ç"}),
)

DIACRITIC_TABLES: Dict[str, DiacriticTable] = {
    "sq": ALBANIAN,
    "al": ALBANIAN,
    "latin": LATIN,
}


class SearchVariantExpander:
    def __init__(
        self,
        tables: Optional[Dict[str, DiacriticTable]] = None,
        default_locale: Optional[str] = None,
    ):
        self.tables = tables if tables is not None else DIACRITIC_TABLES
        self.default_locale = default_locale or settings.DEFAULT_SEARCH_LOCALE

    def table_for(self, locale: Optional[str]) -> DiacriticTable:
        if locale and locale.lower() in self.tables:
            return self.tables[locale.lower()]
        return self.tables.get(self.default_locale, LATIN)

    def expand(self, term: Optional[str], locale: Optional[str] = None) -> Set[str]:
        """Return the distinct search variants of ``term``.

        Blank terms produce an empty set, meaning "no search filter".
        """
        if not term or not term.strip():
            return set()

        term = term.strip()
        table = self.table_for(locale)
        return {term, table.to_base(term), table.to_diacritic(term)}


search_variant_expander = SearchVariantExpander()
