"""Edge naming and the inflection helpers it relies on.

Edge names are derived from foreign-key column names by stripping a
conventional identifier suffix::

    posterId      -> poster
    fileId        -> file
    thumbnail_id  -> thumbnail

When a name is already used on a node by a different relationship, the name
is qualified, first with the referenced table and then with the constraint
symbol. When neither resolves the collision :class:`AmbiguousEdgeName` is
raised; an existing edge is never silently overwritten.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Collection, Sequence

from relgraph.architecture.onto_sql import ForeignKey
from relgraph.inference.exceptions import AmbiguousEdgeName

logger = logging.getLogger(__name__)

DEFAULT_ID_SUFFIXES: tuple[str, ...] = ("_id", "Id", "ID")

QUALIFIER_SEPARATOR = "_"

# plural -> singular
IRREGULAR_PLURALS: dict[str, str] = {
    "people": "person",
    "children": "child",
    "men": "man",
    "women": "woman",
    "mice": "mouse",
    "geese": "goose",
    "feet": "foot",
    "teeth": "tooth",
    "indices": "index",
    "analyses": "analysis",
    "theses": "thesis",
    "crises": "crisis",
    "statuses": "status",
    "buses": "bus",
    "bonuses": "bonus",
    "campuses": "campus",
    "viruses": "virus",
    "censuses": "census",
    "vertices": "vertex",
    "matrices": "matrix",
    "appendices": "appendix",
    "criteria": "criterion",
    "phenomena": "phenomenon",
    "knives": "knife",
    "wives": "wife",
    "lives": "life",
    "leaves": "leaf",
    "halves": "half",
    "shelves": "shelf",
    "wolves": "wolf",
    "thieves": "thief",
}
IRREGULAR_SINGULARS: dict[str, str] = {v: k for k, v in IRREGULAR_PLURALS.items()}

UNCOUNTABLE: frozenset[str] = frozenset(
    {"data", "metadata", "media", "series", "species", "news", "equipment", "information"}
)

# singular stems ending in -ie, -che and -s whose plurals the suffix rules would
# otherwise cut too far: movies, caches, aliases
IE_STEMS: tuple[str, ...] = (
    "movie", "cookie", "rookie", "zombie", "calorie", "brownie", "selfie",
    "goalie", "genie", "prairie", "pie", "tie", "lie",
)
CHE_STEMS: tuple[str, ...] = (
    "cache", "niche", "avalanche", "headache", "toothache", "moustache",
    "mustache", "cliche", "creche", "quiche", "psyche", "tranche", "microfiche",
)
S_STEMS: tuple[str, ...] = ("alias", "bias", "gas", "canvas", "atlas", "iris", "lens")

# self-referencing edges named after the forward side: parent -> children
SELF_REFERENCE_INVERSES: dict[str, tuple[str, str]] = {
    "parent": ("child", "children"),
}

_WORD_SPLIT = re.compile(r"[_\-\s]+")


def _match_case(word: str, replacement: str) -> str:
    if word[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def _on_last_word(text: str, transform: Callable[[str], str]) -> str:
    head, sep, last = text.rpartition("_")
    if not last:
        return text
    return f"{head}{sep}{transform(last)}"


def _singular_word(word: str) -> str:
    lower = word.lower()
    if lower in UNCOUNTABLE or lower in IRREGULAR_SINGULARS or lower in S_STEMS:
        return word
    if lower in IRREGULAR_PLURALS:
        return _match_case(word, IRREGULAR_PLURALS[lower])
    if lower.endswith("ies") and len(lower) > 3:
        if lower[:-1] in IE_STEMS or lower.endswith("vies"):
            return word[:-1]
        return word[:-3] + "y"
    if lower.endswith("ches") and lower[:-1] in CHE_STEMS:
        return word[:-1]
    if lower.endswith("ses") and lower[:-2] in S_STEMS:
        return word[:-2]
    if lower.endswith(("sses", "shes", "ches", "xes", "zes")):
        return word[:-2]
    if lower.endswith(("ss", "us", "is")):
        return word
    if lower.endswith("s") and len(lower) > 1:
        return word[:-1]
    return word


def _plural_word(word: str) -> str:
    lower = word.lower()
    if lower in UNCOUNTABLE or lower in IRREGULAR_PLURALS:
        return word
    if lower in IRREGULAR_SINGULARS:
        return _match_case(word, IRREGULAR_SINGULARS[lower])
    if lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        return word[:-1] + "ies"
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


def singularize(name: str) -> str:
    """Singular form of a (snake_case) name; only the last word is inflected.

    Examples:
        >>> singularize("categories")
        'category'
        >>> singularize("user_profiles")
        'user_profile'
    """
    return _on_last_word(name, _singular_word)


def pluralize(name: str) -> str:
    """Plural form of a (snake_case) name; only the last word is inflected."""
    return _on_last_word(name, _plural_word)


def type_name(table_name: str) -> str:
    """Schema type name of a table: singular, PascalCase.

    Examples:
        >>> type_name("files")
        'File'
        >>> type_name("user_profiles")
        'UserProfile'
    """
    parts = [p for p in _WORD_SPLIT.split(singularize(table_name)) if p]
    return "".join(p[:1].upper() + p[1:] for p in parts)


class EdgeNamer:
    """Derives unique, readable edge names.

    Args:
        id_suffixes: Identifier suffixes stripped from foreign-key column
            names, tried in order; matching is case-sensitive.
    """

    def __init__(self, id_suffixes: Sequence[str] = DEFAULT_ID_SUFFIXES):
        self.id_suffixes = tuple(id_suffixes)

    def base_name(self, column_name: str) -> str:
        for suffix in self.id_suffixes:
            if column_name.endswith(suffix) and len(column_name) > len(suffix):
                return column_name[: -len(suffix)]
        return column_name

    def resolve(
        self,
        candidate: str,
        taken: Collection[str],
        qualifiers: Sequence[str | None] = (),
        table: str | None = None,
        symbol: str | None = None,
    ) -> str:
        """Return the first unused name among the candidate and its qualified forms.

        Args:
            candidate: Preferred name
            taken: Names already used on the node by other relationships
            qualifiers: Prefixes tried in order when ``candidate`` is taken;
                empty qualifiers are skipped
            table: Table of the node, for error reporting
            symbol: Constraint symbol, for error reporting

        Raises:
            AmbiguousEdgeName: If every alternative is taken
        """
        alternatives = [candidate]
        for qualifier in qualifiers:
            if not qualifier:
                continue
            alternative = f"{qualifier}{QUALIFIER_SEPARATOR}{candidate}"
            if alternative not in alternatives:
                alternatives.append(alternative)

        for name in alternatives:
            if name not in taken:
                if name != candidate:
                    logger.debug(
                        f"Edge name '{candidate}' is taken on '{table}', using '{name}'"
                    )
                return name

        raise AmbiguousEdgeName(
            f"Cannot name edge '{candidate}' on table '{table}' "
            f"(constraint '{symbol}'): all of {alternatives} are taken",
            candidates=alternatives,
            table=table,
            symbol=symbol,
        )

    def forward_name(
        self, table_name: str, fk: ForeignKey, taken: Collection[str]
    ) -> str:
        """Name of the edge declared on the table owning the foreign key."""
        return self.resolve(
            self.base_name(fk.columns[0]),
            taken,
            qualifiers=(fk.ref_table.lower(), fk.symbol),
            table=table_name,
            symbol=fk.symbol,
        )

    def inverse_base_name(
        self, source_table: str, fk: ForeignKey, forward_name: str, unique: bool
    ) -> str:
        if fk.ref_table == source_table and forward_name in SELF_REFERENCE_INVERSES:
            singular, plural = SELF_REFERENCE_INVERSES[forward_name]
        else:
            singular = singularize(source_table)
            plural = pluralize(singular)
        return singular if unique else plural

    def inverse_name(
        self,
        source_table: str,
        fk: ForeignKey,
        forward_name: str,
        unique: bool,
        taken: Collection[str],
    ) -> str:
        """Name of the edge declared on the referenced table.

        Collisions are qualified with the paired forward edge name, then with
        the constraint symbol.
        """
        return self.resolve(
            self.inverse_base_name(source_table, fk, forward_name, unique),
            taken,
            qualifiers=(forward_name, fk.symbol),
            table=fk.ref_table,
            symbol=fk.symbol,
        )
