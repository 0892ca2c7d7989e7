# ==================================================
# bloom_text_encoder/text.py
# ==================================================
"""String helpers: whitespace splitting, token preprocessors and stopwords."""
from enum import Enum
from functools import lru_cache
from pathlib import Path
import logging
import re
import unicodedata
from typing import Callable

from .errors import ConfigurationError

log = logging.getLogger(__name__)

RESOURCES = Path(__file__).with_name("resources")

PUNCT_PATTERN = re.compile(r"[^\w\s\-_]+")
SPACE_PATTERN = re.compile(r"\s+")
NUMERIC_PATTERN = re.compile(r"\d+")

UMLAUT_REPLACEMENTS = (("Ä", "Ae"), ("Ü", "Ue"), ("Ö", "Oe"),
                       ("ä", "ae"), ("ü", "ue"), ("ö", "oe"),
                       ("ß", "ss"), ("–", "-"))


class Language(str, Enum):
    EN = "EN"
    DE = "DE"

    @classmethod
    def parse(cls, value: "str | Language | None") -> "Language | None":
        if value is None or isinstance(value, Language):
            return value
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ConfigurationError(f"unsupported language {value!r}") from None


def split_spaces(text: str) -> list[str]:
    return text.split()


def replace_umlauts(text: str) -> str:
    for src, dst in UMLAUT_REPLACEMENTS:
        text = text.replace(src, dst)
    return text


# -- preprocessors -----------------------------------------------------------
def identity(token: str) -> str:
    return token


def lowercase(token: str) -> str:
    token = replace_umlauts(token)
    token = unicodedata.normalize("NFD", token)
    return SPACE_PATTERN.sub("_", token.strip()).lower()


def minimal_lowercase(token: str) -> str:
    """Lowercase, drop punctuation, map digit runs to ``#`` and spaces to ``_``."""
    token = replace_umlauts(token.strip())
    token = unicodedata.normalize("NFD", token)
    token = PUNCT_PATTERN.sub("", token)
    token = NUMERIC_PATTERN.sub("#", token)
    token = SPACE_PATTERN.sub("_", token)
    return token.lower()


PREPROCESSORS: dict[str, Callable[[str], str]] = {
    "none": identity,
    "lowercase": lowercase,
    "minimal_lowercase": minimal_lowercase,
}


def get_preprocessor(name: str) -> Callable[[str], str]:
    try:
        return PREPROCESSORS[name]
    except KeyError:
        raise ConfigurationError(
            f"unknown preprocessor {name!r}, expected one of {sorted(PREPROCESSORS)}") from None


# -- stopwords ---------------------------------------------------------------
@lru_cache(maxsize=None)
def stopwords(language: Language) -> frozenset[str]:
    path = RESOURCES / f"stopwords_{language.value.lower()}.txt"
    with open(path, "r", encoding="utf-8") as f:
        words = frozenset(line.strip().lower() for line in f if line.strip())
    log.debug("loaded %d stop words for %s", len(words), language.value)
    return words


def is_stopword(word: str, language: "Language | str | None") -> bool:
    language = Language.parse(language)
    if language is None:
        return False
    return word.lower() in stopwords(language)
