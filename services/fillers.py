from typing import Dict, FrozenSet, Iterable, List, Optional
from config import Config

# Hesitation tokens that don't count toward speaking speed or pause boundaries
FRENCH_FILLERS: FrozenSet[str] = frozenset({
    "euh",
    "heu",
    "hum",
    "hmm",
    "mh",
    "bah",
    "ben",
    "genre",
    "tu vois",
    # Common variants
    "euuuh",
    "heuuu",
    "euhh",
    "um",
    "uh",
    "hm",
})

ENGLISH_FILLERS: FrozenSet[str] = frozenset({
    "um",
    "umm",
    "uh",
    "uhh",
    "er",
    "erm",
    "ah",
    "hm",
    "hmm",
    "mm",
    "mhm",
})

FILLER_LEXICONS: Dict[str, FrozenSet[str]] = {
    "fr": FRENCH_FILLERS,
    "en": ENGLISH_FILLERS,
}


def get_filler_lexicon(language: Optional[str] = None) -> FrozenSet[str]:
    """Return the lexicon for a language code, or the configured default."""
    if language:
        lexicon = FILLER_LEXICONS.get(language.strip().lower())
        if lexicon is not None:
            return lexicon
    return FILLER_LEXICONS.get(Config.FILLER_LANGUAGE, FRENCH_FILLERS)


def is_filler(word: str, lexicon: Optional[FrozenSet[str]] = None) -> bool:
    """Check if a word is a filler (case-insensitive)"""
    if lexicon is None:
        lexicon = get_filler_lexicon()
    return word.strip().lower() in lexicon


def filter_fillers(words: Iterable[str], lexicon: Optional[FrozenSet[str]] = None) -> List[str]:
    """Filter out filler words, keeping the original order"""
    if lexicon is None:
        lexicon = get_filler_lexicon()
    return [word for word in words if not is_filler(word, lexicon)]
