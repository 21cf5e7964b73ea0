import re
import unicodedata


def normalize_text(text: str) -> str:
    """
    Nettoie une chaîne : trim, unicodes normalisés, espaces réduits.
    """
    if not text:
        return ""
    text = text.strip()
    text = unicodedata.normalize("NFKC", text)
    text = re.sub(r"\s+", " ", text)
    return text


def fold(text: str) -> str:
    """
    Forme de comparaison insensible à la casse (recherche, doublons).
    """
    if not text:
        return ""
    return unicodedata.normalize("NFKC", text).casefold()


def word_key(word: str) -> str:
    return fold(normalize_text(word))
