"""
Protocol alphabet: log character classification

Pure and stateless. Characters a station does not admit are IGNORED so that
hand-edited logs may carry separator lines ('=') or comments without the
engine special-casing them.
"""

from .interfaces.data_models import ClassificationError, Symbol, SymbolKind
from .stations import StationProfile

__all__ = ["ClassificationError", "classify"]


def classify(char: str, profile: StationProfile) -> Symbol:
    """
    Classify one log character for the given station.

    Args:
        char: Single character from the log
        profile: Active station profile

    Returns:
        The character's Symbol, of kind IGNORED if the station does not
        admit it

    Raises:
        ClassificationError: If the character is admissible but missing from
            the station's symbol table
    """
    if char not in profile.admissible:
        return Symbol(SymbolKind.IGNORED, char)
    try:
        return profile.symbols[char]
    except KeyError:
        raise ClassificationError(
            f"{profile.name}: impossible character {char!r}"
        ) from None
