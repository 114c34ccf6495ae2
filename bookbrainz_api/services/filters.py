from collections.abc import Callable

from bookbrainz_api.schemas import EntityProjection

Predicate = Callable[[EntityProjection], bool]


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_language_name(value: str) -> str:
    # Stored language names are capitalised: "english" -> "English".
    return value[:1].upper() + value[1:].lower()


def build_predicate(*, format: str | None = None, language: str | None = None) -> Predicate:
    """Compile optional format and language criteria into one predicate.

    Both criteria must hold when both are given; with neither every
    projection is accepted. Blank values count as not given.
    """
    wanted_format = _clean(format)
    wanted_language = _clean(language)
    if wanted_format is not None:
        wanted_format = wanted_format.lower()
    if wanted_language is not None:
        wanted_language = normalize_language_name(wanted_language)

    def predicate(projection: EntityProjection) -> bool:
        if wanted_format is not None and (projection.edition_format or "").lower() != wanted_format:
            return False
        if wanted_language is not None:
            languages = {normalize_language_name(name) for name in projection.languages}
            if wanted_language not in languages:
                return False
        return True

    return predicate
