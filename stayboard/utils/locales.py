"""Locale negotiation from the Accept-Language header."""

from babel import Locale, UnknownLocaleError


def parse_accept_language(header: str | None) -> list[str]:
    """Return language tags from an Accept-Language header, best first.

    Wildcards and malformed quality values are skipped.
    """
    if not header:
        return []

    weighted: list[tuple[float, int, str]] = []
    for index, part in enumerate(header.split(",")):
        tag, _, params = part.strip().partition(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                continue
        if quality <= 0:
            continue
        weighted.append((-quality, index, tag))

    return [tag for _, _, tag in sorted(weighted)]


def negotiate_locale(accept_language: str | None, default: str) -> Locale:
    """Pick the first locale from the header that Babel knows, else ``default``."""
    for tag in parse_accept_language(accept_language):
        try:
            return Locale.parse(tag, sep="-")
        except (UnknownLocaleError, ValueError):
            continue
    return Locale.parse(default)
