"""Month and weekday names per supported locale.

Names are looked up by explicit locale code on every call; nothing here holds
a "current" locale. Weekday tuples are Sunday-first.
"""

from typing import NamedTuple

DEFAULT_LOCALE = "en"

AVAILABLE_LOCALES: dict[str, str] = {
    "en": "English",
    "de": "Deutsch",
    "fr": "Français",
    "es": "Español",
    "it": "Italiano",
    "nl": "Nederlands",
    "pt": "Português",
    "sv": "Svenska",
}


class LocaleNames(NamedTuple):
    months_long: tuple[str, ...]
    months_short: tuple[str, ...]
    weekdays_long: tuple[str, ...]
    weekdays_short: tuple[str, ...]

    @property
    def weekdays_narrow(self) -> tuple[str, ...]:
        return tuple(name[0].upper() for name in self.weekdays_long)


_NAMES: dict[str, LocaleNames] = {
    "en": LocaleNames(
        ("January", "February", "March", "April", "May", "June",
         "July", "August", "September", "October", "November", "December"),
        ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
        ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
        ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"),
    ),
    "de": LocaleNames(
        ("Januar", "Februar", "März", "April", "Mai", "Juni",
         "Juli", "August", "September", "Oktober", "November", "Dezember"),
        ("Jan", "Feb", "Mär", "Apr", "Mai", "Jun", "Jul", "Aug", "Sep", "Okt", "Nov", "Dez"),
        ("Sonntag", "Montag", "Dienstag", "Mittwoch", "Donnerstag", "Freitag", "Samstag"),
        ("So", "Mo", "Di", "Mi", "Do", "Fr", "Sa"),
    ),
    "fr": LocaleNames(
        ("janvier", "février", "mars", "avril", "mai", "juin",
         "juillet", "août", "septembre", "octobre", "novembre", "décembre"),
        ("janv.", "févr.", "mars", "avr.", "mai", "juin",
         "juil.", "août", "sept.", "oct.", "nov.", "déc."),
        ("dimanche", "lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi"),
        ("dim.", "lun.", "mar.", "mer.", "jeu.", "ven.", "sam."),
    ),
    "es": LocaleNames(
        ("enero", "febrero", "marzo", "abril", "mayo", "junio",
         "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre"),
        ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sept", "oct", "nov", "dic"),
        ("domingo", "lunes", "martes", "miércoles", "jueves", "viernes", "sábado"),
        ("dom", "lun", "mar", "mié", "jue", "vie", "sáb"),
    ),
    "it": LocaleNames(
        ("gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
         "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre"),
        ("gen", "feb", "mar", "apr", "mag", "giu", "lug", "ago", "set", "ott", "nov", "dic"),
        ("domenica", "lunedì", "martedì", "mercoledì", "giovedì", "venerdì", "sabato"),
        ("dom", "lun", "mar", "mer", "gio", "ven", "sab"),
    ),
    "nl": LocaleNames(
        ("januari", "februari", "maart", "april", "mei", "juni",
         "juli", "augustus", "september", "oktober", "november", "december"),
        ("jan", "feb", "mrt", "apr", "mei", "jun", "jul", "aug", "sep", "okt", "nov", "dec"),
        ("zondag", "maandag", "dinsdag", "woensdag", "donderdag", "vrijdag", "zaterdag"),
        ("zo", "ma", "di", "wo", "do", "vr", "za"),
    ),
    "pt": LocaleNames(
        ("janeiro", "fevereiro", "março", "abril", "maio", "junho",
         "julho", "agosto", "setembro", "outubro", "novembro", "dezembro"),
        ("jan", "fev", "mar", "abr", "mai", "jun", "jul", "ago", "set", "out", "nov", "dez"),
        ("domingo", "segunda-feira", "terça-feira", "quarta-feira",
         "quinta-feira", "sexta-feira", "sábado"),
        ("dom", "seg", "ter", "qua", "qui", "sex", "sáb"),
    ),
    "sv": LocaleNames(
        ("januari", "februari", "mars", "april", "maj", "juni",
         "juli", "augusti", "september", "oktober", "november", "december"),
        ("jan", "feb", "mars", "apr", "maj", "juni", "juli", "aug", "sep", "okt", "nov", "dec"),
        ("söndag", "måndag", "tisdag", "onsdag", "torsdag", "fredag", "lördag"),
        ("sön", "mån", "tis", "ons", "tors", "fre", "lör"),
    ),
}


def get_locale_names(locale: str) -> LocaleNames:
    """Return name tables for ``locale``.

    Region suffixes are ignored ("en-GB" -> "en"); unknown locales fall back
    to English.
    """
    code = (locale or DEFAULT_LOCALE).replace("_", "-").split("-", 1)[0].lower()
    return _NAMES.get(code, _NAMES[DEFAULT_LOCALE])
