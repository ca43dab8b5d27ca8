"""Locale-aware formatting of numbers, currency, dates and relative time.

LocaleFormatter never raises: when the backend fails (unknown locale,
unknown currency, wrong value type, ...) it logs the failure and returns a
locale-naive rendering of the value.
"""

import math
from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from babel import Locale as BabelLocale
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from localization.logging import get_module_logger

logger = get_module_logger()

NUMBER_TYPES = (int, float, Decimal)

# Units in increasing size; each is used while the distance stays below
# one of the next unit.
RELATIVE_TIME_UNITS = (
    ("second", 1),
    ("minute", 60),
    ("hour", 3600),
    ("day", 86400),
)
SECONDS_PER_UNIT = dict(RELATIVE_TIME_UNITS)


class FormattingBackend(ABC):
    """Platform internationalization facility used by LocaleFormatter.

    Implementations may raise on any failure; LocaleFormatter handles it.
    """

    @abstractmethod
    def format_number(self, value: Any, locale_code: str, options: Dict[str, Any]) -> str:
        pass

    @abstractmethod
    def format_percent(self, value: Any, locale_code: str, options: Dict[str, Any]) -> str:
        pass

    @abstractmethod
    def format_currency(self, value: Any, currency: str, locale_code: str) -> str:
        pass

    @abstractmethod
    def format_date(self, value: Any, locale_code: str, options: Dict[str, Any]) -> str:
        pass

    @abstractmethod
    def format_time(self, value: Any, locale_code: str, options: Dict[str, Any]) -> str:
        pass

    @abstractmethod
    def format_relative(self, amount: int, unit: str, locale_code: str) -> str:
        """Render a signed amount of a unit (e.g., -5 "minute" -> "5 minutes ago")."""
        pass


class BabelFormattingBackend(FormattingBackend):
    """FormattingBackend backed by Babel and the CLDR data it ships.

    Number options:
        style: "decimal" (default), "percent", "scientific" or "compact".
        format: Explicit CLDR number pattern (e.g., "#,##0.00").
        minimum_fraction_digits / maximum_fraction_digits: Fraction digits.
        use_grouping: Whether to insert group separators (default: True).

    Date and time options:
        format: "short", "medium" (default), "long", "full" or a CLDR pattern.
        include_time: Render the time part as well (format_date only).
        tzinfo: Time zone to convert aware values to.
    """

    def format_number(self, value: Any, locale_code: str, options: Dict[str, Any]) -> str:
        _require_number(value)
        locale = _babel_locale(locale_code)
        style = options.get("style", "decimal")
        if style == "percent":
            return self.format_percent(value, locale_code, options)
        if style == "scientific":
            return babel_numbers.format_scientific(
                value, format=options.get("format"), locale=locale
            )
        if style == "compact":
            return babel_numbers.format_compact_decimal(
                value,
                locale=locale,
                fraction_digits=options.get("maximum_fraction_digits", 0),
            )
        if style != "decimal":
            raise ValueError(f"Unknown number style: {style}")

        return babel_numbers.format_decimal(
            value,
            format=_number_pattern(options),
            locale=locale,
            group_separator=options.get("use_grouping", True),
        )

    def format_percent(self, value: Any, locale_code: str, options: Dict[str, Any]) -> str:
        _require_number(value)
        pattern = options.get("format")
        if pattern is None and (
            "minimum_fraction_digits" in options or "maximum_fraction_digits" in options
        ):
            pattern = _number_pattern(options) + "%"
        return babel_numbers.format_percent(
            value,
            format=pattern,
            locale=_babel_locale(locale_code),
            group_separator=options.get("use_grouping", True),
        )

    def format_currency(self, value: Any, currency: str, locale_code: str) -> str:
        _require_number(value)
        currency = str(currency).upper()
        if not babel_numbers.is_currency(currency):
            raise babel_numbers.UnknownCurrencyError(currency)
        return babel_numbers.format_currency(
            value, currency, locale=_babel_locale(locale_code)
        )

    def format_date(self, value: Any, locale_code: str, options: Dict[str, Any]) -> str:
        if not isinstance(value, date):
            raise TypeError(f"Expected date or datetime, got {type(value).__name__}")
        locale = _babel_locale(locale_code)
        pattern = options.get("format", "medium")
        if options.get("include_time"):
            if not isinstance(value, datetime):
                value = datetime.combine(value, time())
            return babel_dates.format_datetime(
                value, format=pattern, tzinfo=options.get("tzinfo"), locale=locale
            )
        if isinstance(value, datetime) and options.get("tzinfo") and value.tzinfo:
            value = value.astimezone(options["tzinfo"])
        return babel_dates.format_date(value, format=pattern, locale=locale)

    def format_time(self, value: Any, locale_code: str, options: Dict[str, Any]) -> str:
        if not isinstance(value, (datetime, time)):
            raise TypeError(f"Expected time or datetime, got {type(value).__name__}")
        return babel_dates.format_time(
            value,
            format=options.get("format", "medium"),
            tzinfo=options.get("tzinfo"),
            locale=_babel_locale(locale_code),
        )

    def format_relative(self, amount: int, unit: str, locale_code: str) -> str:
        # An infinite threshold pins the output to the requested unit
        return babel_dates.format_timedelta(
            timedelta(seconds=amount * SECONDS_PER_UNIT[unit]),
            granularity=unit,
            threshold=float("inf"),
            add_direction=True,
            format="long",
            locale=_babel_locale(locale_code),
        )


class LocaleFormatter:
    """Formats values for the active locale with plain-text fallbacks.

    Attributes:
        backend: FormattingBackend doing the locale-aware work.
        locale_provider: Callable returning the active locale code.
        clock: Callable returning "now" for relative time.
        default_currency: Currency used when none is given.
    """

    def __init__(
        self,
        locale_provider: Callable[[], str],
        backend: Optional[FormattingBackend] = None,
        clock: Optional[Callable[[], datetime]] = None,
        default_currency: str = "USD",
    ):
        self.locale_provider = locale_provider
        self.backend = backend or BabelFormattingBackend()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.default_currency = default_currency

    def format_number(self, value: Any, options: Optional[Dict[str, Any]] = None) -> str:
        """Format a number, falling back to str(value)."""
        locale_code = self.locale_provider()
        try:
            return self.backend.format_number(value, locale_code, dict(options or {}))
        except Exception as e:  # pylint: disable=broad-except
            self._log_failure("number", locale_code, value, e)
            return str(value)

    def format_percent(self, value: Any, options: Optional[Dict[str, Any]] = None) -> str:
        """Format a ratio as a percentage (0.5 -> "50%")."""
        locale_code = self.locale_provider()
        try:
            return self.backend.format_percent(value, locale_code, dict(options or {}))
        except Exception as e:  # pylint: disable=broad-except
            self._log_failure("percent", locale_code, value, e)
            if isinstance(value, NUMBER_TYPES):
                return f"{value * 100:.2f}%"
            return str(value)

    def format_currency(self, value: Any, currency: Optional[str] = None) -> str:
        """Format an amount of money, falling back to "<CODE> <value>"."""
        currency = currency or self.default_currency
        locale_code = self.locale_provider()
        try:
            return self.backend.format_currency(value, currency, locale_code)
        except Exception as e:  # pylint: disable=broad-except
            self._log_failure("currency", locale_code, value, e, currency=currency)
            return f"{currency} {value}"

    def format_date(self, value: Any, options: Optional[Dict[str, Any]] = None) -> str:
        """Format a date or datetime, falling back to ISO 8601."""
        locale_code = self.locale_provider()
        try:
            return self.backend.format_date(value, locale_code, dict(options or {}))
        except Exception as e:  # pylint: disable=broad-except
            self._log_failure("date", locale_code, value, e)
            return _iso(value)

    def format_time(self, value: Any, options: Optional[Dict[str, Any]] = None) -> str:
        """Format a time or datetime, falling back to ISO 8601."""
        locale_code = self.locale_provider()
        try:
            return self.backend.format_time(value, locale_code, dict(options or {}))
        except Exception as e:  # pylint: disable=broad-except
            self._log_failure("time", locale_code, value, e)
            if isinstance(value, datetime):
                return value.time().isoformat()
            return _iso(value)

    def format_relative_time(self, value: Any) -> str:
        """Describe an instant relative to now (e.g., "in 3 days").

        The unit is seconds below one minute, minutes below one hour, hours
        below one day and days otherwise. Amounts are floored, so any past
        instant keeps its "ago" direction.
        """
        locale_code = self.locale_provider()
        try:
            amount, unit = relative_time_parts(value, self._now_for(value))
            return self.backend.format_relative(amount, unit, locale_code)
        except Exception as e:  # pylint: disable=broad-except
            self._log_failure("relative_time", locale_code, value, e)
            return _iso(value)

    def _now_for(self, value: datetime) -> datetime:
        now = self.clock()
        if value.tzinfo is None and now.tzinfo is not None:
            return now.astimezone().replace(tzinfo=None)
        if value.tzinfo is not None and now.tzinfo is None:
            return now.astimezone()
        return now

    def _log_failure(self, kind, locale_code, value, error, **context):
        logger.warning(
            "formatting_failed",
            kind=kind,
            locale=locale_code,
            value=repr(value),
            error=str(error),
            **context,
        )


def relative_time_parts(target: datetime, now: datetime):
    """Split the distance from now to target into (amount, unit).

    Args:
        target: Instant to describe.
        now: Reference instant.

    Returns:
        Tuple of signed amount and unit name; negative amounts are past.
    """
    seconds = math.floor((target - now).total_seconds())
    unit, seconds_per_unit = RELATIVE_TIME_UNITS[0]
    for next_unit, next_seconds in RELATIVE_TIME_UNITS[1:]:
        if abs(seconds) < next_seconds:
            break
        unit, seconds_per_unit = next_unit, next_seconds
    return seconds // seconds_per_unit, unit


def _babel_locale(locale_code: str) -> BabelLocale:
    return BabelLocale.parse(locale_code, sep="-")


def _require_number(value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, NUMBER_TYPES):
        raise TypeError(f"Expected a number, got {type(value).__name__}")


def _number_pattern(options: Dict[str, Any]) -> Optional[str]:
    if "format" in options:
        return options["format"]
    if "minimum_fraction_digits" not in options and "maximum_fraction_digits" not in options:
        return None
    minimum = int(options.get("minimum_fraction_digits", 0))
    maximum = max(minimum, int(options.get("maximum_fraction_digits", max(minimum, 3))))
    integer_part = "#,##0" if options.get("use_grouping", True) else "0"
    fraction = "0" * minimum + "#" * (maximum - minimum)
    return f"{integer_part}.{fraction}" if fraction else integer_part


def _iso(value: Any) -> str:
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)
