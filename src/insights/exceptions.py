"""Custom exceptions for the insights module."""


class WeeklyReviewValidationError(ValueError):
    """Raised when a weekly review is requested with an unusable week start.

    These are caller errors and should not be retried.
    """


class InvalidDateError(WeeklyReviewValidationError):
    """Raised when the week start is not a YYYY-MM-DD date."""

    def __init__(self, value: str) -> None:
        """Initialise InvalidDateError.

        :param value: The rejected input.
        """
        self.value = value
        super().__init__(f'Invalid date: "{value}". Expected YYYY-MM-DD.')


class NotMondayError(WeeklyReviewValidationError):
    """Raised when the week start is a valid date but not a Monday."""

    def __init__(self, value: str, iso_weekday: int) -> None:
        """Initialise NotMondayError.

        :param value: The rejected input.
        :param iso_weekday: Its ISO day of week (1 = Monday .. 7 = Sunday).
        """
        self.value = value
        self.iso_weekday = iso_weekday
        super().__init__(
            f'"{value}" is not a Monday (dayOfWeek={iso_weekday}). '
            "Weekly reviews start on Monday."
        )
