class WeatherAppException(Exception):
    """Base exception for the city weather service."""
    def __init__(self, message: str):
        super().__init__(message)


class TransportException(WeatherAppException):
    """Raised when an upstream request fails or returns a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class CityNotFoundException(WeatherAppException):
    """Raised when a city identifier has no matching directory record."""

    def __init__(self, city_id: str):
        self.city_id = city_id
        super().__init__(f"City not found: {city_id}")


class ParseException(WeatherAppException):
    """Raised when an upstream payload cannot be understood."""


class ValidationError(WeatherAppException):
    """Raised when validation fails."""
