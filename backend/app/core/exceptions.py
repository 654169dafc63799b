# backend/app/core/exceptions.py


class ProviderResponseError(Exception):
    """A provider answered 2xx but without the data we need (no result array, no geocode match)."""
