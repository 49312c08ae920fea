# datasources/exceptions.py

class SeriesStoreError(Exception):
    pass


class StoreUnavailable(SeriesStoreError):
    pass


class InvalidTimeframe(SeriesStoreError, ValueError):
    pass
