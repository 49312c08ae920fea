"""
Factory for creating the series store based on configuration.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from datasources.base import SeriesStore


class SeriesStoreFactory:

    @staticmethod
    def create(config) -> SeriesStore:
        from config import STORE_BACKEND_MEMORY, STORE_BACKEND_SQL

        if config.store_backend == STORE_BACKEND_MEMORY:
            from datasources.memory import InMemorySeriesStore
            return InMemorySeriesStore()
        if config.store_backend == STORE_BACKEND_SQL:
            if not config.database_url:
                raise ValueError("TRENDCAST_DATABASE_URL is required for the sql store backend")
            import database
            from datasources.sql import SqlSeriesStore

            database.init_database(config.database_url)
            return SqlSeriesStore()
        raise ValueError("Unsupported store backend")
