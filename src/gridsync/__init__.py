# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
gridsync: paginated API clients, cached lookups and spreadsheet synchronization.

The package reads records from a tabular-database API and a job-management API,
projects them into lookup tables or flat rows, and writes the result into a
spreadsheet while keeping the sheet's own properties intact.
"""

from .client import JobsClient, TablesClient

__version__ = "0.1.0"

__all__ = ["TablesClient", "JobsClient", "__version__"]
