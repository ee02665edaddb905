# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for gridsync.

This module contains the paginated fetch engine and the low-level clients for
the tables API and the jobs API.
"""

__all__ = []
