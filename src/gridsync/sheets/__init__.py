# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Spreadsheet synchronization for gridsync.

This module contains the host contracts a spreadsheet backend implements,
the Google Sheets backend, and the synchronizer that reconciles datasets
against existing sheets.
"""

from .host import SheetHost, Worksheet
from .sync import SheetSynchronizer

__all__ = ["SheetHost", "Worksheet", "SheetSynchronizer"]
