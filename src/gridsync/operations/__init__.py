# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for gridsync.

This module contains the operation namespace classes that organize
related operations under intuitive namespaces:
- RecordOperations: record reads and writes on the tables API
- LookupOperations: cached lookup tables built from records
- JobOperations: canned searches on the jobs API
"""

__all__ = []
