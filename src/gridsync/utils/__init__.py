# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Utility helpers for gridsync."""

__all__ = []
