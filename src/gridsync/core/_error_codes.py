# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_409 = "http_409"
HTTP_422 = "http_422"
HTTP_429 = "http_429"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"
HTTP_504 = "http_504"

TRANSIENT_STATUS_CODES = {429, 502, 503, 504}

# Validation subcodes
VALIDATION_PAGE_SIZE = "validation_page_size"
VALIDATION_EMPTY_DATA = "validation_empty_data"
VALIDATION_RAGGED_ROWS = "validation_ragged_rows"
VALIDATION_PRIMARY_KEY_COLUMN = "validation_primary_key_column"

# Metadata subcodes
METADATA_TABLE_NOT_FOUND = "metadata_table_not_found"

# Response format subcodes
RESPONSE_MALFORMED_BODY = "response_malformed_body"

# Sheet structure subcodes
SHEET_NOT_FOUND = "sheet_not_found"
SHEET_TOO_FEW_COLUMNS = "sheet_too_few_columns"


def http_subcode(status: int) -> str:
    """Return the subcode string for an HTTP status, e.g. ``http_404``."""
    return f"http_{status}"
