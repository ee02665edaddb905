# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Quickstart: pull active jobs into a sheet and keep a people lookup warm.

Environment:
    GRIDSYNC_JOBSTOKEN        jobs API token
    GRIDSYNC_AIRTABLETOKEN    tables API personal access token
    GRIDSYNC_SERVICEACCOUNT   path to a Google service account JSON file
    GRIDSYNC_SPREADSHEET      spreadsheet id
"""

import logging

from gridsync import JobsClient, TablesClient
from gridsync.core import EnvSecretStore
from gridsync.models.projection import ObjectProjection
from gridsync.sheets.google import GoogleSheetsHost
from gridsync.sheets.sync import SheetSynchronizer
from gridsync.utils.tabular import flatten


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    secrets = EnvSecretStore(prefix="GRIDSYNC_")

    with JobsClient(secrets.get("jobsToken")) as jobs_client:
        jobs = jobs_client.jobs.active_jobs()
        recent_time = jobs_client.jobs.time_since(days_ago=5)

    rows = flatten(
        {
            "Id": "id",
            "Number": "number",
            "Name": "name",
            "Client": lambda _header, job: (job.get("company") or {}).get("name"),
        },
        jobs,
    )

    host = GoogleSheetsHost.from_service_account_file(secrets.get("serviceAccount"), secrets.get("spreadsheet"))
    sync = SheetSynchronizer(host)
    sync.update_sheet_with_data("Jobs", rows)

    time_rows = flatten({"Id": "id", "Date": "date", "Minutes": "minutes", "User": "userId"}, recent_time)
    sync.insert_data("Time", time_rows)
    sync.clean_up_sheet("Time", primary_key_columns=1)

    with TablesClient(secrets.get("airtableToken"), "appVlR8qys1QCNt3H") as tables:
        people = tables.lookups.get(
            "tblWPSxJhJdRgBstS",
            key_field=None,
            projection=ObjectProjection({"email": "fldQRiDzR0S0GpqqJ"}),
        )
    print(f"{len(jobs)} jobs, {len(recent_time)} time entries, {len(people)} people")


if __name__ == "__main__":
    main()
