# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Search operations namespace for the jobs API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

from ..models import conditions as c
from ..models.conditions import Condition, DateLike, JobStatus

if TYPE_CHECKING:
    from ..client import JobsClient

logger = logging.getLogger(__name__)

# Invoice lines ignore job status filters once a date filter is present, so
# "all" is approximated with a long look-back window instead.
INVOICE_LINES_LOOKBACK_DAYS = 1500


class JobOperations:
    """
    Canned searches against the jobs API.

    Accessed via ``client.jobs``. Each method returns every matching result as
    a list of plain dictionaries, fetched page by page.

    Example::

        with JobsClient(token) as client:
            active = client.jobs.active_jobs()
            recent = client.jobs.archived_jobs(since_days_ago=5)
            hours = client.jobs.time_between("2024-01-01", "2024-02-01")
    """

    def __init__(self, client: "JobsClient") -> None:
        self._client = client

    def fetch(
        self,
        endpoint: str,
        conditions: Sequence[Condition] = (),
        page_size: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Run a search with arbitrary conditions.

        :param endpoint: Endpoint name, e.g. ``"Jobs"``.
        :param conditions: Conditions combined with AND.
        :param page_size: Records per page.
        :raises KeyError: If ``endpoint`` is not in the client's registry.
        :raises ~gridsync.core.errors.HttpError: If any page request fails.
        """
        return self._client._get_jobs()._fetch_all(endpoint, conditions, page_size)

    def users(self) -> Any:
        logger.debug("Fetching users")
        return self._client._get_jobs()._fetch_get("Users")

    def companies(self) -> List[Dict[str, Any]]:
        logger.debug("Fetching companies")
        return self.fetch("Companies")

    # ------------------------------- Jobs -------------------------------
    def jobs(self, status: JobStatus = JobStatus.ACTIVE) -> List[Dict[str, Any]]:
        logger.debug("Fetching jobs with status %s", JobStatus(status).name)
        return self.fetch("Jobs", [c.job_status(status)])

    def all_jobs(self) -> List[Dict[str, Any]]:
        return self.jobs(JobStatus.ALL)

    def active_jobs(self) -> List[Dict[str, Any]]:
        return self.jobs(JobStatus.ACTIVE)

    def archived_jobs(self, since_days_ago: int = 5) -> List[Dict[str, Any]]:
        """Archived jobs, limited to those archived within ``since_days_ago`` days."""
        logger.debug("Fetching archived jobs updated within %d days", since_days_ago)
        return self.fetch(
            "Jobs",
            [c.job_status(JobStatus.ARCHIVED), c.job_archived_from_date(since_days_ago)],
        )

    # ----------------------------- Job items ----------------------------
    def all_job_items(self) -> List[Dict[str, Any]]:
        return self.fetch("JobItems", [c.job_status(JobStatus.ALL)])

    def active_job_items(self) -> List[Dict[str, Any]]:
        return self.fetch("JobItems", [c.job_status(JobStatus.ACTIVE)])

    def archived_job_items(self, since_days_ago: int = 5) -> List[Dict[str, Any]]:
        return self.fetch(
            "JobItems",
            [c.job_status(JobStatus.ARCHIVED), c.job_archived_from_date(since_days_ago)],
        )

    # ------------------------------ Expenses ----------------------------
    def all_expenses(self) -> List[Dict[str, Any]]:
        return self.fetch("Expenses", [c.job_status(JobStatus.ALL)])

    def expenses_of_active_jobs(self) -> List[Dict[str, Any]]:
        return self.fetch("Expenses", [c.job_status(JobStatus.ACTIVE)])

    def expenses_of_recent_archived_jobs(self, since_days_ago: int = 5) -> List[Dict[str, Any]]:
        return self.fetch(
            "Expenses",
            [c.job_status(JobStatus.ARCHIVED), c.job_archived_from_date(since_days_ago)],
        )

    # ------------------------------ Invoices ----------------------------
    def all_invoices(self) -> List[Dict[str, Any]]:
        return self.fetch("Invoices", [c.job_status(JobStatus.ALL), c.invoice_status()])

    def invoices_of_active_jobs(self) -> List[Dict[str, Any]]:
        return self.fetch("Invoices", [c.job_status(JobStatus.ACTIVE), c.invoice_status()])

    def invoices_of_recent_archived_jobs(self, since_days_ago: int = 5) -> List[Dict[str, Any]]:
        return self.fetch(
            "Invoices",
            [
                c.job_status(JobStatus.ARCHIVED),
                c.job_archived_from_date(since_days_ago),
                c.invoice_status(),
            ],
        )

    # ---------------------------- Invoice lines -------------------------
    def all_invoice_lines(self) -> List[Dict[str, Any]]:
        return self.fetch(
            "InvoiceLines",
            [c.invoice_from_date(INVOICE_LINES_LOOKBACK_DAYS), c.invoice_status()],
        )

    def unpaid_invoice_lines(self) -> List[Dict[str, Any]]:
        return self.fetch(
            "InvoiceLines",
            [c.invoice_from_date(INVOICE_LINES_LOOKBACK_DAYS), c.invoice_status_unpaid()],
        )

    def recent_invoice_lines(self, since_days_ago: int = 5) -> List[Dict[str, Any]]:
        return self.fetch("InvoiceLines", [c.invoice_from_date(since_days_ago), c.invoice_status()])

    # ------------------------------- Quotes -----------------------------
    def all_quotes(self) -> List[Dict[str, Any]]:
        return self.fetch("Quotes", [c.job_status(JobStatus.ALL), c.quote_status()])

    def quotes_of_active_jobs(self) -> List[Dict[str, Any]]:
        return self.fetch("Quotes", [c.job_status(JobStatus.ACTIVE), c.quote_status()])

    def quotes_of_recent_archived_jobs(self, since_days_ago: int = 30) -> List[Dict[str, Any]]:
        return self.fetch(
            "Quotes",
            [
                c.job_status(JobStatus.ARCHIVED),
                c.job_archived_from_date(since_days_ago),
                c.quote_status(),
            ],
        )

    # -------------------------------- Time ------------------------------
    def time_between(self, from_date: DateLike, to_date: DateLike) -> List[Dict[str, Any]]:
        """
        Logged time strictly between two dates.

        :param from_date: ``YYYY-MM-DD`` string or :class:`datetime.date`.
        :param to_date: ``YYYY-MM-DD`` string or :class:`datetime.date`.
        """
        return self.fetch(
            "Time",
            [c.job_status(JobStatus.ALL), c.time_from_date(from_date), c.time_to_date(to_date)],
        )

    def time_since(self, days_ago: int = 5) -> List[Dict[str, Any]]:
        """Logged time after ``days_ago`` days ago, future entries included."""
        return self.fetch("Time", [c.job_status(JobStatus.ALL), c.time_from_days_ago(days_ago)])

    def time_since_until_now(self, days_ago: int = 5) -> List[Dict[str, Any]]:
        return self.fetch(
            "Time",
            [c.job_status(JobStatus.ALL), c.time_from_days_ago(days_ago), c.time_to_now()],
        )


__all__ = ["JobOperations"]
