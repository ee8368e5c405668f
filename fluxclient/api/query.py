"""
Flux queries for one organization.
"""

import io
from dataclasses import dataclass
from typing import Any

import pandas as pd

from fluxclient.exceptions import ValidationError
from fluxclient.http.service import HttpService, Timeout

QUERY_PATH = "api/v2/query"

# Plain CSV: a header row, no annotation rows.
PLAIN_CSV_DIALECT = {"header": True, "delimiter": ",", "annotations": []}


@dataclass
class QueryApi:
    """
    Flux query execution.

    Instances are cheap and hold no state beyond the organization, so the
    owning client hands out a new one on every call.
    """

    org: str
    service: HttpService

    def query_raw(
        self,
        query: str,
        *,
        dialect: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        timeout: Timeout | None = None,
    ) -> str:
        """
        Run a Flux query and return the CSV response body.

        Parameters
        ----------
        query
            Flux query.
        dialect
            CSV dialect of the response. Defaults to annotated CSV as produced
            by the server.
        params
            Optional Flux query parameters, available as ``params.<name>``.
        timeout
            Optional request timeout overriding the client default.

        Returns
        -------
        csv
            Response body.

        Raises
        ------
        ValidationError
            If `query` is empty/blank.
        ApiError
            If the server rejects the query.
        """
        if not query or not query.strip():
            raise ValidationError("query must be non-empty")

        body: dict[str, Any] = {"query": query, "type": "flux"}
        if dialect is not None:
            body["dialect"] = dialect
        if params:
            body["params"] = params
        return self.service.post_text(
            QUERY_PATH,
            json=body,
            params={"org": self.org},
            headers={"Accept": "application/csv"},
            timeout=timeout,
        )

    def query_data_frame(
        self,
        query: str,
        *,
        params: dict[str, Any] | None = None,
        timeout: Timeout | None = None,
    ) -> pd.DataFrame:
        """
        Run a Flux query and load the result into a pandas DataFrame.

        Results with several tables (different column sets) are concatenated;
        columns missing in a table are NaN.

        Returns
        -------
        df
            One row per record. Empty if the query produced no data.
        """
        text = self.query_raw(
            query, dialect=PLAIN_CSV_DIALECT, params=params, timeout=timeout
        )
        # tables with different schemas are separated by empty lines
        chunks = [c for c in text.replace("\r\n", "\n").split("\n\n") if c.strip()]
        if not chunks:
            return pd.DataFrame()
        frames = [pd.read_csv(io.StringIO(c)) for c in chunks]
        df = pd.concat(frames, ignore_index=True) if len(frames) > 1 else frames[0]
        unnamed = [c for c in df.columns if str(c).startswith("Unnamed")]
        return df.drop(columns=unnamed)
