from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

import pandas as pd

from domain.record_types import RECORD_TYPES
from services.api_client import ApiError, SpeechTrackerClient

logger = logging.getLogger(__name__)

StatusKind = Literal["", "success", "error"]


@dataclass(frozen=True, slots=True)
class SyncStatus:
    message: str = ""
    kind: StatusKind = ""


def _cell(value: Any) -> Any:
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if value is None:
        return ""
    return value


def build_result_tables(payload: Any) -> list[tuple[str, pd.DataFrame]]:
    """One table per record type present in a fetch/sync result."""
    if not isinstance(payload, Mapping):
        return []

    tables: list[tuple[str, pd.DataFrame]] = []
    for record_type in RECORD_TYPES.values():
        rows = payload.get(record_type.key)
        if not isinstance(rows, list) or not rows:
            continue
        columns = list(record_type.sheet_columns)
        data = [
            [_cell(row.get(column)) for column in columns]
            for row in rows
            if isinstance(row, Mapping)
        ]
        tables.append(
            (
                f"{record_type.plural} ({len(data)} records)",
                pd.DataFrame(data, columns=columns),
            )
        )
    return tables


class SheetsSyncPanel:
    """Admin-only Google Sheets import actions sharing one status/result area."""

    def __init__(self, client: SpeechTrackerClient) -> None:
        self.client = client
        self.status = SyncStatus()
        self.result: Any = None
        self.busy = False

    def _run(
        self,
        call: Callable[[], Any],
        *,
        progress: str,
        success: str,
        failure_prefix: str,
        keep_result: bool,
    ) -> bool:
        self.busy = True
        self.status = SyncStatus(progress)
        self.result = None
        try:
            response = call()
        except ApiError as exc:
            self.status = SyncStatus(
                f"✗ {failure_prefix}: {exc.user_message(str(exc))}", "error"
            )
            return False
        finally:
            self.busy = False

        if keep_result:
            self.status = SyncStatus(f"✓ {success}", "success")
            self.result = response
        else:
            details = f"\n{response}" if response else ""
            self.status = SyncStatus(f"✓ {success}{details}", "success")
        return True

    def test_connection(self) -> bool:
        return self._run(
            self.client.test_connection,
            progress="Testing connection...",
            success="Connection successful!",
            failure_prefix="Connection failed",
            keep_result=False,
        )

    def fetch_preview(self) -> bool:
        return self._run(
            self.client.fetch_from_sheets,
            progress="Fetching from Google Sheets...",
            success="Fetch complete! Data displayed below (not saved to database).",
            failure_prefix="Error",
            keep_result=True,
        )

    def sync_commit(self) -> bool:
        ok = self._run(
            self.client.sync_to_database,
            progress="Syncing to database...",
            success="Sync complete! Data saved to database and displayed below.",
            failure_prefix="Error",
            keep_result=True,
        )
        if ok:
            logger.info("Google Sheets sync committed")
        return ok

    def result_tables(self) -> list[tuple[str, pd.DataFrame]]:
        return build_result_tables(self.result)
