"""Check store HTTP client for fetching the current portfolio snapshot"""

import httpx
from typing import Any, Callable, Dict, List, Optional, Tuple
from check_gateway.domain.models import Check, SystemSettings
from check_gateway.domain.exceptions import SnapshotUnavailableError
from check_gateway.config import settings


class CheckStoreClient:
    """Client for the external check store REST API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.check_store_url
        self.api_key = api_key if api_key is not None else settings.check_store_api_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def fetch_snapshot(self) -> Tuple[List[Check], Optional[SystemSettings]]:
        """
        Fetch every check (newest first) and the stored system settings.

        Raises:
            SnapshotUnavailableError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._headers(),
            transport=self.transport,
        ) as client:
            try:
                checks_response = await client.get(
                    "/rest/v1/checks",
                    params={"select": "*", "order": "created_at.desc"},
                )
                checks_response.raise_for_status()
                rows = checks_response.json()

                settings_response = await client.get(
                    "/rest/v1/system_settings",
                    params={"select": "*", "limit": "1"},
                )
                settings_response.raise_for_status()
                settings_rows = settings_response.json()

                checks = [Check.from_record(row) for row in rows]
                return checks, _settings_from_rows(settings_rows)

            except httpx.TimeoutException as e:
                raise SnapshotUnavailableError(f"Check store timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise SnapshotUnavailableError(f"Check store error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise SnapshotUnavailableError(f"Check store unreachable: {e}") from e
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise SnapshotUnavailableError(f"Invalid snapshot data from check store: {e}") from e


def _settings_from_rows(rows: List[Dict[str, Any]]) -> Optional[SystemSettings]:
    """
    First settings row, keeping only the keys the analytics know about.

    Values are converted to the field types; a value that does not convert
    falls back to the default.
    """
    if not rows:
        return None
    row = rows[0]
    defaults = SystemSettings()
    return SystemSettings(
        high_value_threshold=_coerce(row.get("high_value_threshold"), float, defaults.high_value_threshold),
        alert_days=_coerce(row.get("alert_days"), int, defaults.alert_days),
        currency=_coerce(row.get("currency"), str, defaults.currency),
        company_name=_coerce(row.get("company_name"), str, defaults.company_name),
    )


def _coerce(value: Any, kind: Callable[[Any], Any], default: Any) -> Any:
    if value is None:
        return default
    try:
        return kind(value)
    except (TypeError, ValueError):
        return default
