"""HTTP client for the market data vendor's historical endpoints."""

from datetime import date
from typing import Any

import requests
import structlog
from attrs import define, field

HISTORY_URL = "https://ds01.ddfplus.com/historical/queryeod.ashx"
MINUTES_URL = "https://historical-quotes.aws.barchart.com/historical/queryminutes.ashx"

logger = structlog.get_logger(__name__)


def _iso(value: date | str) -> str:
    return value.isoformat() if isinstance(value, date) else str(value)


def _compact(value: date | str) -> str:
    return value.strftime("%Y%m%d") if isinstance(value, date) else str(value).replace("-", "")


@define(slots=True)
class VendorHttpClient:
    """Thin HTTP wrapper around the vendor's end-of-day and minute-bar endpoints.

    Credentials are supplied by the caller (usually from environment
    variables via the CLI) and are never logged.
    """

    username: str | None = None
    password: str | None = field(default=None, repr=False)
    history_url: str = HISTORY_URL
    minutes_url: str = MINUTES_URL
    timeout: float = 30.0
    session: requests.Session = field(factory=requests.Session)
    headers: dict[str, str] = field(
        factory=lambda: {
            "User-Agent": "commodity-compare",
            "Accept": "text/csv,application/json,text/plain,*/*;q=0.1",
        },
    )

    def _credentials(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.username:
            params["username"] = self.username
        if self.password:
            params["password"] = self.password
        return params

    def _get(self, url: str, params: dict[str, str], **context: object) -> requests.Response:
        log = logger.bind(url=url, **context)
        log.debug("http.fetch_start", timeout=self.timeout)
        try:
            response = self.session.get(
                url,
                params={**params, **self._credentials()},
                timeout=self.timeout,
                headers=self.headers,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            log.error("http.fetch_failed", status=status, exc_info=True)
            raise
        log.debug("http.fetch_success", bytes=len(response.content))
        return response

    def get_history(self, symbol: str, start: date | str, end: date | str) -> str:
        """Fetch daily bars as CSV text for the inclusive date range."""
        params = {
            "symbol": symbol,
            "data": "daily",
            "startdate": _iso(start),
            "enddate": _iso(end),
        }
        response = self._get(self.history_url, params, symbol=symbol, start=params["startdate"])
        return response.text

    def get_minutes(self, symbol: str, start: date | str, end: date | str) -> dict[str, Any]:
        """Fetch minute bars as the decoded JSON payload."""
        params = {"symbol": symbol, "start": _compact(start), "end": _compact(end)}
        response = self._get(self.minutes_url, params, symbol=symbol, start=params["start"])
        return response.json()

    def close(self) -> None:
        """Release the underlying HTTP session."""
        self.session.close()
        logger.debug("http.session_closed")


__all__ = ["HISTORY_URL", "MINUTES_URL", "VendorHttpClient"]
