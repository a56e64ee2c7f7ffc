"""
Roster API Client

HTTP client for the roster and VS endpoints, used by the client-side state
containers in ``roster.client.state``.
"""
import os
from typing import Dict, Iterable, List, Optional

import requests


class ApiError(Exception):
    """Non-2xx response from the roster API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RosterApiClient:
    """
    Thin JSON client, one method per endpoint.

    Every method returns the unwrapped payload (``players``, ``week``,
    ``stat``...) and raises ApiError carrying the server's ``error`` message
    on failure.
    """

    def __init__(self, base_url: Optional[str] = None, session=None, timeout: Optional[float] = None):
        self.base_url = (base_url or os.getenv("ROSTER_API_URL", "http://127.0.0.1:5000")).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else float(os.getenv("ROSTER_API_TIMEOUT", "10"))

    def _request(self, method: str, path: str, params: Optional[Dict] = None, json: Optional[Dict] = None) -> Dict:
        response = self.session.request(
            method,
            f"{self.base_url}/api{path}",
            params=params,
            json=json,
            timeout=self.timeout,
        )
        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.status_code >= 400:
            message = (data or {}).get("error") or f"HTTP {response.status_code}"
            raise ApiError(message, response.status_code)
        return data

    # Players

    def list_players(self) -> List[Dict]:
        return self._request("GET", "/players")["players"]

    def create_player(self, name: str, level: int, rank: int) -> Dict:
        body = {"name": name, "level": level, "rank": rank}
        return self._request("POST", "/players", json=body)["player"]

    def update_player(self, player_id, **fields) -> Dict:
        body = {k: v for k, v in fields.items() if k in ("name", "level", "rank")}
        return self._request("PATCH", f"/players/{player_id}", json=body)["player"]

    # VS weeks and stages

    def list_weeks(self) -> List[Dict]:
        return self._request("GET", "/vs/weeks")["weeks"]

    def create_week(self, start_date: Optional[str] = None, end_date: Optional[str] = None) -> Dict:
        body = {}
        if start_date is not None:
            body["startDate"] = start_date
        if end_date is not None:
            body["endDate"] = end_date
        return self._request("POST", "/vs/weeks", json=body)["week"]

    def list_stages(self) -> List[Dict]:
        return self._request("GET", "/vs/stages")["stages"]

    def create_stage(self, stage_number: int, stage_type: Optional[str] = None) -> Dict:
        body = {"stageNumber": stage_number, "stageType": stage_type}
        return self._request("POST", "/vs/stages", json=body)["stage"]

    # VS stats

    def list_stats(self, week_id, stage_id) -> List[Dict]:
        params = {"weekId": week_id, "stageId": stage_id}
        return self._request("GET", "/vs/stats", params=params)["stats"]

    def list_stats_by_week(self, week_id) -> List[Dict]:
        return self._request("GET", "/vs/stats-by-week", params={"weekId": week_id})["stats"]

    def list_stats_trends(self, week_ids: Iterable, stage_id=None) -> List[Dict]:
        params = {"weekIds": ",".join(str(w) for w in week_ids)}
        if stage_id is not None:
            params["stageId"] = stage_id
        return self._request("GET", "/vs/stats-trends", params=params)["stats"]

    def save_stat(self, player_id, week_id, stage_id, score) -> Dict:
        body = {
            "playerId": player_id,
            "weekId": week_id,
            "stageId": stage_id,
            "score": score,
        }
        return self._request("POST", "/vs/stats", json=body)["stat"]
