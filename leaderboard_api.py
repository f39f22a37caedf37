import asyncio
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

DEFAULT_TIMEOUT = 30
MAX_ERROR_BODY = 1200
MAX_MALFORMED_BODY = 300
NO_TIME = '—'


class ErrorKind(Enum):
    API = 'api'
    MALFORMED = 'malformed'
    TRANSPORT = 'transport'
    VALIDATION = 'validation'


class LeaderboardError(Exception):
    kind: ErrorKind


class ApiError(LeaderboardError):
    kind = ErrorKind.API

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = (body or '')[:MAX_ERROR_BODY] or 'Unknown API error'
        super().__init__(f"API error ({status}): {self.body}")


class MalformedResponseError(LeaderboardError):
    kind = ErrorKind.MALFORMED

    def __init__(self, body: str):
        self.body = (body or '')[:MAX_MALFORMED_BODY]
        super().__init__(f"API returned non-JSON: {self.body}")


class TransportError(LeaderboardError):
    kind = ErrorKind.TRANSPORT


class ValidationError(LeaderboardError):
    kind = ErrorKind.VALIDATION


def _first(*values, default=None):
    for value in values:
        if value:
            return value
    return default


def _as_dict(value: Any) -> Dict:
    return value if isinstance(value, dict) else {}


def _top10(data: Dict) -> List[Dict]:
    entries = data.get('top10') or []
    if not isinstance(entries, list):
        return []
    return [_as_dict(entry) for entry in entries[:10]]


@dataclass
class MapRecord:
    player: str
    time: Any
    world_position: Any


@dataclass
class MapLeaderboard:
    tmx_id: str
    title: str
    author: str = 'Unknown'
    author_time: Any = None
    thumbnail: Optional[str] = None
    map_uid: Optional[str] = None
    records: List[MapRecord] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any, tmx_id: str) -> 'MapLeaderboard':
        data = _as_dict(data)
        records = [
            MapRecord(
                player=str(_first(entry.get('displayName'), entry.get('accountId'), default='Unknown')),
                time=NO_TIME if entry.get('timeOrScore') is None else entry['timeOrScore'],
                world_position='?' if entry.get('positionWorld') is None else entry['positionWorld'],
            )
            for entry in _top10(data)
        ]
        shown_id = tmx_id if data.get('tmxId') is None else data['tmxId']
        return cls(
            tmx_id=tmx_id,
            title=str(data['mapName']) if data.get('mapName') else f"TMX {shown_id}",
            author=str(data['authorName']) if data.get('authorName') else 'Unknown',
            author_time=data.get('authorTime'),
            thumbnail=str(data['thumbnail']) if data.get('thumbnail') else None,
            map_uid=str(data['mapUid']) if data.get('mapUid') else None,
            records=records,
        )


@dataclass
class CampaignRecord:
    player: str
    points: Any


@dataclass
class CampaignLeaderboard:
    name: str = 'Current Campaign'
    season_uid: str = '?'
    records: List[CampaignRecord] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> 'CampaignLeaderboard':
        data = _as_dict(data)
        campaign = _as_dict(data.get('campaign'))
        records = [
            CampaignRecord(
                player=str(_first(entry.get('displayName'), entry.get('accountId'), default='Unknown')),
                points=entry.get('points'),
            )
            for entry in _top10(data)
        ]
        return cls(
            name=str(_first(campaign.get('name'), default='Current Campaign')),
            season_uid=str(_first(campaign.get('seasonUid'), default='?')),
            records=records,
        )


class LeaderboardAPI:
    """Read-only client for the India top 10 leaderboard service"""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get_json(self, url: str) -> Any:
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Could not reach leaderboard API: {e}") from e

        text = response.text or ''
        if not response.ok:
            raise ApiError(response.status_code, text)

        try:
            return json.loads(text)
        except ValueError as e:
            raise MalformedResponseError(text) from e

    async def fetch_json(self, url: str) -> Any:
        return await asyncio.to_thread(self._get_json, url)

    async def map_top10(self, tmx_id: str) -> MapLeaderboard:
        data = await self.fetch_json(f"{self.base_url}/map/india-top10/{quote(tmx_id, safe='')}")
        return MapLeaderboard.from_json(data, tmx_id)

    async def campaign_top10(self) -> CampaignLeaderboard:
        data = await self.fetch_json(f"{self.base_url}/india-top10")
        return CampaignLeaderboard.from_json(data)

    async def refresh_campaign(self) -> Any:
        return await self.fetch_json(f"{self.base_url}/refresh/india-top10")
