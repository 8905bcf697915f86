"""
Overwatch: a service-status dashboard for Railway, Plausible, Netlify and
Sentry projects, plus plain links.

Service descriptors are persisted to services.json in the config directory
with API keys encrypted. Status data is kept in memory only.
"""

import json
import time
import uuid
import logging
import threading
from datetime import datetime, timedelta, timezone
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Dict, Any, List, Optional

import requests

from ..config.settings import get_config_directory, get_section
from ..utils.encryption import encrypt_text, decrypt_text

logger = logging.getLogger(__name__)

PROVIDERS = ['railway', 'plausible', 'netlify', 'sentry', 'link']
STATUSES = ['healthy', 'degraded', 'down', 'unknown', 'loading']

RAILWAY_API = 'https://backboard.railway.app/graphql/v2'
PLAUSIBLE_API = 'https://plausible.io/api/v1/stats/aggregate'
NETLIFY_API = 'https://api.netlify.com/api/v1/sites/{site_id}'
SENTRY_API = 'https://sentry.io/api/0/projects/{org}/{project}'

REQUEST_TIMEOUT = 15
MIN_REFRESH_INTERVAL = 30
MAX_REFRESH_INTERVAL = 300

RAILWAY_QUERY = """
query project($id: String!) {
    project(id: $id) {
        name
        services { edges { node { id name } } }
        environments {
            edges {
                node {
                    name
                    deployments(first: 1) { edges { node { status createdAt } } }
                }
            }
        }
    }
}
"""

EDITABLE_FIELDS = [
    'provider', 'name', 'external_url', 'api_key', 'project_id', 'site_id',
    'organization_slug', 'link_icon', 'link_color', 'enabled', 'sort_order',
]


def now_ms() -> int:
    return int(time.time() * 1000)


def _sort_order(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("sort_order must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError("sort_order must be an integer")


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ''


def _enabled(value: Any) -> bool:
    if isinstance(value, str):
        if value.strip().lower() not in ('true', 'false'):
            raise ValueError("enabled must be true or false")
        return value.strip().lower() == 'true'
    return bool(value)


def _iso_to_ms(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)


@dataclass
class ServiceConfig:
    """A monitored service within a workspace."""
    id: str
    workspace_id: str
    provider: str
    name: str
    external_url: Optional[str] = None
    api_key: Optional[str] = None
    project_id: Optional[str] = None
    site_id: Optional[str] = None
    organization_slug: Optional[str] = None
    link_icon: Optional[str] = None
    link_color: Optional[str] = None
    enabled: bool = True
    sort_order: int = 0
    created_at: int = 0
    updated_at: int = 0

    def to_dict(self, include_secret: bool = False) -> Dict[str, Any]:
        data = asdict(self)
        if not include_secret:
            data['has_api_key'] = bool(data.pop('api_key'))
        return data


@dataclass
class ServiceData:
    """Latest fetched status of a service."""
    config_id: str
    status: str = 'unknown'
    metrics: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    last_updated: int = field(default_factory=now_ms)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ApiResponse:
    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


def _auth_headers(api_key: str) -> Dict[str, str]:
    return {'Authorization': f'Bearer {api_key}'}


# Provider fetchers

def fetch_railway_status(api_key: str, project_id: str) -> ApiResponse:
    """Latest deployment status, service count and environment of a Railway project."""
    try:
        response = requests.post(
            RAILWAY_API,
            json={'query': RAILWAY_QUERY, 'variables': {'id': project_id}},
            headers=_auth_headers(api_key),
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        return ApiResponse(False, error=f"Failed to connect to Railway: {str(e)}")

    if not response.ok:
        return ApiResponse(False, error=f"Railway API error: {response.status_code}")

    try:
        body = response.json()
        errors = body.get('errors')
        if errors:
            return ApiResponse(False, error=errors[0].get('message', ''))

        project = (body.get('data') or {}).get('project')
        if not project:
            return ApiResponse(False, error="Project not found")

        service_count = len(project['services']['edges'])
        environments = project['environments']['edges']
        status, deployed_at, environment_name = 'unknown', None, None
        if environments:
            environment = environments[0]['node']
            environment_name = environment['name']
            deployments = environment['deployments']['edges']
            if deployments:
                status = deployments[0]['node']['status']
                deployed_at = _iso_to_ms(deployments[0]['node'].get('createdAt'))
    except (ValueError, KeyError, TypeError, IndexError) as e:
        return ApiResponse(False, error=f"Failed to parse Railway response: {str(e)}")

    return ApiResponse(True, data={
        'deployment_status': status.lower(),
        'last_deployed_at': deployed_at,
        'service_count': service_count,
        'environment_name': environment_name,
    })


def fetch_plausible_stats(api_key: str, site_id: str, period: str = 'day') -> ApiResponse:
    try:
        response = requests.get(
            PLAUSIBLE_API,
            params={
                'site_id': site_id,
                'period': period,
                'metrics': 'visitors,pageviews,bounce_rate,visit_duration',
            },
            headers=_auth_headers(api_key),
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        return ApiResponse(False, error=f"Failed to connect to Plausible: {str(e)}")

    if not response.ok:
        return ApiResponse(False, error=f"Plausible API error ({response.status_code}): {response.text}")

    try:
        results = response.json()['results']
        data = {
            'visitors': int(results['visitors']['value']),
            'pageviews': int(results['pageviews']['value']),
            'bounce_rate': float(results['bounce_rate']['value']),
            'visit_duration': float(results['visit_duration']['value']),
            'period': period,
        }
    except (ValueError, KeyError, TypeError) as e:
        return ApiResponse(False, error=f"Failed to parse Plausible response: {str(e)}")
    return ApiResponse(True, data=data)


def fetch_netlify_status(api_key: str, site_id: str) -> ApiResponse:
    try:
        response = requests.get(
            NETLIFY_API.format(site_id=site_id),
            headers=_auth_headers(api_key),
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        return ApiResponse(False, error=f"Failed to connect to Netlify: {str(e)}")

    if not response.ok:
        return ApiResponse(False, error=f"Netlify API error ({response.status_code}): {response.text}")

    try:
        site = response.json()
        deploy = site.get('published_deploy') or {}
        data = {
            'build_status': deploy.get('state') or 'unknown',
            'last_published_at': _iso_to_ms(deploy.get('published_at')),
            'deploy_time': deploy.get('deploy_time'),
            'site_url': site.get('ssl_url') or site['url'],
            'site_name': site['name'],
        }
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        return ApiResponse(False, error=f"Failed to parse Netlify response: {str(e)}")
    return ApiResponse(True, data=data)


def _sentry_get(url: str, api_key: str) -> Optional[Any]:
    """GET a Sentry endpoint; any failure counts as no data."""
    try:
        response = requests.get(url, headers=_auth_headers(api_key), timeout=REQUEST_TIMEOUT)
        if not response.ok:
            return None
        return response.json()
    except (requests.RequestException, ValueError) as e:
        logger.info("Sentry request to %s failed: %s", url, e)
        return None


def crash_free_rate(unresolved: int, issues_24h: int, events_24h: int) -> float:
    """Approximation: share of events in the last day that did not open a new issue."""
    if unresolved == 0:
        return 100.0
    if events_24h > 0:
        error_rate = issues_24h / events_24h * 100
        return max(0.0, min(100.0, 100 - error_rate))
    return 99.0


def fetch_sentry_stats(api_key: str, organization_slug: str, project_slug: str,
                       now: Optional[datetime] = None) -> ApiResponse:
    base = SENTRY_API.format(org=organization_slug, project=project_slug)
    now = now or datetime.now(timezone.utc)
    since = (now - timedelta(hours=24)).strftime('%Y-%m-%dT%H:%M:%S')

    unresolved = _sentry_get(f"{base}/issues/?query=is:unresolved", api_key)
    recent = _sentry_get(f"{base}/issues/?query=firstSeen:>{since}", api_key)
    stats = _sentry_get(f"{base}/stats/?stat=received&resolution=1d", api_key)

    unresolved_count = len(unresolved) if isinstance(unresolved, list) else 0
    recent_count = len(recent) if isinstance(recent, list) else 0
    events = 0
    if isinstance(stats, list) and stats:
        try:
            events = int(stats[-1][1])
        except (TypeError, ValueError, IndexError):
            events = 0

    return ApiResponse(True, data={
        'unresolved_issues': unresolved_count,
        'issues_last_24h': recent_count,
        'crash_free_rate': crash_free_rate(unresolved_count, recent_count, events),
        'events_last_24h': events,
    })


def _railway_status(metrics: Dict[str, Any]) -> str:
    state = metrics.get('deployment_status')
    if state == 'failed':
        return 'down'
    if state in ('building', 'deploying'):
        return 'degraded'
    return 'healthy'


def _netlify_status(metrics: Dict[str, Any]) -> str:
    state = metrics.get('build_status')
    if state == 'failed':
        return 'down'
    if state in ('building', 'enqueued'):
        return 'degraded'
    return 'healthy'


def _sentry_status(metrics: Dict[str, Any]) -> str:
    if metrics.get('crash_free_rate', 100) < 95 or metrics.get('unresolved_issues', 0) > 50:
        return 'degraded'
    return 'healthy'


# provider -> (fetch from a service config, metrics -> status)
PROVIDER_HANDLERS: Dict[str, Any] = {
    'railway': (lambda s: fetch_railway_status(s.api_key, s.project_id or ''), _railway_status),
    'plausible': (lambda s: fetch_plausible_stats(s.api_key, s.site_id or '', 'day'), lambda m: 'healthy'),
    'netlify': (lambda s: fetch_netlify_status(s.api_key, s.site_id or ''), _netlify_status),
    'sentry': (lambda s: fetch_sentry_stats(s.api_key, s.organization_slug or '', s.project_id or ''),
               _sentry_status),
}


class ServiceManager:
    """Service registry with persisted descriptors and in-memory status data."""

    def __init__(self, storage_file: Optional[Path] = None):
        self.storage_file = Path(storage_file) if storage_file else get_config_directory() / 'services.json'
        self._lock = threading.RLock()
        self.services: List[ServiceConfig] = []
        self.provider_api_keys: Dict[str, str] = {}
        self.service_data: Dict[str, ServiceData] = {}

        defaults = get_section('overwatch')
        self.auto_refresh = bool(defaults.get('auto_refresh', True))
        self.refresh_interval = self._clamp_interval(defaults.get('refresh_interval', 60))
        self._load()

    @staticmethod
    def _clamp_interval(seconds: Any) -> int:
        return max(MIN_REFRESH_INTERVAL, min(MAX_REFRESH_INTERVAL, int(seconds)))

    def _decrypt(self, token: Optional[str]) -> Optional[str]:
        if not token:
            return None
        try:
            return decrypt_text(token)
        except ValueError as e:
            logger.warning("Dropping stored API key: %s", e)
            return None

    def _load(self):
        if not self.storage_file.exists():
            return
        try:
            with open(self.storage_file, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s: %s", self.storage_file, e)
            return

        known = {f.name for f in fields(ServiceConfig)}
        for entry in data.get('services', []):
            entry = {k: v for k, v in entry.items() if k in known}
            entry['api_key'] = self._decrypt(entry.get('api_key'))
            self.services.append(ServiceConfig(**entry))

        for provider, token in data.get('provider_api_keys', {}).items():
            key = self._decrypt(token)
            if key:
                self.provider_api_keys[provider] = key

        self.auto_refresh = bool(data.get('auto_refresh', self.auto_refresh))
        self.refresh_interval = self._clamp_interval(data.get('refresh_interval', self.refresh_interval))
        logger.debug("Loaded %d services from %s", len(self.services), self.storage_file)

    def _save(self):
        services = []
        for service in self.services:
            entry = service.to_dict(include_secret=True)
            entry['api_key'] = encrypt_text(service.api_key) if service.api_key else None
            services.append(entry)

        data = {
            'services': services,
            'provider_api_keys': {p: encrypt_text(k) for p, k in self.provider_api_keys.items()},
            'auto_refresh': self.auto_refresh,
            'refresh_interval': self.refresh_interval,
        }
        self.storage_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.storage_file, 'w') as f:
            json.dump(data, f, indent=2)

    # Configuration CRUD

    def add_service(self, values: Dict[str, Any]) -> ServiceConfig:
        workspace_id = _text(values.get('workspace_id'))
        name = _text(values.get('name'))
        provider = values.get('provider')
        if not workspace_id:
            raise ValueError("workspace_id is required")
        if not name:
            raise ValueError("Service name is required")
        if provider not in PROVIDERS:
            raise ValueError(f"Unsupported provider: {provider}. Supported: {', '.join(PROVIDERS)}")

        with self._lock:
            timestamp = now_ms()
            in_workspace = [s for s in self.services if s.workspace_id == workspace_id]
            service = ServiceConfig(
                id=str(uuid.uuid4()),
                workspace_id=workspace_id,
                provider=provider,
                name=name,
                external_url=values.get('external_url'),
                api_key=values.get('api_key') or None,
                project_id=values.get('project_id'),
                site_id=values.get('site_id'),
                organization_slug=values.get('organization_slug'),
                link_icon=values.get('link_icon'),
                link_color=values.get('link_color'),
                enabled=_enabled(values.get('enabled', True)),
                sort_order=_sort_order(values.get('sort_order', len(in_workspace))),
                created_at=timestamp,
                updated_at=timestamp,
            )
            self.services.append(service)
            self._save()
        logger.info("Added %s service '%s'", provider, name)
        return service

    def update_service(self, service_id: str, updates: Dict[str, Any]) -> ServiceConfig:
        changes = {key: updates[key] for key in EDITABLE_FIELDS if key in updates}
        if 'provider' in changes and changes['provider'] not in PROVIDERS:
            raise ValueError(f"Unsupported provider: {changes['provider']}")
        if 'name' in changes:
            changes['name'] = _text(changes['name'])
            if not changes['name']:
                raise ValueError("Service name is required")
        if 'enabled' in changes:
            changes['enabled'] = _enabled(changes['enabled'])
        if 'sort_order' in changes:
            changes['sort_order'] = _sort_order(changes['sort_order'])
        if 'api_key' in changes:
            changes['api_key'] = changes['api_key'] or None

        with self._lock:
            service = self._require(service_id)
            for key, value in changes.items():
                setattr(service, key, value)
            service.updated_at = now_ms()
            self._save()
        return service

    def delete_service(self, service_id: str):
        with self._lock:
            self._require(service_id)
            self.services = [s for s in self.services if s.id != service_id]
            self.service_data.pop(service_id, None)
            self._save()

    def reorder_services(self, workspace_id: str, service_ids: List[str]):
        """Give each listed service its index as sort order; others keep theirs."""
        with self._lock:
            timestamp = now_ms()
            for service in self.services:
                if service.workspace_id == workspace_id and service.id in service_ids:
                    service.sort_order = service_ids.index(service.id)
                    service.updated_at = timestamp
            self._save()

    # Queries

    def get_service(self, service_id: str) -> Optional[ServiceConfig]:
        return next((s for s in self.services if s.id == service_id), None)

    def _require(self, service_id: str) -> ServiceConfig:
        service = self.get_service(service_id)
        if service is None:
            raise KeyError(f"Service not found: {service_id}")
        return service

    def list_by_workspace(self, workspace_id: str) -> List[ServiceConfig]:
        return sorted((s for s in self.services if s.workspace_id == workspace_id),
                      key=lambda s: s.sort_order)

    def list_by_provider(self, workspace_id: str, provider: str) -> List[ServiceConfig]:
        return [s for s in self.list_by_workspace(workspace_id) if s.provider == provider]

    def get_service_data(self, service_id: str) -> Optional[ServiceData]:
        return self.service_data.get(service_id)

    # Provider API keys and settings

    def get_provider_api_key(self, provider: str) -> Optional[str]:
        return self.provider_api_keys.get(provider)

    def set_provider_api_key(self, provider: str, api_key: str):
        if provider not in PROVIDERS:
            raise ValueError(f"Unsupported provider: {provider}")
        with self._lock:
            self.provider_api_keys[provider] = api_key
            self._save()

    def update_settings(self, auto_refresh: Optional[bool] = None, refresh_interval: Optional[int] = None):
        with self._lock:
            if auto_refresh is not None:
                self.auto_refresh = bool(auto_refresh)
            if refresh_interval is not None:
                self.refresh_interval = self._clamp_interval(refresh_interval)
            self._save()

    def get_settings(self) -> Dict[str, Any]:
        return {'auto_refresh': self.auto_refresh, 'refresh_interval': self.refresh_interval}

    def reset(self):
        with self._lock:
            self.services = []
            self.provider_api_keys = {}
            self.service_data = {}
            defaults = get_section('overwatch')
            self.auto_refresh = bool(defaults.get('auto_refresh', True))
            self.refresh_interval = self._clamp_interval(defaults.get('refresh_interval', 60))
            self._save()

    # Data fetching

    def refresh_service(self, service_id: str) -> Optional[ServiceData]:
        """Fetch metrics for one service; links have nothing to fetch and return None."""
        service = self._require(service_id)
        if service.provider == 'link':
            return None

        if not service.api_key:
            data = ServiceData(config_id=service_id, status='unknown', error='API key not configured')
        else:
            fetch, status_for = PROVIDER_HANDLERS[service.provider]
            try:
                result = fetch(service)
            except requests.RequestException as e:
                result = ApiResponse(False, error=str(e))

            if result.success and result.data is not None:
                data = ServiceData(config_id=service_id, status=status_for(result.data), metrics=result.data)
            else:
                logger.info("Refreshing %s failed: %s", service.name, result.error)
                previous = self.service_data.get(service_id)
                data = ServiceData(
                    config_id=service_id,
                    status='down',
                    metrics=previous.metrics if previous else None,
                    error=result.error or f"Failed to fetch {service.provider} status",
                )

        self.service_data[service_id] = data
        return data

    def refresh_all(self, workspace_id: str) -> List[ServiceData]:
        results = []
        for service in self.list_by_workspace(workspace_id):
            if service.provider == 'link' or not service.enabled:
                continue
            data = self.refresh_service(service.id)
            if data is not None:
                results.append(data)
        return results


_manager: Optional[ServiceManager] = None
_manager_lock = threading.Lock()


def get_service_manager() -> ServiceManager:
    global _manager
    with _manager_lock:
        if _manager is None:
            _manager = ServiceManager()
        return _manager


def reset_service_manager():
    """Forget the shared manager so the next call reloads from disk."""
    global _manager
    with _manager_lock:
        _manager = None
