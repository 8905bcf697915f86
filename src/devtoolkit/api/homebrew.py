"""
Homebrew package manager: list, search, inspect, install and maintain
formulae, casks and taps through the brew command line.
"""

import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List, Optional

from ..bridge.base import CommandOutput
from ..bridge.exceptions import BridgeCommandError, CommandNotFoundError
from ..bridge.homebrew import run_brew
from ..bridge.validation import validate_package_name, validate_tap_name

logger = logging.getLogger(__name__)

FORMULA = 'formula'
CASK = 'cask'


@dataclass
class BrewPackage:
    name: str
    full_name: str
    version: str
    package_type: str
    desc: Optional[str] = None
    homepage: Optional[str] = None
    installed_on_request: bool = True
    outdated: bool = False
    pinned: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BrewSearchResult:
    name: str
    package_type: str
    desc: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BrewPackageInfo:
    name: str
    full_name: str
    version: str
    package_type: str
    desc: Optional[str] = None
    homepage: Optional[str] = None
    license: Optional[str] = None
    dependencies: List[str] = field(default_factory=list)
    caveats: Optional[str] = None
    installed: bool = False
    outdated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BrewTap:
    name: str
    remote: str
    is_official: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BrewDoctorResult:
    issues: List[str]
    warnings: List[str]
    is_healthy: bool
    raw_output: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _load_json(output: CommandOutput) -> Dict[str, Any]:
    """JSON from a successful command; anything unusable is treated as empty."""
    if not output.success:
        return {}
    try:
        data = json.loads(output.stdout)
    except json.JSONDecodeError:
        logger.warning("brew returned output that is not JSON")
        return {}
    return data if isinstance(data, dict) else {}


def _cask_flag(is_cask: bool) -> List[str]:
    return ['--cask'] if is_cask else []


def is_installed() -> bool:
    try:
        return run_brew(['--version']).success
    except CommandNotFoundError:
        return False


def version() -> str:
    output = run_brew(['--version'])
    if not output.success:
        raise BridgeCommandError("Failed to get Homebrew version")
    lines = output.stdout.splitlines()
    return lines[0] if lines else 'Unknown'


def list_installed() -> List[BrewPackage]:
    packages = []

    formulae = _load_json(run_brew(['list', '--formulae', '--json=v2']))
    for f in formulae.get('formulae') or []:
        name = f.get('name') or ''
        installed = f.get('installed') or []
        first = installed[0] if installed else {}
        packages.append(BrewPackage(
            name=name,
            full_name=f.get('full_name') or name,
            version=first.get('version') or 'unknown',
            package_type=FORMULA,
            desc=f.get('desc'),
            homepage=f.get('homepage'),
            installed_on_request=bool(first.get('installed_on_request', False)),
            outdated=bool(f.get('outdated', False)),
            pinned=bool(f.get('pinned', False)),
        ))

    casks = _load_json(run_brew(['list', '--casks', '--json=v2']))
    for c in casks.get('casks') or []:
        token = c.get('token') or ''
        packages.append(BrewPackage(
            name=token,
            full_name=token,
            version=c.get('version') or 'unknown',
            package_type=CASK,
            desc=c.get('desc'),
            homepage=c.get('homepage'),
            outdated=bool(c.get('outdated', False)),
        ))

    packages.sort(key=lambda p: p.name.lower())
    return packages


def list_outdated() -> List[BrewPackage]:
    packages = []

    formulae = _load_json(run_brew(['outdated', '--formulae', '--json=v2']))
    for f in formulae.get('formulae') or []:
        name = f.get('name') or ''
        versions = f.get('installed_versions') or []
        packages.append(BrewPackage(
            name=name,
            full_name=name,
            version=versions[0] if versions else 'unknown',
            package_type=FORMULA,
            outdated=True,
            pinned=bool(f.get('pinned', False)),
        ))

    casks = _load_json(run_brew(['outdated', '--casks', '--json=v2']))
    for c in casks.get('casks') or []:
        name = c.get('name') or ''
        current = c.get('installed_versions')
        packages.append(BrewPackage(
            name=name,
            full_name=name,
            version=current if isinstance(current, str) else 'unknown',
            package_type=CASK,
            outdated=True,
        ))
    return packages


def parse_search_output(stdout: str) -> List[BrewSearchResult]:
    """Names listed under the '==> Formulae' and '==> Casks' headings."""
    results = []
    current_type = FORMULA
    for line in stdout.splitlines():
        line = line.strip()
        if not line:
            continue
        if line.startswith('==> Formulae'):
            current_type = FORMULA
            continue
        if line.startswith('==> Casks'):
            current_type = CASK
            continue
        if line.startswith('==>'):
            continue
        results.extend(BrewSearchResult(name=name, package_type=current_type) for name in line.split())
    return results


def search(query: str) -> List[BrewSearchResult]:
    query = (query or '').strip()
    if not query:
        raise ValueError("Search query cannot be empty")
    validate_package_name(query)
    output = run_brew(['search', query])
    if not output.success:
        return []
    return parse_search_output(output.stdout)


def info(package_name: str, is_cask: bool = False) -> BrewPackageInfo:
    validate_package_name(package_name)
    output = run_brew(['info', '--json=v2'] + _cask_flag(is_cask) + [package_name])
    if not output.success:
        raise BridgeCommandError(f"Package not found: {output.stderr.strip()}")

    try:
        data = json.loads(output.stdout)
    except json.JSONDecodeError as e:
        raise BridgeCommandError(f"Failed to parse JSON: {str(e)}")
    if not isinstance(data, dict):
        data = {}

    if is_cask:
        casks = data.get('casks') or []
        if casks:
            c = casks[0]
            return BrewPackageInfo(
                name=c.get('token') or '',
                full_name=c.get('full_token') or '',
                version=c.get('version') or 'unknown',
                package_type=CASK,
                desc=c.get('desc'),
                homepage=c.get('homepage'),
                caveats=c.get('caveats'),
                installed=isinstance(c.get('installed'), str),
                outdated=bool(c.get('outdated', False)),
            )
    else:
        formulae = data.get('formulae') or []
        if formulae:
            f = formulae[0]
            return BrewPackageInfo(
                name=f.get('name') or '',
                full_name=f.get('full_name') or '',
                version=(f.get('versions') or {}).get('stable') or 'unknown',
                package_type=FORMULA,
                desc=f.get('desc'),
                homepage=f.get('homepage'),
                license=f.get('license'),
                dependencies=[d for d in f.get('dependencies') or [] if isinstance(d, str)],
                caveats=f.get('caveats'),
                installed=bool(f.get('installed')),
                outdated=bool(f.get('outdated', False)),
            )

    raise BridgeCommandError("Package not found")


def install(package_name: str, is_cask: bool = False) -> CommandOutput:
    validate_package_name(package_name)
    logger.info("Installing %s%s", package_name, " (cask)" if is_cask else "")
    return run_brew(['install'] + _cask_flag(is_cask) + [package_name])


def uninstall(package_name: str, is_cask: bool = False) -> CommandOutput:
    validate_package_name(package_name)
    logger.info("Uninstalling %s%s", package_name, " (cask)" if is_cask else "")
    return run_brew(['uninstall'] + _cask_flag(is_cask) + [package_name])


def upgrade(package_name: Optional[str] = None, is_cask: bool = False) -> CommandOutput:
    """Upgrade one package, or everything when no name is given."""
    args = ['upgrade'] + _cask_flag(is_cask)
    if package_name:
        validate_package_name(package_name)
        args.append(package_name)
    return run_brew(args)


def update() -> CommandOutput:
    return run_brew(['update'])


def list_taps() -> List[BrewTap]:
    output = run_brew(['tap'])
    if not output.success:
        raise BridgeCommandError("Failed to list taps")

    taps = []
    for line in output.stdout.splitlines():
        name = line.strip()
        if not name:
            continue
        taps.append(BrewTap(
            name=name,
            remote=f"https://github.com/{name}.git",
            is_official=name.startswith('homebrew/'),
        ))
    return taps


def tap(repo: str) -> CommandOutput:
    validate_tap_name(repo)
    return run_brew(['tap', repo])


def untap(repo: str) -> CommandOutput:
    validate_tap_name(repo)
    return run_brew(['untap', repo])


def parse_doctor_output(stdout: str, stderr: str, success: bool) -> BrewDoctorResult:
    combined = f"{stdout}\n{stderr}"
    issues, warnings = [], []
    for line in combined.splitlines():
        line = line.strip()
        if line.startswith('Error:'):
            issues.append(line)
        elif line.startswith('Warning:'):
            warnings.append(line)
    return BrewDoctorResult(
        issues=issues,
        warnings=warnings,
        is_healthy=success and not warnings,
        raw_output=combined,
    )


def doctor() -> BrewDoctorResult:
    output = run_brew(['doctor'])
    return parse_doctor_output(output.stdout, output.stderr, output.success)


def cleanup(dry_run: bool = False) -> CommandOutput:
    return run_brew(['cleanup'] + (['--dry-run'] if dry_run else []))


def pin(package_name: str) -> CommandOutput:
    validate_package_name(package_name)
    return run_brew(['pin', package_name])


def unpin(package_name: str) -> CommandOutput:
    validate_package_name(package_name)
    return run_brew(['unpin', package_name])
