"""Configuration: .env loading and palette file discovery.

.env load order (first wins):
  1. Existing OS environment variables — never overwrite.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Palette file order (first wins):
  1. --palette on the command line.
  2. VENEER_PALETTE environment variable (may come from .env).
  3. veneer.toml walking up from cwd, same .git boundary.
  4. veneer.toml in cwd, left for the loader to report as missing.
"""

import os
from pathlib import Path

PALETTE_ENV_VAR = 'VENEER_PALETTE'
DEFAULT_PALETTE_NAME = 'veneer.toml'


def find_upwards(start: Path, name: str) -> Path | None:
    """Walk up from start, return the first file called `name`, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / name
        if candidate.is_file():
            return candidate
        # .git is a dir in a normal clone and a file in a worktree
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value, KEY="value" and `export KEY=value`."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip().removeprefix('export ').strip()
        value = raw_value.strip().strip('"').strip("'")
        if key:
            result[key] = value
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = find_upwards(Path.cwd(), '.env')
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


def palette_path(explicit: str | None = None) -> Path:
    """Pick the palette file to load."""
    if explicit:
        return Path(explicit)
    from_env = os.environ.get(PALETTE_ENV_VAR)
    if from_env:
        return Path(from_env)
    found = find_upwards(Path.cwd(), DEFAULT_PALETTE_NAME)
    return found if found is not None else Path(DEFAULT_PALETTE_NAME)
