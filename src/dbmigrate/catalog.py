"""On-disk catalog of migration units.

Layout of the catalog root:

    migration/
        1700000000000-CreateUsers/
            up.sql
            down.sql
        1700000123456-AddEmailToUsers/
            up.sql
            down.sql

Each directory name is ``{key}-{name}``: the key is a millisecond creation
timestamp that orders units, the name a PascalCase label.
"""

import re
import time
from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from common.logger import get_logger

from .errors import CreateError, DiscoveryError

logger = get_logger(__name__)

UP_SCRIPT = "up.sql"
DOWN_SCRIPT = "down.sql"

# Runs of letters or of digits; anything else separates words
_RUN_RE = re.compile(r"[^\W\d_]+|\d+")


@dataclass(frozen=True)
class MigrationUnit:
    """A named, ordered pair of up/down scripts."""

    key: int
    name: str
    path: Path
    up_script: str = ""
    down_script: str = ""

    @property
    def identifier(self) -> str:
        return f"{self.key}-{self.name}"


def _split_case(run: str) -> list[str]:
    """Split a run of letters where the case changes.

    A new word starts at an uppercase letter following a non-uppercase one,
    and at the last capital of an acronym followed by lowercase
    ("HTTPServer" -> "HTTP", "Server").
    """
    words = []
    start = 0
    for i in range(1, len(run)):
        prev, cur = run[i - 1], run[i]
        nxt = run[i + 1] if i + 1 < len(run) else ""
        if cur.isupper() and (not prev.isupper() or (nxt and nxt.islower())):
            words.append(run[start:i])
            start = i
    words.append(run[start:])
    return words


def to_pascal_case(title: str) -> str:
    """Normalize free text into a PascalCase migration name.

    Example:
        >>> to_pascal_case("add email to users")
        'AddEmailToUsers'
        >>> to_pascal_case("HTTPServer_settings")
        'HttpServerSettings'
        >>> to_pascal_case("café au lait")
        'CaféAuLait'
    """
    words = []
    for run in _RUN_RE.findall(title):
        words.extend([run] if run.isdigit() else _split_case(run))
    return "".join(word.capitalize() for word in words)


def parse_identifier(identifier: str) -> tuple[int, str] | None:
    """Split a unit directory name into (key, name).

    Returns:
        Tuple of (key, name), or None if the name is not ``{int}-{name}``
    """
    parts = identifier.split("-", 1)
    if len(parts) != 2:
        return None

    # int() alone would also take "+5", " 5" and "1_000"
    key = parts[0]
    if not (key.isascii() and key.isdigit()):
        return None

    return int(key), parts[1]


def _read_script(path: Path) -> str:
    if not path.is_file():
        return ""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DiscoveryError(f"Cannot read migration script {path}: {e}") from e


class MigrationCatalog:
    """Reads and scaffolds migration units under a root directory."""

    # Last key handed out by create_unit, shared by every catalog in the process
    _last_key = 0

    def __init__(self, root: str | Path):
        """Initialize catalog.

        Args:
            root: Directory holding one sub-directory per migration unit
        """
        self.root = Path(root)

    def list(self) -> list[MigrationUnit]:
        """List every migration unit, ascending by key.

        Returns:
            Units with their scripts loaded; a missing or empty script file
            yields an empty script

        Raises:
            DiscoveryError: If the root cannot be read or two units share a key
        """
        try:
            directories = [entry for entry in self.root.iterdir() if entry.is_dir()]
        except OSError as e:
            raise DiscoveryError(f"Cannot read migrations directory {self.root}: {e}") from e

        units: dict[int, MigrationUnit] = {}
        for directory in directories:
            parsed = parse_identifier(directory.name)
            if parsed is None:
                logger.warning(f"Skipping invalid migration directory: {escape(directory.name)}")
                continue

            key, name = parsed
            if key in units:
                raise DiscoveryError(
                    f"Duplicate migration key {key}: {units[key].path.name} and {directory.name}"
                )

            units[key] = MigrationUnit(
                key=key,
                name=name,
                path=directory,
                up_script=_read_script(directory / UP_SCRIPT),
                down_script=_read_script(directory / DOWN_SCRIPT),
            )

        return [units[key] for key in sorted(units)]

    def create_unit(self, title: str) -> MigrationUnit:
        """Scaffold a new migration unit with empty up/down scripts.

        Args:
            title: Free-form title, normalized to PascalCase

        Returns:
            The newly created unit

        Raises:
            CreateError: If the title has no usable characters or the
                directory cannot be created
        """
        name = to_pascal_case(title)
        if not name:
            raise CreateError(f"Invalid migration name: {title!r}")

        key = self._next_key()
        path = self.root / f"{key}-{name}"

        try:
            path.mkdir(parents=True, exist_ok=False)
            (path / UP_SCRIPT).touch(exist_ok=False)
            (path / DOWN_SCRIPT).touch(exist_ok=False)
        except FileExistsError as e:
            raise CreateError(f"Migration already exists: {path}") from e
        except OSError as e:
            raise CreateError(f"Failed to create migration {path}: {e}") from e

        logger.info(f"Created migration: {escape(str(path))}")
        return MigrationUnit(key=key, name=name, path=path)

    @classmethod
    def _next_key(cls) -> int:
        key = time.time_ns() // 1_000_000
        if key <= cls._last_key:
            key = cls._last_key + 1
        cls._last_key = key
        return key
