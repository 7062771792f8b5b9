"""Query-text registry backed by a directory of `.sql` files."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Union

from ...core.errors import RegistryLoadError, UnknownQueryError
from ...core.logging import get_logger
from ...core.types import QueryFn, QueryParams, Rows

logger = get_logger(__name__)


class QueryFileRegistry:
    """Immutable logical-name -> SQL text mapping, read eagerly from disk.

    Every `*.sql` file below `root` is registered under its path relative to
    `root`, without the suffix and with `/` separators: `root/select.sql` is
    `"select"`, `root/reports/daily.sql` is `"reports/daily"`.
    """

    suffix = ".sql"

    def __init__(self, root: Union[str, Path]):
        """Load every query file under `root`.

        Raises:
            RegistryLoadError: `root` is missing, not a directory, or a file
                cannot be read as UTF-8 text.
        """

        self.root = Path(root)
        self._queries: Mapping[str, str] = MappingProxyType(self._load(self.root))
        logger.info("query_registry_loaded", path=str(self.root), count=len(self._queries))

    def _load(self, root: Path) -> Dict[str, str]:
        if not root.exists():
            raise RegistryLoadError(f"SQL file path does not exist: {root}", root)
        if not root.is_dir():
            raise RegistryLoadError(f"SQL file path is not a directory: {root}", root)

        try:
            # rglob skips unreadable directories silently; listing first makes the root fail loudly.
            next(root.iterdir(), None)
            paths: List[Path] = sorted(root.rglob(f"*{self.suffix}"))
        except OSError as exc:
            raise RegistryLoadError(f"Cannot list SQL file path {root}: {exc}", root) from exc

        queries: Dict[str, str] = {}
        for path in paths:
            if not path.is_file():
                continue
            name = path.relative_to(root).with_suffix("").as_posix()
            try:
                queries[name] = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise RegistryLoadError(f"Cannot read SQL file {path}: {exc}", path) from exc
        return queries

    def names(self) -> List[str]:
        return sorted(self._queries)

    def get(self, name: str) -> str:
        """Return the SQL text registered under `name`."""

        try:
            return self._queries[name]
        except KeyError:
            raise UnknownQueryError(name) from None

    async def run(self, query: QueryFn, name: str, params: QueryParams = None) -> Rows:
        """Resolve `name` and execute its text through `query`.

        Resolution happens first, so an unknown name never reaches `query`.
        """

        text = self.get(name)
        return await query(text, params)

    def __contains__(self, name: object) -> bool:
        return name in self._queries

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._queries)
