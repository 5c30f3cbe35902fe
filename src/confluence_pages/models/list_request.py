"""List request data model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from ..confluence_client.errors import ConfigurationError

MAX_PAGE_IDS = 250
MAX_SPACE_IDS = 100
MIN_LIMIT = 1
MAX_LIMIT = 250
DEFAULT_LIMIT = 25
DEFAULT_STATUS = ('current', 'archived')

VALID_SORTS = frozenset({
    'id', '-id',
    'created-date', '-created-date',
    'modified-date', '-modified-date',
    'title', '-title',
})
VALID_SUBTYPES = frozenset({'live', 'page'})
VALID_STATUSES = frozenset({'current', 'archived', 'deleted', 'trashed'})


class FetchMode(str, Enum):
    """How listed pages are handed back to the caller.

    - LIST: pages are returned inline
    - FIRST_ONLY: the server limit is forced to 1, still returned as a list
    - STREAM_TO_STORAGE: pages are written to storage, only a URI is returned
    """
    LIST = 'LIST'
    FIRST_ONLY = 'FIRST_ONLY'
    STREAM_TO_STORAGE = 'STREAM_TO_STORAGE'

    @classmethod
    def parse(cls, value) -> 'FetchMode':
        """Parse a fetch mode, accepting the FETCH/FETCH_ONE/STORE aliases."""
        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            return cls.LIST
        name = str(value).strip().upper().replace('-', '_')
        name = _FETCH_MODE_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            valid = ', '.join(m.value for m in cls)
            raise ConfigurationError(
                f"Unknown fetch mode '{value}' (valid: {valid})", 'fetch_mode'
            )


_FETCH_MODE_ALIASES = {
    'FETCH': 'LIST',
    'FETCH_ONE': 'FIRST_ONLY',
    'STORE': 'STREAM_TO_STORAGE',
}


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


@dataclass(frozen=True)
class ListRequest:
    """Resolved configuration for one "list pages" invocation.

    Attributes:
        server_url: Confluence site URL, /wiki/api/v2 is appended
        username: Account email used for Basic auth
        api_token: Atlassian API token
        page_ids: Page IDs to filter on (max 250)
        space_ids: Space IDs to filter on (max 100)
        title: Exact title filter
        subtype: 'live' or 'page'
        sort: Sort key, e.g. '-modified-date'
        cursor: Opaque pagination cursor from a previous response
        status: Page statuses to include
        limit: Results per request (1..250)
        fetch_mode: How results are returned
    """
    server_url: Optional[str]
    username: Optional[str]
    api_token: Optional[str]
    page_ids: Tuple[int, ...] = ()
    space_ids: Tuple[int, ...] = ()
    title: Optional[str] = None
    subtype: Optional[str] = None
    sort: Optional[str] = None
    cursor: Optional[str] = None
    status: Tuple[str, ...] = field(default=DEFAULT_STATUS)
    limit: int = DEFAULT_LIMIT
    fetch_mode: FetchMode = FetchMode.LIST

    def __post_init__(self):
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, 'page_ids', _as_int_tuple(self.page_ids, 'page_ids'))
        object.__setattr__(self, 'space_ids', _as_int_tuple(self.space_ids, 'space_ids'))
        object.__setattr__(self, 'status', tuple(
            s.strip() for s in (self.status or ()) if s is not None and str(s).strip()
        ))
        for name in ('title', 'subtype', 'sort', 'cursor'):
            object.__setattr__(self, name, _blank_to_none(getattr(self, name)))
        object.__setattr__(self, 'fetch_mode', FetchMode.parse(self.fetch_mode))
        self._validate()

    def _validate(self) -> None:
        if len(self.page_ids) > MAX_PAGE_IDS:
            raise ConfigurationError(
                f"at most {MAX_PAGE_IDS} page IDs allowed, got {len(self.page_ids)}",
                'page_ids',
            )
        if len(self.space_ids) > MAX_SPACE_IDS:
            raise ConfigurationError(
                f"at most {MAX_SPACE_IDS} space IDs allowed, got {len(self.space_ids)}",
                'space_ids',
            )
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise ConfigurationError(f"limit must be an integer, got {self.limit!r}", 'limit')
        if not MIN_LIMIT <= self.limit <= MAX_LIMIT:
            raise ConfigurationError(
                f"limit must be between {MIN_LIMIT} and {MAX_LIMIT}, got {self.limit}",
                'limit',
            )
        if self.subtype is not None and self.subtype not in VALID_SUBTYPES:
            raise ConfigurationError(
                f"invalid subtype '{self.subtype}' (valid: {', '.join(sorted(VALID_SUBTYPES))})",
                'subtype',
            )
        if self.sort is not None and self.sort not in VALID_SORTS:
            raise ConfigurationError(
                f"invalid sort '{self.sort}' (valid: {', '.join(sorted(VALID_SORTS))})",
                'sort',
            )
        invalid = [s for s in self.status if s not in VALID_STATUSES]
        if invalid:
            raise ConfigurationError(
                f"invalid status {', '.join(invalid)} (valid: {', '.join(sorted(VALID_STATUSES))})",
                'status',
            )

    @property
    def effective_limit(self) -> int:
        """Limit sent to the server; FIRST_ONLY always asks for one page."""
        if self.fetch_mode is FetchMode.FIRST_ONLY:
            return 1
        return self.limit


def _as_int_tuple(values, field_name: str) -> Tuple[int, ...]:
    if values is None:
        return ()
    result = []
    for value in values:
        if isinstance(value, bool):
            raise ConfigurationError(f"expected integer IDs, got {value!r}", field_name)
        try:
            result.append(int(value))
        except (TypeError, ValueError):
            raise ConfigurationError(f"expected integer IDs, got {value!r}", field_name)
    return tuple(result)
