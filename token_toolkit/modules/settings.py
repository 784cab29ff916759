"""
Settings Module

Holds the live token settings record and persists it to a key-value
storage medium.

Reads degrade to defaults: an unconfigured or unreadable store still
yields a usable record. Writes validate the whole candidate before the
live record is touched.
"""

import json
import logging
from typing import Any, Mapping, Optional, Union

from ..errors import StorageError, ValidationError
from ..infra.storage import KeyValueStorage
from ..types.address import is_valid_address
from ..types.amount import MAX_DECIMALS
from ..types.token_config import TokenConfig, DEFAULT_TOKEN_CONFIG, DEFAULT_SYMBOL

logger = logging.getLogger(__name__)


TOKEN_CONFIG_KEY = "kidwiftools.token"


def _coerce_decimals(value: Any) -> int:
    """Non-numeric input becomes 0; fractions truncate; negatives floor at 0"""
    if isinstance(value, bool):
        return int(value)
    try:
        decimals = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    if decimals > MAX_DECIMALS:
        raise ValidationError.invalid_field("decimals", value, f"must be at most {MAX_DECIMALS}")
    return max(0, decimals)


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


def sanitize(candidate: Union[TokenConfig, Mapping[str, Any]]) -> TokenConfig:
    """
    Validate and normalize a settings candidate

    Accepts a TokenConfig or a mapping using either the Python field names
    or the stored names (keepAuthorities / legacy keepAuth).

    Raises:
        ValidationError: If mint or decimals is invalid
    """
    if isinstance(candidate, TokenConfig):
        fields = {
            "mint": candidate.mint,
            "decimals": candidate.decimals,
            "symbol": candidate.symbol,
            "keep_authorities": candidate.keep_authorities,
        }
    elif isinstance(candidate, Mapping):
        fields = dict(candidate)
    else:
        raise ValidationError.invalid_field("settings", candidate, "expected a mapping")

    mint = fields.get("mint") or ""
    if not isinstance(mint, str):
        raise ValidationError.invalid_field("mint", mint, "not a string")
    mint = mint.strip()
    if mint and not is_valid_address(mint):
        raise ValidationError.invalid_field("mint", mint, "not a base58 32-byte address")

    decimals = _coerce_decimals(fields.get("decimals", 0))

    symbol = fields.get("symbol")
    symbol = str(symbol).strip() if symbol is not None else ""

    if "keep_authorities" in fields:
        keep = fields["keep_authorities"]
    elif "keepAuthorities" in fields:
        keep = fields["keepAuthorities"]
    else:
        keep = fields.get("keepAuth", False)

    return TokenConfig(
        mint=mint,
        decimals=decimals,
        symbol=symbol or DEFAULT_SYMBOL,
        keep_authorities=_coerce_bool(keep),
    )


class TokenConfigStore:
    """
    Live token settings with load/save lifecycle

    One store holds one live record. Pass the store to whatever needs
    the current token instead of reaching for a global.

    Usage:
        store = TokenConfigStore(JsonFileStorage("settings.json"))
        store.load()

        store.save({"mint": "So111...112", "decimals": 9, "symbol": "SOL"})
        print(store.current().mint)
    """

    def __init__(
        self,
        storage: Optional[KeyValueStorage] = None,
        key: str = TOKEN_CONFIG_KEY,
    ):
        self._storage = storage
        self._key = key
        self._live: Optional[TokenConfig] = None
        self.last_persist_error: Optional[StorageError] = None

    @property
    def key(self) -> str:
        return self._key

    @property
    def storage(self) -> Optional[KeyValueStorage]:
        return self._storage

    @property
    def persisted(self) -> bool:
        """False when the last save only updated the in-memory record"""
        return self._storage is not None and self.last_persist_error is None

    def load(self) -> TokenConfig:
        """
        Read settings from storage, falling back to defaults

        Never raises. The loaded record becomes the live record.
        """
        self._live = self._read()
        return self._live

    def _read(self) -> TokenConfig:
        if self._storage is None:
            logger.debug("No settings storage configured, using defaults")
            return DEFAULT_TOKEN_CONFIG

        try:
            raw = self._storage.get(self._key)
        except StorageError as e:
            logger.warning(f"Settings storage unavailable, using defaults: {e}")
            return DEFAULT_TOKEN_CONFIG

        if raw is None:
            logger.debug(f"No stored settings under '{self._key}', using defaults")
            return DEFAULT_TOKEN_CONFIG

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("stored settings are not a JSON object")
            merged = {**DEFAULT_TOKEN_CONFIG.to_dict(), **data}
            if "keepAuthorities" not in data and "keepAuth" in data:
                merged["keepAuthorities"] = data["keepAuth"]
            return sanitize(merged)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Ignoring corrupt settings under '{self._key}': {e}")
            return DEFAULT_TOKEN_CONFIG

    def current(self) -> TokenConfig:
        """
        Live record

        No I/O once load() has run. If it has not, the first call loads
        from storage.
        """
        if self._live is None:
            return self.load()
        return self._live

    def save(self, candidate: Union[TokenConfig, Mapping[str, Any]]) -> TokenConfig:
        """
        Validate and store new settings

        The candidate is validated as a whole before the live record
        changes. Persisting is best-effort: a storage failure is logged
        and kept on last_persist_error, and the in-memory record stays
        authoritative.

        Raises:
            ValidationError: If the candidate is invalid (live record unchanged)
        """
        record = sanitize(candidate)
        self._live = record
        self._persist(record)
        logger.info(f"Token settings saved: {record}")
        return record

    def _persist(self, record: TokenConfig) -> None:
        if self._storage is None:
            return
        try:
            self._storage.set(self._key, json.dumps(record.to_dict()))
            self.last_persist_error = None
        except StorageError as e:
            self.last_persist_error = e
            logger.warning(f"Settings kept for this session only, write failed: {e}")


def create_store(
    storage: Optional[KeyValueStorage] = None,
    key: Optional[str] = None,
) -> TokenConfigStore:
    """
    Create a loaded settings store based on configuration

    Args:
        storage: Storage medium (defaults to TOKEN_TOOLKIT_STORAGE_PATH)
        key: Record key (defaults to TOKEN_TOOLKIT_STORAGE_KEY)
    """
    from ..config import config as global_config
    from ..infra.storage import create_storage

    if storage is None:
        storage = create_storage(global_config.storage.path)
    store = TokenConfigStore(storage, key=key or global_config.storage.key)
    store.load()
    return store
