"""
Token settings record
"""

from dataclasses import dataclass
from typing import Any, Dict


DEFAULT_SYMBOL = "KID$"
DEFAULT_DECIMALS = 9


@dataclass(frozen=True)
class TokenConfig:
    """
    Token the toolkit operates on

    Attributes:
        mint: Mint address (base58), empty when unconfigured
        decimals: Token precision
        symbol: Display symbol
        keep_authorities: Operator intends to keep mint/freeze authorities
    """
    mint: str = ""
    decimals: int = DEFAULT_DECIMALS
    symbol: str = DEFAULT_SYMBOL
    keep_authorities: bool = True

    @property
    def is_configured(self) -> bool:
        return bool(self.mint)

    @property
    def mint_display(self) -> str:
        return self.mint or "(none)"

    def to_dict(self) -> Dict[str, Any]:
        """Serialized form written to storage"""
        return {
            "mint": self.mint,
            "decimals": self.decimals,
            "symbol": self.symbol,
            "keepAuthorities": self.keep_authorities,
        }

    def __str__(self) -> str:
        return f"{self.symbol} • {self.mint_display}"


DEFAULT_TOKEN_CONFIG = TokenConfig()
