"""
Environment - RPC endpoints and the signing key, per chain.

Resolves ChainClient and TransactionConfirmer handles for a chain id. Only
the CLI and scripts use this; the orchestrator gets resolved handles.
"""

import json
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from eth_account import Account
from web3 import HTTPProvider, Web3

from .chain import ChainClient
from .confirm import DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT, TransactionConfirmer
from .exceptions import ConfigError

ENV_PREFIX = "L2W_"
_RPC_VAR = re.compile(rf"^{ENV_PREFIX}RPC_URL_(\d+)$")


@dataclass
class ChainConfig:
    """Connection settings for one chain"""
    chain_id: int
    rpc_url: str
    confirmations: int = 1
    request_timeout: float = 30.0


@dataclass
class Environment:
    """Signing key plus the chains it can talk to."""
    private_key: str = field(repr=False)
    chains: Dict[int, ChainConfig] = field(default_factory=dict)

    def __post_init__(self):
        if not self.private_key:
            raise ConfigError("private key is required")
        self._web3: Dict[int, Web3] = {}
        self._account = None

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Environment":
        """
        Load configuration from environment variables.

        Variables:
            L2W_PRIVATE_KEY (or PRIVATE_KEY): hex signing key
            L2W_RPC_URL_<chain_id>: RPC endpoint for a chain
            L2W_CONFIRMATIONS_<chain_id>: required block depth (default 1)
        """
        environ = os.environ if environ is None else environ
        private_key = environ.get(f"{ENV_PREFIX}PRIVATE_KEY") or environ.get("PRIVATE_KEY")
        if not private_key:
            raise ConfigError(
                f"{ENV_PREFIX}PRIVATE_KEY is required.\n"
                f"Set it with: export {ENV_PREFIX}PRIVATE_KEY='0x...'"
            )

        chains = {}
        for name, value in environ.items():
            match = _RPC_VAR.match(name)
            if not match or not value:
                continue
            chain_id = int(match.group(1))
            confirmations = environ.get(f"{ENV_PREFIX}CONFIRMATIONS_{chain_id}", "1")
            try:
                chains[chain_id] = ChainConfig(chain_id, value, confirmations=int(confirmations))
            except ValueError as e:
                raise ConfigError(f"invalid {ENV_PREFIX}CONFIRMATIONS_{chain_id}: {confirmations!r}") from e

        return cls(private_key=private_key, chains=chains)

    @classmethod
    def from_credentials_file(cls, path: str) -> "Environment":
        """
        Load configuration from a JSON file.

        Format:
            {"private_key": "0x...",
             "chains": {"10": {"rpc_url": "https://...", "confirmations": 1}}}
        """
        try:
            with open(Path(path).expanduser()) as f:
                creds = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"cannot read credentials file {path}: {e}") from e

        private_key = creds.get("private_key") or creds.get("privateKey")
        if not private_key:
            raise ConfigError(f"no private_key in {path}")

        chains = {}
        for key, chain in creds.get("chains", {}).items():
            try:
                chain_id = int(key)
                chains[chain_id] = ChainConfig(
                    chain_id=chain_id,
                    rpc_url=chain["rpc_url"],
                    confirmations=int(chain.get("confirmations", 1)),
                    request_timeout=float(chain.get("request_timeout", 30.0)),
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigError(f"invalid chain entry {key!r} in {path}: {e}") from e

        return cls(private_key=private_key, chains=chains)

    def chain(self, chain_id: int) -> ChainConfig:
        try:
            return self.chains[chain_id]
        except KeyError:
            known = ", ".join(str(c) for c in sorted(self.chains)) or "none"
            raise ConfigError(f"no RPC configured for chain {chain_id} (configured: {known})") from None

    def web3(self, chain_id: int) -> Web3:
        """Get (and cache) the Web3 connection for a chain"""
        if chain_id not in self._web3:
            config = self.chain(chain_id)
            self._web3[chain_id] = Web3(
                HTTPProvider(config.rpc_url, request_kwargs={"timeout": config.request_timeout})
            )
        return self._web3[chain_id]

    @property
    def account(self):
        if self._account is None:
            try:
                self._account = Account.from_key(self.private_key)
            except ValueError as e:
                raise ConfigError(f"invalid private key: {e}") from e
        return self._account

    def client(self, chain_id: int) -> ChainClient:
        return ChainClient(self.web3(chain_id), self.account, chain_id=chain_id)

    def confirmer(
        self,
        chain_id: int,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> TransactionConfirmer:
        return TransactionConfirmer(
            self.web3(chain_id),
            chain_id,
            confirmations=self.chain(chain_id).confirmations,
            poll_interval=poll_interval,
            timeout=timeout,
        )
