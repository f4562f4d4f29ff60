from __future__ import annotations

import os
from dataclasses import dataclass, fields

MANAGE_CAPABILITY = "switch_themes"
EDIT_OTHERS_CAPABILITY = "edit_others_styles"

_ENV_PREFIX = "BLOCKSTYLES_"


@dataclass(frozen=True)
class BlockStylesConfig:
    db_path: str = "blockstyles.db"
    host: str = "127.0.0.1"
    port: int = 5000
    secret_key: str = ""  # generated per process when empty
    capability: str = MANAGE_CAPABILITY
    operator: str = "admin"
    operator_capabilities: tuple[str, ...] = (MANAGE_CAPABILITY, EDIT_OTHERS_CAPABILITY)
    log_level: str = "WARNING"
    blocks_file: str = ""  # JSON mapping of extra block name -> title

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> BlockStylesConfig:
        """Build a config from ``BLOCKSTYLES_*`` environment variables.

        ``BLOCKSTYLES_OPERATOR_CAPABILITIES`` is a comma-separated list.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for f in fields(cls):
            raw = env.get(_ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            if f.name == "port":
                values[f.name] = int(raw)
            elif f.name == "operator_capabilities":
                values[f.name] = tuple(c.strip() for c in raw.split(",") if c.strip())
            else:
                values[f.name] = raw
        return cls(**values)
