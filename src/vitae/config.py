"""Environment-driven settings for the vitae command line."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from vitae.models import CompilerConfig

DEFAULT_DATA_DIR = Path.home() / ".vitae"
DEFAULT_COMPILER = "pdflatex"


@dataclass
class Settings:
    """Process-wide paths and compiler choice."""

    data_dir: Path
    compiler: str = DEFAULT_COMPILER
    timeout: Optional[float] = None

    @property
    def db_path(self) -> Path:
        return self.data_dir / "vitae.db"

    @property
    def workspace_root(self) -> Path:
        return self.data_dir / "temp"

    def compiler_config(self) -> CompilerConfig:
        return CompilerConfig(
            workspace_root=self.workspace_root,
            compiler=self.compiler,
            timeout=self.timeout,
        )


def load_config() -> Settings:
    """
    Build Settings from the environment (and a ``.env`` file, if present).

    Variables:
        VITAE_DATA_DIR: Directory holding the database and workspace (default: ~/.vitae)
        VITAE_COMPILER: LaTeX compiler executable (default: pdflatex)
        VITAE_TIMEOUT: Compiler timeout in seconds (default: unset, no timeout)

    Raises:
        ValueError: If VITAE_TIMEOUT is not a positive number
    """
    load_dotenv()

    data_dir = os.getenv("VITAE_DATA_DIR")
    timeout = os.getenv("VITAE_TIMEOUT")

    timeout_s = None
    if timeout:
        timeout_s = float(timeout)
        if timeout_s <= 0:
            raise ValueError(f"VITAE_TIMEOUT must be positive, got {timeout!r}")

    return Settings(
        data_dir=Path(data_dir).expanduser().resolve() if data_dir else DEFAULT_DATA_DIR,
        compiler=os.getenv("VITAE_COMPILER") or DEFAULT_COMPILER,
        timeout=timeout_s,
    )
