"""Runtime settings read from the environment (.env is loaded by the entry point)."""

import os
from dataclasses import dataclass
from pathlib import Path

STORAGE_FILE = "file"
STORAGE_NEO4J = "neo4j"
STORAGE_MEMORY = "memory"
STORAGE_BACKENDS = (STORAGE_FILE, STORAGE_NEO4J, STORAGE_MEMORY)


@dataclass(frozen=True)
class Settings:
    storage: str = STORAGE_FILE
    data_dir: Path = Path("database")
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"

    def __post_init__(self):
        if self.storage not in STORAGE_BACKENDS:
            raise ValueError(
                f"JACKUT_STORAGE must be one of {', '.join(STORAGE_BACKENDS)}; got {self.storage!r}."
            )

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            storage=os.environ.get("JACKUT_STORAGE", STORAGE_FILE).strip().lower(),
            data_dir=Path(os.environ.get("JACKUT_DATA_DIR", "database").strip()),
            neo4j_uri=os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip(),
            neo4j_user=os.environ.get("NEO4J_USER", "neo4j").strip(),
            neo4j_password=os.environ.get("NEO4J_PASSWORD", "password").strip(),
        )
