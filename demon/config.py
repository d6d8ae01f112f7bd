"""demon configuration — loaded from environment / .env via pydantic-settings."""

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class DemonSettings(BaseSettings):
    """All demon configuration. Reads DEMON_* environment variables and .env."""

    # --- Child process ---
    executable: str = Field(
        default="deno",
        description="Executable spawned as the traced child",
    )
    trace_flag: str = Field(
        default="--strace-ops",
        description="Instrumentation flag prepended to the forwarded arguments",
    )

    # --- Output files ---
    stdout_log: str = Field(default="stdout.log", description="Default stdout log path")
    stderr_log: str = Field(default="stderr.log", description="Default stderr log path")

    # --- Streams ---
    read_chunk_size: int = Field(
        default=65536,
        description="Maximum bytes read from a child pipe per chunk",
    )

    # --- Logging ---
    log_level: str = Field(default="WARNING", description="Log level")
    log_format: str = Field(
        default="console",
        description="Log format: 'console' for dev, 'json' for production",
    )

    model_config = {
        "env_prefix": "DEMON_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class RunConfig(BaseModel):
    """What one invocation needs: where to write the logs, what to forward."""

    stdout: Path = Field(description="File receiving the child's raw stdout")
    stderr: Path = Field(description="File receiving the child's raw stderr")
    forward: list[str] = Field(
        default_factory=list,
        description="Arguments passed through to the child after the trace flag",
    )


# Singleton — import this everywhere
settings = DemonSettings()
