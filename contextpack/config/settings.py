from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables (CONTEXTPACK_*)."""

    model_config = SettingsConfigDict(
        env_prefix="CONTEXTPACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"

    # Default token counter encoding (tiktoken)
    token_encoding: str = "cl100k_base"

    # Classification worker pool (per-file binary/generated/lock detection)
    max_workers: int = 8

    # Binary detection
    binary_size_limit: int = 10 * 1024 * 1024  # > 10 MB is treated as binary
    binary_sample_size: int = 512
    binary_non_printable_ratio: float = 0.30

    # Generated-file detection
    marker_scan_bytes: int = 32 * 1024
    # Low-entropy check only runs on files at or below this size
    generated_size_threshold: int = 1024 * 1024
    generated_min_lines: int = 50
    generated_duplicate_ratio: float = 0.85

    # Lock-signature detection reads at most this much of the file head
    lock_signature_scan_bytes: int = 8 * 1024

    # Per-project YAML config, looked up in the extraction root
    project_config_filename: str = ".contextpack.yml"

    @property
    def debug(self) -> bool:
        """Check if debug logging is requested."""
        return self.log_level.upper() == "DEBUG"


settings = Settings()
