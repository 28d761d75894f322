from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PC_",
    )

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000"]

    # Logging
    log_dir: str = "logs"

    # Monte Carlo simulation
    simulation_default_days: int = 20
    allowed_horizons: list[int] = [20, 50, 100]
    simulation_num_paths: int = 500
    simulation_max_paths: int = 20000
    simulation_sample_paths: int = 30
    simulation_seed: int | None = None

    # Parallelization
    simulation_max_workers: int = 1
