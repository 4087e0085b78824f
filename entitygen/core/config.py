from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="ENTITYGEN_", extra="ignore")

    app_name: str = "entitygen"
    log_level: str = "INFO"

    # Directory holding one <ClassName>.json snapshot per generated entity
    snapshot_dir: str = ".jhipster"
    database_type: str = "sql"
    write_unchanged: bool = False

settings = Settings()
