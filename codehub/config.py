"""환경 변수에서 읽어오는 애플리케이션 설정."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """CODEHUB_ 접두사가 붙은 환경 변수 또는 .env 파일에서 설정을 읽습니다."""

    model_config = SettingsConfigDict(env_prefix="CODEHUB_", env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite:///codehub.db"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    environment: str = "development"

    # 배포 URL은 "{public_base_url}/deploy/{slug}" 형태로 만들어집니다.
    public_base_url: str = "http://localhost:3000"

    # Limits
    max_projects_per_user: int = 3
    max_file_size_bytes: int = 5 * 1024 * 1024

    # Rendering
    deployment_cache_max_age: int = 3600
    generator_name: str = "CodeHub"


settings = Settings()
