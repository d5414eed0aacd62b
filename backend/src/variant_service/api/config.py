from pydantic_settings import BaseSettings

from variant_service.core.constants import MAX_ROWS

VARIANTS_ENV_PREFIX = "VARIANTS_"


class ApiSettings(BaseSettings):
    model_config = {"env_prefix": VARIANTS_ENV_PREFIX}

    max_rows: int = MAX_ROWS
    max_items: int = 500
    max_students: int = 5000
    min_seed_length: int = 3
    host: str = "127.0.0.1"
    port: int = 8000
