import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class Settings:
    env: str
    redis_url: str
    motors_dir: str
    cors_origins: list[str]
    celery_task_soft_time_limit: int
    celery_task_time_limit: int
    celery_queue: str
    celery_result_expires_s: int
    sim_time_step_s: float
    sim_max_time_s: float
    sim_max_samples: int


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return ["*"]
    return [item.strip() for item in value.split(",") if item.strip()]


def _package_root() -> str:
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    base_dir = _package_root()
    env = os.getenv("ENV", "development")
    redis_url = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    motors_dir = os.getenv("MOTORS_DIR", "resources/motors")
    if not os.path.isabs(motors_dir):
        motors_dir = os.path.join(base_dir, motors_dir)
    cors_origins = _split_csv(os.getenv("CORS_ORIGINS"))
    celery_task_soft_time_limit = int(os.getenv("CELERY_TASK_SOFT_TIME_LIMIT", "300"))
    celery_task_time_limit = int(os.getenv("CELERY_TASK_TIME_LIMIT", "600"))
    celery_queue = os.getenv("CELERY_QUEUE", "simulations")
    celery_result_expires_s = int(os.getenv("CELERY_RESULT_EXPIRES_S", "86400"))
    sim_time_step_s = float(os.getenv("SIM_TIME_STEP_S", "0.0005"))
    sim_max_time_s = float(os.getenv("SIM_MAX_TIME_S", "30"))
    sim_max_samples = int(os.getenv("SIM_MAX_SAMPLES", "2000"))

    return Settings(
        env=env,
        redis_url=redis_url,
        motors_dir=motors_dir,
        cors_origins=cors_origins,
        celery_task_soft_time_limit=celery_task_soft_time_limit,
        celery_task_time_limit=celery_task_time_limit,
        celery_queue=celery_queue,
        celery_result_expires_s=celery_result_expires_s,
        sim_time_step_s=sim_time_step_s,
        sim_max_time_s=sim_max_time_s,
        sim_max_samples=sim_max_samples,
    )
