import logging
from typing import Any

from modelrocket.api.v1.mappers import (
    design_from_schema,
    launch_from_schema,
    sample_stride,
    simulation_to_schema,
)
from modelrocket.api.v1.schemas import ComparisonRequest
from modelrocket.core.config import get_settings
from modelrocket.engine.pipeline import SimulationEntry, compare_rockets
from modelrocket.motors.storage import load_motor
from modelrocket.workers.celery_app import celery_app

logger = logging.getLogger("modelrocket.backend.worker")


def run_comparison(params: dict[str, Any]) -> list[dict[str, Any]]:
    """Simulate every entry of a comparison request; results keep the request order."""
    settings = get_settings()
    request = ComparisonRequest.model_validate(params)
    entries = [
        SimulationEntry(design=design_from_schema(entry.rocket), motor=load_motor(entry.motor_id))
        for entry in request.entries
    ]
    results = compare_rockets(
        entries,
        launch_from_schema(request.launch),
        time_step_s=request.time_step_s or settings.sim_time_step_s,
        max_time_s=request.max_time_s or settings.sim_max_time_s,
    )
    payload = []
    for result in results:
        every = sample_stride(len(result.trajectory), request.sample_every, settings.sim_max_samples)
        payload.append(simulation_to_schema(result, every).model_dump(mode="json"))
    return payload


@celery_app.task(bind=True, name="run_comparison")
def run_comparison_task(self, params: dict[str, Any]) -> list[dict[str, Any]]:
    try:
        return run_comparison(params)
    except Exception as exc:
        logger.exception("comparison failed: %s", exc)
        raise
