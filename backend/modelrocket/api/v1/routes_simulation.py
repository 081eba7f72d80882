from celery.result import AsyncResult
from fastapi import APIRouter, HTTPException

from modelrocket.api.v1.mappers import (
    design_from_schema,
    launch_from_schema,
    properties_to_schema,
    sample_stride,
    simulation_to_schema,
)
from modelrocket.api.v1.schemas import (
    ComparisonRequest,
    JobResponse,
    RocketPropertiesRequest,
    RocketPropertiesResponse,
    SimulationRequest,
    SimulationResponse,
)
from modelrocket.core.config import get_settings
from modelrocket.engine.errors import ConfigurationError, MotorParseError
from modelrocket.engine.motor import MotorSpec
from modelrocket.engine.pipeline import run_simulation
from modelrocket.engine.rocket import calculate_rocket_properties
from modelrocket.motors.storage import load_motor
from modelrocket.workers.celery_app import celery_app
from modelrocket.workers.tasks import run_comparison_task

router = APIRouter(tags=["simulation"])

JOB_STATUS = {
    "PENDING": "queued",
    "RECEIVED": "queued",
    "STARTED": "running",
    "RETRY": "running",
    "SUCCESS": "completed",
    "FAILURE": "failed",
    "REVOKED": "cancelled",
}


def _load_motor(motor_id: str) -> MotorSpec:
    try:
        return load_motor(motor_id)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="motor file not found")
    except MotorParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/rockets/properties", response_model=RocketPropertiesResponse)
def rocket_properties(request: RocketPropertiesRequest):
    motor = _load_motor(request.motor_id)
    try:
        properties = calculate_rocket_properties(design_from_schema(request.rocket), motor)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return properties_to_schema(properties)


@router.post("/simulations", response_model=SimulationResponse)
def simulate(request: SimulationRequest):
    settings = get_settings()
    motor = _load_motor(request.motor_id)
    try:
        result = run_simulation(
            design_from_schema(request.rocket),
            motor,
            launch_from_schema(request.launch),
            time_step_s=request.time_step_s or settings.sim_time_step_s,
            max_time_s=request.max_time_s or settings.sim_max_time_s,
        )
    except (ConfigurationError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    every = sample_stride(len(result.trajectory), request.sample_every, settings.sim_max_samples)
    return simulation_to_schema(result, every)


@router.post("/simulations/jobs", response_model=JobResponse)
def enqueue_comparison(request: ComparisonRequest):
    for entry in request.entries:
        _load_motor(entry.motor_id)
    task = run_comparison_task.delay(request.model_dump(mode="json"))
    return JobResponse(job_id=task.id, status="queued")


@router.get("/simulations/jobs/{job_id}", response_model=JobResponse)
def get_comparison(job_id: str):
    result = AsyncResult(job_id, app=celery_app)
    status = JOB_STATUS.get(result.state, result.state.lower())
    if status == "completed":
        return JobResponse(job_id=job_id, status=status, result=result.result)
    if status == "failed":
        return JobResponse(job_id=job_id, status=status, error=str(result.result))
    return JobResponse(job_id=job_id, status=status)
