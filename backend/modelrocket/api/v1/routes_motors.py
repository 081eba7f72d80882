from fastapi import APIRouter, HTTPException

from modelrocket.api.v1.mappers import motor_detail, motor_summary
from modelrocket.api.v1.schemas import MotorDetail, MotorSummary
from modelrocket.engine.errors import MotorParseError
from modelrocket.engine.motor import MotorSpec
from modelrocket.motors.storage import MotorInfo, MotorLibrary, resolve_motor_path

router = APIRouter(tags=["motors"])


@router.get("/motors", response_model=list[MotorSummary])
def list_motors(manufacturer: str | None = None, impulse_class: str | None = None):
    library = MotorLibrary.bundled()
    motors = library.motors
    if manufacturer:
        motors = library.by_manufacturer(manufacturer)
    if impulse_class:
        allowed = {m.info.motor_id for m in library.by_impulse_class(impulse_class)}
        motors = [m for m in motors if m.info.motor_id in allowed]
    return [motor_summary(m.info, m.spec) for m in motors]


@router.get("/motors/{motor_id}", response_model=MotorDetail)
def get_motor(motor_id: str):
    try:
        path = resolve_motor_path(motor_id)
        spec = MotorSpec.from_file(path)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="motor file not found")
    except MotorParseError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    info = MotorInfo(motor_id=motor_id, filename=motor_id, source="bundled")
    return motor_detail(info, spec)
