from typing import List, Optional

from flask import current_app

from roster import db
from roster.errors import store_errors
from roster.models import VsStage


def list_stages() -> List[VsStage]:
    with store_errors():
        return VsStage.query.order_by(VsStage.stage_number.asc()).all()


def create_stage(stage_number: int, stage_type: Optional[str] = None) -> VsStage:
    stage = VsStage(stage_number=stage_number, stage_type=stage_type)
    with store_errors():
        db.session.add(stage)
        db.session.commit()
    current_app.logger.info(f"[stage-create] stage={stage.id} number={stage_number} type={stage_type}")
    return stage
