"""
Stale Plan Sweep

A plan whose worker died stays in ``generating`` forever. Before plans are
read, any plan that has been generating for longer than
GENERATION_STALE_MINUTES is moved to ``failed``.
"""

from datetime import datetime, timedelta

from config.database import GENERATED_PLANS, database
from config.logging_utils import log_debug
from config.settings import settings
from models.generated_plan import PlanStatus


async def mark_timed_out_plans() -> int:
    """Mark plans as failed if they have been generating for longer than the stale threshold."""
    minutes = settings.GENERATION_STALE_MINUTES
    threshold = datetime.utcnow() - timedelta(minutes=minutes)

    result = await database.get_collection(GENERATED_PLANS).update_many(
        {"status": PlanStatus.GENERATING.value, "updated_at": {"$lt": threshold}},
        {
            "$set": {
                "status": PlanStatus.FAILED.value,
                "content": None,
                "status_message": f"Generation timed out after {minutes} minutes",
                "updated_at": datetime.utcnow()
            }
        }
    )
    if result.modified_count > 0:
        log_debug(f"Marked {result.modified_count} plans as failed due to timeout", prefix="TIMEOUT")
    return result.modified_count
