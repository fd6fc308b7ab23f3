"""
Generated Plans API Router

Creating a plan returns immediately with a pending plan; generation runs in
the background and callers poll the plan until it is completed or failed.
"""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_current_user
from config.logging_utils import log_debug
from models.generated_plan import PlanUpdate
from models.user import UserResponse
from serializers.generated_plan import GeneratedPlanSerializer
from services import plan_generation, plan_service


router = APIRouter(prefix="/api/trips/{trip_id}/generated_plans", tags=["Generated Plans"])


@router.post("", status_code=status.HTTP_202_ACCEPTED)
async def create_generated_plan(
    trip_id: str,
    current_user: UserResponse = Depends(get_current_user)
):
    """Start asynchronous plan generation for a trip."""
    plan = await plan_service.create_plan(current_user, trip_id)
    log_debug(f"Created pending plan id={plan.id} for trip_id={trip_id}", prefix="GENERATE")
    plan_generation.schedule_plan_generation(plan.id, current_user)
    return {
        "generated_plan": GeneratedPlanSerializer.render(plan),
        "message": "Plan generation initiated. Please check back shortly."
    }


@router.get("")
async def list_generated_plans(
    trip_id: str,
    current_user: UserResponse = Depends(get_current_user)
):
    plans = await plan_service.list_plans(current_user, trip_id)
    return {"generated_plans": GeneratedPlanSerializer.render_many(plans)}


@router.get("/{plan_id}")
async def get_generated_plan(
    trip_id: str,
    plan_id: str,
    current_user: UserResponse = Depends(get_current_user)
):
    plan = await plan_service.get_plan(current_user, trip_id, plan_id)
    return {"generated_plan": GeneratedPlanSerializer.render(plan, view="detail")}


@router.patch("/{plan_id}")
async def rate_generated_plan(
    trip_id: str,
    plan_id: str,
    plan_data: PlanUpdate,
    current_user: UserResponse = Depends(get_current_user)
):
    """Rate a completed plan."""
    plan = await plan_service.rate_plan(current_user, trip_id, plan_id, plan_data.rating)
    return {"generated_plan": GeneratedPlanSerializer.render(plan, view="detail")}
