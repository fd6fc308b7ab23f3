"""
Generated Plan Service

Persistence for generated plans. Status transitions are decided by the
GeneratedPlan model and written with a single compare-and-set update: the
stored document is only modified if its status still equals the status the
transition was computed from. A writer that loses the race gets an
IllegalTransitionError instead of silently overwriting the winner.
"""

from datetime import datetime
from typing import Callable

from pymongo import DESCENDING, ReturnDocument

from config.database import GENERATED_PLANS, database
from config.logging_utils import log_error
from models.errors import IllegalTransitionError, NotFoundError, ValidationError
from models.generated_plan import GeneratedPlan, PlanStatus
from models.plan_content import GeneratedPlanContent
from models.user import UserResponse
from services import preference_service, trip_service
from services.plan_timeouts import mark_timed_out_plans
from services.records import to_object_id


def get_plans_collection():
    """Get the generated plans collection."""
    return database.get_collection(GENERATED_PLANS)


async def create_plan(user: UserResponse, trip_id: str) -> GeneratedPlan:
    """Create a pending plan for one of the user's trips."""
    trip = await trip_service.get_trip(user, trip_id)
    if await preference_service.get_preferences(user) is None:
        raise ValidationError.single(
            "preferences",
            "Cannot generate plan without user preferences. Please set your preferences first."
        )

    now = datetime.utcnow()
    doc = {
        "trip_id": trip.id,
        "status": PlanStatus.PENDING.value,
        "rating": None,
        "content": None,
        "status_message": None,
        "created_at": now,
        "updated_at": now,
    }
    result = await get_plans_collection().insert_one(doc)
    doc["_id"] = result.inserted_id
    return GeneratedPlan.from_document(doc)


async def list_plans(user: UserResponse, trip_id: str) -> list[GeneratedPlan]:
    """List a trip's plans, newest first."""
    trip = await trip_service.get_trip(user, trip_id)
    await mark_timed_out_plans()

    cursor = get_plans_collection().find({"trip_id": trip.id}).sort("created_at", DESCENDING)
    return [GeneratedPlan.from_document(doc) async for doc in cursor]


async def get_plan(user: UserResponse, trip_id: str, plan_id: str) -> GeneratedPlan:
    trip = await trip_service.get_trip(user, trip_id)
    await mark_timed_out_plans()
    doc = await get_plans_collection().find_one({
        "_id": to_object_id(plan_id, "Generated plan"),
        "trip_id": trip.id
    })
    if not doc:
        raise NotFoundError("Generated plan")
    return GeneratedPlan.from_document(doc)


async def load_plan(plan_id: str) -> GeneratedPlan:
    """Load a plan by id without ownership scoping (generation worker only)."""
    doc = await get_plans_collection().find_one({"_id": to_object_id(plan_id, "Generated plan")})
    if not doc:
        raise NotFoundError("Generated plan")
    return GeneratedPlan.from_document(doc)


async def save_transition(previous: GeneratedPlan, updated: GeneratedPlan, action: str) -> GeneratedPlan:
    """
    Persist ``updated`` only if the stored plan is still in ``previous.status``.

    Raises:
        IllegalTransitionError: the stored status changed since ``previous`` was read
        NotFoundError: the plan was deleted
    """
    doc = await get_plans_collection().find_one_and_update(
        {"_id": to_object_id(previous.id, "Generated plan"), "status": previous.status.value},
        {"$set": updated.to_update()},
        return_document=ReturnDocument.AFTER
    )
    if doc is not None:
        return GeneratedPlan.from_document(doc)

    current = await load_plan(previous.id)
    log_error(
        f"Stale {action} on plan {previous.id}: expected '{previous.status.value}', "
        f"found '{current.status.value}'",
        prefix="PLAN"
    )
    raise IllegalTransitionError(current.status.value, action, "plan was modified concurrently")


async def _transition(plan_id: str, action: str, apply: Callable[[GeneratedPlan], GeneratedPlan]) -> GeneratedPlan:
    current = await load_plan(plan_id)
    return await save_transition(current, apply(current), action)


async def start_plan(plan_id: str) -> GeneratedPlan:
    return await _transition(plan_id, "start", lambda plan: plan.start())


async def complete_plan(plan_id: str, content: GeneratedPlanContent) -> GeneratedPlan:
    return await _transition(plan_id, "complete", lambda plan: plan.complete(content))


async def fail_plan(plan_id: str, reason: str) -> GeneratedPlan:
    return await _transition(plan_id, "fail", lambda plan: plan.fail(reason))


async def rate_plan(user: UserResponse, trip_id: str, plan_id: str, rating: int) -> GeneratedPlan:
    """Set the user's rating on a completed plan."""
    plan = await get_plan(user, trip_id, plan_id)
    if not plan.is_completed:
        raise ValidationError.single("rating", "can only be set for completed plans")
    return await save_transition(plan, plan.rate(rating), "rate")
