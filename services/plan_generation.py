"""
Plan Generation

Background worker that takes a pending plan to a terminal status:

1. start the plan (pending -> generating)
2. load the trip, the user's preferences and the trip notes
3. check the inputs
4. call the generation provider, bounded by GENERATION_TIMEOUT_SECONDS
5. validate the returned content against the trip
6. complete the plan, or fail it with the reason of the first problem met
"""

import asyncio
import logging
import traceback
from typing import Optional

from config.logging_utils import log_debug, log_error, log_step, log_success
from config.settings import settings
from models.errors import (
    IllegalTransitionError,
    NotFoundError,
    ProviderError,
    ValidationError,
)
from models.generated_plan import GeneratedPlan
from models.user import UserResponse
from services import note_service, plan_service, preference_service, trip_service
from services.gemini_service import gemini_service
from services.input_validator import InputValidator
from services.plan_validator import PlanContentValidator
from services.prompt_builder import PromptBuilder

logger = logging.getLogger(__name__)

TOTAL_STEPS = 5

_background_tasks: set[asyncio.Task] = set()


class GenerationAborted(Exception):
    """Raised when a plan cannot be generated from its inputs."""
    pass


async def _generate_content(plan: GeneratedPlan, user: UserResponse, provider):
    trip = await trip_service.get_trip(user, plan.trip_id)
    preferences = await preference_service.get_preferences(user)
    notes = await note_service.list_notes(user, plan.trip_id)

    log_step("Validating trip, preferences and notes", 2, TOTAL_STEPS, prefix="GENERATE")
    input_validator = InputValidator(trip=trip, preferences=preferences, notes=notes)
    if not input_validator.is_valid():
        raise GenerationAborted(", ".join(input_validator.errors))

    log_step("Calling generation provider", 3, TOTAL_STEPS, prefix="GENERATE")
    builder = PromptBuilder(trip=trip, preferences=preferences, notes=notes)
    raw = await asyncio.wait_for(
        provider.generate_plan(builder.build_system_instruction(), builder.build_user_prompt()),
        timeout=settings.GENERATION_TIMEOUT_SECONDS
    )

    log_step("Validating generated content", 4, TOTAL_STEPS, prefix="GENERATE")
    validator = PlanContentValidator(trip=trip)
    content = validator.validate(raw)
    for warning in validator.warnings:
        log_debug(f"plan_id={plan.id}: {warning}", prefix="GENERATE")
    return content


async def _stored_plan(plan_id: str) -> Optional[GeneratedPlan]:
    """The plan as another writer left it."""
    try:
        return await plan_service.load_plan(plan_id)
    except NotFoundError:
        return None


async def process_plan_generation(plan_id: str, user: UserResponse, provider=None) -> Optional[GeneratedPlan]:
    """
    Run generation for a pending plan.

    Returns the plan in its terminal status, or None when the plan was
    deleted or is already being handled by another worker. When another
    writer moves the plan first (e.g. the stale sweep), the plan is
    returned as that writer left it.
    """
    provider = provider or gemini_service

    log_step("Starting plan generation", 1, TOTAL_STEPS, prefix="GENERATE")
    log_debug(f"plan_id={plan_id}, user_id={user.id}", prefix="GENERATE")

    try:
        plan = await plan_service.start_plan(plan_id)
    except (IllegalTransitionError, NotFoundError) as e:
        log_error(f"Plan {plan_id} not started: {e}", prefix="GENERATE")
        return None

    try:
        content = await _generate_content(plan, user, provider)
    except NotFoundError:
        log_error(f"Trip of plan {plan_id} was deleted during generation. Stopping.", prefix="GENERATE")
        return None
    except asyncio.TimeoutError:
        reason = f"Generation timed out after {settings.GENERATION_TIMEOUT_SECONDS:g} seconds"
    except GenerationAborted as e:
        reason = f"Invalid input: {e}"
    except ProviderError as e:
        reason = str(e)
    except ValidationError as e:
        reason = f"Invalid plan: {e}"
    except Exception as e:
        logger.error(f"[GENERATE] Full traceback: {traceback.format_exc()}")
        reason = f"Unexpected error: {e}"
    else:
        log_step("Saving plan", 5, TOTAL_STEPS, prefix="GENERATE")
        try:
            completed = await plan_service.complete_plan(plan_id, content)
        except NotFoundError:
            log_error(f"Plan {plan_id} was deleted before final save.", prefix="GENERATE")
            return None
        except IllegalTransitionError as e:
            log_error(f"Plan {plan_id} not completed: {e}", prefix="GENERATE")
            return await _stored_plan(plan_id)
        log_success(f"Generation completed successfully for plan_id={plan_id}", prefix="GENERATE")
        return completed

    log_error(f"Generation failed for plan_id={plan_id}: {reason}", prefix="GENERATE")
    try:
        return await plan_service.fail_plan(plan_id, reason)
    except NotFoundError:
        return None
    except IllegalTransitionError as e:
        log_error(f"Plan {plan_id} not failed: {e}", prefix="GENERATE")
        return await _stored_plan(plan_id)


def _log_task_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error(
            f"[GENERATE] Background task crashed: {error}",
            exc_info=(type(error), error, error.__traceback__)
        )


def schedule_plan_generation(plan_id: str, user: UserResponse) -> asyncio.Task:
    """Start generation in the background and return immediately."""
    task = asyncio.create_task(process_plan_generation(plan_id, user))
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)
    task.add_done_callback(_log_task_failure)
    logger.info(f"[GENERATE] Background task started for plan_id={plan_id}")
    return task
