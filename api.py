"""
JSON endpoints for plan generation and modification.

They are stateless: the caller owns the profile, plan and transcript, and
nothing here touches local storage.
"""

import logging

import gradio as gr
from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from agents import generator, modifier
from agents.errors import GatewayError
from logic.logic_plan import GENERATE_ERROR
from workout_types import ModifyRequest, UserProfile, validation_messages

logger = logging.getLogger(__name__)

MODIFY_ERROR = "Failed to modify workout plan"

router = APIRouter(prefix="/api", tags=["workout"])


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = " ".join(validation_messages(exc.errors())) or "Invalid request"
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return _error(message, 400)


@router.get("/health")
def health():
    return {"ok": True}


@router.post("/generate-workout")
def generate_workout(profile: UserProfile):
    try:
        return generator.plan_generator.generate(profile.model_dump(exclude_none=True))
    except GatewayError:
        logger.exception("Error generating workout plan")
        return _error(GENERATE_ERROR, 500)


@router.post("/modify-workout")
def modify_workout(request: ModifyRequest):
    try:
        result = modifier.plan_modifier.modify(
            request.currentPlan.model_dump(exclude_none=True),
            request.modification,
            [m.model_dump() for m in request.chatHistory],
        )
    except GatewayError:
        logger.exception("Error modifying workout plan")
        return _error(MODIFY_ERROR, 500)

    return {"response": result.response, "updatedPlan": result.updated_plan}


def create_app(demo=None) -> FastAPI:
    """Build the ASGI app; the gradio UI is mounted at / when given."""
    app = FastAPI(title="Workout Coach")
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)
    if demo is not None:
        app = gr.mount_gradio_app(app, demo, path="/")
    return app
