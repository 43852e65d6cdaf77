"""
FastAPI Main Application
Backend server for the SuhbatAI mock interview coach.
"""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from suhbat.config import Settings
from suhbat.core.constants import API_PROVIDER, API_VERSION, SERVICE_MESSAGE
from suhbat.core.controller import InterviewSessionController
from suhbat.core.exceptions import InvalidProfessionError, UpstreamError
from suhbat.core.models import (
    EvaluateInterviewRequest,
    HealthResponse,
    NextQuestionRequest,
    ProfessionSummary,
    QuestionResponse,
    StartInterviewRequest,
)
from suhbat.core.professions import list_professions
from suhbat.prompts.schemas import EvaluationResult
from suhbat.services.model_caller import ModelCaller, create_model_caller
from suhbat.utils.logging_config import setup_logging
from suhbat.utils.metrics import record_interview_request

logger = logging.getLogger(__name__)

EVALUATE_PATH = "/interview/evaluate"


def create_app(
    settings: Optional[Settings] = None,
    model_caller: Optional[ModelCaller] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings (loaded from the environment when omitted)
        model_caller: Pre-built model caller; built from settings at startup when omitted
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown events."""
        # Startup
        if app.state.model_caller is None:
            app.state.model_caller = create_model_caller(settings)
        app.state.controller = InterviewSessionController(app.state.model_caller)

        logger.info("SuhbatAI Backend Started!")
        logger.info(f"  - AI Provider: {API_PROVIDER} ({settings.gemini_model})")
        logger.info(f"  - API Key: {'Configured' if settings.api_key_configured else 'MISSING!'}")

        yield

        # Shutdown
        logger.info("Shutting down application...")
        app.state.controller = None

    app = FastAPI(
        title="SuhbatAI Interview API",
        description="Backend API for AI-generated mock interviews and evaluations",
        version=API_VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.model_caller = model_caller
    app.state.controller = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_routes(app)
    _register_exception_handlers(app)
    return app


def get_controller(request: Request) -> InterviewSessionController:
    """Dependency returning the controller built at startup."""
    controller = request.app.state.controller
    if controller is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up"
        )
    return controller


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _register_routes(app: FastAPI) -> None:

    @app.get("/")
    async def root():
        """Root endpoint - simple API info."""
        return {
            "message": SERVICE_MESSAGE,
            "status": "operational",
            "version": API_VERSION
        }

    @app.get("/health", response_model=HealthResponse)
    async def health_check(settings: Settings = Depends(get_settings)):
        """Health check; the only place a missing API key is reported."""
        return HealthResponse(
            status="ok",
            message=SERVICE_MESSAGE,
            api_provider=API_PROVIDER,
            api_key="✓ Configured" if settings.api_key_configured else "✗ MISSING!",
        )

    @app.get("/metrics")
    async def metrics():
        """Prometheus-compatible metrics endpoint."""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    @app.get("/professions", response_model=List[ProfessionSummary])
    async def professions():
        """List the supported professions in display order."""
        return [
            ProfessionSummary(id=profile.id, name=profile.name, skills=list(profile.skills))
            for profile in list_professions()
        ]

    @app.post("/interview/start", response_model=QuestionResponse)
    async def start_interview(
        request: StartInterviewRequest,
        controller: InterviewSessionController = Depends(get_controller)
    ):
        """Generate the opening question for a new interview."""
        try:
            question = await controller.start(request.profession)
        except InvalidProfessionError:
            record_interview_request("start", "invalid_profession")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid profession")
        except UpstreamError as e:
            record_interview_request("start", "upstream_error")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

        record_interview_request("start", "success")
        return QuestionResponse(question=question)

    @app.post("/interview/next", response_model=QuestionResponse)
    async def next_question(
        request: NextQuestionRequest,
        controller: InterviewSessionController = Depends(get_controller)
    ):
        """Generate the next question from the client-supplied history."""
        try:
            question = await controller.next_question(
                request.profession,
                request.conversation_history,
                request.question_number
            )
        except InvalidProfessionError:
            record_interview_request("next", "invalid_profession")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid profession")
        except UpstreamError as e:
            record_interview_request("next", "upstream_error")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

        record_interview_request("next", "success")
        return QuestionResponse(question=question)

    @app.post(EVALUATE_PATH, response_model=EvaluationResult)
    async def evaluate_interview(
        request: EvaluateInterviewRequest,
        controller: InterviewSessionController = Depends(get_controller)
    ):
        """Evaluate the interview; model failures return the fallback evaluation with 200."""
        try:
            evaluation = await controller.evaluate(request.profession, request.conversation_history)
        except InvalidProfessionError:
            record_interview_request("evaluate", "invalid_profession")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid profession")

        record_interview_request("evaluate", "success")
        return evaluation


def _register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc):
        """Custom exception handler for HTTP exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail}
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc):
        """Malformed request bodies are client errors, except on evaluate."""
        if request.url.path == EVALUATE_PATH:
            return _evaluate_unreadable_body(request, exc)

        logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body", "detail": str(exc.errors())}
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc):
        """Custom exception handler for unexpected exceptions."""
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "detail": str(exc)}
        )


def _evaluate_unreadable_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Evaluate answers 200 with the fallback result unless the profession is unknown."""
    body = exc.body if isinstance(exc.body, dict) else {}
    controller = get_controller(request)
    try:
        evaluation = controller.evaluate_unreadable(body.get("profession"), exc)
    except InvalidProfessionError:
        record_interview_request("evaluate", "invalid_profession")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid profession"}
        )

    record_interview_request("evaluate", "fallback")
    return JSONResponse(content=evaluation.to_wire())


def build_default_app() -> FastAPI:
    """Entry point used by uvicorn: configure logging from settings, then build the app."""
    settings = Settings()
    setup_logging(
        level=settings.log_level,
        json_format=settings.log_format.lower() == "json"
    )
    return create_app(settings)


if __name__ == "__main__":
    import uvicorn
    _settings = Settings()
    uvicorn.run(build_default_app(), host=_settings.host, port=_settings.port)
