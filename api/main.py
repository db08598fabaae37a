"""
FastAPI application for the registration lifecycle notifier.

This application provides:
1. The trigger endpoint the host calls with a batch of registration changes
2. A demo endpoint that runs a scripted batch
3. Read-only views of the state label table

Run with:
    uv run uvicorn api.main:app --reload

Then visit http://localhost:8000/docs for interactive API documentation.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from pydantic import BaseModel

from lifecycle_trigger.dispatcher import DispatchOutcome
from lifecycle_trigger.events import HostBatch, batch_from_host
from lifecycle_trigger.trigger import BatchReport, RegistrationLifecycleTrigger
from registry.directory import UserDirectory
from registry.labels import describe_state
from registry.settings import configure_logging, get_settings
from registry.transport import InMemoryTransport


# Response models
class OutcomeView(BaseModel):
    """One change event's outcome."""
    status: str
    registration: Optional[str]
    party_id: Optional[str]
    subject: Optional[str] = None
    body: Optional[str] = None
    recipients: list[str] = []
    error: Optional[str] = None


class TriggerResult(BaseModel):
    """Result of executing the trigger over one batch."""
    processed: int
    notifications_sent: int
    failures: int
    summary: dict[str, int]
    outcomes: list[OutcomeView]


def _outcome_view(outcome: DispatchOutcome) -> OutcomeView:
    payload = outcome.payload
    return OutcomeView(
        status=outcome.status.value,
        registration=outcome.entity_name,
        party_id=outcome.party_id,
        subject=payload.subject if payload else None,
        body=payload.body if payload else None,
        recipients=sorted(payload.recipient_ids) if payload else [],
        error=outcome.error,
    )


def _trigger_result(report: BatchReport) -> TriggerResult:
    return TriggerResult(
        processed=len(report.outcomes),
        notifications_sent=report.sent,
        failures=report.failed,
        summary=report.summary(),
        outcomes=[_outcome_view(o) for o in report.outcomes],
    )


# Application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    configure_logging(get_settings().log_level)
    logging.info("Starting Registration Lifecycle Notifier API")
    yield
    logging.info("Shutting down")


app = FastAPI(
    title="Registration Lifecycle Notifier",
    description="""
    Notifies the responsible person when a registration changes lifecycle state.

    ## Endpoints

    - `/triggers/registration-lifecycle` - Host callback with a batch of record changes
    - `/demo/registration-lifecycle` - Run the scripted demo batch
    - `/labels` - State code to label table
    """,
    version="1.0.0",
    lifespan=lifespan,
)


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "registration-lifecycle-notifier"}


# =============================================================================
# Trigger Endpoints
# =============================================================================

@app.post("/triggers/registration-lifecycle", response_model=TriggerResult, tags=["Trigger"])
def execute_trigger(batch: HostBatch):
    """
    Execute the lifecycle trigger over a batch of record changes.

    Always answers 200 for a well-formed batch: per-change failures are
    reported in `outcomes`, never as an HTTP error.
    """
    settings = get_settings()
    trigger = RegistrationLifecycleTrigger(
        settings=settings,
        directory=UserDirectory(users_file=settings.users_file),
        transport=InMemoryTransport(),
    )
    events = batch_from_host(batch, field_map=settings.field_map)
    return _trigger_result(trigger.execute(events))


@app.post("/demo/registration-lifecycle", response_model=TriggerResult, tags=["Demo"])
def demo_registration_lifecycle():
    """Run the scripted demo batch against the fixture directory."""
    from lifecycle_trigger.demo import run_lifecycle_demo

    return _trigger_result(run_lifecycle_demo())


# =============================================================================
# Labels
# =============================================================================

@app.get("/labels", tags=["Labels"])
def list_labels():
    """Get the state code -> label table in effect."""
    return dict(get_settings().state_labels)


@app.get("/labels/{state}", tags=["Labels"])
def get_label(state: str):
    """Translate a single state code; unknown codes are returned unchanged."""
    return {"state": state, "label": describe_state(state, get_settings().state_labels)}
