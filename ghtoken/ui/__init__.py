"""Authorization page: view states, the one-shot flow, and HTML rendering."""

from .flow import (
    AuthorizationFlow,
    CopyAcknowledgement,
    FlowAlreadyInitializedError,
    InvalidFlowStateError,
)
from .page import render_page
from .state import Failed, Idle, Loading, Success, ViewState

__all__ = [
    "AuthorizationFlow",
    "CopyAcknowledgement",
    "Failed",
    "FlowAlreadyInitializedError",
    "Idle",
    "InvalidFlowStateError",
    "Loading",
    "Success",
    "ViewState",
    "render_page",
]
