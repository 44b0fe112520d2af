"""Headless board client: session, API clients, board state and drag-and-drop controller."""
from pathforge.client.api import (
    ApiAuthError,
    ApiConflictError,
    ApiError,
    ApiForbiddenError,
    ApiNetworkError,
    ApiNotFoundError,
    ApiServerError,
    ApiValidationError,
    AuthResult,
    ClientConfig,
    HttpJobsApi,
    JobsApi,
)
from pathforge.client.auth import AuthManager
from pathforge.client.board import Board, COLUMN_ORDER, COLUMN_TITLES
from pathforge.client.controller import BoardController, DragLocation
from pathforge.client.demo import DemoJobsApi
from pathforge.client.session import SessionStore

__all__ = [
    "ApiAuthError",
    "ApiConflictError",
    "ApiError",
    "ApiForbiddenError",
    "ApiNetworkError",
    "ApiNotFoundError",
    "ApiServerError",
    "ApiValidationError",
    "AuthManager",
    "AuthResult",
    "Board",
    "BoardController",
    "COLUMN_ORDER",
    "COLUMN_TITLES",
    "ClientConfig",
    "DemoJobsApi",
    "DragLocation",
    "HttpJobsApi",
    "JobsApi",
    "SessionStore",
]
