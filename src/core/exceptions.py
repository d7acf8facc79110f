"""Custom exceptions for the application."""

from fastapi import HTTPException, status
from ..utils.messages import get_message


class EvaluationNotFoundError(HTTPException):
    """Exception raised when a summative evaluation is not found."""

    def __init__(self, evaluation_id: int = None):
        message = (
            get_message("evaluation", "not_found_with_id", evaluation_id=evaluation_id)
            if evaluation_id
            else get_message("evaluation", "not_found")
        )
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=message
        )


class ScenarioNotFoundError(HTTPException):
    """Exception raised when a summative scenario is not found."""

    def __init__(self, scenario_id: int = None):
        message = (
            get_message("scenario", "not_found_with_id", scenario_id=scenario_id)
            if scenario_id
            else get_message("scenario", "not_found")
        )
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=message
        )


class ScoreNotFoundError(HTTPException):
    """Exception raised when a student's score row is not part of the evaluation."""

    def __init__(self):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=get_message("score", "not_found")
        )


class BusinessLogicError(HTTPException):
    """Exception for business logic violations."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message
        )
