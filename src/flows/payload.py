"""Decoding of API response bodies into DTOs."""

from typing import TypeVar

from pydantic import BaseModel

from core.errors import TechnicalError
from core.logger import get_logger
from core.result import Result
from transport import Response

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def parse_payload(response: Response, model: type[M]) -> Result[M]:
    """
    Validate a response body against a DTO.

    Returns:
        Result with the model, or a TechnicalError for a malformed body
    """
    try:
        return Result.success(model.model_validate(response.json()))
    except ValueError as e:
        logger.warning(f"Malformed {model.__name__} payload: {e}")
        return Result.failure(TechnicalError(e))
