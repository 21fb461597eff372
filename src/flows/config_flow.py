"""
Config Flow

Fetches the frontend configuration of the API.
"""

from core.errors import TechnicalError
from core.result import Result
from models import Config
from transport import HttpClient

from .payload import parse_payload


class ConfigFlow:
    def __init__(self, http: HttpClient):
        self._http = http

    async def get(self) -> Result[Config]:
        """Retrieve the frontend configuration. Any non-2xx is Technical."""
        result = await self._http.get("/.well-known/config")
        if not result.ok:
            return Result.failure(result.error)

        response = result.value
        if not response.ok:
            return Result.failure(TechnicalError())
        return parse_payload(response, Config)
