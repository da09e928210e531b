import logging
from typing import Any, List, Optional, Type, TypeVar
import httpx
from pydantic import BaseModel, ValidationError
from utils.app_config import AppConfig
from utils.exceptions import LeaveApiError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def join_url(base: str, *parts) -> str:
    """Append path segments (ids) to a configured endpoint"""
    url = base.rstrip("/")
    for part in parts:
        url = f"{url}/{part}"
    return url


class ApiClient:
    """Thin synchronous wrapper around httpx that turns failures into LeaveApiError"""

    def __init__(self, config: AppConfig, client: Optional[httpx.Client] = None):
        self.config = config
        self.client = client or httpx.Client(timeout=config.http_timeout)

    def close(self):
        self.client.close()

    def _send(self, method: str, url: str, what: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error(f"Failed to {what}: {exc}", extra={"url": url})
            raise LeaveApiError(f"Failed to {what}", url=url) from exc

        if response.status_code != 200:
            logger.error(
                f"Failed to {what}",
                extra={"url": url, "status_code": response.status_code},
            )
            raise LeaveApiError(f"Failed to {what}", status_code=response.status_code, url=url)
        return response

    def get_json(self, url: str, what: str, params: Optional[dict] = None) -> Any:
        response = self._send("GET", url, what, params=params)
        try:
            return response.json()
        except ValueError as exc:
            raise LeaveApiError(f"Failed to {what}: response is not valid JSON", url=url) from exc

    def get_list(self, url: str, what: str, params: Optional[dict] = None) -> list:
        data = self.get_json(url, what, params=params)
        if not isinstance(data, list):
            raise LeaveApiError(f"Failed to {what}: expected a JSON array", url=url)
        return data

    def get_models(self, url: str, model: Type[ModelT], what: str, params: Optional[dict] = None) -> List[ModelT]:
        try:
            return [model.model_validate(item) for item in self.get_list(url, what, params=params)]
        except ValidationError as exc:
            logger.error(f"Unexpected record format while trying to {what}", extra={"url": url})
            raise LeaveApiError(f"Failed to {what}: unexpected record format", url=url) from exc

    def post(self, url: str, what: str, **kwargs) -> httpx.Response:
        return self._send("POST", url, what, **kwargs)
