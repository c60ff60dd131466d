"""
HTTP client for the booking gateway.

Every failure (transport error, timeout, non-2xx response or a payload that
does not describe the seat grid) surfaces as ``GatewayFailureError``. Calls
are never retried.
"""

import logging
from typing import List, Optional, Sequence

import httpx
from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from ..config import get_settings
from ..schemas.seat import SeatResponse
from ..seating import SeatStatus
from ..utils.exceptions import GatewayFailureError

logger = logging.getLogger(__name__)

_seat_list = TypeAdapter(List[SeatResponse])


class BookingGateway:
    """Async client for the seat booking API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the gateway.

        Args:
            base_url: API root such as ``http://localhost:3000/api/v1``
            timeout: Per-request timeout in seconds
            client: Pre-built client; it stays owned by the caller
        """
        settings = get_settings()
        self.base_url = (base_url or settings.gateway_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.gateway_timeout_seconds
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self.timeout)

    async def __aenter__(self) -> "BookingGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, operation: str, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.request(method, url, timeout=self.timeout, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Gateway {operation} failed: {e!r}")
            raise GatewayFailureError(operation, str(e) or type(e).__name__)

        if response.is_error:
            message = self._error_message(response)
            logger.error(f"Gateway {operation} returned {response.status_code}: {message}")
            raise GatewayFailureError(operation, message, status_code=response.status_code)

        return response

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase

        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and "message" in error:
                return str(error["message"])
            if "detail" in body:
                return str(body["detail"])
        return response.reason_phrase

    async def fetch_seats(self) -> List[SeatStatus]:
        """
        Get every seat status in seat-number order.

        Raises:
            GatewayFailureError: If the call fails or the payload is malformed
        """
        response = await self._request("fetch_seats", "GET", "/seats")
        try:
            seats = _seat_list.validate_python(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise GatewayFailureError("fetch_seats", f"malformed seat list: {e}")

        seats.sort(key=lambda seat: seat.seat_number)
        expected = list(range(1, len(seats) + 1))
        if [seat.seat_number for seat in seats] != expected:
            raise GatewayFailureError("fetch_seats", "seat numbers are not contiguous from 1")

        return [seat.status for seat in seats]

    async def book_seats(self, seat_numbers: Sequence[int]) -> List[int]:
        """
        Persist a booking of the given 1-based seat numbers.

        Returns:
            The seat numbers confirmed by the service

        Raises:
            GatewayFailureError: If the booking was not confirmed
        """
        response = await self._request(
            "book_seats", "POST", "/seats/book",
            json={"seat_numbers": list(seat_numbers)}
        )
        try:
            return [int(number) for number in response.json()["booked_seats"]]
        except (ValueError, KeyError, TypeError) as e:
            raise GatewayFailureError("book_seats", f"malformed confirmation: {e!r}")

    async def reset_seats(self) -> None:
        """
        Mark every seat available.

        Raises:
            GatewayFailureError: If the reset was not confirmed
        """
        await self._request("reset_seats", "POST", "/seats/reset")
